"""Application services."""

from finsync.application.services.oauth_state import OAuthStateCodec
from finsync.application.services.token_refresher import TokenRefresher

__all__ = ["OAuthStateCodec", "TokenRefresher"]
