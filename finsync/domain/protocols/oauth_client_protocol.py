"""OAuthClientProtocol for provider token endpoints.

Port (interface) for hexagonal architecture. One implementation per
provider (or one generic implementation configured per provider) performs
the authorization-code exchange and the refresh-token grant.

Methods return Result types following railway-oriented programming pattern.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from finsync.core.result import Result
    from finsync.domain.errors import ProviderError


@dataclass(frozen=True, kw_only=True)
class OAuthTokens:
    """OAuth tokens returned by a provider token endpoint.

    Returned from exchange_code_for_tokens() and refresh_access_token().

    Attributes:
        access_token: Bearer token for API authentication.
        refresh_token: Token for obtaining new access tokens. May be None if
            provider doesn't rotate tokens on refresh.
        expires_in: Seconds until access_token expires.
        token_type: Token type, typically "Bearer".
        scope: OAuth scope granted (provider-specific).
    """

    access_token: str
    refresh_token: str | None
    expires_in: int
    token_type: str = "Bearer"
    scope: str | None = None


class OAuthClientProtocol(Protocol):
    """Protocol (port) for provider OAuth token endpoints.

    This is a Protocol (not ABC) for structural typing.
    Implementations don't need to inherit from this.

    Example:
        >>> result = await client.exchange_code_for_tokens("auth_code")
        >>> match result:
        ...     case Success(value=tokens):
        ...         store(tokens)
        ...     case Failure(error=error):
        ...         log(error)
    """

    @property
    def provider_slug(self) -> str:
        """Provider identifier (e.g. "hotmart")."""
        ...

    @property
    def is_configured(self) -> bool:
        """Whether client id and secret are present."""
        ...

    def authorization_url(self, state: str) -> str:
        """Build the URL that starts the provider's consent screen."""
        ...

    async def exchange_code_for_tokens(
        self, authorization_code: str
    ) -> "Result[OAuthTokens, ProviderError]":
        """Exchange an authorization code for tokens (one-time use)."""
        ...

    async def refresh_access_token(
        self, refresh_token: str
    ) -> "Result[OAuthTokens, ProviderError]":
        """Obtain a new access token with a refresh token."""
        ...
