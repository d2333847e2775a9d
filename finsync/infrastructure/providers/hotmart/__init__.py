"""Hotmart sales platform adapter."""

from finsync.infrastructure.providers.hotmart.hotmart_provider import HotmartProvider

__all__ = ["HotmartProvider"]
