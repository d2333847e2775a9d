"""Provider registry (domain metadata for every supported provider)."""

from finsync.domain.providers.registry import (
    PROVIDER_REGISTRY,
    ProviderCategory,
    ProviderMetadata,
    get_all_provider_slugs,
    get_provider_metadata,
)

__all__ = [
    "PROVIDER_REGISTRY",
    "ProviderCategory",
    "ProviderMetadata",
    "get_all_provider_slugs",
    "get_provider_metadata",
]
