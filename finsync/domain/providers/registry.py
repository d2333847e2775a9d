"""Provider Registry - Single source of truth for all provider metadata.

Every provider the sync orchestrator can drive is listed here together with
the fixed source label stamped on its records and the settings it needs to
run live.

Usage:
    from finsync.domain.providers.registry import get_provider_metadata

    metadata = get_provider_metadata("hotmart")
    if metadata is not None:
        print(metadata.source_label)  # "Hotmart"
"""

from dataclasses import dataclass
from enum import Enum


class ProviderCategory(str, Enum):
    """Provider categories by kind of financial data."""

    SALES_PLATFORM = "sales_platform"
    """Digital product sales (Hotmart, Eduzz, Kiwify)."""

    OPEN_FINANCE = "open_finance"
    """Open-banking aggregators (Pluggy, Belvo)."""


@dataclass(frozen=True, kw_only=True)
class ProviderMetadata:
    """Metadata for a single provider adapter.

    Attributes:
        slug: Unique provider identifier (lowercase, snake_case).
        display_name: User-facing provider name.
        source_label: Fixed value written to CanonicalTransaction.source.
        category: Kind of provider.
        required_settings: Settings attribute names needed for live mode.
        documentation_url: Official provider API documentation URL.
    """

    slug: str
    display_name: str
    source_label: str
    category: ProviderCategory
    required_settings: list[str] | None = None
    documentation_url: str | None = None


# =============================================================================
# Provider Registry (Single Source of Truth)
# =============================================================================

PROVIDER_REGISTRY: list[ProviderMetadata] = [
    ProviderMetadata(
        slug="hotmart",
        display_name="Hotmart",
        source_label="Hotmart",
        category=ProviderCategory.SALES_PLATFORM,
        required_settings=["hotmart_client_id", "hotmart_client_secret"],
        documentation_url="https://developers.hotmart.com/docs",
    ),
    ProviderMetadata(
        slug="open_finance",
        display_name="Open Finance (Pluggy)",
        source_label="Open Finance",
        category=ProviderCategory.OPEN_FINANCE,
        required_settings=["open_finance_client_id", "open_finance_client_secret"],
        documentation_url="https://docs.pluggy.ai",
    ),
]
"""Provider registry containing all provider metadata.

When adding a new provider:
1. Add ProviderMetadata entry here
2. Implement provider class in finsync/infrastructure/providers/{slug}/
3. Add factory case in finsync/infrastructure/providers/provider_factory.py
4. Add a sandbox profile in finsync/infrastructure/providers/sandbox/profiles.py
"""


# =============================================================================
# Helper Functions
# =============================================================================


def get_provider_metadata(slug: str) -> ProviderMetadata | None:
    """Get provider metadata by slug.

    Args:
        slug: Provider identifier (e.g., "hotmart").

    Returns:
        ProviderMetadata if found, None otherwise.
    """
    return next((p for p in PROVIDER_REGISTRY if p.slug == slug), None)


def get_all_provider_slugs() -> list[str]:
    """Get all registered provider slugs in registry order."""
    return [p.slug for p in PROVIDER_REGISTRY]
