"""Provider Factory Implementation.

Resolves, by provider slug, the pieces a sync needs: the live provider,
its OAuth client, and the resilient adapter that wraps the provider with
its sandbox generator.

Unlike a factory that refuses unconfigured providers, this one always
returns an adapter: a provider without client credentials simply runs in
sandbox mode.
"""

import random
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from finsync.core.config import Settings
from finsync.domain.protocols import TransactionProviderProtocol
from finsync.domain.providers.registry import (
    PROVIDER_REGISTRY,
    ProviderMetadata,
    get_all_provider_slugs,
    get_provider_metadata,
)
from finsync.infrastructure.providers.oauth_client import (
    OAuth2Client,
    ProviderOAuthConfig,
)
from finsync.infrastructure.providers.resilient_adapter import (
    ResilientProviderAdapter,
)
from finsync.infrastructure.providers.sandbox import (
    SandboxTransactionGenerator,
    get_sandbox_profile,
)


class ProviderFactory:
    """Concrete provider factory implementation.

    Example:
        >>> factory = ProviderFactory(settings=get_settings())
        >>> adapter = factory.get_adapter("hotmart")
        >>> result = await adapter.fetch(credential, window)
    """

    def __init__(
        self,
        *,
        settings: Settings,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize factory.

        Args:
            settings: Application settings.
            rng: Random source shared by sandbox generators (tests pin it).
            clock: Clock shared by sandbox generators.
        """
        self._settings = settings
        self._rng = rng
        self._clock = clock

    def _metadata(self, slug: str) -> ProviderMetadata:
        metadata = get_provider_metadata(slug)
        if not metadata:
            supported = ", ".join(p.slug for p in PROVIDER_REGISTRY)
            raise ValueError(f"Unknown provider: {slug}. Supported: {supported}")
        return metadata

    def is_configured(self, slug: str) -> bool:
        """Check whether every setting the provider needs for live mode is set.

        Raises:
            ValueError: If provider slug is unknown.
        """
        metadata = self._metadata(slug)
        return all(
            getattr(self._settings, name, None)
            for name in metadata.required_settings or []
        )

    def get_provider(self, slug: str) -> TransactionProviderProtocol:
        """Get the live provider by slug.

        Raises:
            ValueError: If provider slug is unknown.
        """
        self._metadata(slug)
        timeout = self._settings.provider_http_timeout_seconds

        # Lazy import and instantiate (avoid circular imports)
        match slug:
            case "hotmart":
                from finsync.infrastructure.providers.hotmart import HotmartProvider

                return HotmartProvider(settings=self._settings, timeout=timeout)

            case "open_finance":
                from finsync.infrastructure.providers.open_finance import (
                    OpenFinanceProvider,
                )

                return OpenFinanceProvider(settings=self._settings, timeout=timeout)

            case _:
                raise ValueError(
                    f"Provider '{slug}' in registry but no factory defined."
                )

    def get_oauth_client(self, slug: str) -> OAuth2Client:
        """Get the OAuth client by slug.

        Raises:
            ValueError: If provider slug is unknown.
        """
        self._metadata(slug)
        s = self._settings
        match slug:
            case "hotmart":
                config = ProviderOAuthConfig(
                    provider_slug=slug,
                    token_url=s.hotmart_token_url,
                    authorize_url=s.hotmart_authorize_url,
                    client_id=s.hotmart_client_id,
                    client_secret=s.hotmart_client_secret,
                    redirect_uri=s.hotmart_redirect_uri,
                )
            case "open_finance":
                config = ProviderOAuthConfig(
                    provider_slug=slug,
                    token_url=s.open_finance_token_url,
                    authorize_url=s.open_finance_authorize_url,
                    client_id=s.open_finance_client_id,
                    client_secret=s.open_finance_client_secret,
                    redirect_uri=s.open_finance_redirect_uri,
                )
            case _:
                raise ValueError(
                    f"Provider '{slug}' in registry but no OAuth client defined."
                )
        return OAuth2Client(config=config, timeout=s.provider_http_timeout_seconds)

    def get_sandbox_generator(self, slug: str) -> SandboxTransactionGenerator:
        """Get the sandbox generator by slug, using the configured window.

        Raises:
            ValueError: If provider slug is unknown or has no sandbox profile.
        """
        self._metadata(slug)
        profile = get_sandbox_profile(slug)
        if profile is None:
            raise ValueError(f"Provider '{slug}' has no sandbox profile.")
        return SandboxTransactionGenerator(
            replace(profile, window_days=self._settings.sandbox_window_days),
            rng=self._rng,
            clock=self._clock,
        )

    def get_adapter(self, slug: str) -> ResilientProviderAdapter:
        """Get the resilient adapter by slug.

        Raises:
            ValueError: If provider slug is unknown.
        """
        return ResilientProviderAdapter(
            provider=self.get_provider(slug),
            sandbox=self.get_sandbox_generator(slug),
            is_configured=self.is_configured(slug),
            sandbox_enabled=self._settings.sandbox_mode,
        )

    def supports(self, slug: str) -> bool:
        return get_provider_metadata(slug) is not None

    def list_supported(self) -> list[str]:
        """List all provider slugs (every provider works in sandbox mode)."""
        return get_all_provider_slugs()
