"""Container module - Centralized dependency injection.

Application-scoped pieces (provider factory, adapters, refreshers, insight
cascade) are cached singletons built from get_settings(). Handlers are
assembled per call because their storage collaborators belong to the
caller.

Usage:
    from finsync.core.container import get_sync_integrations_handler

    handler = get_sync_integrations_handler(
        credential_store=credential_store,
        persistence=transaction_store,
    )
    result = await handler.handle(SyncIntegrations(user_id=user_id))
"""

from datetime import timedelta
from functools import lru_cache
from typing import TYPE_CHECKING

from finsync.core.config import get_settings

if TYPE_CHECKING:
    from finsync.application.commands.handlers import (
        ConnectIntegrationHandler,
        GenerateInsightHandler,
        SyncIntegrationsHandler,
    )
    from finsync.application.insights import InsightCascade
    from finsync.application.services.oauth_state import OAuthStateCodec
    from finsync.application.services.token_refresher import TokenRefresher
    from finsync.domain.protocols import (
        CredentialStoreProtocol,
        TransactionPersistenceProtocol,
        UserContextProtocol,
    )
    from finsync.infrastructure.providers.provider_factory import ProviderFactory
    from finsync.infrastructure.providers.resilient_adapter import (
        ResilientProviderAdapter,
    )


# ============================================================================
# Logging (Application-Scoped)
# ============================================================================


@lru_cache
def init_logging() -> None:
    """Configure structlog once per process from settings."""
    from finsync.infrastructure.logging import configure_logging

    configure_logging(get_settings())


# ============================================================================
# Provider Infrastructure (Application-Scoped)
# ============================================================================


@lru_cache
def get_provider_factory() -> "ProviderFactory":
    """Get provider factory singleton (app-scoped)."""
    from finsync.infrastructure.providers.provider_factory import ProviderFactory

    return ProviderFactory(settings=get_settings())


@lru_cache
def get_provider_adapters() -> dict[str, "ResilientProviderAdapter"]:
    """Resilient adapter for every registered provider, in registry order."""
    factory = get_provider_factory()
    return {slug: factory.get_adapter(slug) for slug in factory.list_supported()}


@lru_cache
def get_token_refreshers() -> dict[str, "TokenRefresher"]:
    """Token refresher for every registered provider."""
    from finsync.application.services.token_refresher import TokenRefresher

    factory = get_provider_factory()
    margin = timedelta(seconds=get_settings().token_refresh_margin_seconds)
    return {
        slug: TokenRefresher(factory.get_oauth_client(slug), refresh_margin=margin)
        for slug in factory.list_supported()
    }


@lru_cache
def get_oauth_state_codec() -> "OAuthStateCodec":
    from finsync.application.services.oauth_state import OAuthStateCodec

    settings = get_settings()
    return OAuthStateCodec(
        secret=settings.oauth_state_secret,
        ttl_seconds=settings.oauth_state_ttl_seconds,
    )


# ============================================================================
# Insight Generation (Application-Scoped)
# ============================================================================


@lru_cache
def get_insight_cascade() -> "InsightCascade":
    """Get insight cascade singleton (app-scoped).

    One Gemini candidate per configured model name, in order. Without an
    API key the candidate list is empty and the local engine answers.
    """
    from finsync.application.insights import (
        InsightCascade,
        InsightPromptBuilder,
        LocalInsightEngine,
    )

    settings = get_settings()
    prompt_builder = InsightPromptBuilder(
        currency_symbol=settings.currency_symbol,
        max_transactions=settings.insight_context_max_transactions,
    )
    candidates = []
    if settings.gemini_api_key:
        from finsync.infrastructure.insights import GeminiInsightGenerator

        candidates = [
            GeminiInsightGenerator(
                model_name=model_name,
                api_key=settings.gemini_api_key,
                prompt_builder=prompt_builder,
                temperature=settings.insight_temperature,
                max_output_tokens=settings.insight_max_output_tokens,
            )
            for model_name in settings.model_candidates
        ]

    return InsightCascade(
        candidates=candidates,
        local_engine=LocalInsightEngine(currency_symbol=settings.currency_symbol),
        candidate_timeout=settings.insight_candidate_timeout_seconds,
    )


# ============================================================================
# Handler Factories (Per-Call)
# ============================================================================


def get_sync_integrations_handler(
    *,
    credential_store: "CredentialStoreProtocol",
    persistence: "TransactionPersistenceProtocol",
) -> "SyncIntegrationsHandler":
    from finsync.application.commands.handlers import SyncIntegrationsHandler

    settings = get_settings()
    return SyncIntegrationsHandler(
        credential_store=credential_store,
        persistence=persistence,
        adapters=get_provider_adapters(),
        refreshers=get_token_refreshers(),
        adapter_timeout=settings.adapter_timeout_seconds,
        default_window_days=settings.sync_window_days,
    )


def get_connect_integration_handler(
    *,
    credential_store: "CredentialStoreProtocol",
) -> "ConnectIntegrationHandler":
    from finsync.application.commands.handlers import ConnectIntegrationHandler

    return ConnectIntegrationHandler(
        credential_store=credential_store,
        refreshers=get_token_refreshers(),
        state_codec=get_oauth_state_codec(),
    )


def get_generate_insight_handler(
    *,
    user_context: "UserContextProtocol",
) -> "GenerateInsightHandler":
    from finsync.application.commands.handlers import GenerateInsightHandler

    return GenerateInsightHandler(
        user_context=user_context,
        cascade=get_insight_cascade(),
        context_days=get_settings().insight_context_days,
    )
