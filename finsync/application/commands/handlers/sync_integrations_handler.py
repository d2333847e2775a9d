"""SyncIntegrations command handler.

Drives every selected provider adapter for one user-triggered sync, runs
them concurrently, persists whatever each produced and reports a status
per provider.

Per provider:
    1. Load the stored credential
    2. Refresh it ahead of expiry (compare-and-swap save; reload on conflict)
    3. Invoke the resilient adapter under a bounded timeout
    4. Hand the records to the persistence collaborator

Isolation:
    - An authentication failure marks that provider AUTH_REQUIRED and
      discards its credential; other providers are unaffected
    - Transient refresh failures and adapter timeouts use sandbox data
    - An unexpected exception marks that provider FAILED
    - Only "every provider FAILED" fails the command as a whole
"""

import asyncio
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from uuid import UUID

import structlog
from uuid_extensions import uuid7

from finsync.application.commands.integration_commands import SyncIntegrations
from finsync.application.dtos.sync_dtos import ProviderSyncResult, SyncReport
from finsync.application.services.token_refresher import TokenRefresher
from finsync.core.result import Failure, Result, Success
from finsync.domain.enums import FallbackReason, SyncStatus
from finsync.domain.errors import (
    ProviderAuthenticationError,
    ProviderConfigurationError,
)
from finsync.domain.protocols import (
    CredentialStoreProtocol,
    TransactionPersistenceProtocol,
)
from finsync.domain.value_objects import OAuthCredential, SyncWindow
from finsync.infrastructure.providers.resilient_adapter import (
    AdapterOutcome,
    ResilientProviderAdapter,
    fallback_reason_for,
)

logger = structlog.get_logger(__name__)


class SyncIntegrationsError:
    """SyncIntegrations-specific errors."""

    NO_PROVIDERS = "No providers selected for sync"
    UNKNOWN_PROVIDER = "Unknown provider"
    ALL_PROVIDERS_FAILED = "Every provider failed to sync"


# Default look-back window for live fetches (days)
DEFAULT_SYNC_DAYS = 90

# Default per-adapter time budget (seconds)
DEFAULT_ADAPTER_TIMEOUT = 20.0


class SyncIntegrationsHandler:
    """Handler for SyncIntegrations command.

    Dependencies (injected via constructor):
        - CredentialStoreProtocol: Per-(user, provider) credentials
        - TransactionPersistenceProtocol: Idempotent upsert of records
        - ResilientProviderAdapter per provider slug
        - TokenRefresher per provider slug

    Returns:
        Result[SyncReport, str]: Success(report) or Failure(error)
    """

    def __init__(
        self,
        *,
        credential_store: CredentialStoreProtocol,
        persistence: TransactionPersistenceProtocol,
        adapters: Mapping[str, ResilientProviderAdapter],
        refreshers: Mapping[str, TokenRefresher],
        adapter_timeout: float = DEFAULT_ADAPTER_TIMEOUT,
        default_window_days: int = DEFAULT_SYNC_DAYS,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            credential_store: Credential storage.
            persistence: Transaction persistence collaborator.
            adapters: Resilient adapter by provider slug (iteration order is
                the default sync order).
            refreshers: Token refresher by provider slug.
            adapter_timeout: Seconds one adapter invocation may take.
            default_window_days: Window used when the command has none.
            clock: Current-time source (defaults to UTC now).
        """
        self._credential_store = credential_store
        self._persistence = persistence
        self._adapters = dict(adapters)
        self._refreshers = dict(refreshers)
        self._adapter_timeout = adapter_timeout
        self._default_window_days = default_window_days
        self._clock = clock or (lambda: datetime.now(UTC))

    async def handle(self, command: SyncIntegrations) -> Result[SyncReport, str]:
        """Handle SyncIntegrations command.

        Args:
            command: SyncIntegrations command with user_id and optional
                provider selection and window.

        Returns:
            Success(SyncReport): Per-provider outcomes.
            Failure(str): No providers, unknown provider, or every provider failed.
        """
        slugs = (
            command.provider_slugs
            if command.provider_slugs is not None
            else tuple(self._adapters)
        )
        if not slugs:
            return Failure(error=SyncIntegrationsError.NO_PROVIDERS)

        unknown = [slug for slug in slugs if slug not in self._adapters]
        if unknown:
            return Failure(
                error=f"{SyncIntegrationsError.UNKNOWN_PROVIDER}: {', '.join(unknown)}"
            )

        started_at = self._clock()
        window = command.window or SyncWindow.last_days(
            self._default_window_days, today=started_at.date()
        )
        sync_id = uuid7()
        log = logger.bind(sync_id=str(sync_id), user_id=str(command.user_id))
        log.info("sync_started", providers=list(slugs))

        outcomes = await asyncio.gather(
            *(self._sync_provider(command.user_id, slug, window) for slug in slugs),
            return_exceptions=True,
        )

        results: list[ProviderSyncResult] = []
        for slug, outcome in zip(slugs, outcomes, strict=True):
            if isinstance(outcome, ProviderSyncResult):
                results.append(outcome)
                continue
            if not isinstance(outcome, Exception):
                raise outcome
            log.error(
                "provider_sync_failed",
                provider=slug,
                error_type=type(outcome).__name__,
                error_message=str(outcome),
            )
            results.append(
                ProviderSyncResult(
                    provider=slug,
                    status=SyncStatus.FAILED,
                    message=f"Unexpected error: {type(outcome).__name__}",
                )
            )

        report = SyncReport(
            sync_id=sync_id,
            user_id=command.user_id,
            started_at=started_at,
            completed_at=self._clock(),
            results=results,
        )
        log.info(
            "sync_completed",
            succeeded=report.succeeded,
            degraded=report.degraded,
            auth_required=report.auth_required,
            failed=report.failed,
            total_records=report.total_records,
        )

        if len(report.failed) == len(results):
            return Failure(error=SyncIntegrationsError.ALL_PROVIDERS_FAILED)
        return Success(value=report)

    async def _sync_provider(
        self,
        user_id: UUID,
        slug: str,
        window: SyncWindow,
    ) -> ProviderSyncResult:
        adapter = self._adapters[slug]
        outcome: AdapterOutcome | None = None

        credential = await self._credential_store.get(user_id, slug)
        refresher = self._refreshers.get(slug)
        if credential is not None and refresher is not None:
            refresh_result = await refresher.ensure_fresh(credential)
            match refresh_result:
                case Success(value=fresh) if fresh is credential:
                    pass
                case Success(value=fresh):
                    credential = await self._store_refreshed(user_id, slug, credential, fresh)
                case Failure(error=ProviderAuthenticationError() as error):
                    return await self._auth_required(user_id, slug, error)
                case Failure(error=ProviderConfigurationError()):
                    credential = None
                case Failure(error=error):
                    outcome = adapter.fallback(window, fallback_reason_for(error))

        if outcome is None:
            try:
                async with asyncio.timeout(self._adapter_timeout):
                    fetch_result = await adapter.fetch(credential, window)
            except TimeoutError:
                logger.warning(
                    "provider_adapter_timeout",
                    provider=slug,
                    timeout_seconds=self._adapter_timeout,
                )
                outcome = adapter.fallback(window, FallbackReason.TIMEOUT)
            else:
                if isinstance(fetch_result, Failure):
                    return await self._auth_required(user_id, slug, fetch_result.error)
                outcome = fetch_result.value

        persisted = await self._persistence.persist_transactions(
            user_id, slug, outcome.records
        )

        status = SyncStatus.DEGRADED if outcome.is_degraded else SyncStatus.OK
        reason = outcome.fallback_reason
        return ProviderSyncResult(
            provider=slug,
            status=status,
            record_count=len(outcome.records),
            mode=outcome.mode,
            fallback_reason=reason,
            inserted=persisted.inserted,
            updated=persisted.updated,
            message=(
                f"Synced {len(outcome.records)} records"
                if reason is None
                else f"Synced {len(outcome.records)} sandbox records ({reason.value})"
            ),
        )

    async def _store_refreshed(
        self,
        user_id: UUID,
        slug: str,
        previous: OAuthCredential,
        fresh: OAuthCredential,
    ) -> OAuthCredential:
        """Save a refreshed credential; on a lost race use the stored winner."""
        save_result = await self._credential_store.save(
            user_id, slug, fresh, expected=previous
        )
        if isinstance(save_result, Success):
            return fresh

        stored = await self._credential_store.get(user_id, slug)
        logger.info(
            "credential_refresh_conflict",
            provider=slug,
            reloaded=stored is not None,
        )
        return stored or fresh

    async def _auth_required(
        self,
        user_id: UUID,
        slug: str,
        error: ProviderAuthenticationError,
    ) -> ProviderSyncResult:
        await self._credential_store.delete(user_id, slug)
        logger.warning(
            "provider_reconnect_required",
            provider=slug,
            is_token_expired=error.is_token_expired,
        )
        return ProviderSyncResult(
            provider=slug,
            status=SyncStatus.AUTH_REQUIRED,
            message=error.message,
        )
