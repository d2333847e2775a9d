"""Sync DTOs (Data Transfer Objects).

Result dataclasses for the sync and connect handlers. These carry
outcomes from handlers back to the web layer.

DTOs:
    - ProviderSyncResult: Outcome for a single provider
    - SyncReport: Outcome of one SyncIntegrations command
    - ConnectIntegrationResult: Outcome of one ConnectIntegration command
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from finsync.domain.enums import FallbackReason, ProviderMode, SyncStatus


@dataclass
class ProviderSyncResult:
    """Result of syncing one provider.

    Attributes:
        provider: Provider slug.
        status: OK, DEGRADED, AUTH_REQUIRED or FAILED.
        record_count: Records handed to persistence.
        mode: Where the records came from (None when nothing was fetched).
        fallback_reason: Why sandbox data was used.
        inserted: New records stored.
        updated: Existing records overwritten.
        message: Human-readable summary.
    """

    provider: str
    status: SyncStatus
    record_count: int = 0
    mode: ProviderMode | None = None
    fallback_reason: FallbackReason | None = None
    inserted: int = 0
    updated: int = 0
    message: str = ""


@dataclass
class SyncReport:
    """Result of a sync across providers.

    Attributes:
        sync_id: Identifier of this sync run.
        user_id: User the sync ran for.
        started_at: When the run started.
        completed_at: When every provider finished.
        results: One entry per provider, in request order.
    """

    sync_id: UUID
    user_id: UUID
    started_at: datetime
    completed_at: datetime
    results: list[ProviderSyncResult] = field(default_factory=list)

    def result_for(self, provider: str) -> ProviderSyncResult | None:
        return next((r for r in self.results if r.provider == provider), None)

    def _with_status(self, status: SyncStatus) -> list[str]:
        return [r.provider for r in self.results if r.status == status]

    @property
    def succeeded(self) -> list[str]:
        return self._with_status(SyncStatus.OK)

    @property
    def degraded(self) -> list[str]:
        return self._with_status(SyncStatus.DEGRADED)

    @property
    def auth_required(self) -> list[str]:
        return self._with_status(SyncStatus.AUTH_REQUIRED)

    @property
    def failed(self) -> list[str]:
        return self._with_status(SyncStatus.FAILED)

    @property
    def total_records(self) -> int:
        return sum(r.record_count for r in self.results)


@dataclass
class ConnectIntegrationResult:
    """Result of completing an OAuth connection.

    Attributes:
        user_id: User now connected.
        provider: Provider slug.
        expires_at: Access token expiry.
    """

    user_id: UUID
    provider: str
    expires_at: datetime
