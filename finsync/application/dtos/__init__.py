"""Application DTOs (handler results)."""

from finsync.application.dtos.insight_dtos import InsightAttempt, InsightOutcome
from finsync.application.dtos.sync_dtos import (
    ConnectIntegrationResult,
    ProviderSyncResult,
    SyncReport,
)

__all__ = [
    "ConnectIntegrationResult",
    "InsightAttempt",
    "InsightOutcome",
    "ProviderSyncResult",
    "SyncReport",
]
