"""Domain enums.

Available Enums:
    - TransactionType: Direction of a canonical record (income, expense)
    - ProviderMode: Whether an adapter returned live or synthetic data
    - FallbackReason: Why an adapter switched to synthetic data
    - SyncStatus: Per-provider outcome of a sync run
"""

from finsync.domain.enums.fallback_reason import FallbackReason
from finsync.domain.enums.provider_mode import ProviderMode
from finsync.domain.enums.sync_status import SyncStatus
from finsync.domain.enums.transaction_type import TransactionType

__all__ = [
    "FallbackReason",
    "ProviderMode",
    "SyncStatus",
    "TransactionType",
]
