"""Domain value objects.

Usage:
    from finsync.domain.value_objects import OAuthCredential, SyncWindow
"""

from finsync.domain.value_objects.financial_summary import FinancialSummary
from finsync.domain.value_objects.insight_context import (
    ChatMessage,
    ChatRole,
    GoalSnapshot,
    InsightContext,
    UserContext,
    UserProfile,
)
from finsync.domain.value_objects.oauth_credential import OAuthCredential
from finsync.domain.value_objects.sync_window import SyncWindow

__all__ = [
    "ChatMessage",
    "ChatRole",
    "FinancialSummary",
    "GoalSnapshot",
    "InsightContext",
    "OAuthCredential",
    "SyncWindow",
    "UserContext",
    "UserProfile",
]
