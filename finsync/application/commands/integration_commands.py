"""Integration commands.

Commands are immutable value objects representing user intent; handlers
execute them and return Result types.
"""

from dataclasses import dataclass
from uuid import UUID

from finsync.domain.value_objects import ChatMessage, SyncWindow


@dataclass(frozen=True, kw_only=True)
class SyncIntegrations:
    """Command to sync transactions from the user's providers.

    Attributes:
        user_id: User who triggered the sync.
        provider_slugs: Providers to sync (None = every registered provider).
        window: Date window (None = last sync_window_days days).
    """

    user_id: UUID
    provider_slugs: tuple[str, ...] | None = None
    window: SyncWindow | None = None


@dataclass(frozen=True, kw_only=True)
class ConnectIntegration:
    """Command to complete an OAuth connection from the provider callback.

    Attributes:
        provider_slug: Provider being connected.
        code: Authorization code from the callback.
        state: Signed state carrying the initiating user's id.
    """

    provider_slug: str
    code: str
    state: str


@dataclass(frozen=True, kw_only=True)
class GenerateInsight:
    """Command to produce an insight report or a chat answer.

    Attributes:
        user_id: User asking.
        query: Chat message (None = insight report).
        history: Prior chat turns, oldest first.
    """

    user_id: UUID
    query: str | None = None
    history: tuple[ChatMessage, ...] = ()
