"""In-memory user context provider.

Implements UserContextProtocol from registered profiles and goals plus the
transactions held by an InMemoryTransactionStore, trimmed the same way the
insight context is trimmed in production: recent days only, capped count.
"""

from datetime import UTC, date, datetime, timedelta
from uuid import UUID

from finsync.domain.value_objects import GoalSnapshot, UserContext, UserProfile
from finsync.infrastructure.persistence.in_memory_transaction_store import (
    InMemoryTransactionStore,
)


class InMemoryUserContextProvider:
    """User context assembled from in-memory state."""

    def __init__(
        self,
        transaction_store: InMemoryTransactionStore,
        *,
        context_days: int = 45,
        max_transactions: int = 40,
        today: date | None = None,
    ) -> None:
        self._transaction_store = transaction_store
        self._context_days = context_days
        self._max_transactions = max_transactions
        self._today = today
        self._profiles: dict[UUID, UserProfile] = {}
        self._goals: dict[UUID, list[GoalSnapshot]] = {}

    def add_user(self, profile: UserProfile, goals: list[GoalSnapshot] | None = None) -> None:
        self._profiles[profile.user_id] = profile
        self._goals[profile.user_id] = list(goals or [])

    async def get_user_context(self, user_id: UUID) -> UserContext | None:
        profile = self._profiles.get(user_id)
        if profile is None:
            return None

        today = self._today or datetime.now(UTC).date()
        cutoff = today - timedelta(days=self._context_days)
        transactions = [
            record
            for record in self._transaction_store.list_transactions(user_id)
            if record.transaction_date >= cutoff
        ][: self._max_transactions]

        return UserContext(
            profile=profile,
            transactions=tuple(transactions),
            goals=tuple(self._goals.get(user_id, [])),
        )
