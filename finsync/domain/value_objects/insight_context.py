"""Insight request context.

Read-only snapshot of what the insight cascade may use: who the user is,
their recent transactions, their goals and, in chat mode, the conversation
so far plus the current question.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from finsync.domain.entities import CanonicalTransaction


class ChatRole(str, Enum):
    """Author of a chat message."""

    USER = "user"
    MODEL = "model"

    @classmethod
    def parse(cls, value: str) -> "ChatRole":
        """Parse a role label, accepting "ai" and "assistant" as model."""
        normalized = value.strip().lower()
        if normalized in ("ai", "assistant", "model"):
            return cls.MODEL
        return cls.USER


@dataclass(frozen=True, slots=True, kw_only=True)
class UserProfile:
    """Minimal user profile for personalizing answers."""

    user_id: UUID
    name: str
    plan: str = "free"


@dataclass(frozen=True, slots=True, kw_only=True)
class GoalSnapshot:
    """Savings goal with its current progress.

    Attributes:
        name: Goal name ("Emergency fund").
        current_amount: Amount saved so far.
        target_amount: Amount to reach.
        deadline: Optional target date.
    """

    name: str
    current_amount: Decimal
    target_amount: Decimal
    deadline: date | None = None

    @property
    def is_active(self) -> bool:
        """A goal stays active until the target is reached."""
        return self.current_amount < self.target_amount

    @property
    def remaining_amount(self) -> Decimal:
        return max(self.target_amount - self.current_amount, Decimal("0"))

    @property
    def progress_percent(self) -> Decimal:
        if self.target_amount <= 0:
            return Decimal("100")
        return (self.current_amount / self.target_amount * 100).quantize(Decimal("1"))


@dataclass(frozen=True, slots=True, kw_only=True)
class ChatMessage:
    """One turn of the conversation history."""

    role: ChatRole
    text: str


@dataclass(frozen=True, slots=True, kw_only=True)
class UserContext:
    """Data the user-context collaborator provides for a user."""

    profile: UserProfile
    transactions: tuple[CanonicalTransaction, ...] = ()
    goals: tuple[GoalSnapshot, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class InsightContext:
    """Everything one insight or chat answer is generated from.

    Attributes:
        profile: User profile.
        transactions: Recent transactions, newest first.
        goals: User goals.
        history: Prior chat turns (chat mode only).
        query: Current user question (None = insight report mode).
    """

    profile: UserProfile
    transactions: tuple[CanonicalTransaction, ...] = ()
    goals: tuple[GoalSnapshot, ...] = ()
    history: tuple[ChatMessage, ...] = field(default=())
    query: str | None = None

    @property
    def is_chat(self) -> bool:
        return bool(self.query and self.query.strip())

    @classmethod
    def from_user_context(
        cls,
        user_context: UserContext,
        *,
        query: str | None = None,
        history: tuple[ChatMessage, ...] = (),
        since: date | None = None,
    ) -> "InsightContext":
        """Build a context from collaborator data.

        Args:
            user_context: Profile, transactions and goals of the user.
            query: Chat message (None = insight report).
            history: Prior chat turns, oldest first.
            since: Transactions dated before this day are left out.
        """
        transactions = user_context.transactions
        if since is not None:
            transactions = tuple(t for t in transactions if t.transaction_date >= since)
        return cls(
            profile=user_context.profile,
            transactions=transactions,
            goals=user_context.goals,
            history=history,
            query=query,
        )
