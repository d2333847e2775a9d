"""Canonical transaction record.

Provider-agnostic representation of a single financial event. Every
adapter maps its raw records into this shape before anything leaves the
adapter, so persistence and insight generation never see provider-native
payloads.

Invariants:
    - amount is a Decimal strictly greater than zero
    - direction lives only in transaction_type
    - transaction_date is a plain calendar date, never a datetime
    - (source provider, external_id) identifies the record for upserts

Usage:
    from finsync.domain.entities import CanonicalTransaction

    record = CanonicalTransaction(
        description="Hotmart sale: Digital Marketing Course",
        amount=Decimal("97.00"),
        transaction_type=TransactionType.INCOME,
        source="Hotmart",
        transaction_date=date(2024, 11, 5),
        external_id="HP17715690036014",
    )
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from finsync.core.constants import SANDBOX_EXTERNAL_ID_PREFIX
from finsync.domain.enums import TransactionType


@dataclass(frozen=True, slots=True, kw_only=True)
class CanonicalTransaction:
    """Normalized, provider-agnostic financial event.

    Attributes:
        description: Human-readable description.
        amount: Positive amount (sign is carried by transaction_type).
        transaction_type: INCOME or EXPENSE.
        source: Fixed label of the originating provider ("Hotmart", "Open Finance").
        transaction_date: Calendar date of settlement or purchase.
        external_id: Provider-scoped unique identifier.
        category: Optional category label.
    """

    description: str
    amount: Decimal
    transaction_type: TransactionType
    source: str
    transaction_date: date
    external_id: str
    category: str | None = None

    def __post_init__(self) -> None:
        """Validate record invariants.

        Raises:
            ValueError: If any invariant is violated.
        """
        if not isinstance(self.amount, Decimal):
            raise ValueError("amount must be a Decimal")
        if not self.amount.is_finite() or self.amount <= 0:
            raise ValueError(f"amount must be positive, got {self.amount}")
        if not isinstance(self.transaction_type, TransactionType):
            raise ValueError("transaction_type must be a TransactionType enum")
        # datetime is a subclass of date
        if isinstance(self.transaction_date, datetime) or not isinstance(
            self.transaction_date, date
        ):
            raise ValueError("transaction_date must be a date without time")
        if not self.external_id:
            raise ValueError("external_id cannot be empty")
        if not self.source:
            raise ValueError("source cannot be empty")

    @property
    def is_income(self) -> bool:
        return self.transaction_type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.transaction_type == TransactionType.EXPENSE

    @property
    def signed_amount(self) -> Decimal:
        """Amount with sign applied (negative for expenses)."""
        return self.amount if self.is_income else -self.amount

    @property
    def is_sandbox(self) -> bool:
        """Check whether this record was produced by the sandbox generator."""
        return self.external_id.startswith(SANDBOX_EXTERNAL_ID_PREFIX)
