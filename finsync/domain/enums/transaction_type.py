"""Transaction direction.

Canonical records always carry a positive amount. Whether money came in
or went out is expressed only through this enum.
"""

from enum import Enum


class TransactionType(str, Enum):
    """Direction of a canonical transaction record.

    Examples:
        >>> TransactionType("income")
        <TransactionType.INCOME: 'income'>
    """

    INCOME = "income"
    """Money received (sale approved, bank credit, salary)."""

    EXPENSE = "expense"
    """Money spent or returned (bank debit, refund, chargeback)."""

    @classmethod
    def values(cls) -> list[str]:
        """Get all transaction type values as strings."""
        return [member.value for member in cls]
