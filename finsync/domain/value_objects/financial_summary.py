"""Financial summary computed from canonical transactions.

Pure function of its input: the same transactions always produce the same
summary. Prompts and the local insight engine both read from it.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from finsync.domain.entities import CanonicalTransaction

ZERO = Decimal("0")


@dataclass(frozen=True, slots=True, kw_only=True)
class FinancialSummary:
    """Totals and highlights over a set of transactions.

    Attributes:
        total_income: Sum of income amounts.
        total_expenses: Sum of expense amounts.
        transaction_count: Number of transactions summarized.
        largest_expense: Expense with the highest amount (first one on ties).
        income_by_source: Income totals keyed by source label.
        expenses_by_category: Expense totals keyed by category (or description
            when the record has no category).
    """

    total_income: Decimal = ZERO
    total_expenses: Decimal = ZERO
    transaction_count: int = 0
    largest_expense: CanonicalTransaction | None = None
    income_by_source: dict[str, Decimal] = field(default_factory=dict)
    expenses_by_category: dict[str, Decimal] = field(default_factory=dict)

    @classmethod
    def from_transactions(
        cls, transactions: Iterable[CanonicalTransaction]
    ) -> "FinancialSummary":
        total_income = ZERO
        total_expenses = ZERO
        count = 0
        largest: CanonicalTransaction | None = None
        income_by_source: dict[str, Decimal] = {}
        expenses_by_category: dict[str, Decimal] = {}

        for record in transactions:
            count += 1
            if record.is_income:
                total_income += record.amount
                income_by_source[record.source] = (
                    income_by_source.get(record.source, ZERO) + record.amount
                )
                continue

            total_expenses += record.amount
            label = record.category or record.description
            expenses_by_category[label] = (
                expenses_by_category.get(label, ZERO) + record.amount
            )
            if largest is None or record.amount > largest.amount:
                largest = record

        return cls(
            total_income=total_income,
            total_expenses=total_expenses,
            transaction_count=count,
            largest_expense=largest,
            income_by_source=income_by_source,
            expenses_by_category=expenses_by_category,
        )

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expenses

    @property
    def has_deficit(self) -> bool:
        return self.balance < 0

    @property
    def largest_expense_share(self) -> Decimal:
        """Largest expense as a percentage of total expenses (one decimal)."""
        if self.largest_expense is None or self.total_expenses <= 0:
            return ZERO
        share = self.largest_expense.amount / self.total_expenses * 100
        return share.quantize(Decimal("0.1"))

    def income_from(self, sources: Iterable[str]) -> Decimal:
        """Total income whose source label contains any of the given names.

        Matching is case-insensitive and by substring, so "YouTube" also
        matches a source labelled "YouTube AdSense".
        """
        needles = [name.lower() for name in sources]
        return sum(
            (
                amount
                for source, amount in self.income_by_source.items()
                if any(needle in source.lower() for needle in needles)
            ),
            ZERO,
        )
