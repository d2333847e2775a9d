"""Sandbox profiles: what plausible synthetic data looks like per provider.

A profile bounds everything the generator randomizes: how many records,
which descriptions and categories, the amount band per direction and how
far back dates may go.
"""

from dataclasses import dataclass
from decimal import Decimal

from finsync.domain.enums import TransactionType


@dataclass(frozen=True, kw_only=True)
class SandboxTemplate:
    """Shape of one kind of synthetic record."""

    description: str
    transaction_type: TransactionType
    category: str | None = None


@dataclass(frozen=True, kw_only=True)
class SandboxProfile:
    """Bounds for synthetic data of one provider.

    Attributes:
        provider_slug: Provider the profile belongs to.
        marker: Short tag embedded in synthetic external ids.
        source_label: Fixed record source.
        templates: Record shapes to pick from.
        min_records: Lower bound of records per call.
        max_records: Upper bound of records per call.
        income_band: Inclusive (min, max) amount for income records.
        expense_band: Inclusive (min, max) amount for expense records.
        window_days: Dates fall within this many days, today included.
    """

    provider_slug: str
    marker: str
    source_label: str
    templates: tuple[SandboxTemplate, ...]
    min_records: int
    max_records: int
    income_band: tuple[Decimal, Decimal]
    expense_band: tuple[Decimal, Decimal]
    window_days: int = 30

    def __post_init__(self) -> None:
        if not self.templates:
            raise ValueError("templates cannot be empty")
        if not 1 <= self.min_records <= self.max_records:
            raise ValueError("record bounds must satisfy 1 <= min <= max")
        for low, high in (self.income_band, self.expense_band):
            if not Decimal("0") < low <= high:
                raise ValueError("amount bands must satisfy 0 < min <= max")
        if self.window_days < 1:
            raise ValueError("window_days must be at least 1")

    def band_for(self, transaction_type: TransactionType) -> tuple[Decimal, Decimal]:
        if transaction_type == TransactionType.INCOME:
            return self.income_band
        return self.expense_band


HOTMART_SANDBOX_PROFILE = SandboxProfile(
    provider_slug="hotmart",
    marker="HM",
    source_label="Hotmart",
    templates=tuple(
        SandboxTemplate(
            description=f"Hotmart sale: {product}",
            transaction_type=TransactionType.INCOME,
            category="Digital product sales",
        )
        for product in (
            "Digital Marketing Course",
            "Personal Finance E-book",
            "VIP Mentoring",
        )
    ),
    min_records=1,
    max_records=3,
    income_band=(Decimal("47.00"), Decimal("247.00")),
    expense_band=(Decimal("47.00"), Decimal("247.00")),
)

OPEN_FINANCE_SANDBOX_PROFILE = SandboxProfile(
    provider_slug="open_finance",
    marker="OF",
    source_label="Open Finance",
    templates=(
        SandboxTemplate(description="Supermarket", transaction_type=TransactionType.EXPENSE, category="Groceries"),
        SandboxTemplate(description="Transfer received", transaction_type=TransactionType.INCOME, category="Transfers"),
        SandboxTemplate(description="Restaurant", transaction_type=TransactionType.EXPENSE, category="Dining"),
        SandboxTemplate(description="Salary", transaction_type=TransactionType.INCOME, category="Salary"),
        SandboxTemplate(description="Uber ride", transaction_type=TransactionType.EXPENSE, category="Transport"),
        SandboxTemplate(description="Payment received", transaction_type=TransactionType.INCOME, category="Transfers"),
        SandboxTemplate(description="Pharmacy", transaction_type=TransactionType.EXPENSE, category="Health"),
        SandboxTemplate(description="Electricity bill", transaction_type=TransactionType.EXPENSE, category="Utilities"),
        SandboxTemplate(description="Refund", transaction_type=TransactionType.INCOME, category="Refunds"),
    ),
    min_records=15,
    max_records=25,
    income_band=(Decimal("500.00"), Decimal("1500.00")),
    expense_band=(Decimal("20.00"), Decimal("220.00")),
)

_PROFILES: dict[str, SandboxProfile] = {
    profile.provider_slug: profile
    for profile in (HOTMART_SANDBOX_PROFILE, OPEN_FINANCE_SANDBOX_PROFILE)
}


def get_sandbox_profile(provider_slug: str) -> SandboxProfile | None:
    return _PROFILES.get(provider_slug)
