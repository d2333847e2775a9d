"""Unit tests for the deterministic local insight engine.

Tests cover:
- Report mode: three numbered insights (creator income, deficit, surplus,
  largest expense, goal progress)
- Chat mode: whole-word keyword matching in English and Portuguese
- Progressive monthly income tax estimate
- Determinism (same context -> same text)
"""

from datetime import date
from decimal import Decimal

import pytest
from uuid_extensions import uuid7

from finsync.application.insights import LocalInsightEngine, estimate_monthly_income_tax
from finsync.application.insights.local_insights import detect_topic
from finsync.domain.enums import TransactionType
from finsync.domain.value_objects import GoalSnapshot, InsightContext, UserProfile
from tests.conftest import create_transaction

INCOME = TransactionType.INCOME


def build_context(transactions=(), goals=(), query=None) -> InsightContext:
    return InsightContext(
        profile=UserProfile(user_id=uuid7(), name="Ana", plan="pro"),
        transactions=tuple(transactions),
        goals=tuple(goals),
        query=query,
    )


@pytest.fixture
def creator_records():
    return [
        create_transaction(description="Course sale", amount="1000.00", transaction_type=INCOME, source="Hotmart"),
        create_transaction(description="Ads", amount="500.00", transaction_type=INCOME, source="YouTube AdSense"),
        create_transaction(description="Rent", amount="300.00", category="Housing"),
        create_transaction(description="Coffee", amount="100.00"),
        create_transaction(description="Gym", amount="300.00", category="Health"),
    ]


@pytest.fixture
def emergency_goal():
    return GoalSnapshot(
        name="Emergency fund",
        current_amount=Decimal("2000"),
        target_amount=Decimal("5000"),
        deadline=date(2025, 6, 30),
    )


@pytest.fixture
def engine():
    return LocalInsightEngine(currency_symbol="R$")


@pytest.mark.unit
class TestLocalReport:
    """Report mode (no query)."""

    def test_report_has_header_and_three_numbered_insights(
        self, engine, creator_records, emergency_goal
    ):
        text = engine.respond(build_context(creator_records, [emergency_goal]))

        lines = text.splitlines()
        assert lines[0] == "Hi Ana, here is your financial snapshot (5 transactions):"
        assert [line[:3] for line in lines[1:]] == ["1. ", "2. ", "3. "]

    def test_creator_income_insight(self, engine, creator_records):
        text = engine.respond(build_context(creator_records))

        assert (
            "1. Creator income: R$ 1,500.00 of your R$ 1,500.00 income came from "
            "creator platforms. Set aside 30% (R$ 450.00)"
        ) in text

    def test_largest_expense_insight(self, engine, creator_records):
        text = engine.respond(build_context(creator_records))

        assert "2. Largest expense: Rent at R$ 300.00, 42.9% of your spending." in text

    def test_goal_progress_insight(self, engine, creator_records, emergency_goal):
        text = engine.respond(build_context(creator_records, [emergency_goal]))

        assert '3. Goal "Emergency fund": 40% reached, R$ 3,000.00 to go by 2025-06-30.' in text

    def test_deficit_alert_without_creator_income(self, engine):
        records = [
            create_transaction(description="Salary", amount="100.00", transaction_type=INCOME),
            create_transaction(description="Rent", amount="300.00"),
        ]

        text = engine.respond(build_context(records))

        assert (
            "1. Spending alert: expenses (R$ 300.00) exceed income (R$ 100.00) by R$ 200.00."
        ) in text

    def test_surplus_suggests_saving(self, engine):
        records = [
            create_transaction(description="Salary", amount="1000.00", transaction_type=INCOME),
            create_transaction(description="Groceries", amount="200.00"),
        ]

        text = engine.respond(build_context(records))

        assert "1. Positive balance of R$ 800.00. Moving 30% of it (R$ 240.00)" in text

    def test_empty_context_still_gives_three_insights(self, engine):
        text = engine.respond(build_context())

        assert "1. No transactions yet." in text
        assert "2. No expenses recorded" in text
        assert "3. No savings goal yet." in text

    def test_reached_goals_only(self, engine):
        reached = GoalSnapshot(
            name="Laptop", current_amount=Decimal("3000"), target_amount=Decimal("3000")
        )

        text = engine.respond(build_context(goals=[reached]))

        assert "3. Every goal you set is reached." in text

    def test_report_is_deterministic(self, engine, creator_records, emergency_goal):
        context = build_context(creator_records, [emergency_goal])

        assert engine.respond(context) == engine.respond(context)


@pytest.mark.unit
class TestLocalChat:
    """Chat mode (query present)."""

    def test_expenses_question(self, engine, creator_records):
        text = engine.respond(build_context(creator_records, query="How much did I spend?"))

        assert text == (
            "You spent R$ 700.00 in this period. Top categories: Health (R$ 300.00), "
            "Housing (R$ 300.00), Coffee (R$ 100.00). Biggest single expense: "
            "Rent (R$ 300.00)."
        )

    def test_portuguese_expenses_question(self, engine, creator_records):
        text = engine.respond(build_context(creator_records, query="Quanto eu gastei?"))

        assert text.startswith("You spent R$ 700.00")

    def test_income_question(self, engine, creator_records):
        text = engine.respond(build_context(creator_records, query="What was my income?"))

        assert text == (
            "You received R$ 1,500.00 in this period. Main sources: "
            "Hotmart (R$ 1,000.00), YouTube AdSense (R$ 500.00)."
        )

    def test_balance_wins_over_greeting(self, engine, creator_records):
        text = engine.respond(build_context(creator_records, query="Hi, what's my balance?"))

        assert text.startswith("Your balance for this period is R$ 800.00, a surplus")

    def test_savings_phrase(self, engine, creator_records):
        text = engine.respond(build_context(creator_records, query="How can I spend less?"))

        assert "Your largest spending category is Health (R$ 300.00)." in text
        assert "Cutting it by 20% would save R$ 60.00" in text

    def test_tax_question_in_exempt_bracket(self, engine, creator_records):
        text = engine.respond(build_context(creator_records, query="Quanto de imposto eu pago?"))

        assert "exempt bracket" in text

    def test_tax_question_with_taxable_income(self, engine):
        records = [create_transaction(amount="5000.00", transaction_type=INCOME)]

        text = engine.respond(build_context(records, query="What about taxes?"))

        assert "estimated monthly income tax is R$ 479.00" in text
        assert "effective rate 9.6%" in text

    def test_greeting(self, engine):
        text = engine.respond(build_context(query="olá"))

        assert text.startswith("Hi Ana!")

    def test_summary_question(self, engine, creator_records, emergency_goal):
        text = engine.respond(
            build_context(creator_records, [emergency_goal], query="Give me a summary")
        )

        assert text == (
            "Summary: 5 transactions, income R$ 1,500.00, expenses R$ 700.00, "
            "balance R$ 800.00. Active goals: 1."
        )

    def test_unknown_question_gets_help(self, engine):
        text = engine.respond(build_context(query="what is the meaning of life"))

        assert text.startswith("I could not match that question.")


@pytest.mark.unit
class TestTopicDetection:
    """Keyword matching uses whole words, not substrings."""

    @pytest.mark.parametrize(
        ("query", "topic"),
        [
            ("ship it", None),
            ("this month", None),
            ("hi", "greeting"),
            ("meu saldo", "balance"),
            ("relatório do mês", "summary"),
            ("quero economizar", "savings"),
            ("IRPF 2024", "tax"),
        ],
    )
    def test_detect_topic(self, query, topic):
        assert detect_topic(query) == topic


@pytest.mark.unit
class TestMonthlyIncomeTax:
    """Progressive monthly table, never negative."""

    @pytest.mark.parametrize(
        ("income", "expected"),
        [
            ("0", "0.00"),
            ("2259.20", "0.00"),
            ("2500.00", "18.06"),
            ("2826.65", "42.56"),
            ("3000.00", "68.56"),
            ("4000.00", "237.23"),
            ("10000.00", "1854.00"),
        ],
    )
    def test_estimate(self, income, expected):
        assert estimate_monthly_income_tax(Decimal(income)) == Decimal(expected)
