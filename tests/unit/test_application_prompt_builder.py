"""Unit tests for InsightPromptBuilder."""

from datetime import date
from decimal import Decimal

import pytest
from uuid_extensions import uuid7

from finsync.application.insights import InsightPromptBuilder
from finsync.domain.enums import TransactionType
from finsync.domain.value_objects import (
    ChatMessage,
    ChatRole,
    GoalSnapshot,
    InsightContext,
    UserProfile,
)
from tests.conftest import create_transaction


@pytest.fixture
def context() -> InsightContext:
    return InsightContext(
        profile=UserProfile(user_id=uuid7(), name="Ana", plan="pro"),
        transactions=(
            create_transaction(
                description="Hotmart sale: E-book",
                amount="97.00",
                transaction_type=TransactionType.INCOME,
                source="Hotmart",
                transaction_date=date(2024, 11, 19),
            ),
            create_transaction(
                description="Rent",
                amount="1300.00",
                transaction_date=date(2024, 11, 18),
            ),
        ),
        goals=(
            GoalSnapshot(
                name="Emergency fund",
                current_amount=Decimal("2000"),
                target_amount=Decimal("5000"),
                deadline=date(2025, 6, 30),
            ),
        ),
    )


@pytest.mark.unit
class TestReportPrompt:
    """Prompt without a query."""

    def test_contains_profile_and_summary(self, context):
        prompt = InsightPromptBuilder().build(context)

        assert "USER: Ana (plan: pro)" in prompt
        assert "- Income: R$ 97.00" in prompt
        assert "- Expenses: R$ 1,300.00" in prompt
        assert "- Balance: -R$ 1,203.00" in prompt

    def test_renders_transactions_and_goals(self, context):
        prompt = InsightPromptBuilder().build(context)

        assert "- 2024-11-19: Hotmart sale: E-book (income) - R$ 97.00 [Hotmart]" in prompt
        assert "- 2024-11-18: Rent (expense) - R$ 1,300.00 [Open Finance]" in prompt
        assert "- Emergency fund: R$ 2,000.00 / R$ 5,000.00 (deadline 2025-06-30)" in prompt

    def test_asks_for_three_insights(self, context):
        prompt = InsightPromptBuilder().build(context)

        assert "exactly 3" in prompt
        assert "USER MESSAGE" not in prompt

    def test_transaction_lines_are_capped(self, context):
        prompt = InsightPromptBuilder(max_transactions=1).build(context)

        assert "Hotmart sale: E-book" in prompt
        assert "Rent (expense)" not in prompt

    def test_custom_currency_symbol(self, context):
        prompt = InsightPromptBuilder(currency_symbol="$").build(context)

        assert "- Income: $ 97.00" in prompt


@pytest.mark.unit
class TestChatPrompt:
    """Prompt with a query and history."""

    def test_includes_history_and_message(self, context):
        chat = InsightContext(
            profile=context.profile,
            transactions=context.transactions,
            history=(
                ChatMessage(role=ChatRole.USER, text="hello"),
                ChatMessage(role=ChatRole.MODEL, text="hi there"),
            ),
            query="How much did I spend?",
        )

        prompt = InsightPromptBuilder().build(chat)

        assert "CONVERSATION SO FAR:\nUser: hello\nAssistant: hi there" in prompt
        assert prompt.index("CONVERSATION SO FAR") < prompt.index("USER MESSAGE")
        assert "USER MESSAGE:\nHow much did I spend?" in prompt
        assert "GOALS:\n- none set" in prompt

    def test_empty_context_renders_placeholders(self):
        chat = InsightContext(
            profile=UserProfile(user_id=uuid7(), name="Bo"),
            query="hi",
        )

        prompt = InsightPromptBuilder().build(chat)

        assert "RECENT TRANSACTIONS:\n- none recorded" in prompt
        assert "CONVERSATION SO FAR" not in prompt

    def test_chat_role_parse_accepts_assistant_labels(self):
        assert ChatRole.parse("assistant") == ChatRole.MODEL
        assert ChatRole.parse("AI") == ChatRole.MODEL
        assert ChatRole.parse("user") == ChatRole.USER
