"""Unit tests for GenerateInsightHandler."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from finsync.application.commands.handlers import (
    GenerateInsightError,
    GenerateInsightHandler,
)
from finsync.application.commands.integration_commands import GenerateInsight
from finsync.application.dtos.insight_dtos import InsightOutcome
from finsync.application.insights import InsightCascade, LocalInsightEngine
from finsync.core.result import Failure, Success
from finsync.domain.enums import TransactionType
from finsync.domain.value_objects import ChatMessage, ChatRole, UserProfile
from finsync.infrastructure.persistence import (
    InMemoryTransactionStore,
    InMemoryUserContextProvider,
)
from tests.conftest import NOW, TODAY, create_transaction


@pytest.fixture
def user_id():
    return uuid7()


@pytest.fixture
async def user_context(user_id):
    store = InMemoryTransactionStore()
    await store.persist_transactions(
        user_id,
        "hotmart",
        [
            create_transaction(
                description="Hotmart sale: E-book",
                amount="97.00",
                transaction_type=TransactionType.INCOME,
                source="Hotmart",
            )
        ],
    )
    provider = InMemoryUserContextProvider(store, today=TODAY)
    provider.add_user(UserProfile(user_id=user_id, name="Ana"))
    return provider


@pytest.mark.unit
class TestGenerateInsightHandler:
    """Test the handler around the cascade."""

    async def test_unknown_user_fails(self, user_context):
        handler = GenerateInsightHandler(
            user_context=user_context,
            cascade=InsightCascade(candidates=[], local_engine=LocalInsightEngine()),
            clock=lambda: NOW,
        )

        result = await handler.handle(GenerateInsight(user_id=uuid7()))

        assert isinstance(result, Failure)
        assert result.error == GenerateInsightError.USER_NOT_FOUND

    async def test_report_falls_back_to_local_engine(self, user_context, user_id):
        handler = GenerateInsightHandler(
            user_context=user_context,
            cascade=InsightCascade(candidates=[], local_engine=LocalInsightEngine()),
            clock=lambda: NOW,
        )

        result = await handler.handle(GenerateInsight(user_id=user_id))

        assert isinstance(result, Success)
        assert result.value.is_degraded is True
        assert "Creator income: R$ 97.00" in result.value.text

    async def test_chat_context_passed_to_cascade(self, user_context, user_id):
        cascade = AsyncMock(spec=InsightCascade)
        cascade.run.return_value = InsightOutcome(text="Answer", generator="m1")
        handler = GenerateInsightHandler(
            user_context=user_context, cascade=cascade, clock=lambda: NOW
        )
        history = (ChatMessage(role=ChatRole.USER, text="hello"),)

        result = await handler.handle(
            GenerateInsight(user_id=user_id, query="How much?", history=history)
        )

        assert isinstance(result, Success)
        assert result.value.text == "Answer"
        context = cascade.run.await_args.args[0]
        assert context.query == "How much?"
        assert context.history == history
        assert context.profile.name == "Ana"
        assert len(context.transactions) == 1

    async def test_old_transactions_left_out(self, user_id):
        store = InMemoryTransactionStore()
        await store.persist_transactions(
            user_id,
            "open_finance",
            [
                create_transaction(external_id="recent", transaction_date=TODAY),
                create_transaction(
                    external_id="old", transaction_date=TODAY - timedelta(days=60)
                ),
            ],
        )
        provider = InMemoryUserContextProvider(store, context_days=90, today=TODAY)
        provider.add_user(UserProfile(user_id=user_id, name="Ana"))
        cascade = AsyncMock(spec=InsightCascade)
        cascade.run.return_value = InsightOutcome(text="Answer", generator="m1")
        handler = GenerateInsightHandler(
            user_context=provider, cascade=cascade, context_days=30, clock=lambda: NOW
        )

        await handler.handle(GenerateInsight(user_id=user_id))

        context = cascade.run.await_args.args[0]
        assert [t.external_id for t in context.transactions] == ["recent"]
