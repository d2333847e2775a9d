"""Unit tests for the in-memory credential, transaction and user context stores."""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from uuid_extensions import uuid7

from finsync.core.enums import ErrorCode
from finsync.core.result import Failure, Success
from finsync.domain.value_objects import GoalSnapshot, UserProfile
from finsync.infrastructure.persistence import (
    InMemoryCredentialStore,
    InMemoryTransactionStore,
    InMemoryUserContextProvider,
)
from tests.conftest import TODAY, create_credential, create_transaction


@pytest.mark.unit
class TestInMemoryCredentialStore:
    """Keyed storage with compare-and-swap saves."""

    async def test_save_and_get(self):
        store = InMemoryCredentialStore()
        user_id = uuid7()
        credential = create_credential()

        await store.save(user_id, "hotmart", credential)

        assert await store.get(user_id, "hotmart") == credential
        assert await store.get(user_id, "open_finance") is None
        assert await store.get(uuid7(), "hotmart") is None

    async def test_unconditional_save_replaces(self):
        store = InMemoryCredentialStore()
        user_id = uuid7()
        await store.save(user_id, "hotmart", create_credential(access_token="old"))

        await store.save(user_id, "hotmart", create_credential(access_token="new"))

        assert (await store.get(user_id, "hotmart")).access_token == "new"

    async def test_guarded_save_matches(self):
        store = InMemoryCredentialStore()
        user_id = uuid7()
        old = create_credential(access_token="old")
        await store.save(user_id, "hotmart", old)

        result = await store.save(
            user_id, "hotmart", create_credential(access_token="new"), expected=old
        )

        assert result == Success(value=None)
        assert (await store.get(user_id, "hotmart")).access_token == "new"

    async def test_guarded_save_conflict(self):
        store = InMemoryCredentialStore()
        user_id = uuid7()
        await store.save(user_id, "hotmart", create_credential(access_token="winner"))

        result = await store.save(
            user_id,
            "hotmart",
            create_credential(access_token="loser"),
            expected=create_credential(access_token="stale"),
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.CREDENTIAL_CONFLICT
        assert (await store.get(user_id, "hotmart")).access_token == "winner"

    async def test_delete(self):
        store = InMemoryCredentialStore()
        user_id = uuid7()
        await store.save(user_id, "hotmart", create_credential())

        await store.delete(user_id, "hotmart")
        await store.delete(user_id, "hotmart")

        assert await store.get(user_id, "hotmart") is None


@pytest.mark.unit
class TestInMemoryTransactionStore:
    """Idempotent upserts keyed by user, provider and external id."""

    async def test_insert_then_update(self):
        store = InMemoryTransactionStore()
        user_id = uuid7()
        records = [create_transaction(external_id="a"), create_transaction(external_id="b")]

        first = await store.persist_transactions(user_id, "open_finance", records)
        second = await store.persist_transactions(user_id, "open_finance", records)

        assert (first.inserted, first.updated) == (2, 0)
        assert (second.inserted, second.updated) == (0, 2)
        assert store.count() == 2

    async def test_same_id_different_provider_kept_apart(self):
        store = InMemoryTransactionStore()
        user_id = uuid7()
        record = create_transaction(external_id="same")

        await store.persist_transactions(user_id, "hotmart", [record])
        await store.persist_transactions(user_id, "open_finance", [record])

        assert store.count() == 2
        assert len(store.list_transactions(user_id, "hotmart")) == 1

    async def test_list_newest_first(self):
        store = InMemoryTransactionStore()
        user_id = uuid7()
        older = create_transaction(external_id="old", transaction_date=date(2024, 11, 1))
        newer = create_transaction(external_id="new", transaction_date=date(2024, 11, 10))

        await store.persist_transactions(user_id, "open_finance", [older, newer])

        assert store.list_transactions(user_id) == [newer, older]
        assert store.list_transactions(uuid7()) == []


@pytest.mark.unit
class TestInMemoryUserContextProvider:
    """User context trimmed to recent transactions."""

    async def test_unknown_user(self):
        provider = InMemoryUserContextProvider(InMemoryTransactionStore(), today=TODAY)

        assert await provider.get_user_context(uuid7()) is None

    async def test_context_trimmed(self):
        store = InMemoryTransactionStore()
        user_id = uuid7()
        recent = [
            create_transaction(external_id=f"r{i}", transaction_date=TODAY - timedelta(days=i))
            for i in range(5)
        ]
        stale = create_transaction(
            external_id="stale", transaction_date=TODAY - timedelta(days=60)
        )
        await store.persist_transactions(user_id, "open_finance", [*recent, stale])
        goal = GoalSnapshot(
            name="Emergency fund",
            current_amount=Decimal("100"),
            target_amount=Decimal("1000"),
        )
        provider = InMemoryUserContextProvider(
            store, context_days=45, max_transactions=3, today=TODAY
        )
        provider.add_user(UserProfile(user_id=user_id, name="Ana"), [goal])

        context = await provider.get_user_context(user_id)

        assert context.profile.name == "Ana"
        assert [t.external_id for t in context.transactions] == ["r0", "r1", "r2"]
        assert context.goals == (goal,)
