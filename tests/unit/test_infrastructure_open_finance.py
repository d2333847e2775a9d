"""Unit tests for the Open Finance mapper and provider.

Tests cover:
- Direction mapping (CREDIT/DEBIT, sign fallback)
- Zero amounts skipped, default description, synthesized ids
- Account listing and per-account pagination
- X-API-KEY authentication and error propagation

Architecture:
- Uses pytest-httpx for HTTP mocking
"""

import re
from datetime import date
from decimal import Decimal

import pytest
from pytest_httpx import HTTPXMock

from finsync.core.result import Failure, Success
from finsync.domain.enums import TransactionType
from finsync.domain.errors import ProviderAuthenticationError, ProviderInvalidResponseError
from finsync.domain.value_objects import SyncWindow
from finsync.infrastructure.providers.normalization import ExternalIdSynthesizer
from finsync.infrastructure.providers.open_finance import OpenFinanceProvider
from finsync.infrastructure.providers.open_finance.mappers import (
    OpenFinanceTransactionMapper,
)
from tests.conftest import create_credential, make_settings

ACCOUNTS_URL = "https://openfinance.test/accounts"
WINDOW = SyncWindow(start_date=date(2024, 11, 1), end_date=date(2024, 11, 30))


def transactions_url(account_id: str, page: int) -> re.Pattern:
    return re.compile(
        rf"https://openfinance\.test/transactions\?accountId={account_id}"
        rf"&from=2024-11-01&to=2024-11-30&page={page}&pageSize=100"
    )


def build_transaction(
    *,
    id: str | None = "tx-1",
    amount: str = "-45.90",
    type: str | None = "DEBIT",
    description: str | None = "Supermarket",
    when: str = "2024-11-05T01:00:00.000Z",
    category: str | None = "Groceries",
) -> dict:
    data = {"amount": amount, "date": when, "description": description, "category": category}
    if id is not None:
        data["id"] = id
    if type is not None:
        data["type"] = type
    return data


@pytest.fixture
def mapper() -> OpenFinanceTransactionMapper:
    return OpenFinanceTransactionMapper(utc_offset_hours=-3)


@pytest.mark.unit
class TestOpenFinanceMapper:
    """Mapping aggregator transactions."""

    def test_debit_is_expense(self, mapper):
        record = mapper.map_transaction(build_transaction())

        assert record.transaction_type == TransactionType.EXPENSE
        assert record.amount == Decimal("45.90")
        assert record.description == "Supermarket"
        assert record.category == "Groceries"
        assert record.source == "Open Finance"
        assert record.external_id == "tx-1"
        assert record.transaction_date == date(2024, 11, 4)

    def test_credit_is_income(self, mapper):
        record = mapper.map_transaction(build_transaction(amount="1500.00", type="CREDIT"))

        assert record.transaction_type == TransactionType.INCOME

    def test_type_wins_over_sign(self, mapper):
        record = mapper.map_transaction(build_transaction(amount="-10.00", type="CREDIT"))

        assert record.transaction_type == TransactionType.INCOME
        assert record.amount == Decimal("10.00")

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [("25.00", TransactionType.INCOME), ("-25.00", TransactionType.EXPENSE)],
    )
    def test_sign_decides_without_type(self, mapper, amount, expected):
        record = mapper.map_transaction(build_transaction(amount=amount, type=None))

        assert record.transaction_type == expected

    def test_zero_amount_skipped(self, mapper):
        assert mapper.map_transaction(build_transaction(amount="0.00")) is None

    def test_blank_description_defaults(self, mapper):
        record = mapper.map_transaction(build_transaction(description="   "))

        assert record.description == "Bank transaction"

    def test_missing_id_synthesized(self, mapper):
        items = [build_transaction(id=None), build_transaction(id=None)]

        records = mapper.map_transactions(items, ExternalIdSynthesizer("open_finance"))
        again = mapper.map_transactions(items, ExternalIdSynthesizer("open_finance"))

        assert records[0].external_id.startswith("open_finance-")
        assert records[0].external_id != records[1].external_id
        assert [r.external_id for r in records] == [r.external_id for r in again]

    def test_invalid_item_skipped(self, mapper):
        records = mapper.map_transactions(
            [{"id": "x", "amount": "abc", "date": "2024-11-05"}, build_transaction()]
        )

        assert [r.external_id for r in records] == ["tx-1"]

    def test_out_of_range_amount_skipped(self, mapper):
        records = mapper.map_transactions(
            [build_transaction(id="huge", amount="-1e30"), build_transaction()]
        )

        assert [r.external_id for r in records] == ["tx-1"]


@pytest.fixture
def provider() -> OpenFinanceProvider:
    return OpenFinanceProvider(settings=make_settings(), timeout=5.0)


@pytest.mark.unit
class TestOpenFinanceProvider:
    """Accounts then paginated transactions."""

    async def test_fetches_every_account_and_page(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            url=ACCOUNTS_URL,
            json={"results": [{"id": "acc1"}, {"id": "acc2"}, {"name": "no id"}]},
        )
        httpx_mock.add_response(
            url=transactions_url("acc1", 1),
            json={"results": [build_transaction(id="a")], "page": 1, "totalPages": 2},
        )
        httpx_mock.add_response(
            url=transactions_url("acc1", 2),
            json={"results": [build_transaction(id="b")], "page": 2, "totalPages": 2},
        )
        httpx_mock.add_response(
            url=transactions_url("acc2", 1),
            json={
                "results": [build_transaction(id="c", type="CREDIT", amount="900.00")],
                "page": 1,
                "totalPages": 1,
            },
        )

        result = await provider.fetch_transactions(
            create_credential(access_token="api_key_123"), WINDOW
        )

        assert isinstance(result, Success)
        assert [r.external_id for r in result.value] == ["a", "b", "c"]
        assert all(
            request.headers["X-API-KEY"] == "api_key_123"
            for request in httpx_mock.get_requests()
        )

    async def test_records_outside_window_dropped(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=ACCOUNTS_URL, json={"results": [{"id": "acc1"}]})
        httpx_mock.add_response(
            url=transactions_url("acc1", 1),
            json={
                "results": [
                    build_transaction(id="in"),
                    build_transaction(id="late", when="2024-12-01T12:00:00Z"),
                ],
                "totalPages": 1,
            },
        )

        result = await provider.fetch_transactions(create_credential(), WINDOW)

        assert [r.external_id for r in result.value] == ["in"]

    async def test_no_accounts(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=ACCOUNTS_URL, json={"results": []})

        result = await provider.fetch_transactions(create_credential(), WINDOW)

        assert result == Success(value=[])

    async def test_forbidden_accounts(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=ACCOUNTS_URL, status_code=403)

        result = await provider.fetch_transactions(create_credential(), WINDOW)

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderAuthenticationError)
        assert result.error.is_token_expired is False

    async def test_malformed_transactions_page(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=ACCOUNTS_URL, json={"results": [{"id": "acc1"}]})
        httpx_mock.add_response(
            url=transactions_url("acc1", 1), json={"results": {"oops": True}}
        )

        result = await provider.fetch_transactions(create_credential(), WINDOW)

        assert isinstance(result.error, ProviderInvalidResponseError)

    def test_identity(self, provider):
        assert provider.slug == "open_finance"
        assert provider.source_label == "Open Finance"
