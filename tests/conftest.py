"""Shared pytest fixtures and builders.

Every test builds its own Settings from keyword arguments so nothing
depends on the process environment, and every clock is pinned.
"""

import asyncio
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
import structlog
from uuid_extensions import uuid7

from finsync.core.config import Settings, get_settings
from finsync.core.result import Success
from finsync.domain.entities import CanonicalTransaction
from finsync.domain.enums import TransactionType
from finsync.domain.value_objects import OAuthCredential

# Fixed "now" shared by tests that inject clocks
NOW = datetime(2024, 11, 20, 15, 0, tzinfo=UTC)
TODAY = NOW.date()


def make_settings(**overrides) -> Settings:
    """Settings with test defaults, overridable per test."""
    values = {
        "environment": "testing",
        "sandbox_mode": False,
        "hotmart_api_base_url": "https://hotmart.test",
        "hotmart_token_url": "https://auth.hotmart.test/oauth/token",
        "hotmart_authorize_url": "https://auth.hotmart.test/oauth/authorize",
        "open_finance_api_base_url": "https://openfinance.test",
        "open_finance_token_url": "https://auth.openfinance.test/oauth/token",
        "open_finance_authorize_url": "https://auth.openfinance.test/oauth/authorize",
        "gemini_api_key": None,
    }
    values.update(overrides)
    return Settings(**values)


def create_credential(
    *,
    access_token: str = "at_test",
    refresh_token: str | None = "rt_test",
    expires_in: timedelta = timedelta(hours=1),
    now: datetime = NOW,
) -> OAuthCredential:
    """OAuthCredential expiring `expires_in` after `now`."""
    return OAuthCredential(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_at=now + expires_in,
    )


def create_transaction(
    *,
    description: str = "Coffee",
    amount: str | Decimal = "12.50",
    transaction_type: TransactionType = TransactionType.EXPENSE,
    source: str = "Open Finance",
    transaction_date: date = TODAY,
    external_id: str | None = None,
    category: str | None = None,
) -> CanonicalTransaction:
    return CanonicalTransaction(
        description=description,
        amount=Decimal(amount),
        transaction_type=transaction_type,
        source=source,
        transaction_date=transaction_date,
        external_id=external_id or f"tx-{uuid7()}",
        category=category,
    )


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture(autouse=True)
def _reset_cached_singletons():
    """Cached settings and container singletons never leak between tests."""
    from finsync.core import container

    get_settings.cache_clear()
    for factory in (
        container.init_logging,
        container.get_provider_factory,
        container.get_provider_adapters,
        container.get_token_refreshers,
        container.get_oauth_state_codec,
        container.get_insight_cascade,
    ):
        factory.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


class FakeOAuthClient:
    """OAuthClientProtocol double with awaitable mocks for both grants."""

    def __init__(self, provider_slug: str = "hotmart", *, is_configured: bool = True):
        self.provider_slug = provider_slug
        self.is_configured = is_configured
        self.exchange_code_for_tokens = AsyncMock()
        self.refresh_access_token = AsyncMock()

    def authorization_url(self, state: str) -> str:
        return f"https://auth.{self.provider_slug}.test/authorize?state={state}"


class FakeProvider:
    """TransactionProviderProtocol double recording every call."""

    def __init__(
        self,
        slug: str = "hotmart",
        source_label: str = "Hotmart",
        result=None,
        *,
        delay: float = 0.0,
        raises: Exception | None = None,
    ):
        self.slug = slug
        self.source_label = source_label
        self.result = result if result is not None else Success(value=[])
        self.delay = delay
        self.raises = raises
        self.calls: list[tuple] = []

    async def fetch_transactions(self, credential, window):
        self.calls.append((credential, window))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.raises is not None:
            raise self.raises
        return self.result
