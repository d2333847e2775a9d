"""Open Finance aggregator response schemas (Pluggy).

Reference:
    - https://docs.pluggy.ai/reference/accounts-list
    - https://docs.pluggy.ai/reference/transactions-list
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OpenFinanceAccountsPage(BaseModel):
    """Envelope of GET /accounts."""

    model_config = ConfigDict(extra="ignore")

    results: list[dict[str, Any]] = Field(default_factory=list)


class OpenFinanceAccount(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    name: str | None = None
    type: str | None = None


class OpenFinanceTransactionsPage(BaseModel):
    """Envelope of GET /transactions."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    results: list[dict[str, Any]] = Field(default_factory=list)
    page: int = 1
    total_pages: int = Field(default=1, alias="totalPages")


class OpenFinanceTransaction(BaseModel):
    """Bank transaction. amount is signed; type is CREDIT or DEBIT."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    description: str | None = None
    amount: Decimal
    date: datetime
    type: str | None = None
    category: str | None = None
    status: str | None = None
