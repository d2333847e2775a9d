"""Hotmart sales history response schemas.

Only the fields the mapper reads are declared; everything else in the
payload is ignored. Items stay raw dicts on the page envelope so that one
malformed sale is skipped instead of failing the whole page.

Reference:
    - https://developers.hotmart.com/docs/en/v1/sales/sales-history/
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HotmartPrice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    value: Decimal
    currency_code: str | None = None


class HotmartProduct(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    name: str = Field(min_length=1)


class HotmartPurchase(BaseModel):
    """Purchase block of a sale (dates are epoch milliseconds)."""

    model_config = ConfigDict(extra="ignore")

    transaction: str | None = None
    status: str
    order_date: int | None = None
    approved_date: int | None = None
    price: HotmartPrice


class HotmartSale(BaseModel):
    model_config = ConfigDict(extra="ignore")

    product: HotmartProduct
    purchase: HotmartPurchase


class HotmartPageInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    next_page_token: str | None = None
    total_results: int | None = None


class HotmartSalesPage(BaseModel):
    """Envelope of GET /payments/api/v1/sales/history."""

    model_config = ConfigDict(extra="ignore")

    items: list[dict[str, Any]] = Field(default_factory=list)
    page_info: HotmartPageInfo = Field(default_factory=HotmartPageInfo)
