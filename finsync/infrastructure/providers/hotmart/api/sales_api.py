"""Hotmart Sales API client.

HTTP client for the Hotmart sales history endpoint.
Handles HTTP concerns only - returns raw JSON responses.

Endpoints:
    GET /payments/api/v1/sales/history - Paginated sales history

Reference:
    - https://developers.hotmart.com/docs/en/v1/sales/sales-history/
"""

from typing import Any

from finsync.core.constants import BEARER_PREFIX, PROVIDER_PAGE_SIZE, PROVIDER_TIMEOUT_DEFAULT
from finsync.core.result import Result
from finsync.domain.errors import ProviderError
from finsync.infrastructure.providers.base_api_client import (
    BaseProviderAPIClient,
    QueryParams,
)


class HotmartSalesAPI(BaseProviderAPIClient):
    """HTTP client for Hotmart sales history.

    Thread-safe: Uses httpx.AsyncClient per-request (no shared state).

    Example:
        >>> api = HotmartSalesAPI(base_url="https://developers.hotmart.com")
        >>> result = await api.get_sales_page(
        ...     access_token="...",
        ...     start_millis=1730419200000,
        ...     end_millis=1733011199999,
        ... )
    """

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
    ) -> None:
        super().__init__(
            base_url=base_url,
            provider_name="hotmart",
            timeout=timeout,
        )

    def _auth_headers(self, access_token: str) -> dict[str, str]:
        return {"Authorization": f"{BEARER_PREFIX}{access_token}"}

    async def get_sales_page(
        self,
        access_token: str,
        *,
        start_millis: int,
        end_millis: int,
        page_token: str | None = None,
        max_results: int = PROVIDER_PAGE_SIZE,
    ) -> Result[dict[str, Any], ProviderError]:
        """Fetch one page of sales history.

        Args:
            access_token: Valid Hotmart access token.
            start_millis: Window start (epoch milliseconds, inclusive).
            end_millis: Window end (epoch milliseconds, inclusive).
            page_token: Cursor from the previous page (None for the first page).
            max_results: Page size.

        Returns:
            Success(dict): Raw page JSON ({"items": [...], "page_info": {...}}).
            Failure(ProviderError): On any HTTP, auth or parsing failure.
        """
        params: QueryParams = {
            "start_date": start_millis,
            "end_date": end_millis,
            "max_results": max_results,
        }
        if page_token:
            params["page_token"] = page_token

        return await self._get_object(
            path="/payments/api/v1/sales/history",
            access_token=access_token,
            params=params,
            operation="get_sales_page",
        )
