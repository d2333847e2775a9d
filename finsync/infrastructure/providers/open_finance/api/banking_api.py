"""Open Finance banking API client.

HTTP client for the aggregator's accounts and transactions endpoints.
Handles HTTP concerns only - returns raw JSON responses.

Endpoints:
    GET /accounts - Accounts reachable with the connection's API key
    GET /transactions - Paginated transactions for one account

The aggregator authenticates with an X-API-KEY header instead of a Bearer
token; the connection's access token is sent there.
"""

from datetime import date
from typing import Any

from finsync.core.constants import PROVIDER_PAGE_SIZE, PROVIDER_TIMEOUT_DEFAULT
from finsync.core.result import Result
from finsync.domain.errors import ProviderError
from finsync.infrastructure.providers.base_api_client import BaseProviderAPIClient


class OpenFinanceBankingAPI(BaseProviderAPIClient):
    """HTTP client for Open Finance accounts and transactions.

    Example:
        >>> api = OpenFinanceBankingAPI(base_url="https://api.pluggy.ai")
        >>> result = await api.get_accounts(access_token)
    """

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
    ) -> None:
        super().__init__(
            base_url=base_url,
            provider_name="open_finance",
            timeout=timeout,
        )

    def _auth_headers(self, access_token: str) -> dict[str, str]:
        return {"X-API-KEY": access_token}

    async def get_accounts(
        self, access_token: str
    ) -> Result[dict[str, Any], ProviderError]:
        """Fetch accounts of the connection.

        Returns:
            Success(dict): Raw JSON ({"results": [...]}).
            Failure(ProviderError): On any HTTP, auth or parsing failure.
        """
        return await self._get_object(
            path="/accounts",
            access_token=access_token,
            operation="get_accounts",
        )

    async def get_transactions_page(
        self,
        access_token: str,
        account_id: str,
        *,
        start_date: date,
        end_date: date,
        page: int = 1,
        page_size: int = PROVIDER_PAGE_SIZE,
    ) -> Result[dict[str, Any], ProviderError]:
        """Fetch one page of an account's transactions.

        Args:
            access_token: Connection API key.
            account_id: Aggregator account id.
            start_date: First day included.
            end_date: Last day included.
            page: 1-based page number.
            page_size: Page size.

        Returns:
            Success(dict): Raw JSON ({"results": [...], "page": n, "totalPages": m}).
            Failure(ProviderError): On any HTTP, auth or parsing failure.
        """
        return await self._get_object(
            path="/transactions",
            access_token=access_token,
            params={
                "accountId": account_id,
                "from": start_date.isoformat(),
                "to": end_date.isoformat(),
                "page": page,
                "pageSize": page_size,
            },
            operation="get_transactions",
        )
