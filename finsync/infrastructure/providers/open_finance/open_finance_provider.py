"""Open Finance provider adapter.

Lists the accounts reachable through the user's connection, then pages
through each account's transactions inside the sync window and maps them
to canonical records.

Architecture:
    - Implements TransactionProviderProtocol (structural typing)
    - OpenFinanceBankingAPI handles HTTP, OpenFinanceTransactionMapper handles mapping
    - Returns Result types; never raises for provider failures
"""

from typing import Any

import structlog
from pydantic import ValidationError

from finsync.core.config import Settings
from finsync.core.constants import PROVIDER_MAX_PAGES, PROVIDER_TIMEOUT_DEFAULT
from finsync.core.enums import ErrorCode
from finsync.core.result import Failure, Result, Success
from finsync.domain.entities import CanonicalTransaction
from finsync.domain.errors import ProviderError, ProviderInvalidResponseError
from finsync.domain.value_objects import OAuthCredential, SyncWindow
from finsync.infrastructure.providers.normalization import ExternalIdSynthesizer
from finsync.infrastructure.providers.open_finance.api import OpenFinanceBankingAPI
from finsync.infrastructure.providers.open_finance.mappers import (
    OpenFinanceTransactionMapper,
)
from finsync.infrastructure.providers.open_finance.mappers.transaction_mapper import (
    OPEN_FINANCE_SOURCE_LABEL,
)
from finsync.infrastructure.providers.open_finance.schemas import (
    OpenFinanceAccount,
    OpenFinanceAccountsPage,
    OpenFinanceTransactionsPage,
)

logger = structlog.get_logger(__name__)


class OpenFinanceProvider:
    """Open Finance bank transaction adapter."""

    def __init__(
        self,
        *,
        settings: Settings,
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
        max_pages: int = PROVIDER_MAX_PAGES,
    ) -> None:
        """Initialize Open Finance provider.

        Args:
            settings: Application settings with Open Finance configuration.
            timeout: HTTP request timeout in seconds.
            max_pages: Upper bound on pages followed per account.
        """
        self._max_pages = max_pages
        self._banking_api = OpenFinanceBankingAPI(
            base_url=settings.open_finance_api_base_url,
            timeout=timeout,
        )
        self._transaction_mapper = OpenFinanceTransactionMapper(
            utc_offset_hours=settings.provider_utc_offset_hours
        )

    @property
    def slug(self) -> str:
        """Return provider slug identifier."""
        return "open_finance"

    @property
    def source_label(self) -> str:
        return OPEN_FINANCE_SOURCE_LABEL

    def _invalid_response(self, message: str) -> Failure[ProviderError]:
        return Failure(
            error=ProviderInvalidResponseError(
                code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                message=message,
                provider_name=self.slug,
            )
        )

    async def fetch_transactions(
        self,
        credential: OAuthCredential,
        window: SyncWindow,
    ) -> Result[list[CanonicalTransaction], ProviderError]:
        """Fetch bank transactions of every connected account.

        Args:
            credential: Fresh Open Finance credential.
            window: Inclusive date window.

        Returns:
            Success(list[CanonicalTransaction]): Possibly empty.
            Failure(ProviderError): On the first failing request.
        """
        accounts_result = await self._fetch_account_ids(credential.access_token)
        if isinstance(accounts_result, Failure):
            return accounts_result

        synthesizer = ExternalIdSynthesizer(self.slug)
        records: list[CanonicalTransaction] = []
        for account_id in accounts_result.value:
            items_result = await self._fetch_account_items(
                credential.access_token, account_id, window
            )
            if isinstance(items_result, Failure):
                return items_result
            records.extend(
                self._transaction_mapper.map_transactions(items_result.value, synthesizer)
            )

        records = [r for r in records if window.contains(r.transaction_date)]
        logger.info(
            "open_finance_transactions_fetched",
            account_count=len(accounts_result.value),
            record_count=len(records),
        )
        return Success(value=records)

    async def _fetch_account_ids(
        self, access_token: str
    ) -> Result[list[str], ProviderError]:
        result = await self._banking_api.get_accounts(access_token)
        if isinstance(result, Failure):
            return result

        try:
            page = OpenFinanceAccountsPage.model_validate(result.value)
        except ValidationError:
            return self._invalid_response("Open Finance accounts response is malformed")

        account_ids: list[str] = []
        for raw in page.results:
            try:
                account_ids.append(OpenFinanceAccount.model_validate(raw).id)
            except ValidationError as e:
                logger.warning("open_finance_account_invalid", error_count=e.error_count())
        return Success(value=account_ids)

    async def _fetch_account_items(
        self,
        access_token: str,
        account_id: str,
        window: SyncWindow,
    ) -> Result[list[dict[str, Any]], ProviderError]:
        items: list[dict[str, Any]] = []
        for page_number in range(1, self._max_pages + 1):
            result = await self._banking_api.get_transactions_page(
                access_token,
                account_id,
                start_date=window.start_date,
                end_date=window.end_date,
                page=page_number,
            )
            if isinstance(result, Failure):
                return result

            try:
                page = OpenFinanceTransactionsPage.model_validate(result.value)
            except ValidationError:
                return self._invalid_response(
                    "Open Finance transactions response is malformed"
                )

            items.extend(page.results)
            if page_number >= page.total_pages:
                break
        else:
            logger.warning(
                "open_finance_transactions_page_limit_reached",
                max_pages=self._max_pages,
            )
        return Success(value=items)
