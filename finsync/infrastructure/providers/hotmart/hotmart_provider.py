"""Hotmart provider adapter.

Fetches the sales history for the connected producer account, validates
each page against the response schemas and maps sales to canonical records.

Architecture:
    - Implements TransactionProviderProtocol (structural typing)
    - HotmartSalesAPI handles HTTP, HotmartSaleMapper handles mapping
    - Returns Result types; never raises for provider failures

Reference:
    - https://developers.hotmart.com/docs/en/
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
from finsync.infrastructure.providers.hotmart.api import HotmartSalesAPI
from finsync.infrastructure.providers.hotmart.mappers import HotmartSaleMapper
from finsync.infrastructure.providers.hotmart.mappers.sale_mapper import (
    HOTMART_SOURCE_LABEL,
)
from finsync.infrastructure.providers.hotmart.schemas import HotmartSalesPage
from finsync.infrastructure.providers.normalization import date_to_epoch_millis

logger = structlog.get_logger(__name__)


class HotmartProvider:
    """Hotmart sales adapter.

    Example:
        >>> provider = HotmartProvider(settings=get_settings())
        >>> result = await provider.fetch_transactions(credential, window)
    """

    def __init__(
        self,
        *,
        settings: Settings,
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
        max_pages: int = PROVIDER_MAX_PAGES,
    ) -> None:
        """Initialize Hotmart provider.

        Args:
            settings: Application settings with Hotmart configuration.
            timeout: HTTP request timeout in seconds.
            max_pages: Upper bound on pages followed per fetch.
        """
        self._utc_offset_hours = settings.provider_utc_offset_hours
        self._max_pages = max_pages
        self._sales_api = HotmartSalesAPI(
            base_url=settings.hotmart_api_base_url,
            timeout=timeout,
        )
        self._sale_mapper = HotmartSaleMapper(
            utc_offset_hours=settings.provider_utc_offset_hours
        )

    @property
    def slug(self) -> str:
        """Return provider slug identifier."""
        return "hotmart"

    @property
    def source_label(self) -> str:
        return HOTMART_SOURCE_LABEL

    async def fetch_transactions(
        self,
        credential: OAuthCredential,
        window: SyncWindow,
    ) -> Result[list[CanonicalTransaction], ProviderError]:
        """Fetch settled sales and reversals within the window.

        Args:
            credential: Fresh Hotmart credential.
            window: Inclusive date window.

        Returns:
            Success(list[CanonicalTransaction]): Possibly empty.
            Failure(ProviderError): On the first failing page.
        """
        start_millis = date_to_epoch_millis(window.start_date, self._utc_offset_hours)
        end_millis = date_to_epoch_millis(
            window.end_date, self._utc_offset_hours, end_of_day=True
        )

        items: list[dict[str, Any]] = []
        page_token: str | None = None
        for page_number in range(1, self._max_pages + 1):
            result = await self._sales_api.get_sales_page(
                credential.access_token,
                start_millis=start_millis,
                end_millis=end_millis,
                page_token=page_token,
            )
            if isinstance(result, Failure):
                return result

            try:
                page = HotmartSalesPage.model_validate(result.value)
            except ValidationError as e:
                logger.warning(
                    "hotmart_sales_page_invalid",
                    page=page_number,
                    error_count=e.error_count(),
                )
                return Failure(
                    error=ProviderInvalidResponseError(
                        code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                        message="Hotmart sales page does not match the expected schema",
                        provider_name=self.slug,
                    )
                )

            items.extend(page.items)
            page_token = page.page_info.next_page_token
            if not page_token:
                break
        else:
            logger.warning("hotmart_sales_page_limit_reached", max_pages=self._max_pages)

        records = [
            record
            for record in self._sale_mapper.map_sales(items)
            if window.contains(record.transaction_date)
        ]

        logger.info(
            "hotmart_sales_fetched",
            raw_count=len(items),
            record_count=len(records),
        )
        return Success(value=records)
