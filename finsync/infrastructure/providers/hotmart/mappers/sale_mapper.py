"""Hotmart sale mapper.

Converts Hotmart sales history items to CanonicalTransaction records.

Status Mapping (Hotmart purchase.status -> direction):
    APPROVED, COMPLETE -> income (sale settled)
    REFUNDED, PARTIALLY_REFUNDED, CHARGEBACK -> expense (money returned)
    anything else (WAITING_PAYMENT, CANCELLED, EXPIRED, ...) -> skipped

Refunds get their own external id ("<transaction>-REVERSAL") so the
original income record stays intact and the reversal is recorded next to it.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

import structlog
from pydantic import ValidationError

from finsync.domain.entities import CanonicalTransaction
from finsync.domain.enums import TransactionType
from finsync.infrastructure.providers.hotmart.schemas import HotmartSale
from finsync.infrastructure.providers.normalization import (
    ExternalIdSynthesizer,
    epoch_millis_to_date,
    normalize_amount,
)

logger = structlog.get_logger(__name__)


# =============================================================================
# Status Mapping
# =============================================================================

HOTMART_INCOME_STATUSES: frozenset[str] = frozenset({"APPROVED", "COMPLETE"})

# Hotmart status -> description prefix for reversals
HOTMART_REVERSAL_STATUSES: dict[str, str] = {
    "REFUNDED": "Hotmart refund",
    "PARTIALLY_REFUNDED": "Hotmart partial refund",
    "CHARGEBACK": "Hotmart chargeback",
}

HOTMART_SOURCE_LABEL = "Hotmart"
INCOME_CATEGORY = "Digital product sales"
REVERSAL_CATEGORY = "Refunds"


class HotmartSaleMapper:
    """Mapper for converting Hotmart sales to canonical records.

    Thread-safe: No mutable state, can be shared across requests.

    Example:
        >>> mapper = HotmartSaleMapper(utc_offset_hours=-3)
        >>> records = mapper.map_sales(page["items"])
    """

    def __init__(self, *, utc_offset_hours: int = -3) -> None:
        self._utc_offset_hours = utc_offset_hours

    def map_sales(self, items: list[dict[str, Any]]) -> list[CanonicalTransaction]:
        """Map a batch of sales, skipping invalid and unsettled items.

        Args:
            items: Raw sale objects from the sales history endpoint.

        Returns:
            Canonical records in input order.
        """
        synthesizer = ExternalIdSynthesizer("hotmart")
        records: list[CanonicalTransaction] = []
        for item in items:
            record = self.map_sale(item, synthesizer)
            if record is not None:
                records.append(record)
        return records

    def map_sale(
        self,
        data: dict[str, Any],
        synthesizer: ExternalIdSynthesizer | None = None,
    ) -> CanonicalTransaction | None:
        """Map a single Hotmart sale.

        Args:
            data: Raw sale object.
            synthesizer: Id synthesizer shared across the batch.

        Returns:
            CanonicalTransaction, or None if the sale is invalid or not a
            settled money movement.
        """
        try:
            sale = HotmartSale.model_validate(data)
        except ValidationError as e:
            logger.warning(
                "hotmart_sale_invalid",
                error_count=e.error_count(),
                transaction=_transaction_code(data),
            )
            return None

        try:
            return self._map_sale_internal(
                sale, synthesizer or ExternalIdSynthesizer("hotmart")
            )
        except (ValueError, OverflowError, OSError, InvalidOperation) as e:
            logger.warning(
                "hotmart_sale_mapping_failed",
                error=str(e),
                transaction=sale.purchase.transaction,
            )
            return None

    def _map_sale_internal(
        self,
        sale: HotmartSale,
        synthesizer: ExternalIdSynthesizer,
    ) -> CanonicalTransaction | None:
        purchase = sale.purchase
        status = purchase.status.upper()

        if status in HOTMART_INCOME_STATUSES:
            transaction_type = TransactionType.INCOME
            description = f"Hotmart sale: {sale.product.name}"
            category = INCOME_CATEGORY
        elif status in HOTMART_REVERSAL_STATUSES:
            transaction_type = TransactionType.EXPENSE
            description = f"{HOTMART_REVERSAL_STATUSES[status]}: {sale.product.name}"
            category = REVERSAL_CATEGORY
        else:
            logger.debug(
                "hotmart_sale_not_settled",
                status=status,
                transaction=purchase.transaction,
            )
            return None

        amount = normalize_amount(purchase.price.value)
        if amount == Decimal("0"):
            logger.debug("hotmart_sale_zero_amount", transaction=purchase.transaction)
            return None

        millis = purchase.approved_date or purchase.order_date
        if millis is None:
            logger.warning("hotmart_sale_missing_date", transaction=purchase.transaction)
            return None
        transaction_date = epoch_millis_to_date(millis, self._utc_offset_hours)

        if purchase.transaction:
            external_id = purchase.transaction
        else:
            external_id = synthesizer.synthesize(
                transaction_date.isoformat(),
                str(amount),
                sale.product.name,
            )
        if transaction_type == TransactionType.EXPENSE:
            external_id = f"{external_id}-REVERSAL"

        return CanonicalTransaction(
            description=description,
            amount=amount,
            transaction_type=transaction_type,
            source=HOTMART_SOURCE_LABEL,
            transaction_date=transaction_date,
            external_id=external_id,
            category=category,
        )


def _transaction_code(data: dict[str, Any]) -> str | None:
    purchase = data.get("purchase") if isinstance(data, dict) else None
    if isinstance(purchase, dict):
        code = purchase.get("transaction")
        return str(code) if code is not None else None
    return None
