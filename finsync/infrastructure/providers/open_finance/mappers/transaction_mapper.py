"""Open Finance transaction mapper.

Converts aggregator transactions to CanonicalTransaction records.

Direction Mapping:
    type CREDIT -> income
    type DEBIT -> expense
    type missing -> sign of amount (>= 0 income, < 0 expense)
"""

from decimal import Decimal, InvalidOperation
from typing import Any

import structlog
from pydantic import ValidationError

from finsync.domain.entities import CanonicalTransaction
from finsync.domain.enums import TransactionType
from finsync.infrastructure.providers.normalization import (
    ExternalIdSynthesizer,
    normalize_amount,
    to_provider_date,
)
from finsync.infrastructure.providers.open_finance.schemas import (
    OpenFinanceTransaction,
)

logger = structlog.get_logger(__name__)


OPEN_FINANCE_TYPE_MAP: dict[str, TransactionType] = {
    "CREDIT": TransactionType.INCOME,
    "DEBIT": TransactionType.EXPENSE,
}

OPEN_FINANCE_SOURCE_LABEL = "Open Finance"
DEFAULT_DESCRIPTION = "Bank transaction"


class OpenFinanceTransactionMapper:
    """Mapper for converting aggregator transactions to canonical records.

    Thread-safe: No mutable state, can be shared across requests.
    """

    def __init__(self, *, utc_offset_hours: int = -3) -> None:
        self._utc_offset_hours = utc_offset_hours

    def map_transactions(
        self,
        items: list[dict[str, Any]],
        synthesizer: ExternalIdSynthesizer | None = None,
    ) -> list[CanonicalTransaction]:
        """Map a batch of transactions, skipping invalid items.

        Args:
            items: Raw transaction objects.
            synthesizer: Id synthesizer shared across the whole fetch
                (one per fetch, so ids stay unique across accounts).
        """
        synthesizer = synthesizer or ExternalIdSynthesizer("open_finance")
        records: list[CanonicalTransaction] = []
        for item in items:
            record = self.map_transaction(item, synthesizer)
            if record is not None:
                records.append(record)
        return records

    def map_transaction(
        self,
        data: dict[str, Any],
        synthesizer: ExternalIdSynthesizer | None = None,
    ) -> CanonicalTransaction | None:
        """Map a single transaction.

        Returns:
            CanonicalTransaction, or None if the item is invalid or zero.
        """
        try:
            transaction = OpenFinanceTransaction.model_validate(data)
        except ValidationError as e:
            logger.warning(
                "open_finance_transaction_invalid",
                error_count=e.error_count(),
                transaction_id=data.get("id") if isinstance(data, dict) else None,
            )
            return None

        try:
            return self._map_transaction_internal(
                transaction, synthesizer or ExternalIdSynthesizer("open_finance")
            )
        except (ValueError, OverflowError, InvalidOperation) as e:
            logger.warning(
                "open_finance_transaction_mapping_failed",
                error=str(e),
                transaction_id=transaction.id,
            )
            return None

    def _map_transaction_internal(
        self,
        transaction: OpenFinanceTransaction,
        synthesizer: ExternalIdSynthesizer,
    ) -> CanonicalTransaction | None:
        amount = normalize_amount(transaction.amount)
        if amount == Decimal("0"):
            logger.debug("open_finance_transaction_zero_amount", transaction_id=transaction.id)
            return None

        transaction_type = OPEN_FINANCE_TYPE_MAP.get((transaction.type or "").upper())
        if transaction_type is None:
            transaction_type = (
                TransactionType.INCOME
                if transaction.amount >= 0
                else TransactionType.EXPENSE
            )

        transaction_date = to_provider_date(transaction.date, self._utc_offset_hours)
        description = (transaction.description or "").strip() or DEFAULT_DESCRIPTION

        external_id = transaction.id or synthesizer.synthesize(
            transaction_date.isoformat(),
            str(amount),
            transaction_type.value,
            description,
        )

        return CanonicalTransaction(
            description=description,
            amount=amount,
            transaction_type=transaction_type,
            source=OPEN_FINANCE_SOURCE_LABEL,
            transaction_date=transaction_date,
            external_id=external_id,
            category=transaction.category or None,
        )
