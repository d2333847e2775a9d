"""Open Finance mappers."""

from finsync.infrastructure.providers.open_finance.mappers.transaction_mapper import (
    OpenFinanceTransactionMapper,
)

__all__ = ["OpenFinanceTransactionMapper"]
