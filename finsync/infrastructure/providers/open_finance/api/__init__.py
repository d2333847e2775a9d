"""Open Finance API clients."""

from finsync.infrastructure.providers.open_finance.api.banking_api import (
    OpenFinanceBankingAPI,
)

__all__ = ["OpenFinanceBankingAPI"]
