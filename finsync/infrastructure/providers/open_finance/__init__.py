"""Open Finance aggregator (Pluggy) adapter."""

from finsync.infrastructure.providers.open_finance.open_finance_provider import (
    OpenFinanceProvider,
)

__all__ = ["OpenFinanceProvider"]
