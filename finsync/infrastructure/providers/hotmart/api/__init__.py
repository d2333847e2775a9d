"""Hotmart API clients."""

from finsync.infrastructure.providers.hotmart.api.sales_api import HotmartSalesAPI

__all__ = ["HotmartSalesAPI"]
