"""Hotmart mappers."""

from finsync.infrastructure.providers.hotmart.mappers.sale_mapper import (
    HotmartSaleMapper,
)

__all__ = ["HotmartSaleMapper"]
