"""Logging configuration."""

from finsync.infrastructure.logging.console_adapter import configure_logging

__all__ = ["configure_logging"]
