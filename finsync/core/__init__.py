"""Core shared kernel.

This module provides foundational utilities used across all architectural layers:
- Result types for railway-oriented programming
- Base error class for domain-level error handling
- Settings and implementation constants

The core module has NO dependencies on other application layers.
"""

from finsync.core.enums import ErrorCode
from finsync.core.errors import DomainError
from finsync.core.result import Failure, Result, Success

__all__ = [
    "DomainError",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
]
