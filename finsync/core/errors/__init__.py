"""Core errors package.

Usage:
    from finsync.core.errors import DomainError
"""

from finsync.core.errors.domain_error import DomainError

__all__ = ["DomainError"]
