"""Domain entities."""

from finsync.domain.entities.canonical_transaction import CanonicalTransaction

__all__ = ["CanonicalTransaction"]
