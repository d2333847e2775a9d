"""TransactionPersistenceProtocol for the persistence collaborator."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

if TYPE_CHECKING:
    from finsync.domain.entities import CanonicalTransaction


@dataclass(frozen=True, kw_only=True)
class PersistOutcome:
    """Counts reported by the persistence collaborator.

    Attributes:
        inserted: Records that did not exist before.
        updated: Records matched by (provider, external_id) and overwritten.
    """

    inserted: int = 0
    updated: int = 0


class TransactionPersistenceProtocol(Protocol):
    """Protocol (port) for idempotent transaction persistence.

    Implementations must upsert by (provider_slug, external_id) so that
    re-running a sync over identical upstream data inserts nothing new.
    """

    async def persist_transactions(
        self,
        user_id: UUID,
        provider_slug: str,
        records: "list[CanonicalTransaction]",
    ) -> PersistOutcome:
        """Upsert records for a user and provider."""
        ...
