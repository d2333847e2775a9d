"""In-memory transaction store.

Implements TransactionPersistenceProtocol with an upsert keyed by
(user_id, provider_slug, external_id). Persisting the same records twice
inserts nothing the second time.
"""

from uuid import UUID

from finsync.domain.entities import CanonicalTransaction
from finsync.domain.protocols import PersistOutcome


class InMemoryTransactionStore:
    """Dictionary-backed idempotent transaction store."""

    def __init__(self) -> None:
        self._records: dict[tuple[UUID, str, str], CanonicalTransaction] = {}

    async def persist_transactions(
        self,
        user_id: UUID,
        provider_slug: str,
        records: list[CanonicalTransaction],
    ) -> PersistOutcome:
        inserted = 0
        updated = 0
        for record in records:
            key = (user_id, provider_slug, record.external_id)
            if key in self._records:
                updated += 1
            else:
                inserted += 1
            self._records[key] = record
        return PersistOutcome(inserted=inserted, updated=updated)

    def list_transactions(
        self,
        user_id: UUID,
        provider_slug: str | None = None,
    ) -> list[CanonicalTransaction]:
        """Stored records of a user, newest first."""
        records = [
            record
            for (owner, slug, _), record in self._records.items()
            if owner == user_id and (provider_slug is None or slug == provider_slug)
        ]
        return sorted(records, key=lambda r: r.transaction_date, reverse=True)

    def count(self) -> int:
        return len(self._records)
