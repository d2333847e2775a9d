"""TransactionProviderProtocol for provider data adapters.

Each implementation fetches raw records from one provider API, validates
them against its own response schemas and returns canonical records.
No provider-native shape crosses this boundary.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from finsync.core.result import Result
    from finsync.domain.entities import CanonicalTransaction
    from finsync.domain.errors import ProviderError
    from finsync.domain.value_objects import OAuthCredential, SyncWindow


class TransactionProviderProtocol(Protocol):
    """Protocol (port) for live transaction fetches.

    Returning Success with an empty list is a valid, non-degraded outcome.
    """

    @property
    def slug(self) -> str:
        """Provider identifier (e.g. "hotmart", "open_finance")."""
        ...

    @property
    def source_label(self) -> str:
        """Fixed label stamped on every record's source."""
        ...

    async def fetch_transactions(
        self,
        credential: "OAuthCredential",
        window: "SyncWindow",
    ) -> "Result[list[CanonicalTransaction], ProviderError]":
        """Fetch and normalize transactions within the window."""
        ...
