"""In-memory reference implementations of the collaborator protocols."""

from finsync.infrastructure.persistence.in_memory_credential_store import (
    InMemoryCredentialStore,
)
from finsync.infrastructure.persistence.in_memory_transaction_store import (
    InMemoryTransactionStore,
)
from finsync.infrastructure.persistence.in_memory_user_context import (
    InMemoryUserContextProvider,
)

__all__ = [
    "InMemoryCredentialStore",
    "InMemoryTransactionStore",
    "InMemoryUserContextProvider",
]
