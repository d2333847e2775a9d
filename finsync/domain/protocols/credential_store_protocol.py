"""CredentialStoreProtocol for OAuth credential persistence.

The store is the only place credential state lives. Token refreshers are
stateless; adapters never cache tokens.
"""

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

if TYPE_CHECKING:
    from finsync.core.result import Result
    from finsync.domain.errors import CredentialConflictError
    from finsync.domain.value_objects import OAuthCredential


class CredentialStoreProtocol(Protocol):
    """Protocol (port) for per-(user, provider) credential storage."""

    async def get(self, user_id: UUID, provider_slug: str) -> "OAuthCredential | None":
        """Load the stored credential, or None when not connected."""
        ...

    async def save(
        self,
        user_id: UUID,
        provider_slug: str,
        credential: "OAuthCredential",
        *,
        expected: "OAuthCredential | None" = None,
    ) -> "Result[None, CredentialConflictError]":
        """Store a credential, replacing any previous one.

        Args:
            user_id: Owner.
            provider_slug: Provider identifier.
            credential: New credential.
            expected: When given, only replace if the stored credential
                still equals this value (compare-and-swap).

        Returns:
            Success(None) when stored.
            Failure(CredentialConflictError) when expected no longer matches.
        """
        ...

    async def delete(self, user_id: UUID, provider_slug: str) -> None:
        """Forget the credential (no-op when absent)."""
        ...
