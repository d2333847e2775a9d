"""In-memory credential store.

Implements CredentialStoreProtocol with a dictionary keyed by
(user_id, provider_slug). Saves with an expected value are compare-and-swap
under a lock, which is how concurrent refreshes of the same credential are
resolved.

Thread Safety:
    - NOT thread-safe (single event loop)
    - asyncio.Lock serializes compare-and-swap across tasks
"""

import asyncio
from uuid import UUID

from finsync.core.enums import ErrorCode
from finsync.core.result import Failure, Result, Success
from finsync.domain.errors import CredentialConflictError
from finsync.domain.value_objects import OAuthCredential


class InMemoryCredentialStore:
    """Dictionary-backed credential store."""

    def __init__(self) -> None:
        self._credentials: dict[tuple[UUID, str], OAuthCredential] = {}
        self._lock = asyncio.Lock()

    async def get(self, user_id: UUID, provider_slug: str) -> OAuthCredential | None:
        return self._credentials.get((user_id, provider_slug))

    async def save(
        self,
        user_id: UUID,
        provider_slug: str,
        credential: OAuthCredential,
        *,
        expected: OAuthCredential | None = None,
    ) -> Result[None, CredentialConflictError]:
        key = (user_id, provider_slug)
        async with self._lock:
            if expected is not None and self._credentials.get(key) != expected:
                return Failure(
                    error=CredentialConflictError(
                        code=ErrorCode.CREDENTIAL_CONFLICT,
                        message="Stored credential changed since it was read",
                        provider_slug=provider_slug,
                    )
                )
            self._credentials[key] = credential
        return Success(value=None)

    async def delete(self, user_id: UUID, provider_slug: str) -> None:
        async with self._lock:
            self._credentials.pop((user_id, provider_slug), None)
