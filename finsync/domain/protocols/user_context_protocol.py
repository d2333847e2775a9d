"""UserContextProtocol for loading insight inputs."""

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

if TYPE_CHECKING:
    from finsync.domain.value_objects import UserContext


class UserContextProtocol(Protocol):
    """Protocol (port) returning a user's profile, transactions and goals."""

    async def get_user_context(self, user_id: UUID) -> "UserContext | None":
        """Load context for a user (None when the user is unknown)."""
        ...
