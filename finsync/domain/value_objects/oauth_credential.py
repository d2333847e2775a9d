"""OAuth credential value object.

Immutable access/refresh token pair for one (user, provider) connection.
A refresh never mutates a credential: it produces a new instance that
replaces the old one in the credential store.

Usage:
    from finsync.domain.value_objects import OAuthCredential

    credential = OAuthCredential(
        access_token="at_123",
        refresh_token="rt_456",
        expires_at=datetime.now(UTC) + timedelta(hours=1),
    )

    if credential.needs_refresh(margin=timedelta(minutes=5)):
        # Refresh before the provider starts rejecting the access token
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta


@dataclass(frozen=True, slots=True, kw_only=True)
class OAuthCredential:
    """OAuth token pair with absolute expiry.

    Attributes:
        access_token: Bearer token presented to the provider API.
        refresh_token: Token used to obtain a new access token (None when
            the provider did not issue one).
        expires_at: Timezone-aware instant the access token stops working.

    Security:
        Token values are excluded from repr() and str().
    """

    access_token: str
    refresh_token: str | None
    expires_at: datetime

    def __post_init__(self) -> None:
        """Validate credential after initialization.

        Raises:
            ValueError: If access_token is empty or expires_at is naive.
        """
        if not self.access_token:
            raise ValueError("access_token cannot be empty")
        if self.expires_at.tzinfo is None:
            raise ValueError("expires_at must be timezone-aware")

    @property
    def can_refresh(self) -> bool:
        return bool(self.refresh_token)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check if the access token has expired.

        Args:
            now: Reference instant (defaults to current UTC time).

        Returns:
            bool: True if now is at or past expires_at.
        """
        current = now or datetime.now(UTC)
        return current >= self.expires_at

    def needs_refresh(
        self,
        margin: timedelta = timedelta(minutes=5),
        now: datetime | None = None,
    ) -> bool:
        """Check if the access token is expired or within margin of expiring.

        Args:
            margin: Safety margin before expires_at. Defaults to 5 minutes.
            now: Reference instant (defaults to current UTC time).

        Returns:
            bool: True if a refresh should happen before using the token.
        """
        current = now or datetime.now(UTC)
        return current >= self.expires_at - margin

    def time_until_expiry(self, now: datetime | None = None) -> timedelta:
        """Get time remaining until expiry (zero when already expired)."""
        remaining = self.expires_at - (now or datetime.now(UTC))
        if remaining.total_seconds() < 0:
            return timedelta(seconds=0)
        return remaining

    def __repr__(self) -> str:
        """Return repr for debugging.

        Note: Does NOT include token values.
        """
        return (
            f"OAuthCredential("
            f"expires_at={self.expires_at.isoformat()}, "
            f"refreshable={self.can_refresh})"
        )

    __str__ = __repr__
