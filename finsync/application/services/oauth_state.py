"""Signed OAuth state values.

The OAuth callback only receives `code` and `state`, so the state has to
carry the initiating user's id. It is signed so a callback cannot be
pointed at another user's account, and it expires so a leaked consent URL
stops working.

Format: <user_id>.<issued_at>.<nonce>.<signature>
    - issued_at: Unix seconds
    - nonce: URL-safe random text
    - signature: URL-safe base64 HMAC-SHA256 over the first three parts
"""

import base64
import hashlib
import hmac
import secrets
from collections.abc import Callable
from datetime import UTC, datetime
from uuid import UUID

from finsync.core.constants import OAUTH_STATE_NONCE_BYTES
from finsync.core.enums import ErrorCode
from finsync.core.errors import DomainError
from finsync.core.result import Failure, Result, Success


class OAuthStateCodec:
    """Encode and verify OAuth state values.

    Example:
        >>> codec = OAuthStateCodec(secret="s3cret")
        >>> state = codec.encode(user_id)
        >>> codec.decode(state)
        Success(value=UUID('...'))
    """

    def __init__(
        self,
        *,
        secret: str,
        ttl_seconds: int = 600,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not secret:
            raise ValueError("secret cannot be empty")
        self._secret = secret.encode()
        self._ttl_seconds = ttl_seconds
        self._clock = clock or (lambda: datetime.now(UTC))

    def _sign(self, payload: str) -> str:
        digest = hmac.new(self._secret, payload.encode(), hashlib.sha256).digest()
        return base64.urlsafe_b64encode(digest).rstrip(b"=").decode()

    def encode(self, user_id: UUID) -> str:
        issued_at = int(self._clock().timestamp())
        nonce = secrets.token_urlsafe(OAUTH_STATE_NONCE_BYTES)
        payload = f"{user_id}.{issued_at}.{nonce}"
        return f"{payload}.{self._sign(payload)}"

    def decode(self, state: str) -> Result[UUID, DomainError]:
        """Verify a state value and extract the user id.

        Returns:
            Success(UUID): User who started the flow.
            Failure(DomainError): OAUTH_STATE_INVALID or OAUTH_STATE_EXPIRED.
        """
        parts = state.split(".")
        if len(parts) != 4:
            return _invalid("OAuth state is malformed")

        raw_user_id, raw_issued_at, nonce, signature = parts
        payload = f"{raw_user_id}.{raw_issued_at}.{nonce}"
        if not hmac.compare_digest(signature.encode(), self._sign(payload).encode()):
            return _invalid("OAuth state signature does not match")

        try:
            user_id = UUID(raw_user_id)
            issued_at = int(raw_issued_at)
        except ValueError:
            return _invalid("OAuth state is malformed")

        age = self._clock().timestamp() - issued_at
        if age > self._ttl_seconds:
            return Failure(
                error=DomainError(
                    code=ErrorCode.OAUTH_STATE_EXPIRED,
                    message="OAuth state has expired",
                )
            )
        return Success(value=user_id)


def _invalid(message: str) -> Failure[DomainError]:
    return Failure(error=DomainError(code=ErrorCode.OAUTH_STATE_INVALID, message=message))
