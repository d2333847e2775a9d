"""Provider error types for domain protocol contracts.

These errors are part of the provider protocol contracts. They define the
failure cases that OAuth clients and transaction providers can return, and
the resilient adapter decides per type whether to surface the failure or
fall back to synthetic data.

Taxonomy:
    - ProviderAuthenticationError: terminal until the user reconnects
    - ProviderUnavailableError, ProviderRateLimitError: transient
    - ProviderConfigurationError: client credentials missing (sandbox)
    - ProviderInvalidResponseError: unexpected status or body (sandbox)

Usage:
    from finsync.domain.errors import ProviderError, ProviderAuthenticationError
    from finsync.core.result import Result, Success, Failure

    async def fetch_transactions(
        self, credential: OAuthCredential, window: SyncWindow
    ) -> Result[list[CanonicalTransaction], ProviderError]:
        if not valid_token:
            return Failure(error=ProviderAuthenticationError(...))
        return Success(value=records)
"""

from dataclasses import dataclass

from finsync.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderError(DomainError):
    """Base provider API error.

    Attributes:
        code: Domain ErrorCode.
        message: Human-readable message.
        provider_name: Provider slug (hotmart, open_finance).
        details: Additional context (API error code, response).
    """

    provider_name: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderAuthenticationError(ProviderError):
    """Provider authentication/authorization failure.

    Returned when:
    - OAuth authorization code is invalid or expired
    - Access token is rejected by the provider
    - Refresh token is invalid, expired or missing
    - User has revoked provider access

    Recovery: User must reconnect via the OAuth flow. Never retried.

    Attributes:
        is_token_expired: Whether the error is due to token expiration.
    """

    is_token_expired: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderUnavailableError(ProviderError):
    """Provider API is unavailable.

    Returned when:
    - Provider API returns 5xx errors
    - Connection timeout occurs
    - DNS resolution or TLS handshake fails

    Recovery: Fall back to sandbox data for this sync.

    Attributes:
        is_transient: Whether the error is likely transient.
        retry_after: Suggested retry delay in seconds (from provider).
    """

    is_transient: bool = True
    retry_after: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderRateLimitError(ProviderError):
    """Provider rate limit exceeded (HTTP 429).

    Attributes:
        retry_after: Seconds to wait before retrying (from Retry-After header).
    """

    retry_after: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderConfigurationError(ProviderError):
    """Provider client credentials or endpoints are not configured.

    Recovery: Silently use sandbox data. Only operators can fix this.
    """


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderInvalidResponseError(ProviderError):
    """Provider returned an invalid or unexpected response.

    Returned when:
    - Response JSON is malformed
    - Required fields are missing
    - Response does not match the adapter's schema

    Attributes:
        response_body: Truncated raw response body for debugging.
    """

    response_body: str | None = None
