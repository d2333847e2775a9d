"""Token refresher.

Stateless service that turns OAuth client responses into OAuthCredential
values and refreshes credentials ahead of expiry. It never stores
anything: persisting a refreshed credential is the caller's job, which
keeps concurrent syncs from sharing hidden state.

Refresh policy:
    - expires_at more than refresh_margin away -> same credential, no network call
    - otherwise exactly one refresh call
    - rejected or missing refresh token -> ProviderAuthenticationError (terminal)
    - missing client credentials -> ProviderConfigurationError
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import structlog

from finsync.core.enums import ErrorCode
from finsync.core.result import Failure, Result, Success
from finsync.domain.errors import (
    ProviderAuthenticationError,
    ProviderConfigurationError,
    ProviderError,
)
from finsync.domain.protocols import OAuthClientProtocol, OAuthTokens
from finsync.domain.value_objects import OAuthCredential

logger = structlog.get_logger(__name__)

DEFAULT_REFRESH_MARGIN = timedelta(minutes=5)


class TokenRefresher:
    """Exchange authorization codes and keep credentials fresh.

    Example:
        >>> refresher = TokenRefresher(oauth_client)
        >>> result = await refresher.ensure_fresh(stored_credential)
        >>> if isinstance(result, Success) and result.value is not stored_credential:
        ...     await store.save(user_id, slug, result.value, expected=stored_credential)
    """

    def __init__(
        self,
        oauth_client: OAuthClientProtocol,
        *,
        refresh_margin: timedelta = DEFAULT_REFRESH_MARGIN,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize refresher.

        Args:
            oauth_client: Provider token endpoint client.
            refresh_margin: Refresh when expiry is closer than this.
            clock: Current-time source (defaults to UTC now).
        """
        self._client = oauth_client
        self._refresh_margin = refresh_margin
        self._clock = clock or (lambda: datetime.now(UTC))

    @property
    def provider_slug(self) -> str:
        return self._client.provider_slug

    def authorization_url(self, state: str) -> str:
        """Consent URL of the provider for the given signed state."""
        return self._client.authorization_url(state)

    def _credential_from_tokens(
        self,
        tokens: OAuthTokens,
        previous_refresh_token: str | None = None,
    ) -> OAuthCredential:
        return OAuthCredential(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token or previous_refresh_token,
            expires_at=self._clock() + timedelta(seconds=tokens.expires_in),
        )

    def _not_configured(self) -> Failure[ProviderError]:
        return Failure(
            error=ProviderConfigurationError(
                code=ErrorCode.PROVIDER_NOT_CONFIGURED,
                message=f"{self.provider_slug} OAuth client credentials are not configured",
                provider_name=self.provider_slug,
            )
        )

    async def exchange_code(
        self, authorization_code: str
    ) -> Result[OAuthCredential, ProviderError]:
        """Exchange a one-time authorization code for a credential.

        Args:
            authorization_code: Code from the OAuth callback.

        Returns:
            Success(OAuthCredential): New credential.
            Failure(ProviderAuthenticationError): Code rejected or client
                credentials unset.
            Failure(ProviderUnavailableError): Token endpoint unreachable.
        """
        if not self._client.is_configured:
            return Failure(
                error=ProviderAuthenticationError(
                    code=ErrorCode.PROVIDER_AUTHENTICATION_FAILED,
                    message=(
                        f"Cannot connect {self.provider_slug}: "
                        "OAuth client credentials are not configured"
                    ),
                    provider_name=self.provider_slug,
                )
            )

        result = await self._client.exchange_code_for_tokens(authorization_code)
        if isinstance(result, Failure):
            return result

        logger.info("oauth_code_exchanged", provider=self.provider_slug)
        return Success(value=self._credential_from_tokens(result.value))

    async def ensure_fresh(
        self, credential: OAuthCredential
    ) -> Result[OAuthCredential, ProviderError]:
        """Return a credential that is valid for at least the refresh margin.

        Args:
            credential: Stored credential.

        Returns:
            Success(credential): The same instance when no refresh is needed.
            Success(OAuthCredential): A new instance after one refresh call.
            Failure(ProviderAuthenticationError): Refresh impossible or rejected.
            Failure(ProviderConfigurationError): Client credentials unset.
            Failure(ProviderUnavailableError | ProviderRateLimitError): Transient.
        """
        now = self._clock()
        if not credential.needs_refresh(self._refresh_margin, now=now):
            return Success(value=credential)

        refresh_token = credential.refresh_token
        if not refresh_token:
            logger.info("oauth_refresh_token_missing", provider=self.provider_slug)
            return Failure(
                error=ProviderAuthenticationError(
                    code=ErrorCode.PROVIDER_AUTHENTICATION_FAILED,
                    message=f"{self.provider_slug} credential expired and cannot be refreshed",
                    provider_name=self.provider_slug,
                    is_token_expired=True,
                )
            )

        if not self._client.is_configured:
            return self._not_configured()

        result = await self._client.refresh_access_token(refresh_token)
        if isinstance(result, Failure):
            logger.warning(
                "oauth_refresh_failed",
                provider=self.provider_slug,
                error_code=result.error.code.value,
            )
            return result

        refreshed = self._credential_from_tokens(
            result.value, previous_refresh_token=refresh_token
        )
        logger.info(
            "oauth_credential_refreshed",
            provider=self.provider_slug,
            expires_at=refreshed.expires_at.isoformat(),
            rotated=result.value.refresh_token is not None,
        )
        return Success(value=refreshed)
