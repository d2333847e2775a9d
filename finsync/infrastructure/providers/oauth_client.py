"""Generic OAuth 2.0 client for provider token endpoints.

Implements OAuthClientProtocol for any provider that speaks the standard
authorization-code and refresh-token grants with form-encoded bodies and
HTTP Basic client authentication. Hotmart and the Open Finance aggregator
both use it, configured through ProviderOAuthConfig.

Response handling:
    - 200 with a valid token body -> Success(OAuthTokens)
    - 400/401 -> ProviderAuthenticationError (code or refresh token rejected)
    - 429 -> ProviderRateLimitError
    - 5xx, timeout, connection error -> ProviderUnavailableError
    - anything else, malformed JSON or schema mismatch -> ProviderInvalidResponseError
"""

import base64
from dataclasses import dataclass
from urllib.parse import urlencode

import httpx
import structlog
from pydantic import BaseModel, Field, ValidationError

from finsync.core.constants import PROVIDER_TIMEOUT_DEFAULT, RESPONSE_BODY_MAX_LENGTH
from finsync.core.enums import ErrorCode
from finsync.core.result import Failure, Result, Success
from finsync.domain.errors import (
    ProviderAuthenticationError,
    ProviderConfigurationError,
    ProviderError,
    ProviderInvalidResponseError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)
from finsync.domain.protocols import OAuthTokens

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, kw_only=True)
class ProviderOAuthConfig:
    """Token endpoint configuration for one provider.

    Attributes:
        provider_slug: Provider identifier.
        token_url: Token endpoint URL.
        authorize_url: Consent screen URL.
        client_id: OAuth client ID (None = not configured).
        client_secret: OAuth client secret (None = not configured).
        redirect_uri: Redirect URI registered with the provider.
        scope: Optional scope requested on authorization.
    """

    provider_slug: str
    token_url: str
    authorize_url: str
    client_id: str | None
    client_secret: str | None
    redirect_uri: str | None = None
    scope: str | None = None


class TokenResponse(BaseModel):
    """Token endpoint response body."""

    access_token: str = Field(min_length=1)
    refresh_token: str | None = None
    expires_in: int = Field(gt=0)
    token_type: str = "Bearer"
    scope: str | None = None


class OAuth2Client:
    """OAuth 2.0 token endpoint client.

    Example:
        >>> client = OAuth2Client(config=hotmart_oauth_config)
        >>> result = await client.exchange_code_for_tokens("auth_code")
    """

    def __init__(
        self,
        *,
        config: ProviderOAuthConfig,
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
    ) -> None:
        """Initialize OAuth client.

        Args:
            config: Provider token endpoint configuration.
            timeout: HTTP request timeout in seconds.
        """
        self._config = config
        self._timeout = timeout

    @property
    def provider_slug(self) -> str:
        return self._config.provider_slug

    @property
    def is_configured(self) -> bool:
        return bool(self._config.client_id and self._config.client_secret)

    def _get_basic_auth_header(self) -> str:
        """Generate Basic Auth header (Base64 client_id:client_secret)."""
        credentials = f"{self._config.client_id}:{self._config.client_secret}"
        encoded = base64.b64encode(credentials.encode()).decode()
        return f"Basic {encoded}"

    def authorization_url(self, state: str) -> str:
        """Build the provider consent URL carrying the given state.

        Args:
            state: Signed OAuth state value.

        Returns:
            Absolute URL to redirect the user to.
        """
        params: dict[str, str] = {
            "response_type": "code",
            "client_id": self._config.client_id or "",
            "state": state,
        }
        if self._config.redirect_uri:
            params["redirect_uri"] = self._config.redirect_uri
        if self._config.scope:
            params["scope"] = self._config.scope
        return f"{self._config.authorize_url}?{urlencode(params)}"

    async def exchange_code_for_tokens(
        self,
        authorization_code: str,
    ) -> Result[OAuthTokens, ProviderError]:
        """Exchange OAuth authorization code for access and refresh tokens.

        Args:
            authorization_code: Code from OAuth callback query parameter.

        Returns:
            Success(OAuthTokens): With access_token, refresh_token, and expiration.
            Failure(ProviderAuthenticationError): If code is invalid or expired.
            Failure(ProviderUnavailableError): If the token endpoint is unreachable.
        """
        data = {
            "grant_type": "authorization_code",
            "code": authorization_code,
        }
        if self._config.redirect_uri:
            data["redirect_uri"] = self._config.redirect_uri
        return await self._request_tokens(data, "exchange")

    async def refresh_access_token(
        self,
        refresh_token: str,
    ) -> Result[OAuthTokens, ProviderError]:
        """Refresh access token using refresh token.

        Args:
            refresh_token: Current refresh token.

        Returns:
            Success(OAuthTokens): New access token (refresh_token None when
                the provider does not rotate it).
            Failure(ProviderAuthenticationError): If refresh token is rejected.
            Failure(ProviderUnavailableError): If the token endpoint is unreachable.
        """
        return await self._request_tokens(
            {"grant_type": "refresh_token", "refresh_token": refresh_token},
            "refresh",
        )

    async def _request_tokens(
        self,
        data: dict[str, str],
        operation: str,
    ) -> Result[OAuthTokens, ProviderError]:
        slug = self.provider_slug
        if not self.is_configured:
            logger.warning(f"{slug}_token_{operation}_not_configured", provider=slug)
            return Failure(
                error=ProviderConfigurationError(
                    code=ErrorCode.PROVIDER_NOT_CONFIGURED,
                    message=f"{slug} OAuth client credentials are not configured",
                    provider_name=slug,
                )
            )

        logger.info(f"{slug}_token_{operation}_started", provider=slug)

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    self._config.token_url,
                    headers={
                        "Authorization": self._get_basic_auth_header(),
                        "Content-Type": "application/x-www-form-urlencoded",
                        "Accept": "application/json",
                    },
                    data=data,
                )

            return self._handle_token_response(response, operation)

        except httpx.TimeoutException as e:
            logger.warning(
                f"{slug}_token_{operation}_timeout",
                provider=slug,
                error=str(e),
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"{slug} token endpoint timed out",
                    provider_name=slug,
                    is_transient=True,
                )
            )
        except httpx.RequestError as e:
            logger.warning(
                f"{slug}_token_{operation}_connection_error",
                provider=slug,
                error=str(e),
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"Failed to connect to {slug} token endpoint: {e}",
                    provider_name=slug,
                    is_transient=True,
                )
            )

    def _handle_token_response(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[OAuthTokens, ProviderError]:
        """Map a token endpoint response to OAuthTokens or a ProviderError.

        Args:
            response: HTTP response from token endpoint.
            operation: "exchange" or "refresh" for logging.
        """
        slug = self.provider_slug
        status = response.status_code

        if status == 429:
            retry_after = response.headers.get("Retry-After")
            retry_seconds = int(retry_after) if retry_after and retry_after.isdigit() else None
            logger.warning(
                f"{slug}_token_{operation}_rate_limited",
                provider=slug,
                retry_after=retry_seconds,
            )
            return Failure(
                error=ProviderRateLimitError(
                    code=ErrorCode.PROVIDER_RATE_LIMITED,
                    message=f"{slug} token endpoint rate limit exceeded",
                    provider_name=slug,
                    retry_after=retry_seconds,
                )
            )

        if status in (400, 401):
            logger.warning(
                f"{slug}_token_{operation}_auth_failed",
                provider=slug,
                status_code=status,
            )
            return Failure(
                error=ProviderAuthenticationError(
                    code=ErrorCode.PROVIDER_AUTHENTICATION_FAILED,
                    message=f"{slug} rejected the {operation} request",
                    provider_name=slug,
                    is_token_expired="expired" in response.text.lower(),
                    details={"response": response.text[:RESPONSE_BODY_MAX_LENGTH]},
                )
            )

        if status >= 500:
            logger.warning(
                f"{slug}_token_{operation}_server_error",
                provider=slug,
                status_code=status,
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"{slug} token endpoint server error: {status}",
                    provider_name=slug,
                    is_transient=True,
                )
            )

        if status != 200:
            logger.warning(
                f"{slug}_token_{operation}_unexpected_status",
                provider=slug,
                status_code=status,
            )
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                    message=f"Unexpected response from {slug} token endpoint: {status}",
                    provider_name=slug,
                    response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                )
            )

        try:
            body = TokenResponse.model_validate_json(response.content)
        except ValidationError as e:
            logger.error(
                f"{slug}_token_{operation}_invalid_body",
                provider=slug,
                error_count=e.error_count(),
            )
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                    message=f"Invalid token response from {slug}",
                    provider_name=slug,
                    response_body=None,
                )
            )

        logger.info(
            f"{slug}_token_{operation}_succeeded",
            provider=slug,
            expires_in=body.expires_in,
            has_refresh_token=body.refresh_token is not None,
        )
        return Success(
            value=OAuthTokens(
                access_token=body.access_token,
                refresh_token=body.refresh_token,
                expires_in=body.expires_in,
                token_type=body.token_type,
                scope=body.scope,
            )
        )
