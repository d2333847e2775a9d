"""ConnectIntegration command handler.

Completes the OAuth flow from the provider callback: verifies the signed
state, exchanges the authorization code and stores the credential for the
user the state names.
"""

from collections.abc import Mapping
from uuid import UUID

import structlog

from finsync.application.commands.integration_commands import ConnectIntegration
from finsync.application.dtos.sync_dtos import ConnectIntegrationResult
from finsync.application.services.oauth_state import OAuthStateCodec
from finsync.application.services.token_refresher import TokenRefresher
from finsync.core.enums import ErrorCode
from finsync.core.result import Failure, Result, Success
from finsync.domain.errors import ProviderAuthenticationError
from finsync.domain.protocols import CredentialStoreProtocol

logger = structlog.get_logger(__name__)


class ConnectIntegrationError:
    """ConnectIntegration-specific errors."""

    UNKNOWN_PROVIDER = "Unknown provider"
    INVALID_STATE = "Invalid OAuth state"
    EXPIRED_STATE = "OAuth state has expired, please start the connection again"
    MISSING_CODE = "Authorization code is missing"
    AUTHORIZATION_REJECTED = "Provider rejected the authorization"
    PROVIDER_UNAVAILABLE = "Provider is unavailable, please try again"


class ConnectIntegrationHandler:
    """Handler for ConnectIntegration command.

    Flow:
        1. Decode state -> user id
        2. Exchange code via the provider's TokenRefresher
        3. Save the credential (replacing any previous one)

    Returns:
        Result[ConnectIntegrationResult, str]: Success(result) or Failure(error)
    """

    def __init__(
        self,
        *,
        credential_store: CredentialStoreProtocol,
        refreshers: Mapping[str, TokenRefresher],
        state_codec: OAuthStateCodec,
    ) -> None:
        self._credential_store = credential_store
        self._refreshers = dict(refreshers)
        self._state_codec = state_codec

    async def handle(
        self, command: ConnectIntegration
    ) -> Result[ConnectIntegrationResult, str]:
        """Handle ConnectIntegration command."""
        refresher = self._refreshers.get(command.provider_slug)
        if refresher is None:
            return Failure(
                error=f"{ConnectIntegrationError.UNKNOWN_PROVIDER}: {command.provider_slug}"
            )

        if not command.code:
            return Failure(error=ConnectIntegrationError.MISSING_CODE)

        state_result = self._state_codec.decode(command.state)
        if isinstance(state_result, Failure):
            logger.warning(
                "oauth_callback_state_rejected",
                provider=command.provider_slug,
                error_code=state_result.error.code.value,
            )
            if state_result.error.code == ErrorCode.OAUTH_STATE_EXPIRED:
                return Failure(error=ConnectIntegrationError.EXPIRED_STATE)
            return Failure(error=ConnectIntegrationError.INVALID_STATE)
        user_id = state_result.value

        exchange_result = await refresher.exchange_code(command.code)
        if isinstance(exchange_result, Failure):
            error = exchange_result.error
            logger.warning(
                "oauth_callback_exchange_failed",
                provider=command.provider_slug,
                user_id=str(user_id),
                error_code=error.code.value,
            )
            if isinstance(error, ProviderAuthenticationError):
                return Failure(
                    error=f"{ConnectIntegrationError.AUTHORIZATION_REJECTED}: {error.message}"
                )
            return Failure(error=ConnectIntegrationError.PROVIDER_UNAVAILABLE)

        credential = exchange_result.value
        await self._credential_store.save(user_id, command.provider_slug, credential)
        logger.info(
            "provider_connected",
            provider=command.provider_slug,
            user_id=str(user_id),
        )
        return Success(
            value=ConnectIntegrationResult(
                user_id=user_id,
                provider=command.provider_slug,
                expires_at=credential.expires_at,
            )
        )

    def start_connection(self, provider_slug: str, user_id: UUID) -> Result[str, str]:
        """Build the consent URL that starts a connection for a user.

        Returns:
            Success(str): Provider authorization URL carrying a signed state.
            Failure(str): Unknown provider.
        """
        refresher = self._refreshers.get(provider_slug)
        if refresher is None:
            return Failure(error=f"{ConnectIntegrationError.UNKNOWN_PROVIDER}: {provider_slug}")
        return Success(value=refresher.authorization_url(self._state_codec.encode(user_id)))
