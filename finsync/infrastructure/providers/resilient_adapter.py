"""Sandbox/live mode resolution around a provider adapter.

Wraps a TransactionProviderProtocol implementation and its sandbox
generator. Every invocation resolves the mode anew:

    1. global sandbox flag set            -> sandbox (sandbox_enabled)
    2. provider client not configured     -> sandbox (not_configured)
    3. no credential for the user         -> sandbox (no_credential)
    4. live fetch succeeded               -> live records (possibly empty)
    5. live fetch failed transiently      -> sandbox (reason per error type)
    6. live fetch failed authentication   -> Failure surfaced to the caller

Only authentication failures leave this class as errors. Everything else
degrades to synthetic data so the user always sees a dashboard.
"""

from dataclasses import dataclass, field

import structlog

from finsync.core.result import Failure, Result, Success
from finsync.domain.entities import CanonicalTransaction
from finsync.domain.enums import FallbackReason, ProviderMode
from finsync.domain.errors import (
    ProviderAuthenticationError,
    ProviderConfigurationError,
    ProviderError,
    ProviderInvalidResponseError,
    ProviderRateLimitError,
)
from finsync.domain.protocols import TransactionProviderProtocol
from finsync.domain.value_objects import OAuthCredential, SyncWindow
from finsync.infrastructure.providers.sandbox import SandboxTransactionGenerator

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, kw_only=True)
class AdapterOutcome:
    """Records produced by one adapter invocation.

    Attributes:
        records: Canonical records (never empty in sandbox mode).
        mode: LIVE or SANDBOX.
        fallback_reason: Why sandbox data was used (None in live mode).
    """

    records: list[CanonicalTransaction] = field(default_factory=list)
    mode: ProviderMode = ProviderMode.LIVE
    fallback_reason: FallbackReason | None = None

    @property
    def is_degraded(self) -> bool:
        return self.mode == ProviderMode.SANDBOX


def fallback_reason_for(error: ProviderError) -> FallbackReason:
    """Map a non-authentication provider error to a fallback reason."""
    match error:
        case ProviderRateLimitError():
            return FallbackReason.RATE_LIMITED
        case ProviderConfigurationError():
            return FallbackReason.NOT_CONFIGURED
        case ProviderInvalidResponseError():
            return FallbackReason.INVALID_RESPONSE
        case _:
            return FallbackReason.PROVIDER_UNAVAILABLE


class ResilientProviderAdapter:
    """Provider adapter with sandbox fallback.

    Example:
        >>> adapter = ResilientProviderAdapter(
        ...     provider=HotmartProvider(settings=settings),
        ...     sandbox=SandboxTransactionGenerator(HOTMART_SANDBOX_PROFILE),
        ...     is_configured=settings.hotmart_configured,
        ... )
        >>> result = await adapter.fetch(credential, window)
    """

    def __init__(
        self,
        *,
        provider: TransactionProviderProtocol,
        sandbox: SandboxTransactionGenerator,
        is_configured: bool,
        sandbox_enabled: bool = False,
    ) -> None:
        """Initialize adapter.

        Args:
            provider: Live provider implementation.
            sandbox: Generator used for every fallback.
            is_configured: Whether the provider's client credentials are set.
            sandbox_enabled: Global sandbox flag.
        """
        self._provider = provider
        self._sandbox = sandbox
        self._is_configured = is_configured
        self._sandbox_enabled = sandbox_enabled

    @property
    def slug(self) -> str:
        return self._provider.slug

    @property
    def source_label(self) -> str:
        return self._provider.source_label

    def fallback(
        self,
        window: SyncWindow | None,
        reason: FallbackReason,
    ) -> AdapterOutcome:
        """Produce sandbox records directly.

        Args:
            window: Sync window.
            reason: Why live data is not used.
        """
        return AdapterOutcome(
            records=self._sandbox.generate(window),
            mode=ProviderMode.SANDBOX,
            fallback_reason=reason,
        )

    async def fetch(
        self,
        credential: OAuthCredential | None,
        window: SyncWindow,
    ) -> Result[AdapterOutcome, ProviderAuthenticationError]:
        """Resolve the mode and fetch records.

        Args:
            credential: Fresh credential, or None when the user has none.
            window: Sync window.

        Returns:
            Success(AdapterOutcome): Live or sandbox records.
            Failure(ProviderAuthenticationError): Provider rejected the credential.
        """
        if self._sandbox_enabled:
            return Success(value=self.fallback(window, FallbackReason.SANDBOX_ENABLED))
        if not self._is_configured:
            return Success(value=self.fallback(window, FallbackReason.NOT_CONFIGURED))
        if credential is None:
            return Success(value=self.fallback(window, FallbackReason.NO_CREDENTIAL))

        result = await self._provider.fetch_transactions(credential, window)

        match result:
            case Success(value=records):
                return Success(value=AdapterOutcome(records=records, mode=ProviderMode.LIVE))
            case Failure(error=ProviderAuthenticationError() as error):
                logger.warning(
                    "provider_authentication_rejected",
                    provider=self.slug,
                    is_token_expired=error.is_token_expired,
                )
                return Failure(error=error)
            case Failure(error=error):
                reason = fallback_reason_for(error)
                logger.warning(
                    "provider_sync_degraded",
                    provider=self.slug,
                    reason=reason.value,
                    error_code=error.code.value,
                    error_message=error.message,
                )
                return Success(value=self.fallback(window, reason))
