"""Domain errors.

Usage:
    from finsync.domain.errors import ProviderError, ProviderAuthenticationError
"""

from finsync.domain.errors.credential_error import CredentialConflictError
from finsync.domain.errors.insight_error import (
    InsightError,
    InsightGenerationError,
    InsightModelNotFoundError,
    InsightQuotaExceededError,
)
from finsync.domain.errors.provider_error import (
    ProviderAuthenticationError,
    ProviderConfigurationError,
    ProviderError,
    ProviderInvalidResponseError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)

__all__ = [
    "CredentialConflictError",
    "InsightError",
    "InsightGenerationError",
    "InsightModelNotFoundError",
    "InsightQuotaExceededError",
    "ProviderAuthenticationError",
    "ProviderConfigurationError",
    "ProviderError",
    "ProviderInvalidResponseError",
    "ProviderRateLimitError",
    "ProviderUnavailableError",
]
