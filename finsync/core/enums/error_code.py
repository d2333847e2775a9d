"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Provider errors (PROVIDER_*)
- Credential errors (CREDENTIAL_*, OAUTH_*)
- Insight generation errors (INSIGHT_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Provider errors
    PROVIDER_AUTHENTICATION_FAILED = "provider_authentication_failed"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    PROVIDER_RATE_LIMITED = "provider_rate_limited"
    PROVIDER_INVALID_RESPONSE = "provider_invalid_response"
    PROVIDER_NOT_CONFIGURED = "provider_not_configured"

    # Credential errors
    CREDENTIAL_CONFLICT = "credential_conflict"
    OAUTH_STATE_INVALID = "oauth_state_invalid"
    OAUTH_STATE_EXPIRED = "oauth_state_expired"

    # Insight generation errors
    INSIGHT_MODEL_NOT_FOUND = "insight_model_not_found"
    INSIGHT_QUOTA_EXCEEDED = "insight_quota_exceeded"
    INSIGHT_GENERATION_FAILED = "insight_generation_failed"
    INSIGHT_EMPTY_RESPONSE = "insight_empty_response"
