"""Reasons an adapter produced sandbox data instead of live data.

Carried on sync results so that a degraded outcome can be told apart from
one that was intentionally synthetic.
"""

from enum import Enum


class FallbackReason(str, Enum):
    """Why an adapter switched to the sandbox generator."""

    SANDBOX_ENABLED = "sandbox_enabled"
    """Global sandbox flag is set."""

    NOT_CONFIGURED = "not_configured"
    """Provider client credentials are missing."""

    NO_CREDENTIAL = "no_credential"
    """User has not connected this provider."""

    PROVIDER_UNAVAILABLE = "provider_unavailable"
    """Network failure, timeout inside the HTTP client, or 5xx."""

    RATE_LIMITED = "rate_limited"
    """Provider answered 429."""

    INVALID_RESPONSE = "invalid_response"
    """Provider answered with an unexpected status or body."""

    TIMEOUT = "timeout"
    """Adapter invocation exceeded the orchestrator's time budget."""
