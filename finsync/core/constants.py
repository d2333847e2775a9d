"""Centralized constants for internal implementation details.

This module contains constants that are internal implementation details,
NOT environment-specific configuration. For environment-specific settings,
use `finsync/core/config.py` instead.

Categories:
- Timeouts: Default timeouts for external service calls
- Prefixes: Standard protocol prefixes and record markers
- Limits: Truncation, pagination and safety limits

Example:
    >>> from finsync.core.constants import BEARER_PREFIX
    >>> header = f"{BEARER_PREFIX}{access_token}"
"""

# =============================================================================
# Timeouts
# =============================================================================

PROVIDER_TIMEOUT_DEFAULT: float = 30.0
"""Default timeout for external provider API calls in seconds."""


# =============================================================================
# Prefixes
# =============================================================================

BEARER_PREFIX: str = "Bearer "
"""HTTP Authorization header prefix for Bearer tokens."""

SANDBOX_EXTERNAL_ID_PREFIX: str = "SANDBOX-"
"""Marker that starts the external id of every synthetic record."""


# =============================================================================
# Limits
# =============================================================================

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Maximum response body characters kept in error details."""

PROVIDER_MAX_PAGES: int = 20
"""Upper bound on pages fetched per provider request chain."""

PROVIDER_PAGE_SIZE: int = 100
"""Records requested per page from provider APIs."""

SYNTHETIC_ID_HASH_LENGTH: int = 24
"""Hex characters kept from the digest of a synthesized external id."""

OAUTH_STATE_NONCE_BYTES: int = 16
"""Random bytes in the nonce part of an OAuth state value."""
