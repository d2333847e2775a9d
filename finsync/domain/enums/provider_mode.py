"""Provider mode (resolved per adapter invocation, never persisted)."""

from enum import Enum


class ProviderMode(str, Enum):
    """Where an adapter's records came from."""

    SANDBOX = "sandbox"
    """Synthetic records produced locally."""

    LIVE = "live"
    """Records fetched from the provider API."""
