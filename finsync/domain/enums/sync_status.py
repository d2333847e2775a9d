"""Per-provider sync outcome."""

from enum import Enum


class SyncStatus(str, Enum):
    """Outcome of syncing one provider.

    Examples:
        >>> SyncStatus.AUTH_REQUIRED.requires_user_action()
        True
    """

    OK = "ok"
    """Live data fetched and persisted."""

    DEGRADED = "degraded"
    """Sandbox data persisted because live data was not available."""

    AUTH_REQUIRED = "auth_required"
    """Provider rejected the credential; user must reconnect."""

    FAILED = "failed"
    """Unexpected error while syncing this provider."""

    def requires_user_action(self) -> bool:
        """Check whether the user has to reconnect the provider."""
        return self is SyncStatus.AUTH_REQUIRED
