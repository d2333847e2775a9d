"""Credential store errors."""

from dataclasses import dataclass

from finsync.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class CredentialConflictError(DomainError):
    """Compare-and-swap save lost a race.

    Another writer replaced the stored credential after the caller read it.
    The caller should reload the stored credential instead of overwriting it.

    Attributes:
        provider_slug: Provider whose credential changed underneath the caller.
    """

    provider_slug: str
