"""Synthetic transaction generation for sandbox mode."""

from finsync.infrastructure.providers.sandbox.generator import (
    SandboxTransactionGenerator,
)
from finsync.infrastructure.providers.sandbox.profiles import (
    HOTMART_SANDBOX_PROFILE,
    OPEN_FINANCE_SANDBOX_PROFILE,
    SandboxProfile,
    SandboxTemplate,
    get_sandbox_profile,
)

__all__ = [
    "HOTMART_SANDBOX_PROFILE",
    "OPEN_FINANCE_SANDBOX_PROFILE",
    "SandboxProfile",
    "SandboxTemplate",
    "SandboxTransactionGenerator",
    "get_sandbox_profile",
]
