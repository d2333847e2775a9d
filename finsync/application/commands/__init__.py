"""Application commands (immutable user intents)."""

from finsync.application.commands.integration_commands import (
    ConnectIntegration,
    GenerateInsight,
    SyncIntegrations,
)

__all__ = ["ConnectIntegration", "GenerateInsight", "SyncIntegrations"]
