"""Command handlers."""

from finsync.application.commands.handlers.connect_integration_handler import (
    ConnectIntegrationError,
    ConnectIntegrationHandler,
)
from finsync.application.commands.handlers.generate_insight_handler import (
    GenerateInsightError,
    GenerateInsightHandler,
)
from finsync.application.commands.handlers.sync_integrations_handler import (
    SyncIntegrationsError,
    SyncIntegrationsHandler,
)

__all__ = [
    "ConnectIntegrationError",
    "ConnectIntegrationHandler",
    "GenerateInsightError",
    "GenerateInsightHandler",
    "SyncIntegrationsError",
    "SyncIntegrationsHandler",
]
