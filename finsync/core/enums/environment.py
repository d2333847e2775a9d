"""Runtime environments.

Settings use the environment to pick the log renderer and to decide how
loudly misconfiguration is reported.

Environments:
- DEVELOPMENT: Local development, human-readable logs
- TESTING: Automated test execution
- CI: Continuous integration
- PRODUCTION: Deployed service, JSON logs
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
