"""
Configuration management using Pydantic Settings.

This module provides type-safe, validated configuration loading from environment
variables.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic
- Every field has a default so a bare checkout runs entirely in sandbox mode

Usage:
    from finsync.core.config import get_settings

    settings = get_settings()
    if settings.sandbox_mode:
        ...

    candidates = settings.model_candidates
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from finsync.core.enums import Environment


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. Default values (only for non-sensitive config)

    Returns:
        Settings: Application configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Sync behaviour
    sandbox_mode: bool = Field(
        default=False,
        description="Force every provider adapter to return synthetic data",
    )
    provider_http_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for a single HTTP request to a provider API",
    )
    adapter_timeout_seconds: float = Field(
        default=20.0,
        description="Upper bound for one adapter invocation during a sync",
    )
    token_refresh_margin_seconds: int = Field(
        default=300,
        description="Refresh access tokens this many seconds before they expire",
    )
    sync_window_days: int = Field(
        default=90,
        description="Default look-back window for live transaction fetches",
    )
    sandbox_window_days: int = Field(
        default=30,
        description="Recency window for synthetic records",
    )
    provider_utc_offset_hours: int = Field(
        default=-3,
        description="UTC offset used to turn provider timestamps into calendar dates",
    )

    # Hotmart (sales platform)
    hotmart_client_id: str | None = Field(
        default=None,
        description="Hotmart OAuth client ID",
    )
    hotmart_client_secret: str | None = Field(
        default=None,
        description="Hotmart OAuth client secret",
    )
    hotmart_api_base_url: str = Field(
        default="https://developers.hotmart.com",
        description="Hotmart API base URL",
    )
    hotmart_token_url: str = Field(
        default="https://api-sec-vlc.hotmart.com/security/oauth/token",
        description="Hotmart OAuth token endpoint",
    )
    hotmart_authorize_url: str = Field(
        default="https://api-sec-vlc.hotmart.com/security/oauth/authorize",
        description="Hotmart OAuth authorization endpoint",
    )
    hotmart_redirect_uri: str | None = Field(
        default=None,
        description="Hotmart OAuth redirect URI registered for this app",
    )

    # Open Finance aggregator (Pluggy)
    open_finance_client_id: str | None = Field(
        default=None,
        description="Open Finance aggregator client ID",
    )
    open_finance_client_secret: str | None = Field(
        default=None,
        description="Open Finance aggregator client secret",
    )
    open_finance_api_base_url: str = Field(
        default="https://api.pluggy.ai",
        description="Open Finance aggregator API base URL",
    )
    open_finance_token_url: str = Field(
        default="https://api.pluggy.ai/oauth/token",
        description="Open Finance OAuth token endpoint",
    )
    open_finance_authorize_url: str = Field(
        default="https://connect.pluggy.ai/oauth/authorize",
        description="Open Finance OAuth authorization endpoint",
    )
    open_finance_redirect_uri: str | None = Field(
        default=None,
        description="Open Finance OAuth redirect URI registered for this app",
    )

    # OAuth state
    oauth_state_secret: str = Field(
        default="change-me-in-production",
        description="Secret used to sign OAuth state values",
    )
    oauth_state_ttl_seconds: int = Field(
        default=600,
        description="Maximum age of an OAuth state value",
    )

    # Insight generation (Gemini)
    gemini_api_key: str | None = Field(
        default=None,
        description="Google Gemini API key (None = local insights only)",
    )
    insight_model_candidates: str = Field(
        default=(
            "gemini-2.0-flash,gemini-2.5-flash,gemini-1.5-flash,"
            "gemini-1.5-flash-latest,gemini-pro"
        ),
        description="Comma-separated model names tried in order",
    )
    insight_candidate_timeout_seconds: float = Field(
        default=30.0,
        description="Upper bound for one model attempt",
    )
    insight_max_output_tokens: int = Field(
        default=1000,
        description="Maximum tokens a model may generate per answer",
    )
    insight_temperature: float = Field(
        default=0.7,
        description="Sampling temperature for model answers",
    )
    insight_context_days: int = Field(
        default=45,
        description="Transactions older than this are left out of the insight context",
    )
    insight_context_max_transactions: int = Field(
        default=40,
        description="Maximum number of transactions rendered into a prompt",
    )
    currency_symbol: str = Field(
        default="R$",
        description="Currency symbol used in prompts and local insights",
    )

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "hotmart_api_base_url",
        "hotmart_token_url",
        "hotmart_authorize_url",
        "open_finance_api_base_url",
        "open_finance_token_url",
        "open_finance_authorize_url",
    )
    @classmethod
    def validate_url(cls, v: str) -> str:
        """
        Remove trailing slashes from URLs.

        Args:
            v: URL string.

        Returns:
            str: URL without trailing slash.
        """
        return v.rstrip("/")

    @field_validator(
        "provider_http_timeout_seconds",
        "adapter_timeout_seconds",
        "insight_candidate_timeout_seconds",
    )
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """
        Validate timeouts are positive.

        Raises:
            ValueError: If timeout is zero or negative.
        """
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator("sync_window_days", "sandbox_window_days", "insight_context_days")
    @classmethod
    def validate_window_days(cls, v: int) -> int:
        """
        Validate look-back windows stay within a sane range.

        Raises:
            ValueError: If days are not between 1 and 365.
        """
        if not 1 <= v <= 365:
            raise ValueError("window days must be between 1 and 365")
        return v

    @field_validator("provider_utc_offset_hours")
    @classmethod
    def validate_utc_offset(cls, v: int) -> int:
        if not -12 <= v <= 14:
            raise ValueError("provider_utc_offset_hours must be between -12 and 14")
        return v

    @property
    def model_candidates(self) -> list[str]:
        """
        Parse comma-separated model candidates, keeping order.

        Returns:
            list[str]: Model names, empty entries and duplicates removed.
        """
        candidates: list[str] = []
        for name in self.insight_model_candidates.split(","):
            name = name.strip()
            if name and name not in candidates:
                candidates.append(name)
        return candidates

    @property
    def hotmart_configured(self) -> bool:
        """Check whether Hotmart client credentials are present."""
        return bool(self.hotmart_client_id and self.hotmart_client_secret)

    @property
    def open_finance_configured(self) -> bool:
        """Check whether Open Finance client credentials are present."""
        return bool(self.open_finance_client_id and self.open_finance_client_secret)

    # Convenience properties for environment checks
    @property
    def is_development(self) -> bool:
        """
        Check if running in development environment.

        Returns:
            bool: True if environment is DEVELOPMENT, False otherwise.
        """
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """
        Check if running in testing environment.

        Returns:
            bool: True if environment is TESTING, False otherwise.
        """
        return self.environment == Environment.TESTING

    @property
    def is_ci(self) -> bool:
        """
        Check if running in CI environment.

        Returns:
            bool: True if environment is CI, False otherwise.
        """
        return self.environment == Environment.CI

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.

        Returns:
            bool: True if environment is PRODUCTION, False otherwise.
        """
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()
