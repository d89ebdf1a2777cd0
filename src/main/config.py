"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files, docker secrets and default values.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.shared import EnumEnvironment, EnumLogLevel
from src.shared.consts import SWITCHBOT_API_URL
from src.shared.env import load_secret_file_variables


class SwitchBotSettings(BaseSettings):
    """SwitchBot cloud API settings."""

    token: str = Field(default="", description="Open token from the SwitchBot app")
    secret: str = Field(default="", description="Client secret from the app")
    base_url: str = Field(default=SWITCHBOT_API_URL, description="API root URL")
    request_timeout_s: float = Field(
        default=10.0, description="Per-request timeout in seconds"
    )
    poll_interval_ms: int = Field(
        default=60000, description="Status sweep interval (minimum 10000)"
    )
    min_request_interval_ms: int = Field(
        default=100, description="Minimum spacing between request starts"
    )
    command_resync_delay_ms: int = Field(
        default=2000, description="Delay of the status refresh after a command"
    )

    model_config = SettingsConfigDict(
        env_prefix="SWITCHBOT_", case_sensitive=False, extra="ignore"
    )


class RetrySettings(BaseSettings):
    """Backoff settings shared by every provider operation."""

    max_retries: int = Field(default=3, description="Retries after the first call")
    base_delay_ms: int = Field(default=1000, description="Delay before retry 1")
    max_delay_ms: int = Field(default=30000, description="Backoff cap")

    model_config = SettingsConfigDict(
        env_prefix="RETRY_", case_sensitive=False, extra="ignore"
    )


class AppInfoSettings(BaseSettings):
    """Service metadata exposed by the API."""

    title: str = Field(default="SwitchBot Cloud Bridge", description="API title")
    description: str = Field(
        default="Synchronizes SwitchBot cloud devices into a local state store",
        description="API description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("APP_GIT_COMMIT", "GIT_COMMIT"),
    )
    port: int = Field(default=8000, description="Port to bind the server")

    model_config = SettingsConfigDict(
        env_prefix="APP_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    switchbot: SwitchBotSettings = Field(default_factory=SwitchBotSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    app: AppInfoSettings = Field(default_factory=AppInfoSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on environment.
    """
    load_secret_file_variables()
    return AppSettings()


settings = get_settings()
