"""
Shared settings foundation.

Every settings class reads the process environment and an optional ``.env``
file; sub-settings differ only in their variable prefix.

Dependencies: pydantic_settings
System role: Common base for configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


def settings_config(env_prefix: str = "") -> SettingsConfigDict:
    """
    Build the model_config used by all settings classes.

    Args:
        env_prefix: Prefix for this class's environment variables

    Returns:
        SettingsConfigDict: .env-aware, case-insensitive config ignoring unknown keys
    """
    return SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix=env_prefix,
        case_sensitive=False,
        extra="ignore",
    )


class BaseSettings(PydanticBaseSettings):
    """Deployment-wide settings shared by every config module."""

    model_config = settings_config()

    environment: str = Field(
        default="development",
        description="Deployment name (development, staging, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level applied by configure_logging",
    )
