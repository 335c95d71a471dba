"""
Top-level settings object.

Nests the per-concern settings (database, analysis) under one model and
exposes a cached accessor so environment variables are read once.

Dependencies: speaker_companion.configs.*
System role: Single entry point for configuration
"""

from functools import lru_cache

from speaker_companion.configs.analysis import AnalysisSettings
from speaker_companion.configs.base import BaseSettings
from speaker_companion.configs.database import DatabaseSettings


class Settings(BaseSettings):
    """Application settings: deployment fields plus nested sub-settings."""

    database: DatabaseSettings = DatabaseSettings()
    analysis: AnalysisSettings = AnalysisSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Load settings from the environment once per process.

    Returns:
        Settings: Cached settings instance
    """
    return Settings()
