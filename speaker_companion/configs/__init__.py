"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from speaker_companion.configs.analysis import AnalysisSettings
from speaker_companion.configs.database import DatabaseSettings
from speaker_companion.configs.settings import Settings, get_settings

__all__ = ["AnalysisSettings", "DatabaseSettings", "Settings", "get_settings"]
