"""API-specific dependencies."""

from .dependencies import (
    ServiceContainer,
    get_analysis_service,
    get_container,
    get_settings_dependency,
)

__all__ = [
    "ServiceContainer",
    "get_analysis_service",
    "get_container",
    "get_settings_dependency",
]
