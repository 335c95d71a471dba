"""Service orchestrators."""

from .analysis_service import AnalysisService, LocalAnalysisService

__all__ = ["AnalysisService", "LocalAnalysisService"]
