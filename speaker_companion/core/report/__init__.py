"""
Analysis report assembly.

Exports:
  - ResultAggregator: raw pipeline output -> AnalysisReport
  - build_timeline, build_recommendations: report section builders
"""

from speaker_companion.core.report.aggregator import ResultAggregator
from speaker_companion.core.report.recommendations import build_recommendations
from speaker_companion.core.report.timeline import build_timeline

__all__ = ["ResultAggregator", "build_recommendations", "build_timeline"]
