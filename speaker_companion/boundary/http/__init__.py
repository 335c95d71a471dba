"""
HTTP adapters.

Exports:
  - RemoteAnalysisService: AnalysisService over a remote analyses API
"""

from speaker_companion.boundary.http.analysis_client import RemoteAnalysisService

__all__ = ["RemoteAnalysisService"]
