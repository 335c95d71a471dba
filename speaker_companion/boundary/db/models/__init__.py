"""
Database models package.

Exports:
  - AnalysisModel: Analysis job ORM model

Dependencies: sqlalchemy, speaker_companion.boundary.db.base
System role: Database model definitions for domain entities
"""

from speaker_companion.boundary.db.models.analysis_model import AnalysisModel

__all__ = ["AnalysisModel"]
