"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), create_tables(): Connection management
  - AnalysisModel: Analysis job entity
  - analysis_crud: CRUD operation singleton

Dependencies: sqlalchemy, speaker_companion.configs
System role: Durable storage for analysis jobs
"""

from speaker_companion.boundary.db.base import Base, TimestampMixin, UUIDMixin
from speaker_companion.boundary.db.connection import (
    create_tables,
    get_async_engine,
    get_async_session_factory,
)
from speaker_companion.boundary.db.models.analysis_model import AnalysisModel
from speaker_companion.boundary.db.CRUD import AnalysisCRUD, BaseCRUD, analysis_crud

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "create_tables",
    "get_async_engine",
    "get_async_session_factory",
    "AnalysisModel",
    "AnalysisCRUD",
    "BaseCRUD",
    "analysis_crud",
]
