"""
CRUD operations package.

Exports:
  - BaseCRUD: Generic CRUD base class
  - AnalysisCRUD, analysis_crud: Analysis persistence operations
"""

from speaker_companion.boundary.db.CRUD.analysis_crud import AnalysisCRUD, analysis_crud
from speaker_companion.boundary.db.CRUD.base_crud import BaseCRUD

__all__ = ["AnalysisCRUD", "BaseCRUD", "analysis_crud"]
