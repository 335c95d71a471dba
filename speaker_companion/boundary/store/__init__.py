"""
Job store implementations.

Exports:
  - JobStore: Storage interface
  - InMemoryJobStore: Process-local store
  - SqlJobStore: SQLAlchemy-backed store
"""

from speaker_companion.boundary.store.base import JobStore
from speaker_companion.boundary.store.memory_store import InMemoryJobStore
from speaker_companion.boundary.store.sql_store import SqlJobStore

__all__ = ["InMemoryJobStore", "JobStore", "SqlJobStore"]
