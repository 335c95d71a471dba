"""
Job store interface.

Dependencies: speaker_companion.models
System role: Storage contract shared by the in-memory and database stores
"""

from abc import ABC, abstractmethod
from uuid import UUID

from speaker_companion.core.stages import AnalysisStage
from speaker_companion.models.analysis import AnalysisJob


class JobStore(ABC):
    """
    Durable record of all analysis jobs.

    Implementations must make ``replace`` a single atomic compare-and-set so
    that readers only ever see whole records.
    """

    @abstractmethod
    async def create(self, job: AnalysisJob) -> AnalysisJob:
        """Persist a new job and return the stored record."""

    @abstractmethod
    async def get(self, analysis_id: UUID) -> AnalysisJob | None:
        """Return the current record, or None if unknown."""

    @abstractmethod
    async def list_page(
        self,
        offset: int,
        limit: int,
        stage: AnalysisStage | None = None,
    ) -> tuple[list[AnalysisJob], int]:
        """
        Return one page of jobs, newest first, and the total match count.

        Args:
            offset: Records to skip
            limit: Maximum records to return
            stage: Optional stage filter
        """

    @abstractmethod
    async def replace(self, expected_stage: AnalysisStage, job: AnalysisJob) -> bool:
        """
        Swap in ``job`` if the stored record is still in ``expected_stage``.

        Returns:
            bool: False if the job is unknown or its stage has changed
        """

    async def close(self) -> None:
        """Release resources held by the store."""
