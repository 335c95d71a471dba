"""
In-memory job store.

Keeps immutable AnalysisJob snapshots in a dict. Writers serialise on an
asyncio lock; readers take no lock and always see a whole snapshot.

Dependencies: asyncio, bisect, speaker_companion.models
System role: Job store for tests and single-process development
"""

import asyncio
import bisect
import itertools
from datetime import datetime
from uuid import UUID

from speaker_companion.boundary.store.base import JobStore
from speaker_companion.core.stages import AnalysisStage
from speaker_companion.models.analysis import AnalysisJob

SortKey = tuple[datetime, int, UUID]


class InMemoryJobStore(JobStore):
    """Job store backed by process memory."""

    def __init__(self) -> None:
        """Initialize empty store."""
        self._jobs: dict[UUID, AnalysisJob] = {}
        self._keys: dict[UUID, SortKey] = {}
        # Ascending (created_at, insertion sequence) keys, overall and per stage
        self._order: list[SortKey] = []
        self._by_stage: dict[AnalysisStage, list[SortKey]] = {stage: [] for stage in AnalysisStage}
        self._sequence = itertools.count()
        self._lock = asyncio.Lock()

    async def create(self, job: AnalysisJob) -> AnalysisJob:
        async with self._lock:
            if job.id in self._jobs:
                raise ValueError(f"Analysis {job.id} already exists")
            key = (job.created_at, next(self._sequence), job.id)
            self._keys[job.id] = key
            bisect.insort(self._order, key)
            bisect.insort(self._by_stage[job.stage], key)
            self._jobs[job.id] = job
        return job

    async def get(self, analysis_id: UUID) -> AnalysisJob | None:
        return self._jobs.get(analysis_id)

    async def list_page(
        self,
        offset: int,
        limit: int,
        stage: AnalysisStage | None = None,
    ) -> tuple[list[AnalysisJob], int]:
        # No await below: the slice is taken against one consistent state
        keys = self._order if stage is None else self._by_stage[stage]
        total = len(keys)
        end = max(total - offset, 0)
        start = max(end - limit, 0)
        page = [self._jobs[key[2]] for key in reversed(keys[start:end])]
        return page, total

    async def replace(self, expected_stage: AnalysisStage, job: AnalysisJob) -> bool:
        async with self._lock:
            current = self._jobs.get(job.id)
            if current is None or current.stage is not expected_stage:
                return False
            if current.stage is not job.stage:
                key = self._keys[job.id]
                old_bucket = self._by_stage[current.stage]
                del old_bucket[bisect.bisect_left(old_bucket, key)]
                bisect.insort(self._by_stage[job.stage], key)
            self._jobs[job.id] = job
        return True

    def __len__(self) -> int:
        return len(self._jobs)
