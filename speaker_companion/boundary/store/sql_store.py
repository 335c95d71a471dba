"""
Database-backed job store.

Each operation runs in its own short transaction. Transitions are one
conditional UPDATE, so the stage and its terminal payload land together.

Dependencies: sqlalchemy, speaker_companion.boundary.db
System role: Durable job store
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from speaker_companion.boundary.db.CRUD.analysis_crud import analysis_crud
from speaker_companion.boundary.db.models.analysis_model import AnalysisModel
from speaker_companion.boundary.store.base import JobStore
from speaker_companion.core.stages import AnalysisStage
from speaker_companion.models.analysis import AnalysisJob

logger = logging.getLogger(__name__)


def _aware(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo; stored values are always UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def model_to_job(model: AnalysisModel) -> AnalysisJob:
    """
    Convert an ORM row into an AnalysisJob snapshot.

    Args:
        model: AnalysisModel row

    Returns:
        AnalysisJob: Validated immutable record
    """
    return AnalysisJob.model_validate(
        {
            "id": model.id,
            "stage": model.stage,
            "created_at": _aware(model.created_at),
            "started_at": _aware(model.started_at),
            "completed_at": _aware(model.completed_at),
            "video": model.video,
            "config": model.config,
            "result": model.result,
            "failure_reason": model.failure_reason,
        }
    )


def job_to_values(job: AnalysisJob) -> dict:
    """
    Column values for an AnalysisJob.

    Args:
        job: Record to persist

    Returns:
        dict: Mapping of AnalysisModel column names to JSON-safe values
    """
    return {
        "stage": job.stage,
        "started_at": job.started_at,
        "completed_at": job.completed_at,
        "video": job.video.model_dump(mode="json"),
        "config": job.config.model_dump(mode="json"),
        "result": job.result.model_dump(mode="json") if job.result is not None else None,
        "failure_reason": job.failure_reason,
    }


class SqlJobStore(JobStore):
    """Job store persisted through SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker, engine: AsyncEngine | None = None) -> None:
        """
        Initialize store.

        Args:
            session_factory: Async session factory
            engine: Engine to dispose on close (optional)
        """
        self.session_factory = session_factory
        self.engine = engine

    async def create(self, job: AnalysisJob) -> AnalysisJob:
        async with self.session_factory() as session:
            try:
                model = await analysis_crud.create(
                    session,
                    id=job.id,
                    created_at=job.created_at,
                    **job_to_values(job),
                )
                await session.commit()
            except Exception:
                await session.rollback()
                logger.exception("Failed to persist analysis", extra={"analysis_id": str(job.id)})
                raise
            return model_to_job(model)

    async def get(self, analysis_id: UUID) -> AnalysisJob | None:
        async with self.session_factory() as session:
            model = await analysis_crud.get_by_id(session, analysis_id)
            return model_to_job(model) if model is not None else None

    async def list_page(
        self,
        offset: int,
        limit: int,
        stage: AnalysisStage | None = None,
    ) -> tuple[list[AnalysisJob], int]:
        async with self.session_factory() as session:
            total = await analysis_crud.count(session, stage)
            models = await analysis_crud.get_page(session, offset, limit, stage)
            return [model_to_job(model) for model in models], total

    async def replace(self, expected_stage: AnalysisStage, job: AnalysisJob) -> bool:
        async with self.session_factory() as session:
            try:
                applied = await analysis_crud.transition(
                    session, job.id, expected_stage, **job_to_values(job)
                )
                await session.commit()
            except Exception:
                await session.rollback()
                logger.exception(
                    "Failed to apply transition",
                    extra={"analysis_id": str(job.id), "target_stage": job.stage.value},
                )
                raise
            return applied

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
