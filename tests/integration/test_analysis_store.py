"""
Integration tests for the database-backed job store.

Runs AnalysisCRUD and SqlJobStore against in-memory SQLite to verify
persistence round trips, newest-first paging and compare-and-set transitions.

Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Persistence layer verification
"""

import uuid
from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from speaker_companion.boundary.db.CRUD.analysis_crud import analysis_crud
from speaker_companion.boundary.store import SqlJobStore
from speaker_companion.core.job_tracker import JobTracker
from speaker_companion.core.stages import SUCCESS_PATH, AnalysisStage
from speaker_companion.models.analysis import AnalysisConfig, AnalysisJob, utcnow

pytestmark = pytest.mark.integration


@pytest.fixture
def sql_store(test_async_engine) -> SqlJobStore:
    factory = async_sessionmaker(test_async_engine, class_=AsyncSession, expire_on_commit=False)
    return SqlJobStore(factory)


def _queued(video, created_at=None) -> AnalysisJob:
    return AnalysisJob(
        id=uuid.uuid4(),
        stage=AnalysisStage.QUEUED,
        created_at=created_at or utcnow(),
        video=video,
        config=AnalysisConfig(target_fps=12),
    )


class TestAnalysisCRUD:
    """Test cases for AnalysisCRUD against SQLite."""

    @pytest.mark.asyncio
    async def test_transition_should_only_apply_from_expected_stage(self, test_async_db, sample_video):
        # Arrange
        model = await analysis_crud.create(
            test_async_db,
            stage=AnalysisStage.QUEUED,
            video=sample_video.model_dump(mode="json"),
            config=AnalysisConfig().model_dump(mode="json"),
        )

        # Act
        applied = await analysis_crud.transition(
            test_async_db, model.id, AnalysisStage.QUEUED, stage=AnalysisStage.PREPROCESSING_VIDEO
        )
        stale = await analysis_crud.transition(
            test_async_db, model.id, AnalysisStage.QUEUED, stage=AnalysisStage.FAILED, failure_reason="late"
        )

        # Assert
        assert applied is True
        assert stale is False
        assert await analysis_crud.count(test_async_db, AnalysisStage.PREPROCESSING_VIDEO) == 1
        assert await analysis_crud.count(test_async_db, AnalysisStage.FAILED) == 0

    @pytest.mark.asyncio
    async def test_transition_on_missing_row_should_report_false(self, test_async_db):
        applied = await analysis_crud.transition(
            test_async_db, uuid.uuid4(), AnalysisStage.QUEUED, stage=AnalysisStage.PREPROCESSING_VIDEO
        )

        assert applied is False


class TestSqlJobStore:
    """Test cases for SqlJobStore."""

    @pytest.mark.asyncio
    async def test_create_and_get_should_round_trip(self, sql_store, sample_video):
        job = _queued(sample_video)

        await sql_store.create(job)
        loaded = await sql_store.get(job.id)

        assert loaded == job

    @pytest.mark.asyncio
    async def test_get_unknown_should_return_none(self, sql_store):
        assert await sql_store.get(uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_list_page_should_be_newest_first(self, sql_store, sample_video):
        # Arrange
        start = utcnow()
        jobs = [_queued(sample_video, start + timedelta(seconds=i)) for i in range(5)]
        for job in jobs:
            await sql_store.create(job)

        # Act
        first, total = await sql_store.list_page(0, 3)
        second, _ = await sql_store.list_page(3, 3)

        # Assert
        assert total == 5
        assert [j.id for j in first + second] == [j.id for j in reversed(jobs)]

    @pytest.mark.asyncio
    async def test_replace_should_reject_stale_stage(self, sql_store, sample_video):
        job = _queued(sample_video)
        await sql_store.create(job)
        moved = AnalysisJob(**{**dict(job), "stage": AnalysisStage.PREPROCESSING_VIDEO, "started_at": utcnow()})

        assert await sql_store.replace(AnalysisStage.QUEUED, moved) is True
        assert await sql_store.replace(AnalysisStage.QUEUED, moved) is False
        assert (await sql_store.get(job.id)).stage is AnalysisStage.PREPROCESSING_VIDEO

    @pytest.mark.asyncio
    async def test_completed_report_should_survive_persistence(self, sql_store, sample_video, healthy_output):
        # Arrange
        job = _queued(sample_video)
        await sql_store.create(job)
        tracker = JobTracker(sql_store)
        for stage in SUCCESS_PATH[1:-1]:
            await tracker.advance(job.id, stage)

        # Act
        completed = await tracker.complete(job.id, healthy_output)
        loaded = await sql_store.get(job.id)

        # Assert
        assert loaded.stage is AnalysisStage.COMPLETED
        assert loaded.result == completed.result
        assert loaded.failure_reason is None
        page, total = await sql_store.list_page(0, 10, AnalysisStage.COMPLETED)
        assert total == 1 and page[0].id == job.id
