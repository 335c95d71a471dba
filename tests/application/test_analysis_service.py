"""
Unit tests for LocalAnalysisService.

Tests cover submission validation, status projection, result retrieval and
pagination over the in-memory store.

Dependencies: pytest, pytest-asyncio
System role: Analysis service verification
"""

import uuid

import pytest

from speaker_companion.application.services import LocalAnalysisService
from speaker_companion.core.exceptions import (
    AnalysisNotFoundError,
    InvalidArgumentError,
    InvalidConfigError,
)
from speaker_companion.core.stages import SUCCESS_PATH, AnalysisStage
from speaker_companion.workers.dispatcher import QueueDispatcher


@pytest.fixture
def dispatcher():
    return QueueDispatcher()


@pytest.fixture
def service(memory_store, dispatcher):
    return LocalAnalysisService(memory_store, dispatcher=dispatcher, max_page_size=50)


async def _complete(tracker, analysis_id, raw_output):
    for stage in SUCCESS_PATH[1:-1]:
        await tracker.advance(analysis_id, stage)
    return await tracker.complete(analysis_id, raw_output)


class TestSubmit:
    """Test cases for submit."""

    @pytest.mark.asyncio
    async def test_submit_should_queue_job_and_notify_worker(self, service, dispatcher, sample_video):
        # Act
        analysis_id = await service.submit(sample_video, {"target_fps": 15})

        # Assert
        job = await service.get_result(analysis_id)
        assert job.stage is AnalysisStage.QUEUED
        assert job.config.target_fps == 15
        assert job.config.skip_intro_seconds == 10
        assert job.result is None and job.failure_reason is None
        assert dispatcher.pending() == 1

    @pytest.mark.asyncio
    async def test_submit_should_accept_mapping_video(self, service):
        analysis_id = await service.submit({"filename": "talk.mov", "duration_seconds": 90, "format": "mov"})

        job = await service.get_result(analysis_id)
        assert job.video.filename == "talk.mov"

    @pytest.mark.asyncio
    async def test_short_video_without_options_should_be_accepted(self, service, dispatcher):
        # Act
        analysis_id = await service.submit({"filename": "pitch.mp4", "duration_seconds": 8}, None)

        # Assert
        job = await service.get_result(analysis_id)
        assert job.stage is AnalysisStage.QUEUED
        assert job.config.skip_intro_seconds == 0
        assert dispatcher.pending() == 1

    @pytest.mark.asyncio
    async def test_explicit_intro_skip_past_short_video_should_be_rejected(self, service, memory_store):
        with pytest.raises(InvalidConfigError) as exc_info:
            await service.submit({"filename": "pitch.mp4", "duration_seconds": 8}, {"skip_intro_seconds": 10})

        assert exc_info.value.field == "skip_intro_seconds"
        assert len(memory_store) == 0

    @pytest.mark.asyncio
    async def test_unknown_duration_should_keep_default_intro_skip(self, service):
        analysis_id = await service.submit({"filename": "live.mp4", "duration_seconds": 0})

        job = await service.get_result(analysis_id)
        assert job.config.skip_intro_seconds == 10

    @pytest.mark.asyncio
    async def test_submissions_should_get_distinct_ids(self, service, sample_video):
        ids = {await service.submit(sample_video) for _ in range(5)}

        assert len(ids) == 5

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "options, field",
        [
            ({"skip_intro_seconds": -1}, "skip_intro_seconds"),
            ({"skip_intro_seconds": 300}, "skip_intro_seconds"),
            ({"target_fps": 0}, "target_fps"),
            ({"target_fps": 61}, "target_fps"),
            ({"audio_format": "flac"}, "audio_format"),
            ({"target_fps": "fast"}, "target_fps"),
        ],
    )
    async def test_invalid_options_should_be_rejected(self, service, memory_store, dispatcher, sample_video, options, field):
        with pytest.raises(InvalidConfigError) as exc_info:
            await service.submit(sample_video, options)

        assert exc_info.value.field == field
        assert len(memory_store) == 0
        assert dispatcher.pending() == 0

    @pytest.mark.asyncio
    async def test_invalid_video_should_be_rejected(self, service, memory_store):
        with pytest.raises(InvalidConfigError) as exc_info:
            await service.submit({"duration_seconds": 60})

        assert exc_info.value.field == "video"
        assert len(memory_store) == 0


class TestStatusAndResult:
    """Test cases for get_status and get_result."""

    @pytest.mark.asyncio
    async def test_queued_status_should_report_waiting(self, service, sample_video):
        analysis_id = await service.submit(sample_video)

        status = await service.get_status(analysis_id)

        assert status.analysis_id == analysis_id
        assert status.status is AnalysisStage.QUEUED
        assert status.progress_pct == 0
        assert status.current_step == "Waiting to start..."
        assert status.estimated_time_remaining_seconds == 120

    @pytest.mark.asyncio
    async def test_completed_status_should_report_done(self, service, tracker, sample_video, healthy_output):
        analysis_id = await service.submit(sample_video)
        await _complete(tracker, analysis_id, healthy_output)

        status = await service.get_status(analysis_id)

        assert status.status is AnalysisStage.COMPLETED
        assert status.progress_pct == 100
        assert status.estimated_time_remaining_seconds == 0

    @pytest.mark.asyncio
    async def test_failed_status_should_have_no_eta(self, service, tracker, sample_video):
        analysis_id = await service.submit(sample_video)
        await tracker.fail(analysis_id, "Video file unreadable")

        status = await service.get_status(analysis_id)

        assert status.status is AnalysisStage.FAILED
        assert status.estimated_time_remaining_seconds is None

    @pytest.mark.asyncio
    async def test_unknown_id_should_raise_not_found(self, service):
        with pytest.raises(AnalysisNotFoundError):
            await service.get_status(uuid.uuid4())
        with pytest.raises(AnalysisNotFoundError):
            await service.get_result(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_result_should_be_stable_once_completed(self, service, tracker, sample_video, healthy_output):
        analysis_id = await service.submit(sample_video)
        await _complete(tracker, analysis_id, healthy_output)

        first = await service.get_result(analysis_id)
        second = await service.get_result(analysis_id)

        assert first.result == second.result
        assert first.result.overall_score == 83


class TestListAnalyses:
    """Test cases for list_analyses."""

    @pytest.mark.asyncio
    async def test_pages_should_concatenate_to_full_listing(self, service, sample_video):
        # Arrange
        submitted = [await service.submit(sample_video) for _ in range(25)]

        # Act
        pages = [await service.list_analyses(page=page, page_size=10) for page in (1, 2, 3, 4)]

        # Assert
        listed = [item.id for page in pages for item in page.analyses]
        assert listed == list(reversed(submitted))
        assert [len(page.analyses) for page in pages] == [10, 10, 5, 0]
        assert all(page.total == 25 for page in pages)

    @pytest.mark.asyncio
    async def test_status_filter_should_restrict_items_and_total(self, service, tracker, sample_video):
        ids = [await service.submit(sample_video) for _ in range(3)]
        await tracker.fail(ids[1], "Video file unreadable")

        failed = await service.list_analyses(status="failed")
        queued = await service.list_analyses(status=AnalysisStage.QUEUED)

        assert [item.id for item in failed.analyses] == [ids[1]]
        assert failed.total == 1
        assert queued.total == 2

    @pytest.mark.asyncio
    async def test_summary_should_carry_score_once_completed(self, service, tracker, sample_video, healthy_output):
        analysis_id = await service.submit(sample_video)
        await _complete(tracker, analysis_id, healthy_output)

        page = await service.list_analyses()

        item = page.analyses[0]
        assert item.overall_score == 83
        assert item.overall_rating == "Good"
        assert item.progress_pct == 100
        assert item.title == "Quarterly keynote"
        assert item.video_overlay_url == f"/storage/results/{analysis_id}/overlay.mp4"

    @pytest.mark.asyncio
    async def test_default_page_size_should_apply(self, service):
        page = await service.list_analyses()

        assert page.page == 1
        assert page.page_size == 20
        assert page.analyses == []
        assert page.total == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kwargs",
        [{"page": 0}, {"page_size": 0}, {"page_size": 51}, {"status": "paused"}],
    )
    async def test_invalid_arguments_should_be_rejected(self, service, kwargs):
        with pytest.raises(InvalidArgumentError):
            await service.list_analyses(**kwargs)
