"""
Tests for RemoteAnalysisService.

Uses httpx.MockTransport to stand in for a deployed analyses API and checks
request shapes, response parsing and error mapping.

Dependencies: pytest, pytest-asyncio, httpx, tenacity
System role: Networked service client verification
"""

import uuid

import httpx
import pytest
from tenacity import wait_none

from speaker_companion.api.routers.analyses.analysis_responses import map_analysis_to_response
from speaker_companion.boundary.http import RemoteAnalysisService
from speaker_companion.core.exceptions import (
    AnalysisNotFoundError,
    InvalidArgumentError,
    InvalidConfigError,
    RemoteServiceError,
)
from speaker_companion.core.report import ResultAggregator
from speaker_companion.core.stages import AnalysisStage
from speaker_companion.models.analysis import AnalysisConfig, AnalysisJob, utcnow

BASE_URL = "http://analysis.test/api/v1"


def make_service(handler) -> RemoteAnalysisService:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    return RemoteAnalysisService(BASE_URL, client=client)


@pytest.fixture(autouse=True)
def no_retry_wait(monkeypatch):
    monkeypatch.setattr(RemoteAnalysisService._get.retry, "wait", wait_none())


class TestSubmit:
    """Test cases for remote submission."""

    @pytest.mark.asyncio
    async def test_submit_should_post_video_and_options(self, sample_video):
        # Arrange
        analysis_id = uuid.uuid4()
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = request.read()
            return httpx.Response(201, json={"analysis_id": str(analysis_id), "status": "queued"})

        service = make_service(handler)

        # Act
        result = await service.submit(sample_video, {"target_fps": 15})

        # Assert
        assert result == analysis_id
        assert seen["method"] == "POST"
        assert seen["path"] == "/api/v1/analyses"
        assert b'"target_fps":15' in seen["body"].replace(b" ", b"")
        assert b"keynote.mp4" in seen["body"]

    @pytest.mark.asyncio
    async def test_rejected_submission_should_raise_invalid_config(self, sample_video):
        service = make_service(
            lambda request: httpx.Response(400, json={"detail": "target_fps must be between 1 and 60"})
        )

        with pytest.raises(InvalidConfigError, match="target_fps"):
            await service.submit(sample_video, {"target_fps": 99})


class TestReads:
    """Test cases for status, result and list requests."""

    @pytest.mark.asyncio
    async def test_get_status_should_parse_response(self):
        analysis_id = uuid.uuid4()
        service = make_service(
            lambda request: httpx.Response(
                200,
                json={
                    "analysis_id": str(analysis_id),
                    "status": "detecting_pose",
                    "progress_pct": 40,
                    "current_step": "Detecting pose...",
                    "estimated_time_remaining_seconds": 120,
                },
            )
        )

        status = await service.get_status(analysis_id)

        assert status.status is AnalysisStage.DETECTING_POSE
        assert status.progress_pct == 40

    @pytest.mark.asyncio
    async def test_unknown_analysis_should_raise_not_found(self):
        service = make_service(lambda request: httpx.Response(404, json={"detail": "Analysis not found"}))

        with pytest.raises(AnalysisNotFoundError):
            await service.get_status(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_get_result_should_rebuild_completed_job(self, sample_video, healthy_output):
        # Arrange
        report = ResultAggregator().aggregate(healthy_output, sample_video)
        now = utcnow()
        job = AnalysisJob(
            id=uuid.uuid4(),
            stage=AnalysisStage.COMPLETED,
            created_at=now,
            started_at=now,
            completed_at=now,
            video=sample_video,
            config=AnalysisConfig(),
            result=report,
        )
        payload = map_analysis_to_response(job).model_dump(mode="json")
        service = make_service(lambda request: httpx.Response(200, json=payload))

        # Act
        rebuilt = await service.get_result(job.id)

        # Assert
        assert rebuilt.stage is AnalysisStage.COMPLETED
        assert rebuilt.result == report
        assert rebuilt.failure_reason is None

    @pytest.mark.asyncio
    async def test_list_should_forward_query_parameters(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.url.params)
            return httpx.Response(200, json={"analyses": [], "total": 0, "page": 2, "page_size": 5})

        page = await make_service(handler).list_analyses(page=2, page_size=5, status="failed")

        assert seen == {"page": "2", "page_size": "5", "status": "failed"}
        assert page.total == 0

    @pytest.mark.asyncio
    async def test_unknown_status_filter_should_fail_before_request(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        with pytest.raises(InvalidArgumentError):
            await make_service(handler).list_analyses(status="paused")


class TestErrors:
    """Test cases for transport and server failures."""

    @pytest.mark.asyncio
    async def test_server_error_should_raise_remote_service_error(self):
        service = make_service(lambda request: httpx.Response(500, json={"detail": "boom"}))

        with pytest.raises(RemoteServiceError) as exc_info:
            await service.list_analyses()

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_transient_transport_errors_should_be_retried(self):
        # Arrange
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            if len(attempts) < 3:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json={"analyses": [], "total": 0, "page": 1, "page_size": 20})

        # Act
        page = await make_service(handler).list_analyses()

        # Assert
        assert len(attempts) == 3
        assert page.page == 1

    @pytest.mark.asyncio
    async def test_persistent_transport_errors_should_raise(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RemoteServiceError):
            await make_service(handler).get_status(uuid.uuid4())
