"""
Remote analysis service client.

AnalysisService implementation that talks to a deployed analyses API over
HTTP. Wire errors are mapped back onto the domain exception hierarchy so
callers cannot tell it apart from the in-process service.

Dependencies: httpx, tenacity, speaker_companion.models
System role: Networked job service
"""

import logging
from typing import Any, Mapping
from uuid import UUID

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from speaker_companion.application.services.analysis_service import (
    AnalysisService,
    parse_status_filter,
    parse_video,
)
from speaker_companion.core.exceptions import (
    AnalysisNotFoundError,
    InvalidArgumentError,
    InvalidConfigError,
    RemoteServiceError,
)
from speaker_companion.core.stages import AnalysisStage
from speaker_companion.models.analysis import (
    AnalysisConfig,
    AnalysisJob,
    AnalysisPage,
    AnalysisResponse,
    AnalysisStatusResponse,
    SubmitAnalysisResponse,
    VideoReference,
)
from speaker_companion.models.report import AnalysisReport

logger = logging.getLogger(__name__)

# Only idempotent reads are retried, and only on transport failures
_retry_reads = retry(
    retry=retry_if_exception_type(httpx.TransportError),
    stop=stop_after_attempt(3),
    wait=wait_exponential_jitter(initial=0.5, max=5, jitter=0.5),
    reraise=True,
    before_sleep=lambda retry_state: logger.warning(
        f"{__name__} - Retry {retry_state.attempt_number}/3 after transport error"
    ),
)


def _detail(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except ValueError:
        return response.text[:500]
    if isinstance(detail, list) and detail:
        return str(detail[0].get("msg", detail[0]))
    return str(detail) if detail else response.reason_phrase


def response_to_job(payload: AnalysisResponse) -> AnalysisJob:
    """
    Rebuild the domain record from its wire representation.

    Args:
        payload: Parsed GET /analyses/{id} body

    Returns:
        AnalysisJob: Record with the report reassembled when completed
    """
    result = None
    if payload.status is AnalysisStage.COMPLETED:
        result = AnalysisReport(
            overall_score=payload.overall_score,
            overall_rating=payload.overall_rating,
            pose_analysis=payload.pose_analysis,
            timeline=payload.timeline,
            recommendations=payload.recommendations,
        )
    return AnalysisJob(
        id=payload.id,
        stage=payload.status,
        created_at=payload.created_at,
        started_at=payload.started_at,
        completed_at=payload.completed_at,
        video=payload.video,
        config=payload.config,
        result=result,
        failure_reason=payload.failure_reason,
    )


class RemoteAnalysisService(AnalysisService):
    """
    HTTP client for a remote analyses API.

    Attributes:
        client: Shared httpx.AsyncClient
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize client.

        Args:
            base_url: API root, e.g. http://host:8000/api/v1
            timeout_seconds: Per-request timeout
            client: Pre-built client (tests inject a MockTransport)
        """
        self.client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
        )

    def _raise_for_status(
        self,
        response: httpx.Response,
        analysis_id: UUID | None = None,
        invalid: type[InvalidConfigError] | type[InvalidArgumentError] = InvalidArgumentError,
    ) -> None:
        if response.is_success:
            return
        message = _detail(response)
        if response.status_code == 404 and analysis_id is not None:
            raise AnalysisNotFoundError(analysis_id)
        if response.status_code in (400, 422):
            raise invalid(message)
        logger.error(
            "Remote analysis API error",
            extra={"status_code": response.status_code, "url": str(response.request.url)},
        )
        raise RemoteServiceError(message, status_code=response.status_code)

    @_retry_reads
    async def _get(self, path: str, params: dict | None = None) -> httpx.Response:
        return await self.client.get(path, params=params)

    async def submit(
        self,
        video: VideoReference | Mapping[str, Any],
        config: AnalysisConfig | Mapping[str, Any] | None = None,
    ) -> UUID:
        video = parse_video(video)
        if isinstance(config, AnalysisConfig):
            options = config.model_dump()
        else:
            options = dict(config or {})

        body = {"video": video.model_dump(mode="json"), **options}
        try:
            response = await self.client.post("/analyses", json=body)
        except httpx.HTTPError as e:
            raise RemoteServiceError(f"Submission failed: {e}") from e

        self._raise_for_status(response, invalid=InvalidConfigError)
        return SubmitAnalysisResponse.model_validate(response.json()).analysis_id

    async def get_status(self, analysis_id: UUID) -> AnalysisStatusResponse:
        try:
            response = await self._get(f"/analyses/{analysis_id}/status")
        except httpx.HTTPError as e:
            raise RemoteServiceError(f"Status request failed: {e}") from e
        self._raise_for_status(response, analysis_id)
        return AnalysisStatusResponse.model_validate(response.json())

    async def get_result(self, analysis_id: UUID) -> AnalysisJob:
        try:
            response = await self._get(f"/analyses/{analysis_id}")
        except httpx.HTTPError as e:
            raise RemoteServiceError(f"Analysis request failed: {e}") from e
        self._raise_for_status(response, analysis_id)
        return response_to_job(AnalysisResponse.model_validate(response.json()))

    async def list_analyses(
        self,
        page: int = 1,
        page_size: int | None = None,
        status: AnalysisStage | str | None = None,
    ) -> AnalysisPage:
        params: dict[str, Any] = {"page": page}
        if page_size is not None:
            params["page_size"] = page_size
        stage = parse_status_filter(status)
        if stage is not None:
            params["status"] = stage.value

        try:
            response = await self._get("/analyses", params=params)
        except httpx.HTTPError as e:
            raise RemoteServiceError(f"List request failed: {e}") from e
        self._raise_for_status(response)
        return AnalysisPage.model_validate(response.json())

    async def close(self) -> None:
        await self.client.aclose()
