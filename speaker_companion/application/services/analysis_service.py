"""
Analysis service orchestrator.

Public façade over the analysis lifecycle: submit, status polling, result
retrieval, and listing. ``AnalysisService`` is the stable interface;
``LocalAnalysisService`` runs against a JobStore in-process.

Dependencies: pydantic, speaker_companion.boundary.store, speaker_companion.core
System role: Analysis use case orchestration
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping
from uuid import UUID, uuid4

from pydantic import ValidationError as PydanticValidationError

from speaker_companion.application.media import build_media_urls
from speaker_companion.boundary.store.base import JobStore
from speaker_companion.core.exceptions import (
    AnalysisNotFoundError,
    InvalidArgumentError,
    InvalidConfigError,
)
from speaker_companion.core.progress import ProgressEstimator
from speaker_companion.core.stages import AnalysisStage
from speaker_companion.models.analysis import (
    AnalysisConfig,
    AnalysisJob,
    AnalysisPage,
    AnalysisStatusResponse,
    AnalysisSummary,
    VideoReference,
    utcnow,
)
from speaker_companion.workers.dispatcher import NullDispatcher, WorkDispatcher

logger = logging.getLogger(__name__)

AUDIO_FORMATS = ("wav", "mp3")
MIN_TARGET_FPS = 1
MAX_TARGET_FPS = 60


class AnalysisService(ABC):
    """Analysis lifecycle façade seen by external callers."""

    @abstractmethod
    async def submit(
        self,
        video: VideoReference | Mapping[str, Any],
        config: AnalysisConfig | Mapping[str, Any] | None = None,
    ) -> UUID:
        """
        Submit a video for analysis.

        Returns:
            UUID: New analysis ID (job is in QUEUED)

        Raises:
            InvalidConfigError: If the video reference or options are invalid
        """

    @abstractmethod
    async def get_status(self, analysis_id: UUID) -> AnalysisStatusResponse:
        """
        Current stage with progress projection.

        Raises:
            AnalysisNotFoundError: If the ID is unknown
        """

    @abstractmethod
    async def get_result(self, analysis_id: UUID) -> AnalysisJob:
        """
        Full analysis record, including report or failure reason.

        Raises:
            AnalysisNotFoundError: If the ID is unknown
        """

    @abstractmethod
    async def list_analyses(
        self,
        page: int = 1,
        page_size: int | None = None,
        status: AnalysisStage | str | None = None,
    ) -> AnalysisPage:
        """
        One page of analysis summaries, newest first.

        Raises:
            InvalidArgumentError: If page/page_size/status are invalid
        """

    async def close(self) -> None:
        """Release resources held by the service."""


def parse_video(video: VideoReference | Mapping[str, Any]) -> VideoReference:
    """
    Coerce a video reference.

    Raises:
        InvalidConfigError: If required fields are missing or mistyped
    """
    if isinstance(video, VideoReference):
        return video
    try:
        return VideoReference.model_validate(video)
    except PydanticValidationError as e:
        raise InvalidConfigError(f"Invalid video reference: {e.errors()[0]['msg']}", field="video") from e


def validate_config(
    config: AnalysisConfig | Mapping[str, Any] | None,
    video: VideoReference,
) -> AnalysisConfig:
    """
    Coerce processing options and check their bounds.

    Args:
        config: Options (defaults when None)
        video: Video the options apply to

    Returns:
        AnalysisConfig: Validated options

    Raises:
        InvalidConfigError: If an option is mistyped or out of bounds
    """
    if config is None:
        config = AnalysisConfig()
    elif not isinstance(config, AnalysisConfig):
        try:
            config = AnalysisConfig.model_validate(config)
        except PydanticValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"])
            raise InvalidConfigError(f"Invalid {field}: {error['msg']}", field=field) from e

    if config.skip_intro_seconds < 0:
        raise InvalidConfigError("skip_intro_seconds must be non-negative", field="skip_intro_seconds")
    # Zero duration means the length is unknown, so there is nothing to bound against
    if video.duration_seconds and config.skip_intro_seconds >= video.duration_seconds:
        if "skip_intro_seconds" in config.model_fields_set:
            raise InvalidConfigError(
                "skip_intro_seconds must be shorter than the video", field="skip_intro_seconds"
            )
        # The default intro skip would consume a short clip entirely
        config = config.model_copy(update={"skip_intro_seconds": 0})
    if not MIN_TARGET_FPS <= config.target_fps <= MAX_TARGET_FPS:
        raise InvalidConfigError(
            f"target_fps must be between {MIN_TARGET_FPS} and {MAX_TARGET_FPS}", field="target_fps"
        )
    if config.audio_format not in AUDIO_FORMATS:
        raise InvalidConfigError(
            f"audio_format must be one of {', '.join(AUDIO_FORMATS)}", field="audio_format"
        )
    return config


def parse_status_filter(status: AnalysisStage | str | None) -> AnalysisStage | None:
    """
    Coerce a list status filter.

    Raises:
        InvalidArgumentError: If the value is not a known stage
    """
    if status is None or isinstance(status, AnalysisStage):
        return status
    try:
        return AnalysisStage(status)
    except ValueError as e:
        raise InvalidArgumentError(f"Unknown status: {status}", field="status") from e


class LocalAnalysisService(AnalysisService):
    """
    In-process analysis service.

    Attributes:
        store: Job store
        dispatcher: Worker notification channel
        estimator: Stage -> progress projection
    """

    def __init__(
        self,
        store: JobStore,
        dispatcher: WorkDispatcher | None = None,
        estimator: ProgressEstimator | None = None,
        media_base_path: str = "/storage",
        default_page_size: int = 20,
        max_page_size: int = 100,
    ) -> None:
        """
        Initialize service.

        Args:
            store: Job store
            dispatcher: Notified after each submission (no-op when omitted)
            estimator: Progress estimator
            media_base_path: URL prefix for media artifacts
            default_page_size: Page size when none is requested
            max_page_size: Largest accepted page size
        """
        self.store = store
        self.dispatcher = dispatcher or NullDispatcher()
        self.estimator = estimator or ProgressEstimator()
        self.media_base_path = media_base_path
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def submit(
        self,
        video: VideoReference | Mapping[str, Any],
        config: AnalysisConfig | Mapping[str, Any] | None = None,
    ) -> UUID:
        video = parse_video(video)
        config = validate_config(config, video)

        job = AnalysisJob(
            id=uuid4(),
            stage=AnalysisStage.QUEUED,
            created_at=utcnow(),
            video=video,
            config=config,
        )
        await self.store.create(job)
        self.dispatcher.notify(job.id)

        logger.info(
            "Analysis queued",
            extra={"analysis_id": str(job.id), "video_filename": video.filename},
        )
        return job.id

    async def get_status(self, analysis_id: UUID) -> AnalysisStatusResponse:
        job = await self.get_result(analysis_id)
        estimate = self.estimator.estimate(job.stage)
        return AnalysisStatusResponse(
            analysis_id=job.id,
            status=job.stage,
            progress_pct=estimate.progress_pct,
            current_step=estimate.step_label,
            estimated_time_remaining_seconds=estimate.eta_seconds,
        )

    async def get_result(self, analysis_id: UUID) -> AnalysisJob:
        job = await self.store.get(analysis_id)
        if job is None:
            raise AnalysisNotFoundError(analysis_id)
        return job

    async def list_analyses(
        self,
        page: int = 1,
        page_size: int | None = None,
        status: AnalysisStage | str | None = None,
    ) -> AnalysisPage:
        if page_size is None:
            page_size = self.default_page_size
        if not isinstance(page, int) or page < 1:
            raise InvalidArgumentError("page must be a positive integer", field="page")
        if not isinstance(page_size, int) or not 1 <= page_size <= self.max_page_size:
            raise InvalidArgumentError(
                f"page_size must be between 1 and {self.max_page_size}", field="page_size"
            )
        stage = parse_status_filter(status)

        jobs, total = await self.store.list_page((page - 1) * page_size, page_size, stage)
        return AnalysisPage(
            analyses=[self.summarize(job) for job in jobs],
            total=total,
            page=page,
            page_size=page_size,
        )

    def summarize(self, job: AnalysisJob) -> AnalysisSummary:
        """
        Flatten a job into its list entry.

        Args:
            job: Analysis record

        Returns:
            AnalysisSummary: List item with score, progress and overlay URL
        """
        urls = build_media_urls(job, self.media_base_path)
        return AnalysisSummary(
            id=job.id,
            status=job.stage,
            created_at=job.created_at,
            completed_at=job.completed_at,
            video_filename=job.video.filename,
            title=job.video.title,
            duration_seconds=job.video.duration_seconds,
            overall_score=job.result.overall_score if job.result else None,
            overall_rating=job.result.overall_rating if job.result else None,
            progress_pct=self.estimator.estimate(job.stage).progress_pct,
            video_overlay_url=urls.video_overlay_url,
        )

    async def close(self) -> None:
        await self.store.close()
