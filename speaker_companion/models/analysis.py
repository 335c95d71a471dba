"""
Analysis domain models and schemas.

The analysis job record plus request/response schemas for the analyses API.

Dependencies: pydantic, speaker_companion.core.stages, speaker_companion.models.report
System role: Analysis lifecycle record and API contracts
"""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, model_validator

from speaker_companion.core.stages import AnalysisStage
from speaker_companion.models.report import (
    AnalysisReport,
    PoseAnalysis,
    Recommendation,
    TimelineBucket,
)


def utcnow() -> datetime:
    """Current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


class VideoReference(BaseModel):
    """Uploaded source video, carried through the lifecycle untouched."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(..., min_length=1, max_length=255)
    duration_seconds: float = Field(..., ge=0)
    fps: float = Field(default=30.0, gt=0)
    resolution: tuple[int, int] = Field(default=(1920, 1080))
    file_size_bytes: int = Field(default=0, ge=0)
    format: str = Field(default="mp4")
    uploaded_at: datetime = Field(default_factory=utcnow)
    title: str | None = Field(default=None, max_length=255)


class AnalysisConfig(BaseModel):
    """
    Processing options captured at submission.

    Only types are enforced here; bounds are checked by the service so that
    violations surface as InvalidConfigError.
    """

    model_config = ConfigDict(frozen=True)

    skip_intro_seconds: float = 10
    target_fps: int = 10
    generate_overlay_video: bool = True
    audio_format: str = "wav"


class AnalysisJob(BaseModel):
    """
    Full lifecycle record of one submitted video.

    Instances are immutable snapshots; stores replace them wholesale on every
    transition so readers never observe a half-applied change.
    """

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID
    stage: AnalysisStage
    created_at: datetime
    started_at: datetime | None = None
    completed_at: datetime | None = None
    video: VideoReference
    config: AnalysisConfig
    result: AnalysisReport | None = None
    failure_reason: str | None = None

    @model_validator(mode="after")
    def _check_terminal_payload(self) -> "AnalysisJob":
        if (self.result is not None) != (self.stage is AnalysisStage.COMPLETED):
            raise ValueError("result must be set exactly when stage is completed")
        if (self.failure_reason is not None) != (self.stage is AnalysisStage.FAILED):
            raise ValueError("failure_reason must be set exactly when stage is failed")
        if self.failure_reason is not None and not self.failure_reason.strip():
            raise ValueError("failure_reason must not be empty")
        return self

    @property
    def processing_time_seconds(self) -> float | None:
        """Seconds between leaving the queue and reaching a terminal stage."""
        if self.started_at is None or self.completed_at is None:
            return None
        return round((self.completed_at - self.started_at).total_seconds(), 3)


class MediaUrls(BaseModel):
    """Storage URLs for the source video and generated artifacts."""

    video_original_url: str
    video_overlay_url: str | None = None
    audio_url: str | None = None


class AnalysisSummary(BaseModel):
    """Flattened list entry for one analysis."""

    id: uuid.UUID
    status: AnalysisStage
    created_at: datetime
    completed_at: datetime | None
    video_filename: str
    title: str | None
    duration_seconds: float
    overall_score: int | None
    overall_rating: str | None
    progress_pct: int
    thumbnail_url: str | None = None
    video_overlay_url: str | None = None


class AnalysisPage(BaseModel):
    """One page of analysis summaries."""

    analyses: list[AnalysisSummary]
    total: int
    page: int
    page_size: int


class AnalysisStatusResponse(BaseModel):
    """Status projection returned to polling clients."""

    analysis_id: uuid.UUID
    status: AnalysisStage
    progress_pct: int
    current_step: str
    estimated_time_remaining_seconds: int | None


class SubmitAnalysisRequest(BaseModel):
    """Request schema for submitting a video for analysis."""

    video: VideoReference
    title: str | None = Field(None, max_length=255, description="Display title")
    skip_intro_seconds: float | None = Field(None, description="Seconds to skip at the start")
    target_fps: int | None = Field(None, description="Frame sampling rate")
    generate_overlay_video: bool | None = Field(None, description="Render pose overlay video")
    audio_format: str | None = Field(None, description="Extracted audio format (wav or mp3)")

    def to_config(self) -> dict:
        """Processing options that were explicitly provided."""
        return self.model_dump(
            include={"skip_intro_seconds", "target_fps", "generate_overlay_video", "audio_format"},
            exclude_none=True,
        )


class SubmitAnalysisResponse(BaseModel):
    """Response schema for a queued analysis."""

    analysis_id: uuid.UUID
    status: AnalysisStage = AnalysisStage.QUEUED
    message: str = "Analysis queued successfully"


class AnalysisResponse(BaseModel):
    """Full analysis record with the report inlined once completed."""

    id: uuid.UUID
    status: AnalysisStage
    created_at: datetime
    started_at: datetime | None
    completed_at: datetime | None
    processing_time_seconds: float | None
    video: VideoReference
    config: AnalysisConfig
    overall_score: int | None = None
    overall_rating: str | None = None
    pose_analysis: PoseAnalysis | None = None
    audio_analysis: None = None
    timeline: list[TimelineBucket] = Field(default_factory=list)
    recommendations: list[Recommendation] = Field(default_factory=list)
    failure_reason: str | None = None
    video_original_url: str
    video_overlay_url: str | None = None
    audio_url: str | None = None
