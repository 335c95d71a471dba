"""
Analysis report schemas.

The immutable report attached to a job when it completes: category metrics,
per-minute timeline, and prioritized recommendations.

Dependencies: pydantic, speaker_companion.models.raw_output
System role: Result document contract
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from speaker_companion.models.raw_output import (
    RawEyeContact,
    RawGestures,
    RawMovement,
    RawPosture,
)

Priority = Literal["high", "medium", "low"]


class EyeContactMetrics(RawEyeContact):
    """Scored eye contact block."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    rating: str


class GestureMetrics(RawGestures):
    """Scored gestures block."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    rating: str


class MovementMetrics(RawMovement):
    """Scored movement block."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    rating: str


class PostureMetrics(RawPosture):
    """Scored posture block."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    rating: str


class PoseAnalysis(BaseModel):
    """Pose-derived section of the report."""

    model_config = ConfigDict(frozen=True)

    overall_score: int = Field(ge=0, le=100)
    rating: str
    total_frames_analyzed: int
    frames_with_pose: int
    detection_confidence_avg: float
    eye_contact: EyeContactMetrics
    gestures: GestureMetrics
    movement: MovementMetrics
    posture: PostureMetrics


class TimelineBucket(BaseModel):
    """Summary of one minute of analysed video."""

    model_config = ConfigDict(frozen=True)

    minute: int = Field(ge=1)
    start_time: str
    end_time: str
    vertical_gaze: dict[str, float]
    horizontal_gaze: dict[str, float]
    movement_pct: float
    stationary_pct: float
    gesture_activity_pct: float
    top_postures: dict[str, float]


class Recommendation(BaseModel):
    """Advisory item pointing at one improvable behaviour."""

    model_config = ConfigDict(frozen=True)

    id: str
    category: str
    priority: Priority
    issue: str
    suggestion: str
    timestamp_start: float | None = None
    timestamp_end: float | None = None
    is_cross_analysis: bool = False


class AnalysisReport(BaseModel):
    """Final report document for a completed analysis."""

    model_config = ConfigDict(frozen=True)

    overall_score: int = Field(ge=0, le=100)
    overall_rating: str
    pose_analysis: PoseAnalysis
    audio_analysis: None = None
    timeline: list[TimelineBucket] = Field(default_factory=list)
    recommendations: list[Recommendation] = Field(default_factory=list)
