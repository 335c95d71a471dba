"""
Raw pose pipeline output schemas.

Shape of the measurements handed over by the (external) pose pipeline when a
job reaches report generation. Category blocks arrive already scored.

Dependencies: pydantic
System role: Aggregation input contract
"""

from typing import Literal

from pydantic import BaseModel, Field

VerticalGaze = Literal["up", "level", "down", "away"]
HorizontalGaze = Literal["left", "center-left", "center", "center-right", "right", "away"]


class RawEyeContact(BaseModel):
    """Gaze distribution over the analysed frames."""

    level_pct: float = Field(ge=0, le=100)
    up_pct: float = Field(ge=0, le=100)
    down_pct: float = Field(ge=0, le=100)
    away_pct: float = Field(ge=0, le=100)
    center_pct: float = Field(ge=0, le=100)
    left_pct: float = Field(ge=0, le=100)
    right_pct: float = Field(ge=0, le=100)
    score: float


class RawGestures(BaseModel):
    """Hand gesture statistics."""

    total_count: int = Field(ge=0)
    open_hands_pct: float = Field(ge=0, le=100)
    hand_above_waist_pct: float = Field(ge=0, le=100)
    gestures_per_minute: float = Field(ge=0)
    hand_positions: dict[str, float] = Field(default_factory=dict)
    score: float


class RawMovement(BaseModel):
    """Stage movement statistics."""

    movement_pct: float = Field(ge=0, le=100)
    stationary_pct: float = Field(ge=0, le=100)
    stage_coverage_pct: float = Field(ge=0, le=100)
    avg_movement_duration_seconds: float = Field(ge=0)
    transitions_count: int = Field(ge=0)
    score: float


class RawPosture(BaseModel):
    """Posture (combined left/right hand placement) statistics."""

    dominant_posture: str
    posture_distribution: dict[str, float] = Field(default_factory=dict)
    posture_variety_score: float = Field(ge=0, le=100)
    score: float


class FrameSample(BaseModel):
    """One sampled frame, positioned on the source video clock."""

    timestamp_seconds: float = Field(ge=0)
    vertical_gaze: VerticalGaze
    horizontal_gaze: HorizontalGaze
    is_moving: bool
    gesture_active: bool
    posture: str


class RawAnalysisOutput(BaseModel):
    """
    Complete pipeline output for one analysis.

    Category blocks are optional at the schema level so that a missing block
    can be reported as incomplete input rather than a parsing failure.
    """

    total_frames_analyzed: int = Field(ge=0)
    frames_with_pose: int = Field(ge=0)
    detection_confidence_avg: float = Field(ge=0, le=1)
    eye_contact: RawEyeContact | None = None
    gestures: RawGestures | None = None
    movement: RawMovement | None = None
    posture: RawPosture | None = None
    samples: list[FrameSample] = Field(default_factory=list)
