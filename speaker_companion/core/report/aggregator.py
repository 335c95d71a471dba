"""
Result aggregation.

Turns raw pose pipeline output into the immutable analysis report: scored
category blocks, overall score and rating, per-minute timeline, and ordered
recommendations.

Dependencies: pydantic, speaker_companion.core, speaker_companion.models
System role: Report assembly at the completing transition
"""

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from speaker_companion.core.exceptions import IncompleteInputError
from speaker_companion.core.report.recommendations import build_recommendations
from speaker_companion.core.report.timeline import build_timeline
from speaker_companion.core.scoring import (
    CATEGORIES,
    ScoringPolicy,
    clamp_score,
    rating_for_score,
    round_score,
)
from speaker_companion.models.analysis import VideoReference
from speaker_companion.models.raw_output import RawAnalysisOutput
from speaker_companion.models.report import (
    AnalysisReport,
    EyeContactMetrics,
    GestureMetrics,
    MovementMetrics,
    PoseAnalysis,
    PostureMetrics,
)

logger = logging.getLogger(__name__)

METRIC_TYPES = {
    "eye_contact": EyeContactMetrics,
    "gestures": GestureMetrics,
    "movement": MovementMetrics,
    "posture": PostureMetrics,
}


class ResultAggregator:
    """
    Builds AnalysisReport documents from raw pipeline output.

    Attributes:
        policy: Overall score weighting
        max_recommendations: Upper bound on recommendations per report
    """

    def __init__(
        self,
        policy: ScoringPolicy | None = None,
        max_recommendations: int = 10,
    ) -> None:
        """
        Initialize aggregator.

        Args:
            policy: Scoring policy (equal weights when omitted)
            max_recommendations: Maximum recommendations kept after ordering
        """
        self.policy = policy or ScoringPolicy()
        self.max_recommendations = max_recommendations

    def parse(self, raw: RawAnalysisOutput | Mapping[str, Any] | None) -> RawAnalysisOutput:
        """
        Validate raw pipeline output.

        Args:
            raw: Parsed model or JSON-like mapping from the pipeline

        Returns:
            RawAnalysisOutput: Output with every category block present

        Raises:
            IncompleteInputError: If the output is absent, malformed, or a
                category block is missing
        """
        if raw is None:
            raise IncompleteInputError("Pipeline produced no output")

        if not isinstance(raw, RawAnalysisOutput):
            try:
                raw = RawAnalysisOutput.model_validate(raw)
            except ValidationError as e:
                fields = sorted({".".join(str(part) for part in err["loc"]) for err in e.errors()})
                raise IncompleteInputError(
                    f"Malformed pipeline output: {', '.join(fields)}", missing=fields
                ) from e

        missing = [category for category in CATEGORIES if getattr(raw, category) is None]
        if missing:
            raise IncompleteInputError(
                f"Missing category data: {', '.join(missing)}", missing=missing
            )
        return raw

    def aggregate(
        self,
        raw: RawAnalysisOutput | Mapping[str, Any] | None,
        video: VideoReference,
    ) -> AnalysisReport:
        """
        Assemble the final report.

        Args:
            raw: Raw pipeline output
            video: Source video reference (duration drives the timeline)

        Returns:
            AnalysisReport: Complete, immutable report

        Raises:
            IncompleteInputError: If the raw output is structurally incomplete
        """
        output = self.parse(raw)

        blocks = {}
        for category, metric_type in METRIC_TYPES.items():
            source = getattr(output, category)
            score = round_score(source.score)
            blocks[category] = metric_type(
                **source.model_dump(exclude={"score"}),
                score=score,
                rating=rating_for_score(score),
            )

        overall = self.policy.overall_score(
            {category: clamp_score(getattr(output, category).score) for category in CATEGORIES}
        )
        rating = rating_for_score(overall)

        pose = PoseAnalysis(
            overall_score=overall,
            rating=rating,
            total_frames_analyzed=output.total_frames_analyzed,
            frames_with_pose=output.frames_with_pose,
            detection_confidence_avg=output.detection_confidence_avg,
            **blocks,
        )
        timeline = build_timeline(output.samples, video.duration_seconds)
        recommendations = build_recommendations(pose, timeline, self.max_recommendations)

        logger.info(
            "Report aggregated",
            extra={
                "overall_score": overall,
                "timeline_minutes": len(timeline),
                "recommendation_count": len(recommendations),
            },
        )

        return AnalysisReport(
            overall_score=overall,
            overall_rating=rating,
            pose_analysis=pose,
            timeline=timeline,
            recommendations=recommendations,
        )
