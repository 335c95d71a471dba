"""
Recommendation rules.

Threshold rules over the scored category blocks, cross-category correlation
rules, and timeline-based rules that point at specific minutes.

Dependencies: speaker_companion.models
System role: Recommendations section of the analysis report
"""

from dataclasses import dataclass
from typing import Callable, Iterable

from speaker_companion.core.scoring import CATEGORIES
from speaker_companion.models.report import PoseAnalysis, Recommendation, TimelineBucket

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}
CATEGORY_ORDER = {category: index for index, category in enumerate(CATEGORIES)}

# Timeline rule: a minute is flagged when gaze is mostly down/away while hands are idle
DISENGAGED_GAZE_PCT = 50.0
IDLE_GESTURE_PCT = 20.0


@dataclass(frozen=True)
class Finding:
    """A recommendation before ordering and ID assignment."""

    category: str
    priority: str
    issue: str
    suggestion: str
    timestamp_start: float | None = None
    timestamp_end: float | None = None
    is_cross_analysis: bool = False


@dataclass(frozen=True)
class Rule:
    """Single threshold rule evaluated against the pose analysis."""

    category: str
    check: Callable[[PoseAnalysis], tuple[str, str] | None]
    suggestion: str
    cross: bool = False

    def evaluate(self, pose: PoseAnalysis) -> Finding | None:
        outcome = self.check(pose)
        if outcome is None:
            return None
        priority, issue = outcome
        return Finding(
            category=self.category,
            priority=priority,
            issue=issue,
            suggestion=self.suggestion,
            is_cross_analysis=self.cross,
        )


def _looking_down(pose: PoseAnalysis) -> tuple[str, str] | None:
    down = pose.eye_contact.down_pct
    if down > 30:
        return "high", f"Looking down {down:.0f}% of the time"
    if down > 15:
        return "medium", f"Looking down {down:.0f}% of the time"
    return None


def _looking_away(pose: PoseAnalysis) -> tuple[str, str] | None:
    away = pose.eye_contact.away_pct
    if away > 15:
        return "medium", f"Looking away from the audience {away:.0f}% of the time"
    return None


def _off_center(pose: PoseAnalysis) -> tuple[str, str] | None:
    center = pose.eye_contact.center_pct
    if center < 30:
        return "low", f"Center of the room receives only {center:.0f}% of your gaze"
    return None


def _few_gestures(pose: PoseAnalysis) -> tuple[str, str] | None:
    rate = pose.gestures.gestures_per_minute
    if rate < 5:
        return "high", f"Only {rate:.0f} gestures per minute"
    if rate < 10:
        return "medium", f"Only {rate:.0f} gestures per minute"
    return None


def _closed_hands(pose: PoseAnalysis) -> tuple[str, str] | None:
    open_pct = pose.gestures.open_hands_pct
    if open_pct < 40:
        return "medium", f"Open-hand gestures only {open_pct:.0f}% of the time"
    return None


def _hands_low(pose: PoseAnalysis) -> tuple[str, str] | None:
    above = pose.gestures.hand_above_waist_pct
    if above < 50:
        return "low", f"Hands below the waist {100 - above:.0f}% of the time"
    return None


def _too_stationary(pose: PoseAnalysis) -> tuple[str, str] | None:
    stationary = pose.movement.stationary_pct
    if stationary > 85:
        return "medium", f"Stationary {stationary:.0f}% of the time"
    return None


def _pacing(pose: PoseAnalysis) -> tuple[str, str] | None:
    moving = pose.movement.movement_pct
    if moving > 60:
        return "medium", f"Moving {moving:.0f}% of the time - may read as pacing"
    return None


def _low_coverage(pose: PoseAnalysis) -> tuple[str, str] | None:
    coverage = pose.movement.stage_coverage_pct
    if coverage < 40:
        return "medium", f"Stage coverage at {coverage:.0f}% - large areas unused"
    if coverage < 50:
        return "low", f"Stage coverage at {coverage:.0f}% - some areas underutilized"
    return None


def _rigid_posture(pose: PoseAnalysis) -> tuple[str, str] | None:
    variety = pose.posture.posture_variety_score
    if variety < 40:
        return "medium", f"Low posture variety ({variety:.0f}/100)"
    return None


def _dominant_posture(pose: PoseAnalysis) -> tuple[str, str] | None:
    posture = pose.posture
    share = posture.posture_distribution.get(posture.dominant_posture, 0.0)
    if share > 50:
        return "low", f"'{posture.dominant_posture}' held {share:.0f}% of the time"
    return None


def _static_delivery(pose: PoseAnalysis) -> tuple[str, str] | None:
    if pose.movement.stationary_pct > 80 and pose.gestures.gestures_per_minute < 10:
        return "high", "Stationary with few gestures - delivery may feel static"
    return None


def _reading_notes(pose: PoseAnalysis) -> tuple[str, str] | None:
    if pose.eye_contact.down_pct > 20 and pose.gestures.hand_above_waist_pct < 60:
        return "medium", "Looking down while hands stay low - likely reading from notes"
    return None


RULES: tuple[Rule, ...] = (
    Rule("eye_contact", _looking_down,
         "Practice maintaining eye level gaze. Try placing sticky notes at eye level around the room."),
    Rule("eye_contact", _looking_away,
         "Anchor your gaze on individual audience members for a full thought before moving on."),
    Rule("eye_contact", _off_center,
         "Return to the center of the audience between sweeps to either side."),
    Rule("gestures", _few_gestures,
         "Use deliberate hand gestures to emphasize key points; aim for one gesture per idea."),
    Rule("gestures", _closed_hands,
         "Show your palms when making points; open hands read as honest and inviting."),
    Rule("gestures", _hands_low,
         "Keep your hands between waist and shoulders so gestures stay visible."),
    Rule("movement", _too_stationary,
         "Take a few purposeful steps when changing topics to re-engage the room."),
    Rule("movement", _pacing,
         "Plant your feet while delivering key points and move only during transitions."),
    Rule("movement", _low_coverage,
         "Plan intentional movements to different stage areas to connect with all audience sections."),
    Rule("posture", _rigid_posture,
         "Vary your stance and hand placement to avoid appearing rigid."),
    Rule("posture", _dominant_posture,
         "Break up your default resting position with new gestures."),
    Rule("movement", _static_delivery,
         "Pair movement with gestures: step toward the audience and open your hands when introducing new ideas.",
         cross=True),
    Rule("eye_contact", _reading_notes,
         "Hold notes at chest height or use a confidence monitor so your gaze and hands stay up.",
         cross=True),
)


def _disengaged(bucket: TimelineBucket) -> bool:
    if not any(bucket.vertical_gaze.values()):
        return False
    gaze_off = bucket.vertical_gaze.get("down", 0.0) + bucket.vertical_gaze.get("away", 0.0)
    return gaze_off >= DISENGAGED_GAZE_PCT and bucket.gesture_activity_pct < IDLE_GESTURE_PCT


def timeline_findings(timeline: Iterable[TimelineBucket]) -> list[Finding]:
    """
    Flag runs of consecutive minutes where gaze drops while gestures stop.

    Returns:
        list[Finding]: One cross-analysis finding per run, with its time range
    """
    findings: list[Finding] = []
    run: list[TimelineBucket] = []

    def close_run() -> None:
        if not run:
            return
        first, last = run[0], run[-1]
        start = (first.minute - 1) * 60.0
        end = _clock_seconds(last.end_time)
        label = f"Minute {first.minute}" if first is last else f"Minutes {first.minute}-{last.minute}"
        findings.append(
            Finding(
                category="eye_contact",
                priority="low",
                issue=f"{label}: gaze drops while gestures stop",
                suggestion="Rehearse this section until you can deliver it facing the audience with active hands.",
                timestamp_start=start,
                timestamp_end=end,
                is_cross_analysis=True,
            )
        )
        run.clear()

    for bucket in timeline:
        if _disengaged(bucket):
            run.append(bucket)
        else:
            close_run()
    close_run()
    return findings


def _clock_seconds(clock: str) -> float:
    minutes, seconds = clock.split(":")
    return float(int(minutes) * 60 + int(seconds))


def build_recommendations(
    pose: PoseAnalysis,
    timeline: Iterable[TimelineBucket],
    limit: int,
) -> list[Recommendation]:
    """
    Evaluate every rule and order the resulting recommendations.

    Ordering is by priority (high, medium, low), then category order, then
    rule order. The list is truncated to ``limit`` and numbered afterwards.

    Args:
        pose: Scored pose analysis
        timeline: Per-minute buckets
        limit: Maximum number of recommendations

    Returns:
        list[Recommendation]: Possibly empty ordered recommendations
    """
    findings = [finding for rule in RULES if (finding := rule.evaluate(pose)) is not None]
    findings.extend(timeline_findings(timeline))

    ranked = sorted(
        enumerate(findings),
        key=lambda item: (
            PRIORITY_ORDER[item[1].priority],
            CATEGORY_ORDER.get(item[1].category, len(CATEGORY_ORDER)),
            item[0],
        ),
    )

    return [
        Recommendation(
            id=f"rec_{position:03d}",
            category=finding.category,
            priority=finding.priority,
            issue=finding.issue,
            suggestion=finding.suggestion,
            timestamp_start=finding.timestamp_start,
            timestamp_end=finding.timestamp_end,
            is_cross_analysis=finding.is_cross_analysis,
        )
        for position, (_, finding) in enumerate(ranked[: max(limit, 0)], start=1)
    ]
