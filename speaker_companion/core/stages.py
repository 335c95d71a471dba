"""
Analysis stage machine.

Ordered processing stages, terminal states, and the legality rules for
moving a job from one stage to the next.

Dependencies: speaker_companion.core.exceptions
System role: Job lifecycle state machine
"""

import enum

from speaker_companion.core.exceptions import InvalidTransitionError


class AnalysisStage(str, enum.Enum):
    """
    Analysis processing stages, in lifecycle order.

    The wire value of each member is the status string exposed by the API.
    FAILED is reachable from every non-terminal stage.
    """

    QUEUED = "queued"
    PREPROCESSING_VIDEO = "preprocessing_video"
    DETECTING_POSE = "detecting_pose"
    EXTRACTING_FEATURES = "extracting_features"
    ANALYZING_POSE = "analyzing_pose"
    GENERATING_OVERLAY = "generating_overlay"
    GENERATING_REPORT = "generating_report"
    COMPLETED = "completed"
    FAILED = "failed"


SUCCESS_PATH: tuple[AnalysisStage, ...] = (
    AnalysisStage.QUEUED,
    AnalysisStage.PREPROCESSING_VIDEO,
    AnalysisStage.DETECTING_POSE,
    AnalysisStage.EXTRACTING_FEATURES,
    AnalysisStage.ANALYZING_POSE,
    AnalysisStage.GENERATING_OVERLAY,
    AnalysisStage.GENERATING_REPORT,
    AnalysisStage.COMPLETED,
)

TERMINAL_STAGES = frozenset({AnalysisStage.COMPLETED, AnalysisStage.FAILED})


def is_terminal(stage: AnalysisStage) -> bool:
    """Whether no further transitions are permitted out of ``stage``."""
    return stage in TERMINAL_STAGES


def next_stage(stage: AnalysisStage) -> AnalysisStage | None:
    """
    Immediate successor of ``stage`` on the success path.

    Returns:
        AnalysisStage | None: Successor, or None for terminal stages
    """
    if is_terminal(stage):
        return None
    return SUCCESS_PATH[SUCCESS_PATH.index(stage) + 1]


def validate_transition(
    current: AnalysisStage,
    target: AnalysisStage,
    analysis_id=None,
) -> None:
    """
    Check that ``current -> target`` is a legal single step.

    Args:
        current: Stage the job is in now
        target: Requested stage
        analysis_id: Optional job ID for error context

    Raises:
        InvalidTransitionError: If current is terminal, or target is neither
            the immediate successor nor FAILED
    """
    if is_terminal(current):
        raise InvalidTransitionError(
            current, target, f"{current.value} is terminal", analysis_id
        )
    if target is AnalysisStage.FAILED:
        return
    if target is not next_stage(current):
        raise InvalidTransitionError(
            current,
            target,
            f"{target.value} does not follow {current.value}",
            analysis_id,
        )
