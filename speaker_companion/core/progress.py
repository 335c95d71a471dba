"""
Progress estimation for analysis jobs.

Maps each stage to a displayable percentage, step label, and advisory ETA.
The table must cover every stage; this is verified when an estimator is built.

Dependencies: speaker_companion.core.stages
System role: Status projection for polling clients
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from speaker_companion.core.stages import AnalysisStage


@dataclass(frozen=True)
class ProgressEstimate:
    """Displayable progress for one stage."""

    progress_pct: int
    step_label: str
    eta_seconds: int | None


STAGE_PROGRESS: Mapping[AnalysisStage, tuple[int, str]] = MappingProxyType({
    AnalysisStage.QUEUED: (0, "Waiting to start..."),
    AnalysisStage.PREPROCESSING_VIDEO: (15, "Preprocessing video..."),
    AnalysisStage.DETECTING_POSE: (40, "Detecting pose..."),
    AnalysisStage.EXTRACTING_FEATURES: (60, "Extracting features..."),
    AnalysisStage.ANALYZING_POSE: (75, "Analyzing pose..."),
    AnalysisStage.GENERATING_OVERLAY: (90, "Generating overlay video..."),
    AnalysisStage.GENERATING_REPORT: (98, "Creating report..."),
    AnalysisStage.COMPLETED: (100, "Complete!"),
    AnalysisStage.FAILED: (0, "Failed"),
})


class ProgressEstimator:
    """
    Pure stage -> progress projection.

    Attributes:
        eta_placeholder_seconds: ETA reported for every non-terminal stage
    """

    def __init__(
        self,
        eta_placeholder_seconds: int = 120,
        table: Mapping[AnalysisStage, tuple[int, str]] = STAGE_PROGRESS,
    ) -> None:
        """
        Build the estimator and verify the table is exhaustive.

        Args:
            eta_placeholder_seconds: Advisory ETA for non-terminal stages
            table: Stage -> (percentage, label) mapping

        Raises:
            ValueError: If a stage is missing or a percentage is out of range
        """
        missing = [stage.value for stage in AnalysisStage if stage not in table]
        if missing:
            raise ValueError(f"Progress table missing stages: {missing}")
        for stage, (pct, _) in table.items():
            if not 0 <= pct <= 100:
                raise ValueError(f"Progress for {stage.value} out of range: {pct}")
        if eta_placeholder_seconds < 0:
            raise ValueError("eta_placeholder_seconds must be non-negative")

        self.eta_placeholder_seconds = eta_placeholder_seconds
        self._table = dict(table)

    def estimate(self, stage: AnalysisStage) -> ProgressEstimate:
        """
        Project a stage to its progress estimate.

        Args:
            stage: Current job stage

        Returns:
            ProgressEstimate: Percentage, label, and ETA (0 when completed,
            None when failed)
        """
        pct, label = self._table[stage]
        if stage is AnalysisStage.COMPLETED:
            eta = 0
        elif stage is AnalysisStage.FAILED:
            eta = None
        else:
            eta = self.eta_placeholder_seconds
        return ProgressEstimate(progress_pct=pct, step_label=label, eta_seconds=eta)
