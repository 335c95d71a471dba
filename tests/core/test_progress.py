"""
Unit tests for ProgressEstimator.

Dependencies: pytest
System role: Progress projection verification
"""

import pytest

from speaker_companion.core.progress import STAGE_PROGRESS, ProgressEstimator
from speaker_companion.core.stages import SUCCESS_PATH, AnalysisStage


class TestProgressEstimator:
    """Test cases for stage -> progress projection."""

    @pytest.mark.parametrize("stage", list(AnalysisStage))
    def test_every_stage_should_have_an_estimate(self, stage):
        estimate = ProgressEstimator().estimate(stage)

        assert 0 <= estimate.progress_pct <= 100
        assert estimate.step_label

    def test_progress_should_not_decrease_along_success_path(self):
        estimator = ProgressEstimator()

        percentages = [estimator.estimate(stage).progress_pct for stage in SUCCESS_PATH]

        assert percentages == sorted(percentages)
        assert percentages[0] == 0
        assert percentages[-1] == 100

    def test_known_stage_values_should_match_display_table(self):
        estimator = ProgressEstimator()

        detecting = estimator.estimate(AnalysisStage.DETECTING_POSE)

        assert detecting.progress_pct == 40
        assert detecting.step_label == "Detecting pose..."

    def test_eta_should_be_placeholder_while_running(self):
        estimator = ProgressEstimator(eta_placeholder_seconds=90)

        assert estimator.estimate(AnalysisStage.QUEUED).eta_seconds == 90
        assert estimator.estimate(AnalysisStage.ANALYZING_POSE).eta_seconds == 90

    def test_eta_should_be_zero_when_completed(self):
        assert ProgressEstimator().estimate(AnalysisStage.COMPLETED).eta_seconds == 0

    def test_eta_should_be_none_when_failed(self):
        assert ProgressEstimator().estimate(AnalysisStage.FAILED).eta_seconds is None

    def test_incomplete_table_should_be_rejected_at_construction(self):
        # Arrange
        table = {stage: value for stage, value in STAGE_PROGRESS.items() if stage is not AnalysisStage.FAILED}

        # Act / Assert
        with pytest.raises(ValueError, match="failed"):
            ProgressEstimator(table=table)

    def test_out_of_range_percentage_should_be_rejected(self):
        table = dict(STAGE_PROGRESS)
        table[AnalysisStage.COMPLETED] = (101, "Complete!")

        with pytest.raises(ValueError, match="out of range"):
            ProgressEstimator(table=table)

    def test_negative_eta_should_be_rejected(self):
        with pytest.raises(ValueError):
            ProgressEstimator(eta_placeholder_seconds=-1)
