"""
Unit tests for ResultAggregator.

Tests cover scored category blocks, overall score weighting, and rejection of
incomplete pipeline output.

Dependencies: pytest, pydantic
System role: Report assembly verification
"""

import pytest
from pydantic import ValidationError

from speaker_companion.core.exceptions import IncompleteInputError
from speaker_companion.core.report import ResultAggregator
from speaker_companion.core.scoring import ScoringPolicy


class TestAggregate:
    """Test cases for ResultAggregator.aggregate."""

    def test_healthy_output_should_produce_scored_report(self, healthy_output, sample_video):
        # Arrange
        aggregator = ResultAggregator()

        # Act
        report = aggregator.aggregate(healthy_output, sample_video)

        # Assert
        assert report.overall_score == 83
        assert report.overall_rating == "Good"
        assert report.pose_analysis.overall_score == 83
        assert report.pose_analysis.eye_contact.score == 88
        assert report.pose_analysis.eye_contact.rating == "Excellent"
        assert report.pose_analysis.posture.rating == "Good"
        assert report.pose_analysis.frames_with_pose == 2850
        assert report.audio_analysis is None
        assert len(report.timeline) == 5

    def test_category_metrics_should_carry_raw_measurements(self, healthy_output, sample_video):
        report = ResultAggregator().aggregate(healthy_output, sample_video)

        gestures = report.pose_analysis.gestures
        assert gestures.gestures_per_minute == 12.0
        assert gestures.hand_positions["spread"] == 40.0

    def test_out_of_range_scores_should_be_clamped(self, healthy_output, sample_video):
        healthy_output["eye_contact"]["score"] = 130.0
        healthy_output["posture"]["score"] = -20.0

        report = ResultAggregator().aggregate(healthy_output, sample_video)

        assert report.pose_analysis.eye_contact.score == 100
        assert report.pose_analysis.posture.score == 0
        assert 0 <= report.overall_score <= 100

    def test_policy_weights_should_drive_overall_score(self, healthy_output, sample_video):
        policy = ScoringPolicy({"eye_contact": 1.0, "gestures": 0.0, "movement": 0.0, "posture": 0.0})

        report = ResultAggregator(policy=policy).aggregate(healthy_output, sample_video)

        assert report.overall_score == 88
        assert report.overall_rating == "Excellent"

    def test_report_should_be_immutable(self, healthy_output, sample_video):
        report = ResultAggregator().aggregate(healthy_output, sample_video)

        with pytest.raises(ValidationError):
            report.overall_score = 10


class TestParse:
    """Test cases for raw output validation."""

    def test_missing_output_should_raise_incomplete_input(self, sample_video):
        with pytest.raises(IncompleteInputError, match="no output"):
            ResultAggregator().aggregate(None, sample_video)

    def test_missing_category_should_name_it(self, healthy_output, sample_video):
        # Arrange
        del healthy_output["posture"]

        # Act
        with pytest.raises(IncompleteInputError) as exc_info:
            ResultAggregator().aggregate(healthy_output, sample_video)

        # Assert
        assert exc_info.value.missing == ["posture"]
        assert "Missing category data: posture" in exc_info.value.message

    def test_malformed_output_should_list_bad_fields(self, healthy_output, sample_video):
        healthy_output["detection_confidence_avg"] = 1.5

        with pytest.raises(IncompleteInputError) as exc_info:
            ResultAggregator().aggregate(healthy_output, sample_video)

        assert "detection_confidence_avg" in exc_info.value.missing
