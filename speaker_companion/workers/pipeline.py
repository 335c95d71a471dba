"""
Pose pipeline interface and development simulator.

The real computer-vision pipeline lives outside this service. It is driven
one processing stage at a time and finally hands over its raw measurements.
``SimulatedPipeline`` produces deterministic, plausible output per job so the
full lifecycle can run without it.

Dependencies: asyncio, random, speaker_companion.models
System role: Opaque processing step behind the worker
"""

import asyncio
import logging
import math
import random
from abc import ABC, abstractmethod
from collections import Counter
from itertools import groupby

from speaker_companion.core.stages import AnalysisStage
from speaker_companion.models.analysis import AnalysisJob
from speaker_companion.models.raw_output import (
    FrameSample,
    RawAnalysisOutput,
    RawEyeContact,
    RawGestures,
    RawMovement,
    RawPosture,
)

logger = logging.getLogger(__name__)

HAND_POSITIONS = ("spread", "on_torso", "pointing", "clasped", "pockets")
VERTICAL = ("level", "down", "up", "away")
HORIZONTAL = ("center", "left", "center-left", "center-right", "right")


class PosePipeline(ABC):
    """Stage-by-stage processing of one analysis."""

    @abstractmethod
    async def run_stage(self, job: AnalysisJob, stage: AnalysisStage) -> None:
        """Perform the work belonging to ``stage`` (job is already in it)."""

    @abstractmethod
    async def collect_output(self, job: AnalysisJob) -> RawAnalysisOutput | dict:
        """Return the raw measurements once every stage has run."""


def _pct(count: int, total: int) -> float:
    return round(100.0 * count / total, 1) if total else 0.0


class SimulatedPipeline(PosePipeline):
    """
    Deterministic stand-in for the pose pipeline.

    Output is seeded by the analysis ID, so repeated runs for the same job
    produce identical measurements.
    """

    def __init__(self, step_delay_seconds: float = 2.0, sample_rate_hz: float = 1.0) -> None:
        """
        Initialize simulator.

        Args:
            step_delay_seconds: Sleep per processing stage
            sample_rate_hz: Frame samples generated per second of video
        """
        self.step_delay_seconds = step_delay_seconds
        self.sample_rate_hz = sample_rate_hz

    async def run_stage(self, job: AnalysisJob, stage: AnalysisStage) -> None:
        if stage is AnalysisStage.GENERATING_OVERLAY and not job.config.generate_overlay_video:
            logger.debug("Overlay disabled; skipping render", extra={"analysis_id": str(job.id)})
            return
        await asyncio.sleep(self.step_delay_seconds)

    async def collect_output(self, job: AnalysisJob) -> RawAnalysisOutput:
        rng = random.Random(str(job.id))
        samples = self._samples(job, rng)
        return self._summarize(samples, job, rng)

    def _samples(self, job: AnalysisJob, rng: random.Random) -> list[FrameSample]:
        start = job.config.skip_intro_seconds
        end = job.video.duration_seconds
        count = max(int((end - start) * self.sample_rate_hz), 0)

        samples = []
        moving = False
        for index in range(count):
            # Movement comes in runs rather than independent frames
            if rng.random() < 0.15:
                moving = not moving
            left = rng.choice(HAND_POSITIONS[:3])
            right = rng.choice(HAND_POSITIONS[:3])
            samples.append(
                FrameSample(
                    timestamp_seconds=round(start + index / self.sample_rate_hz, 3),
                    vertical_gaze=rng.choices(VERTICAL, weights=(70, 18, 5, 7))[0],
                    horizontal_gaze=rng.choices(HORIZONTAL, weights=(35, 20, 18, 17, 10))[0],
                    is_moving=moving,
                    gesture_active=rng.random() < 0.7,
                    posture=f"L:{left}+R:{right}",
                )
            )
        return samples

    def _summarize(self, samples: list[FrameSample], job: AnalysisJob, rng: random.Random) -> RawAnalysisOutput:
        total = len(samples)
        minutes = max((job.video.duration_seconds - job.config.skip_intro_seconds) / 60.0, 1 / 60)

        vertical = Counter(s.vertical_gaze for s in samples)
        horizontal = Counter(s.horizontal_gaze for s in samples)
        eye = RawEyeContact(
            level_pct=_pct(vertical["level"], total),
            up_pct=_pct(vertical["up"], total),
            down_pct=_pct(vertical["down"], total),
            away_pct=_pct(vertical["away"], total),
            center_pct=_pct(horizontal["center"], total),
            left_pct=_pct(horizontal["left"] + horizontal["center-left"], total),
            right_pct=_pct(horizontal["right"] + horizontal["center-right"], total),
            score=_pct(vertical["level"], total) + 0.3 * _pct(horizontal["center"], total),
        )

        gesture_starts = sum(1 for active, _ in groupby(s.gesture_active for s in samples) if active)
        hands = Counter(
            hand.split(":", 1)[1]
            for s in samples
            for hand in s.posture.split("+")
        )
        open_pct = round(rng.uniform(40, 85), 1)
        gestures = RawGestures(
            total_count=gesture_starts,
            open_hands_pct=open_pct,
            hand_above_waist_pct=round(rng.uniform(55, 95), 1),
            gestures_per_minute=round(gesture_starts / minutes, 1),
            hand_positions={name: _pct(hands[name], 2 * total) for name in HAND_POSITIONS},
            score=50 + open_pct / 2,
        )

        runs = [(moving, len(list(group))) for moving, group in groupby(s.is_moving for s in samples)]
        moving_runs = [length for moving, length in runs if moving]
        movement_pct = _pct(sum(moving_runs), total)
        coverage = round(rng.uniform(40, 85), 1)
        movement = RawMovement(
            movement_pct=movement_pct,
            stationary_pct=round(100.0 - movement_pct, 1) if total else 0.0,
            stage_coverage_pct=coverage,
            avg_movement_duration_seconds=round(
                sum(moving_runs) / len(moving_runs) / self.sample_rate_hz, 2
            ) if moving_runs else 0.0,
            transitions_count=max(len(runs) - 1, 0),
            score=100 - abs(movement_pct - 35) + (coverage - 60) / 4,
        )

        postures = Counter(s.posture for s in samples)
        top = postures.most_common(4)
        distribution = {name: _pct(count, total) for name, count in top}
        if total and len(postures) > len(top):
            distribution["other"] = round(100.0 - sum(distribution.values()), 1)
        variety = _pct(len(postures), 9) if postures else 0.0
        posture = RawPosture(
            dominant_posture=top[0][0] if top else "unknown",
            posture_distribution=distribution,
            posture_variety_score=min(variety, 100.0),
            score=60 + variety * 0.35,
        )

        with_pose = math.floor(total * rng.uniform(0.95, 1.0))
        return RawAnalysisOutput(
            total_frames_analyzed=total,
            frames_with_pose=with_pose,
            detection_confidence_avg=round(rng.uniform(0.8, 0.95), 2),
            eye_contact=eye,
            gestures=gestures,
            movement=movement,
            posture=posture,
            samples=samples,
        )
