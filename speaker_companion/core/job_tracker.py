"""
Job state management logic.

Applies stage transitions for the worker, attaches the report or failure
reason at the terminal step, and rejects illegal moves.

Dependencies: speaker_companion.boundary.store, speaker_companion.core
System role: Job tracking business logic (single writer per job)
"""

import logging
from typing import Any, Mapping
from uuid import UUID

from speaker_companion.boundary.store.base import JobStore
from speaker_companion.core.exceptions import (
    AnalysisNotFoundError,
    IncompleteInputError,
    InvalidTransitionError,
)
from speaker_companion.core.report.aggregator import ResultAggregator
from speaker_companion.core.stages import AnalysisStage, is_terminal, validate_transition
from speaker_companion.models.analysis import AnalysisJob, utcnow
from speaker_companion.models.raw_output import RawAnalysisOutput
from speaker_companion.models.report import AnalysisReport

logger = logging.getLogger(__name__)


class JobTracker:
    """Job tracking business logic."""

    def __init__(self, store: JobStore, aggregator: ResultAggregator | None = None) -> None:
        """
        Initialize job tracker.

        Args:
            store: Job store holding the records
            aggregator: Report builder used on completion
        """
        self.store = store
        self.aggregator = aggregator or ResultAggregator()

    async def _load(self, analysis_id: UUID) -> AnalysisJob:
        job = await self.store.get(analysis_id)
        if job is None:
            raise AnalysisNotFoundError(analysis_id)
        return job

    async def transition(
        self,
        analysis_id: UUID,
        target: AnalysisStage,
        result: AnalysisReport | None = None,
        failure_reason: str | None = None,
    ) -> AnalysisJob:
        """
        Move a job to ``target`` as one atomic write.

        Args:
            analysis_id: Job ID
            target: Requested stage (immediate successor or FAILED)
            result: Report; required when target is COMPLETED
            failure_reason: Reason; required when target is FAILED

        Returns:
            AnalysisJob: The stored record after the transition

        Raises:
            AnalysisNotFoundError: If the job is unknown
            InvalidTransitionError: If the move is illegal or its payload is
                missing; the stored record is left unchanged
        """
        job = await self._load(analysis_id)
        try:
            validate_transition(job.stage, target, analysis_id)
            if target is AnalysisStage.COMPLETED and result is None:
                raise InvalidTransitionError(job.stage, target, "completion requires a report", analysis_id)
            if target is not AnalysisStage.COMPLETED and result is not None:
                raise InvalidTransitionError(job.stage, target, "a report can only be attached on completion", analysis_id)
            if target is AnalysisStage.FAILED and not (failure_reason or "").strip():
                raise InvalidTransitionError(job.stage, target, "failure requires a non-empty reason", analysis_id)
            if target is not AnalysisStage.FAILED and failure_reason is not None:
                raise InvalidTransitionError(job.stage, target, "a failure reason can only be attached on failure", analysis_id)
        except InvalidTransitionError as e:
            logger.warning("Rejected stage transition", extra=e.details)
            raise

        now = utcnow()
        changes: dict[str, Any] = {"stage": target}
        if job.started_at is None:
            changes["started_at"] = now
        if is_terminal(target):
            changes["completed_at"] = now
            changes["result"] = result
            changes["failure_reason"] = failure_reason.strip() if failure_reason else None
        updated = AnalysisJob(**{**dict(job), **changes})

        if not await self.store.replace(job.stage, updated):
            current = await self._load(analysis_id)
            logger.warning(
                "Stage changed during transition",
                extra={"analysis_id": str(analysis_id), "expected_stage": job.stage.value},
            )
            raise InvalidTransitionError(current.stage, target, "stage changed concurrently", analysis_id)

        logger.info(
            "Analysis stage changed",
            extra={
                "analysis_id": str(analysis_id),
                "from_stage": job.stage.value,
                "to_stage": target.value,
            },
        )
        return updated

    async def advance(self, analysis_id: UUID, target: AnalysisStage) -> AnalysisJob:
        """
        Move a job to its next non-terminal stage.

        Args:
            analysis_id: Job ID
            target: Immediate successor of the current stage

        Returns:
            AnalysisJob: Updated record
        """
        return await self.transition(analysis_id, target)

    async def complete(
        self,
        analysis_id: UUID,
        raw_output: RawAnalysisOutput | Mapping[str, Any] | None,
    ) -> AnalysisJob:
        """
        Aggregate the pipeline output and finish the job.

        Incomplete pipeline output does not raise: the job is moved to FAILED
        with the aggregation error as its reason.

        Args:
            analysis_id: Job ID (must be in GENERATING_REPORT)
            raw_output: Raw pipeline measurements

        Returns:
            AnalysisJob: Record in COMPLETED, or FAILED on incomplete input
        """
        job = await self._load(analysis_id)
        validate_transition(job.stage, AnalysisStage.COMPLETED, analysis_id)

        try:
            report = self.aggregator.aggregate(raw_output, job.video)
        except IncompleteInputError as e:
            logger.warning(
                "Pipeline output incomplete; failing analysis",
                extra={"analysis_id": str(analysis_id), "missing": e.missing},
            )
            return await self.fail(analysis_id, f"Incomplete input: {e.message}")

        return await self.transition(analysis_id, AnalysisStage.COMPLETED, result=report)

    async def fail(self, analysis_id: UUID, reason: str) -> AnalysisJob:
        """
        Mark job as failed.

        Args:
            analysis_id: Job ID
            reason: Human-readable failure description

        Returns:
            AnalysisJob: Record in FAILED
        """
        return await self.transition(analysis_id, AnalysisStage.FAILED, failure_reason=reason)
