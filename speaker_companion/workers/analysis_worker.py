"""
Analysis worker.

Consumes announced jobs and drives each one through the processing stages,
finishing with report aggregation. Pipeline errors become FAILED jobs; they
are never retried.

Dependencies: asyncio, speaker_companion.core, speaker_companion.workers
System role: Stage-advancing writer for queued analyses
"""

import asyncio
import logging
from uuid import UUID

from speaker_companion.core.exceptions import AnalysisNotFoundError, InvalidTransitionError
from speaker_companion.core.job_tracker import JobTracker
from speaker_companion.core.stages import SUCCESS_PATH, AnalysisStage
from speaker_companion.workers.dispatcher import QueueDispatcher
from speaker_companion.workers.pipeline import PosePipeline

logger = logging.getLogger(__name__)

# Everything between QUEUED and COMPLETED
PROCESSING_STAGES: tuple[AnalysisStage, ...] = SUCCESS_PATH[1:-1]


class AnalysisWorker:
    """
    Background worker for queued analyses.

    Attributes:
        dispatcher: Source of announced job IDs
        tracker: Transition writer
        pipeline: Processing implementation
    """

    def __init__(
        self,
        dispatcher: QueueDispatcher,
        tracker: JobTracker,
        pipeline: PosePipeline,
    ) -> None:
        """
        Initialize worker.

        Args:
            dispatcher: Queue the service announces jobs on
            tracker: Applies stage transitions
            pipeline: Pose pipeline driven stage by stage
        """
        self.dispatcher = dispatcher
        self.tracker = tracker
        self.pipeline = pipeline
        self._task: asyncio.Task | None = None

    async def process(self, analysis_id: UUID) -> None:
        """
        Run one job from QUEUED to a terminal stage.

        Args:
            analysis_id: Job to process
        """
        logger.info("Processing analysis", extra={"analysis_id": str(analysis_id)})
        try:
            for stage in PROCESSING_STAGES:
                job = await self.tracker.advance(analysis_id, stage)
                await self.pipeline.run_stage(job, stage)
            raw_output = await self.pipeline.collect_output(job)
            job = await self.tracker.complete(analysis_id, raw_output)
        except (AnalysisNotFoundError, InvalidTransitionError) as e:
            logger.error(
                "Analysis cannot be processed",
                extra={"analysis_id": str(analysis_id), "error": str(e)},
            )
            return
        except Exception as e:
            logger.exception("Pipeline failed", extra={"analysis_id": str(analysis_id)})
            await self._fail(analysis_id, f"{type(e).__name__}: {e}")
            return

        logger.info(
            "Analysis finished",
            extra={"analysis_id": str(analysis_id), "final_stage": job.stage.value},
        )

    async def _fail(self, analysis_id: UUID, reason: str) -> None:
        try:
            await self.tracker.fail(analysis_id, reason)
        except (AnalysisNotFoundError, InvalidTransitionError) as e:
            logger.error(
                "Could not record failure",
                extra={"analysis_id": str(analysis_id), "error": str(e)},
            )

    async def run(self) -> None:
        """Process announced jobs until cancelled."""
        while True:
            analysis_id = await self.dispatcher.next_job()
            try:
                await self.process(analysis_id)
            except Exception:
                # Keep the loop alive for the next job
                logger.exception("Unhandled worker error", extra={"analysis_id": str(analysis_id)})
            finally:
                self.dispatcher.job_done()

    def start(self) -> asyncio.Task:
        """Start the worker loop on the running event loop."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run(), name="analysis-worker")
        return self._task

    async def stop(self) -> None:
        """Cancel the worker loop and wait for it to exit."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
