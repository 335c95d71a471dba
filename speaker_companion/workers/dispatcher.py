"""
Work dispatch.

Fire-and-forget notification that a job is waiting. ``notify`` never blocks
and never waits for processing.

Dependencies: asyncio
System role: Submission -> worker hand-off
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from uuid import UUID

logger = logging.getLogger(__name__)


class WorkDispatcher(ABC):
    """Channel used by the service to announce new jobs."""

    @abstractmethod
    def notify(self, analysis_id: UUID) -> None:
        """Announce that ``analysis_id`` is queued."""


class NullDispatcher(WorkDispatcher):
    """Dispatcher for deployments where external workers poll the store."""

    def notify(self, analysis_id: UUID) -> None:
        logger.debug("No in-process worker; job left for external pickup", extra={"analysis_id": str(analysis_id)})


class QueueDispatcher(WorkDispatcher):
    """In-process dispatcher backed by an unbounded asyncio queue."""

    def __init__(self) -> None:
        """Initialize with an empty queue."""
        self.queue: asyncio.Queue[UUID] = asyncio.Queue()

    def notify(self, analysis_id: UUID) -> None:
        self.queue.put_nowait(analysis_id)

    async def next_job(self) -> UUID:
        """Wait for the next announced job ID."""
        return await self.queue.get()

    def job_done(self) -> None:
        """Mark the most recently taken job as handled."""
        self.queue.task_done()

    def pending(self) -> int:
        """Number of announced jobs not yet taken."""
        return self.queue.qsize()
