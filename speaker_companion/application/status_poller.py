"""
Caller-side status polling.

Re-requests an analysis status on a fixed interval until a terminal stage is
observed. The periodic task is always torn down by ``stop`` or on leaving the
async context.

Dependencies: asyncio, speaker_companion.application.services
System role: Polling client for long-running analyses
"""

import asyncio
import logging
from typing import Awaitable, Callable
from uuid import UUID

from speaker_companion.application.services.analysis_service import AnalysisService
from speaker_companion.core.stages import is_terminal
from speaker_companion.models.analysis import AnalysisStatusResponse

logger = logging.getLogger(__name__)

StatusCallback = Callable[[AnalysisStatusResponse], Awaitable[None] | None]


class StatusPoller:
    """
    Periodic status watcher for one analysis.

    Usage:
        async with StatusPoller(service, analysis_id, interval_seconds=5) as poller:
            final = await poller.wait()
    """

    def __init__(
        self,
        service: AnalysisService,
        analysis_id: UUID,
        interval_seconds: float = 5.0,
        on_update: StatusCallback | None = None,
    ) -> None:
        """
        Initialize poller.

        Args:
            service: Analysis service to poll
            analysis_id: Analysis to watch
            interval_seconds: Delay between requests
            on_update: Called with every snapshot (sync or async)
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.service = service
        self.analysis_id = analysis_id
        self.interval_seconds = interval_seconds
        self.on_update = on_update
        self.latest: AnalysisStatusResponse | None = None
        self._task: asyncio.Task | None = None

    async def _poll(self) -> AnalysisStatusResponse:
        while True:
            status = await self.service.get_status(self.analysis_id)
            self.latest = status
            if self.on_update is not None:
                outcome = self.on_update(status)
                if asyncio.iscoroutine(outcome):
                    await outcome
            if is_terminal(status.status):
                logger.debug(
                    "Terminal stage observed; polling stopped",
                    extra={"analysis_id": str(self.analysis_id), "stage": status.status.value},
                )
                return status
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        """Begin polling on the running event loop."""
        if self._task is None:
            self._task = asyncio.create_task(self._poll(), name=f"poll-{self.analysis_id}")

    @property
    def running(self) -> bool:
        """Whether the periodic task is still active."""
        return self._task is not None and not self._task.done()

    async def wait(self) -> AnalysisStatusResponse:
        """
        Wait for the terminal snapshot.

        Returns:
            AnalysisStatusResponse: First status with a terminal stage

        Raises:
            Exception: Whatever the service raised while polling
        """
        self.start()
        return await self._task

    async def stop(self) -> None:
        """Cancel polling (if still running) and wait for the task to end."""
        task, self._task = self._task, None
        if task is None:
            return
        if not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        elif not task.cancelled():
            # Outcome is reported through wait(); only mark it retrieved here
            task.exception()

    async def __aenter__(self) -> "StatusPoller":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
