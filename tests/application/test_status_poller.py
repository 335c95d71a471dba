"""
Unit tests for StatusPoller.

Tests cover stopping on terminal stages, explicit teardown, and error
propagation from the polled service.

Dependencies: pytest, pytest-asyncio, unittest.mock
System role: Caller-side polling verification
"""

import asyncio
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from speaker_companion.application.status_poller import StatusPoller
from speaker_companion.core.exceptions import AnalysisNotFoundError
from speaker_companion.core.stages import AnalysisStage
from speaker_companion.models.analysis import AnalysisStatusResponse


def _status(analysis_id, stage, pct=0):
    return AnalysisStatusResponse(
        analysis_id=analysis_id,
        status=stage,
        progress_pct=pct,
        current_step=stage.value,
        estimated_time_remaining_seconds=120,
    )


@pytest.fixture
def analysis_id():
    return uuid.uuid4()


@pytest.fixture
def mock_service():
    return AsyncMock()


class TestStatusPoller:
    """Test cases for StatusPoller."""

    @pytest.mark.asyncio
    async def test_polling_should_stop_at_terminal_stage(self, mock_service, analysis_id):
        # Arrange
        mock_service.get_status.side_effect = [
            _status(analysis_id, AnalysisStage.QUEUED),
            _status(analysis_id, AnalysisStage.DETECTING_POSE, 40),
            _status(analysis_id, AnalysisStage.COMPLETED, 100),
        ]
        updates = MagicMock()

        # Act
        async with StatusPoller(mock_service, analysis_id, interval_seconds=0.01, on_update=updates) as poller:
            final = await poller.wait()

        # Assert
        assert final.status is AnalysisStage.COMPLETED
        assert mock_service.get_status.await_count == 3
        assert updates.call_count == 3
        assert not poller.running

    @pytest.mark.asyncio
    async def test_async_callback_should_be_awaited(self, mock_service, analysis_id):
        mock_service.get_status.return_value = _status(analysis_id, AnalysisStage.FAILED)
        on_update = AsyncMock()

        poller = StatusPoller(mock_service, analysis_id, interval_seconds=0.01, on_update=on_update)
        await poller.wait()

        on_update.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_stop_should_cancel_polling(self, mock_service, analysis_id):
        # Arrange
        mock_service.get_status.return_value = _status(analysis_id, AnalysisStage.QUEUED)
        poller = StatusPoller(mock_service, analysis_id, interval_seconds=0.01)
        poller.start()
        await asyncio.sleep(0.05)

        # Act
        await poller.stop()
        calls = mock_service.get_status.await_count
        await asyncio.sleep(0.05)

        # Assert
        assert not poller.running
        assert mock_service.get_status.await_count == calls

    @pytest.mark.asyncio
    async def test_service_errors_should_surface_from_wait(self, mock_service, analysis_id):
        mock_service.get_status.side_effect = AnalysisNotFoundError(analysis_id)

        async with StatusPoller(mock_service, analysis_id, interval_seconds=0.01) as poller:
            with pytest.raises(AnalysisNotFoundError):
                await poller.wait()

    def test_non_positive_interval_should_be_rejected(self, mock_service, analysis_id):
        with pytest.raises(ValueError):
            StatusPoller(mock_service, analysis_id, interval_seconds=0)
