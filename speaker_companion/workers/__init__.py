"""
Background processing: dispatch, pose pipeline, and the analysis worker.
"""

from speaker_companion.workers.analysis_worker import AnalysisWorker
from speaker_companion.workers.dispatcher import NullDispatcher, QueueDispatcher, WorkDispatcher
from speaker_companion.workers.pipeline import PosePipeline, SimulatedPipeline

__all__ = [
    "AnalysisWorker",
    "NullDispatcher",
    "PosePipeline",
    "QueueDispatcher",
    "SimulatedPipeline",
    "WorkDispatcher",
]
