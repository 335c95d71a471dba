"""
Pydantic schemas for analysis records, reports, and pipeline output.
"""

from speaker_companion.models.analysis import (
    AnalysisConfig,
    AnalysisJob,
    AnalysisPage,
    AnalysisResponse,
    AnalysisStatusResponse,
    AnalysisSummary,
    MediaUrls,
    SubmitAnalysisRequest,
    SubmitAnalysisResponse,
    VideoReference,
)
from speaker_companion.models.raw_output import FrameSample, RawAnalysisOutput
from speaker_companion.models.report import (
    AnalysisReport,
    PoseAnalysis,
    Recommendation,
    TimelineBucket,
)

__all__ = [
    "AnalysisConfig",
    "AnalysisJob",
    "AnalysisPage",
    "AnalysisReport",
    "AnalysisResponse",
    "AnalysisStatusResponse",
    "AnalysisSummary",
    "FrameSample",
    "MediaUrls",
    "PoseAnalysis",
    "RawAnalysisOutput",
    "Recommendation",
    "SubmitAnalysisRequest",
    "SubmitAnalysisResponse",
    "TimelineBucket",
    "VideoReference",
]
