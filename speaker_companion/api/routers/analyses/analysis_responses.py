"""
Analysis response mapping utilities.

Flattens domain records into the API's response models.

Dependencies: speaker_companion.models, speaker_companion.application.media
System role: Analysis response transformation
"""

from speaker_companion.application.media import build_media_urls
from speaker_companion.models.analysis import AnalysisJob, AnalysisResponse


def map_analysis_to_response(job: AnalysisJob, media_base_path: str = "/storage") -> AnalysisResponse:
    """
    Transform an analysis record into AnalysisResponse.

    Args:
        job: Analysis record from the service
        media_base_path: URL prefix for media artifacts

    Returns:
        AnalysisResponse: Record with report fields lifted to the top level
    """
    report = job.result
    urls = build_media_urls(job, media_base_path)
    return AnalysisResponse(
        id=job.id,
        status=job.stage,
        created_at=job.created_at,
        started_at=job.started_at,
        completed_at=job.completed_at,
        processing_time_seconds=job.processing_time_seconds,
        video=job.video,
        config=job.config,
        overall_score=report.overall_score if report else None,
        overall_rating=report.overall_rating if report else None,
        pose_analysis=report.pose_analysis if report else None,
        timeline=report.timeline if report else [],
        recommendations=report.recommendations if report else [],
        failure_reason=job.failure_reason,
        **urls.model_dump(),
    )
