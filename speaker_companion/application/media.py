"""
Media URL construction.

Storage layout is not owned by this service; URLs follow the fixed
``uploads`` / ``results`` / ``intermediate`` convention under a base path.

Dependencies: speaker_companion.models
System role: Artifact URL derivation for API responses
"""

from speaker_companion.core.stages import AnalysisStage
from speaker_companion.models.analysis import AnalysisJob, MediaUrls


def build_media_urls(job: AnalysisJob, base_path: str = "/storage") -> MediaUrls:
    """
    Derive artifact URLs for a job.

    Args:
        job: Analysis record
        base_path: URL prefix of the storage area

    Returns:
        MediaUrls: Original video URL always; overlay (when requested) and
        audio URLs only once the job has completed
    """
    base = base_path.rstrip("/")
    completed = job.stage is AnalysisStage.COMPLETED
    extension = job.video.format or "mp4"

    overlay = None
    if completed and job.config.generate_overlay_video:
        overlay = f"{base}/results/{job.id}/overlay.mp4"

    return MediaUrls(
        video_original_url=f"{base}/uploads/{job.id}/video.{extension}",
        video_overlay_url=overlay,
        audio_url=f"{base}/intermediate/{job.id}/audio.{job.config.audio_format}" if completed else None,
    )
