"""
Analysis API endpoints.

Routes:
- POST /analyses - Submit a video for analysis
- GET /analyses - List analyses (newest first, paginated)
- GET /analyses/{id}/status - Poll stage and progress
- GET /analyses/{id} - Full analysis record with report

Dependencies: speaker_companion.application.services, speaker_companion.models
System role: Analysis lifecycle HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from speaker_companion.api.deps.dependencies import (
    get_analysis_service,
    get_settings_dependency,
)
from speaker_companion.application.services.analysis_service import AnalysisService
from speaker_companion.configs import Settings
from speaker_companion.models.analysis import (
    AnalysisPage,
    AnalysisResponse,
    AnalysisStatusResponse,
    SubmitAnalysisRequest,
    SubmitAnalysisResponse,
)

from .analysis_error_handling import handle_analysis_errors
from .analysis_responses import map_analysis_to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analyses", tags=["analyses"])


@router.post("", response_model=SubmitAnalysisResponse, status_code=201)
@handle_analysis_errors
async def submit_analysis(
    request: SubmitAnalysisRequest,
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> SubmitAnalysisResponse:
    """
    Queue a video for analysis.

    Args:
        request: Video reference plus optional processing options
        analysis_service: Injected AnalysisService

    Returns:
        SubmitAnalysisResponse: New analysis ID in the queued stage

    Raises:
        HTTPException(400): Invalid video reference or options
    """
    video = request.video
    if request.title:
        video = video.model_copy(update={"title": request.title})

    analysis_id = await analysis_service.submit(video, request.to_config())
    return SubmitAnalysisResponse(analysis_id=analysis_id)


@router.get("", response_model=AnalysisPage)
@handle_analysis_errors
async def list_analyses(
    page: int = Query(1, description="1-based page number"),
    page_size: int | None = Query(None, description="Items per page"),
    status: str | None = Query(None, description="Only analyses in this stage"),
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> AnalysisPage:
    """
    List analyses, newest first.

    Raises:
        HTTPException(400): Invalid page, page_size or status
    """
    return await analysis_service.list_analyses(page=page, page_size=page_size, status=status)


@router.get("/{analysis_id}/status", response_model=AnalysisStatusResponse)
@handle_analysis_errors
async def get_analysis_status(
    analysis_id: UUID,
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> AnalysisStatusResponse:
    """
    Poll the current stage of an analysis.

    Raises:
        HTTPException(404): Analysis not found
    """
    return await analysis_service.get_status(analysis_id)


@router.get("/{analysis_id}", response_model=AnalysisResponse)
@handle_analysis_errors
async def get_analysis(
    analysis_id: UUID,
    analysis_service: AnalysisService = Depends(get_analysis_service),
    settings: Settings = Depends(get_settings_dependency),
) -> AnalysisResponse:
    """
    Get the full analysis record.

    Args:
        analysis_id: Analysis UUID
        analysis_service: Injected AnalysisService
        settings: Injected settings (media URL prefix)

    Returns:
        AnalysisResponse: Stage, timestamps, report when completed, failure
        reason when failed, and media URLs

    Raises:
        HTTPException(404): Analysis not found
    """
    job = await analysis_service.get_result(analysis_id)
    return map_analysis_to_response(job, settings.analysis.media_base_path)
