"""
Liveness endpoint.

Routes: GET /health

Dependencies: fastapi, speaker_companion.configs
System role: Load-balancer and deploy checks
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from speaker_companion.api.deps.dependencies import get_settings_dependency
from speaker_companion.configs import Settings


class HealthResponse(BaseModel):
    """Liveness payload with the active backends."""

    status: str
    message: str
    service_backend: str
    store_backend: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings_dependency)) -> HealthResponse:
    """Report that the process is serving and which backends it was built with."""
    return HealthResponse(
        status="healthy",
        message="Server Healthy",
        service_backend=settings.analysis.service_backend,
        store_backend=settings.analysis.store_backend,
    )
