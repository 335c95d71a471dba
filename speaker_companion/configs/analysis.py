"""
Analysis pipeline configuration settings.

Backend selection for the job service and job store, progress estimation
constants, listing bounds, and report aggregation policy.

Dependencies: pydantic, pydantic_settings
System role: Analysis lifecycle configuration
"""

from typing import Literal

from pydantic import Field

from speaker_companion.configs.base import BaseSettings, settings_config


class AnalysisSettings(BaseSettings):
    """Analysis job lifecycle configuration."""

    model_config = settings_config("ANALYSIS_")

    service_backend: Literal["local", "remote"] = Field(
        default="local",
        description="Job service implementation: in-process (local) or HTTP client (remote)",
    )
    store_backend: Literal["memory", "database"] = Field(
        default="memory",
        description="Job store used by the local service",
    )
    remote_base_url: str = Field(
        default="http://localhost:8000/api/v1",
        description="Base URL of a remote analysis API",
    )
    remote_timeout_seconds: float = Field(
        default=10.0,
        description="HTTP timeout for the remote analysis API",
    )

    eta_placeholder_seconds: int = Field(
        default=120,
        ge=0,
        description="Advisory ETA reported for every non-terminal stage",
    )
    default_page_size: int = Field(default=20, ge=1, description="List page size default")
    max_page_size: int = Field(default=100, ge=1, description="Largest accepted list page size")

    max_recommendations: int = Field(
        default=10,
        ge=0,
        description="Upper bound on recommendations per report",
    )
    eye_contact_weight: float = Field(default=1.0, ge=0, description="Overall score weight")
    gestures_weight: float = Field(default=1.0, ge=0, description="Overall score weight")
    movement_weight: float = Field(default=1.0, ge=0, description="Overall score weight")
    posture_weight: float = Field(default=1.0, ge=0, description="Overall score weight")

    media_base_path: str = Field(
        default="/storage",
        description="URL prefix for uploaded videos and generated artifacts",
    )

    simulate_pipeline: bool = Field(
        default=True,
        description="Run the in-process simulated pose pipeline worker",
    )
    simulated_step_delay_seconds: float = Field(
        default=2.0,
        ge=0,
        description="Delay between simulated stage transitions",
    )

    @property
    def category_weights(self) -> dict[str, float]:
        """Category weights keyed by category name."""
        return {
            "eye_contact": self.eye_contact_weight,
            "gestures": self.gestures_weight,
            "movement": self.movement_weight,
            "posture": self.posture_weight,
        }
