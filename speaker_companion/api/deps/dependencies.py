"""
Dependency injection container.

Builds the configured analysis service (and, for the local backend, its job
store and in-process worker) once per application, and exposes FastAPI
dependency factories over it.

Dependencies: fastapi, speaker_companion.configs, speaker_companion.application,
    speaker_companion.boundary, speaker_companion.workers
System role: DI container for service injection
"""

import logging
from fastapi import Request

from speaker_companion.application.services import AnalysisService, LocalAnalysisService
from speaker_companion.boundary.db import create_tables, get_async_engine, get_async_session_factory
from speaker_companion.boundary.http import RemoteAnalysisService
from speaker_companion.boundary.store import InMemoryJobStore, JobStore, SqlJobStore
from speaker_companion.configs import Settings, get_settings
from speaker_companion.core.job_tracker import JobTracker
from speaker_companion.core.progress import ProgressEstimator
from speaker_companion.core.report import ResultAggregator
from speaker_companion.core.scoring import ScoringPolicy
from speaker_companion.workers import (
    AnalysisWorker,
    NullDispatcher,
    QueueDispatcher,
    SimulatedPipeline,
    WorkDispatcher,
)

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for the application's long-lived components.

    Attributes:
        settings: Application settings
        service: Configured AnalysisService
        store: Job store (local backend only)
        tracker: Transition writer (local backend only)
        worker: In-process worker (when the simulated pipeline is enabled)
    """

    def __init__(self, settings: Settings) -> None:
        """
        Initialize container from settings.

        Args:
            settings: Application settings
        """
        self.settings = settings
        self.store: JobStore | None = None
        self.tracker: JobTracker | None = None
        self.worker: AnalysisWorker | None = None
        self._engine = None
        self.service = self._build_service()

    def _build_store(self) -> JobStore:
        if self.settings.analysis.store_backend == "database":
            self._engine = get_async_engine(self.settings.database)
            return SqlJobStore(get_async_session_factory(self._engine), engine=self._engine)
        return InMemoryJobStore()

    def _build_service(self) -> AnalysisService:
        config = self.settings.analysis

        if config.service_backend == "remote":
            logger.info("Using remote analysis service", extra={"base_url": config.remote_base_url})
            return RemoteAnalysisService(config.remote_base_url, config.remote_timeout_seconds)

        self.store = self._build_store()
        self.tracker = JobTracker(
            self.store,
            ResultAggregator(
                policy=ScoringPolicy(config.category_weights),
                max_recommendations=config.max_recommendations,
            ),
        )

        dispatcher: WorkDispatcher
        if config.simulate_pipeline:
            dispatcher = QueueDispatcher()
            self.worker = AnalysisWorker(
                dispatcher,
                self.tracker,
                SimulatedPipeline(step_delay_seconds=config.simulated_step_delay_seconds),
            )
        else:
            dispatcher = NullDispatcher()

        logger.info(
            "Using local analysis service",
            extra={"store_backend": config.store_backend, "simulate_pipeline": config.simulate_pipeline},
        )
        return LocalAnalysisService(
            store=self.store,
            dispatcher=dispatcher,
            estimator=ProgressEstimator(config.eta_placeholder_seconds),
            media_base_path=config.media_base_path,
            default_page_size=config.default_page_size,
            max_page_size=config.max_page_size,
        )

    async def startup(self) -> None:
        """Create tables for the database store and start the worker."""
        if self._engine is not None:
            await create_tables(self._engine)
        if self.worker is not None:
            self.worker.start()

    async def shutdown(self) -> None:
        """Stop the worker and release service resources."""
        if self.worker is not None:
            await self.worker.stop()
        await self.service.close()


def get_settings_dependency(request: Request) -> Settings:
    """Get the settings the running application was created with."""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_container(request: Request) -> ServiceContainer:
    """
    Get the container attached to the running application.

    Args:
        request: Incoming request

    Returns:
        ServiceContainer: Container created during application lifespan
    """
    return request.app.state.container


def get_analysis_service(request: Request) -> AnalysisService:
    """
    Get analysis service instance.

    Args:
        request: Incoming request

    Returns:
        AnalysisService: Local or remote service, per configuration
    """
    return get_container(request).service
