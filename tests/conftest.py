"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory SQLite database, job stores, sample videos and raw
pipeline output
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import copy
from datetime import datetime, timezone

import pytest

from speaker_companion.boundary.store import InMemoryJobStore
from speaker_companion.core.job_tracker import JobTracker
from speaker_companion.models.analysis import VideoReference

HEALTHY_OUTPUT = {
    "total_frames_analyzed": 2900,
    "frames_with_pose": 2850,
    "detection_confidence_avg": 0.92,
    "eye_contact": {
        "level_pct": 80.0,
        "up_pct": 5.0,
        "down_pct": 10.0,
        "away_pct": 5.0,
        "center_pct": 45.0,
        "left_pct": 28.0,
        "right_pct": 27.0,
        "score": 88.0,
    },
    "gestures": {
        "total_count": 180,
        "open_hands_pct": 70.0,
        "hand_above_waist_pct": 80.0,
        "gestures_per_minute": 12.0,
        "hand_positions": {"spread": 40.0, "on_torso": 35.0, "pointing": 25.0},
        "score": 84.0,
    },
    "movement": {
        "movement_pct": 30.0,
        "stationary_pct": 70.0,
        "stage_coverage_pct": 70.0,
        "avg_movement_duration_seconds": 3.5,
        "transitions_count": 24,
        "score": 81.0,
    },
    "posture": {
        "dominant_posture": "L:spread+R:spread",
        "posture_distribution": {"L:spread+R:spread": 30.0, "L:on_torso+R:spread": 25.0, "other": 45.0},
        "posture_variety_score": 65.0,
        "score": 79.0,
    },
    "samples": [],
}


def make_samples(duration_seconds: int, **overrides) -> list[dict]:
    """One sample per second on the source clock, starting at 0."""
    base = {
        "vertical_gaze": "level",
        "horizontal_gaze": "center",
        "is_moving": False,
        "gesture_active": True,
        "posture": "L:spread+R:spread",
    }
    base.update(overrides)
    return [{"timestamp_seconds": float(second), **base} for second in range(duration_seconds)]


@pytest.fixture
def sample_video() -> VideoReference:
    """Five-minute presentation video."""
    return VideoReference(
        filename="keynote.mp4",
        duration_seconds=300.0,
        uploaded_at=datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc),
        title="Quarterly keynote",
    )


@pytest.fixture
def sample_factory():
    """Factory for per-second frame samples."""
    return make_samples


@pytest.fixture
def healthy_output() -> dict:
    """Raw pipeline output with no behaviour worth flagging."""
    output = copy.deepcopy(HEALTHY_OUTPUT)
    output["samples"] = make_samples(300)
    return output


@pytest.fixture
def memory_store() -> InMemoryJobStore:
    """Empty in-memory job store."""
    return InMemoryJobStore()


@pytest.fixture
def tracker(memory_store) -> JobTracker:
    """JobTracker over the in-memory store."""
    return JobTracker(memory_store)


@pytest.fixture
async def test_async_engine():
    """
    Create in-memory SQLite async engine with the schema applied.

    Yields:
        AsyncEngine: Engine sharing one connection across sessions
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    from speaker_companion.boundary.db.base import Base
    from speaker_companion.boundary.db.connection import create_tables

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(engine)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_async_db(test_async_engine):
    """
    Create a session on the in-memory SQLite database.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    async_session = async_sessionmaker(
        test_async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session() as session:
        yield session
        await session.rollback()
