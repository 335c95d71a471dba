"""
Analysis ORM model.

Durable record of each analysis job: lifecycle stage, timestamps, the
submitted video reference and options, and the terminal payload.

Dependencies: sqlalchemy, speaker_companion.boundary.db.base
System role: Persistent job store table
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Enum, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from speaker_companion.boundary.db.base import Base, TimestampMixin, UUIDMixin
from speaker_companion.core.stages import AnalysisStage


class AnalysisModel(Base, UUIDMixin, TimestampMixin):
    """
    Analysis ORM model.

    Attributes:
        id: UUID primary key
        stage: Current lifecycle stage
        started_at: Set when the job leaves the queue
        completed_at: Set when the job reaches a terminal stage
        video: Source video reference (JSON)
        config: Processing options captured at submission (JSON)
        result: Report document, only when stage is completed
        failure_reason: Failure description, only when stage is failed
        created_at: Submission timestamp (UTC)
        updated_at: Last transition timestamp (UTC)

    Workflow:
        1. Service inserts the row in QUEUED
        2. Worker advances stage with compare-and-set updates
        3. Terminal update writes stage + result/failure_reason in one statement
    """

    __tablename__ = "analyses"
    __table_args__ = (Index("ix_analyses_stage_created_at", "stage", "created_at"),)

    stage: Mapped[AnalysisStage] = mapped_column(
        Enum(
            AnalysisStage,
            native_enum=False,
            length=32,
            values_callable=lambda stages: [stage.value for stage in stages],
        ),
        nullable=False,
        default=AnalysisStage.QUEUED,
    )
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    video: Mapped[dict] = mapped_column(JSON, nullable=False, doc="Source video reference")
    config: Mapped[dict] = mapped_column(JSON, nullable=False, doc="Processing options")
    result: Mapped[dict | None] = mapped_column(JSON, nullable=True, doc="Report document")
    failure_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
