"""
Analysis CRUD operations.

Extends BaseCRUD with paging, counting, and the compare-and-set stage
update used for every lifecycle transition.

Dependencies: sqlalchemy, speaker_companion.boundary.db.models
System role: Analysis persistence operations
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from speaker_companion.boundary.db.CRUD.base_crud import BaseCRUD
from speaker_companion.boundary.db.models.analysis_model import AnalysisModel
from speaker_companion.core.stages import AnalysisStage


class AnalysisCRUD(BaseCRUD[AnalysisModel]):
    """CRUD operations for AnalysisModel."""

    def __init__(self) -> None:
        """Initialize AnalysisCRUD with AnalysisModel."""
        super().__init__(AnalysisModel)

    async def get_page(
        self,
        session: AsyncSession,
        offset: int,
        limit: int,
        stage: AnalysisStage | None = None,
    ) -> Sequence[AnalysisModel]:
        """
        Retrieve analyses newest first.

        Args:
            session: Async database session
            offset: Rows to skip
            limit: Maximum rows to return
            stage: Optional stage filter

        Returns:
            Sequence of AnalysisModels ordered by created_at desc, id desc
        """
        stmt = select(AnalysisModel)
        if stage is not None:
            stmt = stmt.where(AnalysisModel.stage == stage)
        stmt = (
            stmt.order_by(AnalysisModel.created_at.desc(), AnalysisModel.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count(self, session: AsyncSession, stage: AnalysisStage | None = None) -> int:
        """
        Count analyses, optionally restricted to one stage.

        Args:
            session: Async database session
            stage: Optional stage filter

        Returns:
            int: Number of matching rows
        """
        stmt = select(func.count()).select_from(AnalysisModel)
        if stage is not None:
            stmt = stmt.where(AnalysisModel.stage == stage)
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def transition(
        self,
        session: AsyncSession,
        id: UUID,
        expected_stage: AnalysisStage,
        **values: Any,
    ) -> bool:
        """
        Apply an update only if the row is still in ``expected_stage``.

        All columns in ``values`` are written by a single UPDATE statement.

        Args:
            session: Async database session
            id: Analysis UUID
            expected_stage: Stage the caller read before deciding
            **values: Columns to write (stage, timestamps, result, failure_reason)

        Returns:
            True if exactly one row was updated, False if the row is missing
            or has moved on
        """
        stmt = (
            update(AnalysisModel)
            .where(AnalysisModel.id == id, AnalysisModel.stage == expected_stage)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount == 1


analysis_crud = AnalysisCRUD()
