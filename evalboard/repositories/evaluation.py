"""Evaluation repository."""

from typing import List, Optional, Tuple
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from evalboard.auth.scope import DataScope, UNRESTRICTED
from evalboard.models.enums import EvaluationStatus
from evalboard.models.evaluation import Evaluation
from evalboard.models.teacher import Teacher
from evalboard.schemas.evaluation import EvaluationFilterParams
from evalboard.utils.store import execute_read


class EvaluationRepository:
    """Evaluation repository; every read honours the caller's DataScope."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _scoped(query, scope: DataScope):
        if scope.is_restricted:
            query = query.where(Evaluation.teacher_id == scope.teacher_id)
        return query

    async def create(self, evaluation: Evaluation) -> Evaluation:
        """Insert one evaluation; nothing is written if the commit fails."""
        self.session.add(evaluation)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(evaluation)
        return evaluation

    async def get_with_teacher(
        self, evaluation_id: int, scope: DataScope = UNRESTRICTED
    ) -> Optional[Tuple[Evaluation, Optional[Teacher]]]:
        """Evaluation and its teacher; rows outside the scope are not found."""
        query = (
            select(Evaluation, Teacher)
            .outerjoin(Teacher, Teacher.id == Evaluation.teacher_id)
            .where(Evaluation.id == evaluation_id)
        )
        result = await execute_read(self.session, self._scoped(query, scope), "evaluation lookup")
        row = result.first()
        return (row[0], row[1]) if row else None

    async def search(
        self, filters: EvaluationFilterParams, scope: DataScope = UNRESTRICTED
    ) -> List[Tuple[Evaluation, Optional[Teacher]]]:
        """Evaluations with their teachers, newest first, before score filtering."""
        query = select(Evaluation, Teacher).outerjoin(Teacher, Teacher.id == Evaluation.teacher_id)
        query = self._scoped(query, scope)

        if filters.teacher_id:
            query = query.where(Evaluation.teacher_id == filters.teacher_id)

        if filters.department:
            query = query.where(Teacher.department == filters.department)

        if filters.search:
            query = query.where(Teacher.name.ilike(f"%{filters.search}%"))

        if filters.status:
            query = query.where(Evaluation.status == filters.status)

        query = query.order_by(Evaluation.created_at.desc(), Evaluation.id.desc())
        result = await execute_read(self.session, query, "evaluation search")
        return [(row[0], row[1]) for row in result.all()]

    async def get_all(
        self,
        scope: DataScope = UNRESTRICTED,
        status: Optional[EvaluationStatus] = None,
    ) -> List[Evaluation]:
        query = self._scoped(select(Evaluation), scope)
        if status:
            query = query.where(Evaluation.status == status)
        query = query.order_by(Evaluation.created_at, Evaluation.id)
        result = await execute_read(self.session, query, "evaluation list")
        return list(result.scalars().all())
