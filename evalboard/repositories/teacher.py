"""Teacher repository."""

from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from evalboard.auth.scope import DataScope, UNRESTRICTED
from evalboard.models.enums import TeacherSortKey
from evalboard.models.evaluation import Evaluation
from evalboard.models.teacher import Teacher
from evalboard.models.user import User
from evalboard.schemas.teacher import TeacherFilterParams
from evalboard.utils.store import execute_read

SQL_SORT_COLUMNS = {
    TeacherSortKey.NAME: Teacher.name,
    TeacherSortKey.DEPARTMENT: Teacher.department,
    TeacherSortKey.JOIN_DATE: Teacher.join_date,
}


class TeacherRepository:
    """Teacher repository; every read honours the caller's DataScope."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _scoped(query, scope: DataScope):
        if scope.is_restricted:
            query = query.where(Teacher.id == scope.teacher_id)
        return query

    def add(self, user: User, profile: Dict[str, Any]) -> Teacher:
        """Stage a profile paired with an already flushed user."""
        teacher = Teacher(id=user.id, email=user.email, **profile)
        self.session.add(teacher)
        return teacher

    async def get_by_id(self, teacher_id: int, scope: DataScope = UNRESTRICTED) -> Optional[Teacher]:
        """Get teacher by ID; rows outside the scope are not found."""
        query = self._scoped(select(Teacher).where(Teacher.id == teacher_id), scope)
        result = await execute_read(self.session, query, "teacher lookup")
        return result.scalar_one_or_none()

    async def get_all(self, scope: DataScope = UNRESTRICTED) -> List[Teacher]:
        query = self._scoped(select(Teacher).order_by(Teacher.name), scope)
        result = await execute_read(self.session, query, "teacher list")
        return list(result.scalars().all())

    async def search(
        self,
        filters: TeacherFilterParams,
        scope: DataScope = UNRESTRICTED,
        paginate: bool = True,
    ) -> Tuple[List[Teacher], int]:
        """Search teachers with filters, SQL-sortable ordering and pagination."""
        query = self._scoped(select(Teacher), scope)
        count_query = self._scoped(select(func.count(Teacher.id)), scope)

        if filters.search:
            search_filter = Teacher.name.ilike(f"%{filters.search}%")
            query = query.where(search_filter)
            count_query = count_query.where(search_filter)

        if filters.department:
            query = query.where(Teacher.department == filters.department)
            count_query = count_query.where(Teacher.department == filters.department)

        sort_column = SQL_SORT_COLUMNS.get(filters.sort_by, Teacher.name)
        if filters.sort_order == "desc":
            sort_column = sort_column.desc()
        query = query.order_by(sort_column, Teacher.id)

        if paginate:
            query = query.offset(filters.offset).limit(filters.size)

        result = await execute_read(self.session, query, "teacher search")
        teachers = list(result.scalars().all())

        count_result = await execute_read(self.session, count_query, "teacher search count")
        return teachers, count_result.scalar_one()

    async def departments(self) -> List[str]:
        query = (
            select(Teacher.department)
            .where(Teacher.department.is_not(None))
            .distinct()
            .order_by(Teacher.department)
        )
        result = await execute_read(self.session, query, "department list")
        return [row for row in result.scalars().all() if row]

    async def update(self, teacher: Teacher, values: Dict[str, Any]) -> Teacher:
        """Apply field changes; the paired user email follows the profile email."""
        for field, value in values.items():
            setattr(teacher, field, value)
        teacher.touch()

        if "email" in values:
            user = await self.session.get(User, teacher.id)
            if user is not None:
                user.email = values["email"]
                user.touch()

        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(teacher)
        return teacher

    async def delete_with_related(self, teacher_id: int) -> None:
        """Remove profile and identity record; the teacher's evaluations stay, unassigned."""
        try:
            await self.session.execute(
                update(Evaluation).where(Evaluation.teacher_id == teacher_id).values(teacher_id=None)
            )
            await self.session.execute(delete(Teacher).where(Teacher.id == teacher_id))
            await self.session.execute(delete(User).where(User.id == teacher_id))
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
