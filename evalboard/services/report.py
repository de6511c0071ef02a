"""Dashboard and report service.

Teachers, evaluations and the category catalogue are fetched concurrently,
each on its own session, then joined in memory and handed to the aggregator.
Nothing is cached; every request recomputes from the stored rows.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import async_sessionmaker

from evalboard.auth.scope import DataScope, UNRESTRICTED
from evalboard.core.database import async_session_maker
from evalboard.models.enums import EvaluationStatus, ReportPeriod, SettingKey
from evalboard.models.evaluation import Evaluation
from evalboard.models.teacher import Teacher
from evalboard.repositories.evaluation import EvaluationRepository
from evalboard.repositories.setting import SettingRepository
from evalboard.repositories.teacher import TeacherRepository
from evalboard.schemas.report import (
    CategoryAverage,
    DashboardResponse,
    DepartmentStat,
    GroupAverage,
    MonthlyAverage,
    RankedTeacher,
    ReportResponse,
    TeacherDetail,
)
from evalboard.services import aggregator
from evalboard.services.evaluation import to_list_item
from evalboard.utils.categories import Category, active_categories, load_categories

logger = logging.getLogger(__name__)

DASHBOARD_LATEST = 5
DASHBOARD_TOP = 3
REPORT_TOP = 5
ALL_DEPARTMENTS = "all"


def _assigned(evaluations: List[Evaluation]) -> List[Evaluation]:
    """Evaluations whose teacher still exists; only these are ranked per teacher."""
    return [evaluation for evaluation in evaluations if evaluation.teacher_id is not None]


def _ranked(
    teacher_id: int,
    average: float,
    counts: Dict[Any, int],
    teachers_by_id: Dict[int, Teacher],
) -> Dict[str, Any]:
    teacher = teachers_by_id.get(teacher_id)
    return {
        "teacher_id": teacher_id,
        "name": teacher.name if teacher else None,
        "subject": teacher.subject if teacher else None,
        "department": teacher.department if teacher else None,
        "evaluation_count": counts.get(teacher_id, 0),
        "average_percent": aggregator.round_half_up(average),
    }


class ReportService:
    """Report service."""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def _teachers(self, scope: DataScope) -> List[Teacher]:
        async with self.session_factory() as session:
            return await TeacherRepository(session).get_all(scope)

    async def _evaluations(self, scope: DataScope) -> List[Evaluation]:
        async with self.session_factory() as session:
            return await EvaluationRepository(session).get_all(scope)

    async def _categories(self) -> List[Category]:
        async with self.session_factory() as session:
            stored = await SettingRepository(session).get_value(SettingKey.EVALUATION)
        return active_categories(load_categories(stored.get("categories")))

    async def _fetch(self, scope: DataScope) -> Tuple[List[Teacher], List[Evaluation], List[Category]]:
        teachers, evaluations, categories = await asyncio.gather(
            self._teachers(scope),
            self._evaluations(scope),
            self._categories(),
        )
        return teachers, evaluations, categories

    async def get_dashboard(self, scope: DataScope = UNRESTRICTED) -> DashboardResponse:
        """Headline numbers, latest submissions and the top teachers."""
        teachers, evaluations, _ = await self._fetch(scope)
        teachers_by_id = {teacher.id: teacher for teacher in teachers}

        submitted = [e for e in evaluations if e.status == EvaluationStatus.SUBMITTED]
        pending = [e for e in evaluations if e.status == EvaluationStatus.DRAFT]

        latest = sorted(submitted, key=lambda e: (e.created_at, e.id), reverse=True)[:DASHBOARD_LATEST]

        teacher_averages = aggregator.group_average(_assigned(submitted), aggregator.by_teacher)
        teacher_counts = aggregator.group_counts(_assigned(submitted), aggregator.by_teacher)

        return DashboardResponse(
            total_teachers=len(teachers),
            completed_evaluations=len(submitted),
            pending_evaluations=len(pending),
            overall_average=aggregator.overall_average(submitted),
            latest_evaluations=[
                to_list_item(evaluation, teachers_by_id.get(evaluation.teacher_id))
                for evaluation in latest
            ],
            top_teachers=[
                RankedTeacher(**_ranked(teacher_id, average, teacher_counts, teachers_by_id))
                for teacher_id, average in aggregator.rank(teacher_averages, DASHBOARD_TOP)
            ],
        )

    async def get_report(
        self,
        period: ReportPeriod = ReportPeriod.CURRENT,
        department: Optional[str] = None,
        scope: DataScope = UNRESTRICTED,
        now: Optional[datetime] = None,
    ) -> ReportResponse:
        """All report sections for one department and period filter."""
        if department == ALL_DEPARTMENTS:
            department = None

        teachers, evaluations, categories = await self._fetch(scope)
        teachers_by_id = {teacher.id: teacher for teacher in teachers}

        submitted = [e for e in evaluations if e.status == EvaluationStatus.SUBMITTED]
        filtered = aggregator.filter_by_period(submitted, period, now)
        filtered = aggregator.filter_by_department(filtered, teachers_by_id, department)

        assigned = _assigned(filtered)
        teacher_averages = aggregator.group_average(assigned, aggregator.by_teacher)
        teacher_counts = aggregator.group_counts(assigned, aggregator.by_teacher)

        month_averages = aggregator.monthly_averages(filtered)
        month_counts = aggregator.group_counts(filtered, aggregator.by_month)

        department_key = aggregator.by_department(teachers_by_id)
        department_averages = aggregator.group_average(filtered, department_key)
        department_counts = aggregator.group_counts(filtered, department_key)

        category_percents = aggregator.category_averages(filtered, categories)
        breakdown = aggregator.teacher_category_breakdown(assigned, categories)

        logger.debug(
            f"Report period={period.value} department={department or ALL_DEPARTMENTS} "
            f"evaluations={len(filtered)}"
        )

        return ReportResponse(
            period=period,
            department=department,
            evaluation_count=len(filtered),
            top_teachers=[
                RankedTeacher(**_ranked(teacher_id, average, teacher_counts, teachers_by_id))
                for teacher_id, average in aggregator.rank(teacher_averages, REPORT_TOP)
            ],
            monthly=[
                MonthlyAverage(
                    month=month,
                    average_percent=aggregator.round_half_up(average),
                    evaluation_count=month_counts.get(month, 0),
                )
                for month, average in month_averages.items()
            ],
            departments=[
                GroupAverage(
                    name=name,
                    average_percent=aggregator.round_half_up(average),
                    evaluation_count=department_counts.get(name, 0),
                )
                for name, average in department_averages.items()
            ],
            categories=[
                CategoryAverage(
                    key=category.key,
                    label=category.label,
                    section=category.section,
                    average_percent=category_percents.get(category.key, 0),
                )
                for category in categories
            ],
            department_stats=[
                DepartmentStat(**row)
                for row in aggregator.department_stats(
                    teacher_averages, teachers, department_averages, department_counts
                )
            ],
            teacher_details=[
                TeacherDetail(
                    **_ranked(teacher_id, average, teacher_counts, teachers_by_id),
                    categories=breakdown.get(teacher_id, {}),
                )
                for teacher_id, average in teacher_averages.items()
            ],
        )


def get_session_factory() -> async_sessionmaker:
    """Session factory dependency; reports open their own sessions."""
    return async_session_maker
