"""Evaluation service: form template, submission and scoped reads."""

import logging
from typing import Dict, List, Optional

from evalboard.auth.scope import DataScope, UNRESTRICTED
from evalboard.core.exceptions import NotFoundError, ValidationError
from evalboard.models.enums import EvaluationSection, NotificationKind, SettingKey
from evalboard.models.evaluation import Evaluation
from evalboard.models.teacher import Teacher
from evalboard.repositories.evaluation import EvaluationRepository
from evalboard.repositories.setting import SettingRepository
from evalboard.repositories.teacher import TeacherRepository
from evalboard.schemas.evaluation import (
    MAX_SCORE,
    MIN_SCORE,
    CategoryInfo,
    EvaluationCreate,
    EvaluationFilterParams,
    EvaluationForm,
    EvaluationListItem,
    EvaluationListResponse,
    EvaluationResponse,
    FormTemplateResponse,
    SectionTemplate,
)
from evalboard.schemas.shared import BaseListResponse
from evalboard.services import aggregator
from evalboard.services.notification import NotificationHub
from evalboard.utils.categories import Category, active_categories, group_by_section, load_categories
from evalboard.utils.messages import get_message

logger = logging.getLogger(__name__)


def validate_form(form: EvaluationForm, categories: List[Category]) -> None:
    """The form must hold exactly the active categories, each scored 1-5."""
    expected = group_by_section(active_categories(categories))
    known_sections = EvaluationSection.get_all_values()

    for section, records in form.sections.items():
        if section not in known_sections:
            raise ValidationError(get_message("evaluation", "unknown_section", section=section))
        allowed = {category.key for category in expected.get(section, [])}
        for key, record in records.items():
            if key not in allowed:
                raise ValidationError(
                    get_message("evaluation", "unknown_category", category=key, section=section)
                )
            if not MIN_SCORE <= record.score <= MAX_SCORE:
                raise ValidationError(get_message("evaluation", "score_out_of_range", category=key))

    for section, section_categories in expected.items():
        records = form.sections.get(section, {})
        for category in section_categories:
            if category.key not in records:
                raise ValidationError(
                    get_message("evaluation", "missing_category", category=category.key, section=section)
                )


def to_list_item(evaluation: Evaluation, teacher: Optional[Teacher]) -> EvaluationListItem:
    return EvaluationListItem(
        id=evaluation.id,
        teacher_id=evaluation.teacher_id,
        teacher_name=teacher.name if teacher else None,
        department=teacher.department if teacher else None,
        evaluator_id=evaluation.evaluator_id,
        status=evaluation.status,
        created_at=evaluation.created_at,
        average_percent=aggregator.average_percent(evaluation),
    )


class EvaluationService:
    """Evaluation service."""

    def __init__(
        self,
        evaluation_repo: EvaluationRepository,
        teacher_repo: TeacherRepository,
        setting_repo: SettingRepository,
        hub: NotificationHub,
    ):
        self.evaluation_repo = evaluation_repo
        self.teacher_repo = teacher_repo
        self.setting_repo = setting_repo
        self.hub = hub

    async def get_categories(self) -> List[Category]:
        stored = await self.setting_repo.get_value(SettingKey.EVALUATION)
        return load_categories(stored.get("categories"))

    async def get_form_template(self) -> FormTemplateResponse:
        """Active categories per section and a fresh form at the default score."""
        categories = active_categories(await self.get_categories())
        titles = EvaluationSection.get_display_names()
        sections = [
            SectionTemplate(
                section=EvaluationSection(section),
                title=titles[section],
                categories=[
                    CategoryInfo(key=c.key, label=c.label, description=c.description, weight=c.weight)
                    for c in section_categories
                ],
            )
            for section, section_categories in group_by_section(categories).items()
        ]
        return FormTemplateResponse(sections=sections, form=EvaluationForm.initial(categories))

    async def create_evaluation(self, evaluation_data: EvaluationCreate, evaluator: Dict) -> EvaluationResponse:
        """Validate and store one evaluation with a server-assigned timestamp."""
        teacher = await self.teacher_repo.get_by_id(evaluation_data.teacher_id)
        if not teacher:
            raise NotFoundError(get_message("teacher", "not_found"))

        form = evaluation_data.to_form()
        validate_form(form, await self.get_categories())

        evaluation = Evaluation(
            teacher_id=teacher.id,
            evaluator_id=evaluator["id"],
            status=evaluation_data.status,
            sections=form.to_storage(),
            final_notes=form.final_notes or None,
        )
        evaluation = await self.evaluation_repo.create(evaluation)
        logger.info(f"Evaluation {evaluation.id} recorded for teacher {teacher.id} by user {evaluator['id']}")

        await self.hub.publish(
            NotificationKind.EVALUATION_ADDED,
            get_message("notification", "evaluation_added", name=teacher.name),
            teacher_id=teacher.id,
            evaluation_id=evaluation.id,
            event_id=f"evaluation-{evaluation.id}",
        )
        return self._to_response(evaluation, teacher)

    @staticmethod
    def _to_response(evaluation: Evaluation, teacher: Optional[Teacher]) -> EvaluationResponse:
        item = to_list_item(evaluation, teacher)
        return EvaluationResponse(
            **item.model_dump(),
            sections=evaluation.sections,
            final_notes=evaluation.final_notes,
        )

    async def get_evaluation(self, evaluation_id: int, scope: DataScope = UNRESTRICTED) -> EvaluationResponse:
        row = await self.evaluation_repo.get_with_teacher(evaluation_id, scope)
        if not row:
            raise NotFoundError(get_message("evaluation", "not_found"))
        return self._to_response(*row)

    async def list_evaluations(
        self, filters: EvaluationFilterParams, scope: DataScope = UNRESTRICTED
    ) -> EvaluationListResponse:
        """Scoped evaluation rows, newest first, with the minimum percent applied."""
        rows = await self.evaluation_repo.search(filters, scope)
        items = [to_list_item(evaluation, teacher) for evaluation, teacher in rows]
        if filters.min_percent is not None:
            items = [item for item in items if item.average_percent >= filters.min_percent]

        total = len(items)
        return EvaluationListResponse(
            items=items[filters.offset:filters.offset + filters.size],
            total=total,
            page=filters.page,
            size=filters.size,
            pages=BaseListResponse.count_pages(total, filters.size),
        )
