"""Teacher service: listing, profile edits, deletion and provisioning."""

import logging
import secrets
from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from evalboard.auth.jwt import get_password_hash
from evalboard.auth.scope import DataScope, UNRESTRICTED
from evalboard.core.config import settings
from evalboard.core.exceptions import ConflictError, NotFoundError, ValidationError
from evalboard.models.enums import EvaluationStatus, NotificationKind, TeacherSortKey, UserRole
from evalboard.models.teacher import Teacher
from evalboard.repositories.evaluation import EvaluationRepository
from evalboard.repositories.teacher import TeacherRepository
from evalboard.repositories.user import UserRepository
from evalboard.schemas.shared import BaseListResponse, MessageResponse
from evalboard.schemas.teacher import (
    TeacherCreate,
    TeacherFilterParams,
    TeacherListResponse,
    TeacherProvisionResponse,
    TeacherResponse,
    TeacherUpdate,
)
from evalboard.services import aggregator
from evalboard.services.notification import NotificationHub
from evalboard.utils.messages import get_message
from evalboard.utils.sanitize_html import sanitize_html_content

logger = logging.getLogger(__name__)


def birthdate_password(birth_date: date, prefix: Optional[str] = None) -> str:
    """Initial password built from the birth date: prefix + DDMMYYYY."""
    prefix = settings.BIRTHDATE_PASSWORD_PREFIX if prefix is None else prefix
    return f"{prefix}{birth_date.strftime('%d%m%Y')}"


def choose_initial_password(teacher_data: TeacherCreate) -> Tuple[str, bool]:
    """Pick the initial password and whether it must be shown to the caller.

    An explicit password wins. The birth-date scheme only applies when it is
    enabled in settings; otherwise a random password is generated.
    """
    if teacher_data.password:
        return teacher_data.password, False
    if settings.ALLOW_BIRTHDATE_INITIAL_PASSWORD and teacher_data.birth_date:
        return birthdate_password(teacher_data.birth_date), False
    return secrets.token_urlsafe(12), True


def _validate_dates(birth_date: Optional[date], join_date: Optional[date]) -> None:
    if birth_date and join_date and birth_date >= join_date:
        raise ValidationError(get_message("teacher", "invalid_dates"))


async def create_teacher_account(
    user_repo: UserRepository,
    teacher_repo: TeacherRepository,
    email: str,
    password: str,
    profile: Dict,
) -> Teacher:
    """Stage the user and its paired profile, then commit them together.

    A concurrent insert of the same email surfaces as ConflictError.
    """
    session = teacher_repo.session
    try:
        user = user_repo.add(
            email=email,
            hashed_password=get_password_hash(password),
            role=UserRole.TEACHER,
            name=profile.get("name"),
        )
        await session.flush()
        teacher = teacher_repo.add(user, profile)
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise ConflictError(get_message("user", "email_exists"))
    except Exception:
        await session.rollback()
        raise
    await session.refresh(teacher)
    return teacher


class TeacherService:
    """Teacher service."""

    def __init__(
        self,
        teacher_repo: TeacherRepository,
        user_repo: UserRepository,
        evaluation_repo: EvaluationRepository,
        hub: NotificationHub,
    ):
        self.teacher_repo = teacher_repo
        self.user_repo = user_repo
        self.evaluation_repo = evaluation_repo
        self.hub = hub

    async def _aggregates(self, scope: DataScope) -> Tuple[Dict[int, float], Dict[int, int]]:
        submitted = await self.evaluation_repo.get_all(scope, status=EvaluationStatus.SUBMITTED)
        return (
            aggregator.group_average(submitted, aggregator.by_teacher),
            aggregator.group_counts(submitted, aggregator.by_teacher),
        )

    @staticmethod
    def _to_response(teacher: Teacher, averages: Dict[int, float], counts: Dict[int, int]) -> TeacherResponse:
        return TeacherResponse.from_teacher_model(
            teacher,
            evaluation_count=counts.get(teacher.id, 0),
            average_percent=aggregator.round_half_up(averages.get(teacher.id, 0)),
        )

    async def list_teachers(self, filters: TeacherFilterParams, scope: DataScope = UNRESTRICTED) -> TeacherListResponse:
        """Scoped teacher list with per-teacher evaluation aggregates."""
        sort_in_memory = filters.sort_by in (TeacherSortKey.AVERAGE, TeacherSortKey.EVALUATIONS)
        teachers, total = await self.teacher_repo.search(filters, scope, paginate=not sort_in_memory)
        averages, counts = await self._aggregates(scope)

        items = [self._to_response(teacher, averages, counts) for teacher in teachers]
        if sort_in_memory:
            field = "average_percent" if filters.sort_by == TeacherSortKey.AVERAGE else "evaluation_count"
            items.sort(key=lambda item: getattr(item, field), reverse=filters.sort_order == "desc")
            items = items[filters.offset:filters.offset + filters.size]

        return TeacherListResponse(
            items=items,
            total=total,
            page=filters.page,
            size=filters.size,
            pages=BaseListResponse.count_pages(total, filters.size),
        )

    async def get_teacher(self, teacher_id: int, scope: DataScope = UNRESTRICTED) -> TeacherResponse:
        if not scope.allows_teacher(teacher_id):
            raise NotFoundError(get_message("teacher", "not_found"))
        teacher = await self.teacher_repo.get_by_id(teacher_id, scope)
        if not teacher:
            raise NotFoundError(get_message("teacher", "not_found"))
        averages, counts = await self._aggregates(DataScope(teacher_id=teacher_id))
        return self._to_response(teacher, averages, counts)

    async def list_departments(self) -> List[str]:
        return await self.teacher_repo.departments()

    async def provision_teacher(self, teacher_data: TeacherCreate, created_by: Dict) -> TeacherProvisionResponse:
        """Create identity, credential, teacher role record and profile together."""
        _validate_dates(teacher_data.birth_date, teacher_data.join_date)

        if await self.user_repo.email_exists(teacher_data.email):
            raise ConflictError(get_message("user", "email_exists"))

        password, reveal = choose_initial_password(teacher_data)
        profile = teacher_data.model_dump(exclude={"email", "password"})
        profile["bio"] = sanitize_html_content(profile.get("bio"))

        teacher = await create_teacher_account(
            self.user_repo, self.teacher_repo, teacher_data.email, password, profile
        )

        logger.info(f"Teacher {teacher.id} provisioned by user {created_by['id']}")
        await self.hub.publish(
            NotificationKind.TEACHER_ADDED,
            get_message("notification", "teacher_added", name=teacher.name),
            teacher_id=teacher.id,
        )
        return TeacherProvisionResponse(
            teacher=self._to_response(teacher, {}, {}),
            initial_password=password if reveal else None,
        )

    async def update_teacher(self, teacher_id: int, teacher_data: TeacherUpdate) -> TeacherResponse:
        teacher = await self.teacher_repo.get_by_id(teacher_id)
        if not teacher:
            raise NotFoundError(get_message("teacher", "not_found"))

        values = teacher_data.model_dump(exclude_unset=True)
        if "name" in values and values["name"] is None:
            values.pop("name")
        if "email" in values:
            if not values["email"]:
                values.pop("email")
            elif await self.user_repo.email_exists(values["email"], exclude_user_id=teacher_id):
                raise ConflictError(get_message("user", "email_exists"))
        if "bio" in values:
            values["bio"] = sanitize_html_content(values["bio"])

        _validate_dates(
            values.get("birth_date", teacher.birth_date),
            values.get("join_date", teacher.join_date),
        )

        try:
            teacher = await self.teacher_repo.update(teacher, values)
        except IntegrityError:
            raise ConflictError(get_message("user", "email_exists"))
        await self.hub.publish(
            NotificationKind.TEACHER_UPDATED,
            get_message("notification", "teacher_updated", name=teacher.name),
            teacher_id=teacher.id,
        )
        averages, counts = await self._aggregates(DataScope(teacher_id=teacher_id))
        return self._to_response(teacher, averages, counts)

    async def delete_teacher(self, teacher_id: int) -> MessageResponse:
        """Delete profile and identity record; past evaluations are kept unassigned."""
        teacher = await self.teacher_repo.get_by_id(teacher_id)
        if not teacher:
            raise NotFoundError(get_message("teacher", "not_found"))

        name = teacher.name
        await self.teacher_repo.delete_with_related(teacher_id)
        logger.info(f"Teacher {teacher_id} deleted; evaluations kept")

        await self.hub.publish(
            NotificationKind.TEACHER_REMOVED,
            get_message("notification", "teacher_removed", name=name),
            teacher_id=teacher_id,
        )
        return MessageResponse(message=get_message("teacher", "deleted"))
