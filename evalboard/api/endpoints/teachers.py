"""Teacher management endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from evalboard.auth.permissions import any_authorized_user, log_access_attempt, supervisor_required
from evalboard.auth.scope import scope_for
from evalboard.core.database import get_db
from evalboard.repositories.evaluation import EvaluationRepository
from evalboard.repositories.teacher import TeacherRepository
from evalboard.repositories.user import UserRepository
from evalboard.schemas.shared import MessageResponse
from evalboard.schemas.teacher import (
    TeacherCreate,
    TeacherFilterParams,
    TeacherListResponse,
    TeacherProvisionResponse,
    TeacherResponse,
    TeacherUpdate,
)
from evalboard.services.notification import NotificationHub, get_notification_hub
from evalboard.services.teacher import TeacherService

router = APIRouter()


async def get_teacher_service(
    session: AsyncSession = Depends(get_db),
    hub: NotificationHub = Depends(get_notification_hub),
) -> TeacherService:
    """Get teacher service dependency."""
    return TeacherService(
        TeacherRepository(session),
        UserRepository(session),
        EvaluationRepository(session),
        hub,
    )


@router.get("", response_model=TeacherListResponse, summary="List teachers")
async def list_teachers(
    filters: TeacherFilterParams = Depends(),
    current_user: dict = Depends(any_authorized_user),
    teacher_service: TeacherService = Depends(get_teacher_service),
):
    """
    List teachers with search, department filter, sorting and pagination.

    Teachers only see their own profile.
    """
    return await teacher_service.list_teachers(filters, scope_for(current_user))


@router.get("/departments", response_model=List[str], summary="List departments")
async def list_departments(
    current_user: dict = Depends(supervisor_required),
    teacher_service: TeacherService = Depends(get_teacher_service),
):
    return await teacher_service.list_departments()


@router.post(
    "",
    response_model=TeacherProvisionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Provision a teacher account",
)
async def create_teacher(
    teacher_data: TeacherCreate,
    current_user: dict = Depends(supervisor_required),
    teacher_service: TeacherService = Depends(get_teacher_service),
):
    """
    Create the login, the teacher role record and the profile in one step.

    When no password is given the server chooses one and returns it once.
    """
    await log_access_attempt(current_user, "teachers", action="create")
    return await teacher_service.provision_teacher(teacher_data, current_user)


@router.get("/{teacher_id}", response_model=TeacherResponse, summary="Get teacher")
async def get_teacher(
    teacher_id: int,
    current_user: dict = Depends(any_authorized_user),
    teacher_service: TeacherService = Depends(get_teacher_service),
):
    return await teacher_service.get_teacher(teacher_id, scope_for(current_user))


@router.put("/{teacher_id}", response_model=TeacherResponse, summary="Update teacher")
async def update_teacher(
    teacher_id: int,
    teacher_data: TeacherUpdate,
    current_user: dict = Depends(supervisor_required),
    teacher_service: TeacherService = Depends(get_teacher_service),
):
    """
    Update a teacher profile. The id cannot change.
    """
    return await teacher_service.update_teacher(teacher_id, teacher_data)


@router.delete("/{teacher_id}", response_model=MessageResponse, summary="Delete teacher")
async def delete_teacher(
    teacher_id: int,
    current_user: dict = Depends(supervisor_required),
    teacher_service: TeacherService = Depends(get_teacher_service),
):
    """
    Delete a teacher with its login and every evaluation.
    """
    await log_access_attempt(current_user, f"teachers/{teacher_id}", action="delete")
    return await teacher_service.delete_teacher(teacher_id)
