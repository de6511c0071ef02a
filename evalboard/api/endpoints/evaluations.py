"""Evaluation endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from evalboard.auth.permissions import any_authorized_user, supervisor_required
from evalboard.auth.scope import scope_for
from evalboard.core.database import get_db
from evalboard.repositories.evaluation import EvaluationRepository
from evalboard.repositories.setting import SettingRepository
from evalboard.repositories.teacher import TeacherRepository
from evalboard.schemas.evaluation import (
    EvaluationCreate,
    EvaluationFilterParams,
    EvaluationListResponse,
    EvaluationResponse,
    FormTemplateResponse,
)
from evalboard.services.evaluation import EvaluationService
from evalboard.services.notification import NotificationHub, get_notification_hub

router = APIRouter()


async def get_evaluation_service(
    session: AsyncSession = Depends(get_db),
    hub: NotificationHub = Depends(get_notification_hub),
) -> EvaluationService:
    """Get evaluation service dependency."""
    return EvaluationService(
        EvaluationRepository(session),
        TeacherRepository(session),
        SettingRepository(session),
        hub,
    )


@router.get("/form-template", response_model=FormTemplateResponse, summary="Blank evaluation form")
async def get_form_template(
    current_user: dict = Depends(supervisor_required),
    evaluation_service: EvaluationService = Depends(get_evaluation_service),
):
    """
    Active categories grouped by section, and a form with every score at 3.
    """
    return await evaluation_service.get_form_template()


@router.post(
    "",
    response_model=EvaluationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit an evaluation",
)
async def create_evaluation(
    evaluation_data: EvaluationCreate,
    current_user: dict = Depends(supervisor_required),
    evaluation_service: EvaluationService = Depends(get_evaluation_service),
):
    """
    Record a completed evaluation form for one teacher.

    The form must score every active category between 1 and 5.
    """
    return await evaluation_service.create_evaluation(evaluation_data, current_user)


@router.get("", response_model=EvaluationListResponse, summary="List evaluations")
async def list_evaluations(
    filters: EvaluationFilterParams = Depends(),
    current_user: dict = Depends(any_authorized_user),
    evaluation_service: EvaluationService = Depends(get_evaluation_service),
):
    """
    List evaluations, newest first.

    Teachers only see their own evaluations whatever filters they send.
    """
    return await evaluation_service.list_evaluations(filters, scope_for(current_user))


@router.get("/{evaluation_id}", response_model=EvaluationResponse, summary="Get evaluation")
async def get_evaluation(
    evaluation_id: int,
    current_user: dict = Depends(any_authorized_user),
    evaluation_service: EvaluationService = Depends(get_evaluation_service),
):
    return await evaluation_service.get_evaluation(evaluation_id, scope_for(current_user))
