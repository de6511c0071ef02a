"""Settings endpoints (supervisors only)."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from evalboard.auth.permissions import supervisor_required
from evalboard.core.database import get_db
from evalboard.repositories.setting import SettingRepository
from evalboard.schemas.setting import (
    EvaluationSettings,
    EvaluationSettingsUpdate,
    GeneralSettings,
    GeneralSettingsUpdate,
    NotificationSettings,
    NotificationSettingsUpdate,
    SettingsResponse,
)
from evalboard.services.setting import SettingService

router = APIRouter()


async def get_setting_service(session: AsyncSession = Depends(get_db)) -> SettingService:
    """Get setting service dependency."""
    return SettingService(SettingRepository(session))


@router.get("", response_model=SettingsResponse, summary="Get all settings")
async def get_settings(
    current_user: dict = Depends(supervisor_required),
    setting_service: SettingService = Depends(get_setting_service),
):
    return await setting_service.get_all()


@router.get("/general", response_model=GeneralSettings, summary="Get general settings")
async def get_general_settings(
    current_user: dict = Depends(supervisor_required),
    setting_service: SettingService = Depends(get_setting_service),
):
    return await setting_service.get_general()


@router.get("/evaluation", response_model=EvaluationSettings, summary="Get evaluation categories")
async def get_evaluation_settings(
    current_user: dict = Depends(supervisor_required),
    setting_service: SettingService = Depends(get_setting_service),
):
    return await setting_service.get_evaluation()


@router.get("/notifications", response_model=NotificationSettings, summary="Get notification settings")
async def get_notification_settings(
    current_user: dict = Depends(supervisor_required),
    setting_service: SettingService = Depends(get_setting_service),
):
    return await setting_service.get_notifications()


@router.put("/general", response_model=GeneralSettings, summary="Update general settings")
async def update_general_settings(
    data: GeneralSettingsUpdate,
    current_user: dict = Depends(supervisor_required),
    setting_service: SettingService = Depends(get_setting_service),
):
    """
    Merge the given fields into the general settings document.
    """
    return await setting_service.update_general(data)


@router.put("/evaluation", response_model=EvaluationSettings, summary="Update evaluation categories")
async def update_evaluation_settings(
    data: EvaluationSettingsUpdate,
    current_user: dict = Depends(supervisor_required),
    setting_service: SettingService = Depends(get_setting_service),
):
    """
    Replace the category list. Keys must be unique within a section and at
    least one category must stay active.
    """
    return await setting_service.update_evaluation(data)


@router.put("/notifications", response_model=NotificationSettings, summary="Update notification settings")
async def update_notification_settings(
    data: NotificationSettingsUpdate,
    current_user: dict = Depends(supervisor_required),
    setting_service: SettingService = Depends(get_setting_service),
):
    return await setting_service.update_notifications(data)
