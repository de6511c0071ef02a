"""Settings service: general, evaluation and notification documents."""

import logging

from evalboard.core.exceptions import ValidationError
from evalboard.models.enums import SettingKey
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
from evalboard.utils.categories import default_category_dicts
from evalboard.utils.messages import get_message

logger = logging.getLogger(__name__)


def validate_categories(update: EvaluationSettingsUpdate) -> None:
    """Keys unique per section and at least one active category overall."""
    seen = set()
    for category in update.categories:
        marker = (category.section.value, category.key)
        if marker in seen:
            raise ValidationError(
                get_message("settings", "duplicate_category", category=category.key, section=category.section.value)
            )
        seen.add(marker)

    if not any(category.active for category in update.categories):
        raise ValidationError(get_message("settings", "no_active_category"))


class SettingService:
    """Setting service."""

    def __init__(self, setting_repo: SettingRepository):
        self.setting_repo = setting_repo

    async def get_general(self) -> GeneralSettings:
        return GeneralSettings(**await self.setting_repo.get_value(SettingKey.GENERAL))

    async def get_evaluation(self) -> EvaluationSettings:
        stored = await self.setting_repo.get_value(SettingKey.EVALUATION)
        return EvaluationSettings(categories=stored.get("categories") or default_category_dicts())

    async def get_notifications(self) -> NotificationSettings:
        return NotificationSettings(**await self.setting_repo.get_value(SettingKey.NOTIFICATIONS))

    async def get_all(self) -> SettingsResponse:
        return SettingsResponse(
            general=await self.get_general(),
            evaluation=await self.get_evaluation(),
            notifications=await self.get_notifications(),
        )

    async def update_general(self, data: GeneralSettingsUpdate) -> GeneralSettings:
        values = data.model_dump(exclude_unset=True, exclude_none=True, mode="json")
        setting = await self.setting_repo.merge(SettingKey.GENERAL, values)
        logger.info(f"General settings updated: {sorted(values)}")
        return GeneralSettings(**setting.value)

    async def update_evaluation(self, data: EvaluationSettingsUpdate) -> EvaluationSettings:
        validate_categories(data)
        values = data.model_dump(mode="json")
        setting = await self.setting_repo.merge(SettingKey.EVALUATION, values)
        logger.info(f"Evaluation categories updated: {len(data.categories)} categories")
        return EvaluationSettings(**setting.value)

    async def update_notifications(self, data: NotificationSettingsUpdate) -> NotificationSettings:
        values = data.model_dump(exclude_unset=True, exclude_none=True, mode="json")
        setting = await self.setting_repo.merge(SettingKey.NOTIFICATIONS, values)
        return NotificationSettings(**setting.value)
