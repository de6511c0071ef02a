"""Settings repository."""

from typing import Any, Dict, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from evalboard.models.enums import SettingKey
from evalboard.models.setting import Setting
from evalboard.utils.store import execute_read


class SettingRepository:
    """Key/value settings documents."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, key: SettingKey) -> Optional[Setting]:
        query = select(Setting).where(Setting.key == key.value)
        result = await execute_read(self.session, query, f"settings {key.value}")
        return result.scalar_one_or_none()

    async def get_value(self, key: SettingKey) -> Dict[str, Any]:
        """Stored document, or an empty dict when it was never saved."""
        setting = await self.get(key)
        return dict(setting.value or {}) if setting else {}

    async def merge(self, key: SettingKey, values: Dict[str, Any]) -> Setting:
        """Update-merge a document, creating it on first write."""
        setting = await self.get(key)
        if setting is None:
            setting = Setting(key=key.value, value=dict(values))
            self.session.add(setting)
        else:
            setting.merge(values)

        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(setting)
        return setting

    async def delete_all(self) -> None:
        for key in SettingKey:
            setting = await self.get(key)
            if setting is not None:
                await self.session.delete(setting)
        await self.session.commit()
