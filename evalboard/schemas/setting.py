"""Settings document schemas (general, evaluation, notifications)."""

from typing import List, Literal, Optional
from pydantic import BaseModel, EmailStr, Field

from evalboard.models.enums import EvaluationSection, ReminderFrequency


# ===== GENERAL =====

class GeneralSettings(BaseModel):
    """School identity and display preferences."""
    school_name: str = ""
    school_code: str = ""
    address: str = ""
    school_email: str = ""
    school_phone: str = ""
    dark_mode: bool = False
    rtl: bool = True
    auto_save: bool = True
    language: Literal["ar", "en"] = "ar"


class GeneralSettingsUpdate(BaseModel):
    """Partial update; only the given fields are merged."""
    school_name: Optional[str] = Field(None, max_length=255)
    school_code: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)
    school_email: Optional[EmailStr] = None
    school_phone: Optional[str] = Field(None, max_length=50)
    dark_mode: Optional[bool] = None
    rtl: Optional[bool] = None
    auto_save: Optional[bool] = None
    language: Optional[Literal["ar", "en"]] = None


# ===== EVALUATION =====

class CategorySetting(BaseModel):
    """One configurable evaluation category."""
    key: str = Field(..., min_length=1, max_length=50, pattern=r"^[a-z][a-z0-9_]*$")
    label: str = Field(..., min_length=1, max_length=255)
    section: EvaluationSection
    description: str = Field(default="", max_length=500)
    weight: float = Field(default=1.0, ge=0)
    active: bool = True


class EvaluationSettings(BaseModel):
    categories: List[CategorySetting] = Field(default_factory=list)


class EvaluationSettingsUpdate(BaseModel):
    categories: List[CategorySetting] = Field(..., min_length=1)


# ===== NOTIFICATIONS =====

class NotificationSettings(BaseModel):
    email_notifications: bool = False
    new_evaluation_notifications: bool = False
    reminder_notifications: bool = False
    system_update_notifications: bool = False
    reminder_frequency: ReminderFrequency = ReminderFrequency.WEEKLY


class NotificationSettingsUpdate(BaseModel):
    email_notifications: Optional[bool] = None
    new_evaluation_notifications: Optional[bool] = None
    reminder_notifications: Optional[bool] = None
    system_update_notifications: Optional[bool] = None
    reminder_frequency: Optional[ReminderFrequency] = None


class SettingsResponse(BaseModel):
    """All three settings documents."""
    general: GeneralSettings
    evaluation: EvaluationSettings
    notifications: NotificationSettings
