"""Database models initialization."""

# Base classes
from .base import BaseModel

# Core models
from .user import User
from .teacher import Teacher
from .evaluation import Evaluation
from .setting import Setting

# Enums
from .enums import (
    UserRole as UserRoleEnum,
    UserStatus,
    EvaluationSection,
    EvaluationStatus,
    ReportPeriod,
    TeacherSortKey,
    ReminderFrequency,
    SettingKey,
    NotificationKind,
)

__all__ = [
    # Base classes
    "BaseModel",

    # Core models
    "User",
    "Teacher",
    "Evaluation",
    "Setting",

    # Enums
    "UserRoleEnum",
    "UserStatus",
    "EvaluationSection",
    "EvaluationStatus",
    "ReportPeriod",
    "TeacherSortKey",
    "ReminderFrequency",
    "SettingKey",
    "NotificationKind",
]
