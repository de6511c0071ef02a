"""Schemas initialization."""

# Shared schemas
from .shared import (
    PaginationParams,
    BaseListResponse,
    MessageResponse,
    StatusResponse,
)

# User schemas
from .user import (
    UserLogin,
    UserSignup,
    UserResponse,
    SupervisorSummary,
    Token,
    PageAccessResponse,
)

# Teacher schemas
from .teacher import (
    TeacherCreate,
    TeacherUpdate,
    TeacherResponse,
    TeacherProvisionResponse,
    TeacherListResponse,
    TeacherFilterParams,
)

# Evaluation schemas
from .evaluation import (
    ScoreRecord,
    EvaluationForm,
    EvaluationCreate,
    EvaluationFilterParams,
    EvaluationListItem,
    EvaluationResponse,
    EvaluationListResponse,
    FormTemplateResponse,
)

# Report schemas
from .report import (
    RankedTeacher,
    DashboardResponse,
    ReportResponse,
)

# Settings schemas
from .setting import (
    GeneralSettings,
    GeneralSettingsUpdate,
    CategorySetting,
    EvaluationSettings,
    EvaluationSettingsUpdate,
    NotificationSettings,
    NotificationSettingsUpdate,
    SettingsResponse,
)

# Notification schemas
from .notification import (
    NotificationEvent,
    NotificationListResponse,
)

__all__ = [
    # Shared
    "PaginationParams",
    "BaseListResponse",
    "MessageResponse",
    "StatusResponse",
    # User
    "UserLogin",
    "UserSignup",
    "UserResponse",
    "SupervisorSummary",
    "Token",
    "PageAccessResponse",
    # Teacher
    "TeacherCreate",
    "TeacherUpdate",
    "TeacherResponse",
    "TeacherProvisionResponse",
    "TeacherListResponse",
    "TeacherFilterParams",
    # Evaluation
    "ScoreRecord",
    "EvaluationForm",
    "EvaluationCreate",
    "EvaluationFilterParams",
    "EvaluationListItem",
    "EvaluationResponse",
    "EvaluationListResponse",
    "FormTemplateResponse",
    # Report
    "RankedTeacher",
    "DashboardResponse",
    "ReportResponse",
    # Settings
    "GeneralSettings",
    "GeneralSettingsUpdate",
    "CategorySetting",
    "EvaluationSettings",
    "EvaluationSettingsUpdate",
    "NotificationSettings",
    "NotificationSettingsUpdate",
    "SettingsResponse",
    # Notification
    "NotificationEvent",
    "NotificationListResponse",
]
