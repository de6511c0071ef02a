"""Enums for database models and request parameters."""

from enum import Enum


class UserRole(str, Enum):
    """User role enum for role-based access control."""
    SUPERVISOR = "supervisor"
    TEACHER = "teacher"

    @classmethod
    def get_all_values(cls):
        """Get all role values as list."""
        return [role.value for role in cls]

    @classmethod
    def is_valid_role(cls, role: str) -> bool:
        """Check if role is valid."""
        return role in cls.get_all_values()


class UserStatus(str, Enum):
    """User status enum."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class EvaluationSection(str, Enum):
    """The three fixed groups of evaluation categories."""
    CLASSROOM = "classroom"
    STUDENT = "student"
    PROFESSIONAL = "professional"

    @classmethod
    def get_all_values(cls):
        return [section.value for section in cls]

    @classmethod
    def get_display_names(cls):
        """Get display names for sections."""
        return {
            cls.CLASSROOM.value: "Classroom observation",
            cls.STUDENT.value: "Student impact",
            cls.PROFESSIONAL.value: "Professional conduct",
        }


class EvaluationStatus(str, Enum):
    """Evaluation status; drafts are the pending evaluations of the dashboard."""
    DRAFT = "draft"
    SUBMITTED = "submitted"


class ReportPeriod(str, Enum):
    """Time windows offered by the reports page."""
    CURRENT = "current"
    PREVIOUS = "previous"
    SEMESTER1 = "semester1"
    SEMESTER2 = "semester2"
    ALL = "all"


class TeacherSortKey(str, Enum):
    """Sort orders for the teacher list."""
    NAME = "name"
    DEPARTMENT = "department"
    JOIN_DATE = "join_date"
    AVERAGE = "avg_score"
    EVALUATIONS = "evaluations"


class ReminderFrequency(str, Enum):
    """Reminder frequency for notification settings."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class SettingKey(str, Enum):
    """Documents of the settings collection."""
    GENERAL = "general"
    EVALUATION = "evaluation"
    NOTIFICATIONS = "notifications"


class NotificationKind(str, Enum):
    """Live update event types."""
    TEACHER_ADDED = "teacher_added"
    TEACHER_UPDATED = "teacher_updated"
    TEACHER_REMOVED = "teacher_removed"
    EVALUATION_ADDED = "evaluation_added"
