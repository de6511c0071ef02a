"""Teacher profile schemas."""

from typing import Optional
from datetime import date, datetime
from pydantic import BaseModel, EmailStr, ConfigDict, Field, field_validator

from evalboard.core.config import settings
from evalboard.models.enums import TeacherSortKey
from evalboard.schemas.shared import BaseListResponse, PaginationParams


class TeacherBase(BaseModel):
    """Editable profile fields."""
    name: str = Field(..., min_length=1, max_length=255, description="Full name")
    subject: Optional[str] = Field(None, max_length=100, description="Subject taught")
    department: Optional[str] = Field(None, max_length=100, description="Department")
    phone: Optional[str] = Field(None, max_length=50)
    join_date: Optional[date] = Field(None, description="Date the teacher joined the school")
    birth_date: Optional[date] = Field(None, description="Date of birth")
    experience: Optional[str] = Field(None, max_length=100, description="Years of experience, free text")
    education: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = Field(None, max_length=2000)


class TeacherCreate(TeacherBase):
    """Provisioning request: identity, role record and profile in one step."""
    email: EmailStr = Field(..., description="Login email of the new teacher")
    password: Optional[str] = Field(
        None,
        min_length=settings.PASSWORD_MIN_LENGTH,
        max_length=128,
        description="Initial password; generated when omitted",
    )

    @field_validator('email')
    @classmethod
    def normalize_email(cls, email: str) -> str:
        return email.lower().strip()


class TeacherUpdate(BaseModel):
    """Every field except the id may change."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    subject: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    join_date: Optional[date] = None
    birth_date: Optional[date] = None
    experience: Optional[str] = Field(None, max_length=100)
    education: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = Field(None, max_length=2000)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, email: Optional[str]) -> Optional[str]:
        return email.lower().strip() if email else None


class TeacherResponse(TeacherBase):
    """Teacher profile with its evaluation aggregate."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    evaluation_count: int = Field(default=0, description="Number of submitted evaluations")
    average_percent: float = Field(default=0, description="Mean of per-evaluation percentages")

    @classmethod
    def from_teacher_model(cls, teacher, evaluation_count: int = 0, average_percent: float = 0) -> "TeacherResponse":
        data = cls.model_validate(teacher).model_dump(exclude={"evaluation_count", "average_percent"})
        return cls(**data, evaluation_count=evaluation_count, average_percent=average_percent)


class TeacherProvisionResponse(BaseModel):
    """Created teacher plus the initial password when the server chose it."""
    teacher: TeacherResponse
    initial_password: Optional[str] = Field(
        None,
        description="Only present when the password was generated; shown once",
    )


class TeacherListResponse(BaseListResponse[TeacherResponse]):
    """Standardized teacher list response."""
    pass


class TeacherFilterParams(PaginationParams):
    """Filter parameters for teacher listing."""
    search: Optional[str] = Field(default=None, description="Search in name")
    department: Optional[str] = Field(default=None, description="Filter by department")
    sort_by: TeacherSortKey = Field(default=TeacherSortKey.NAME, description="Sort field")
    sort_order: str = Field(default="asc", pattern="^(asc|desc)$", description="Sort order")
