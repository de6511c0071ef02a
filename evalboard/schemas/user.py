"""User, authentication and page access schemas."""

from typing import List, Optional
from pydantic import BaseModel, EmailStr, ConfigDict, field_validator, Field
from datetime import date, datetime

from evalboard.core.config import settings
from evalboard.models.enums import UserStatus, UserRole


# ===== REQUEST SCHEMAS =====

class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr = Field(..., description="Email for login")
    password: str = Field(..., min_length=1)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, email: str) -> str:
        return email.lower().strip()


class UserSignup(BaseModel):
    """Self sign-up; always creates a teacher account with its profile."""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=settings.PASSWORD_MIN_LENGTH, max_length=128)
    name: str = Field(..., min_length=1, max_length=255)
    subject: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    birth_date: Optional[date] = None

    @field_validator('email')
    @classmethod
    def normalize_email(cls, email: str) -> str:
        return email.lower().strip()


# ===== RESPONSE SCHEMAS =====

class UserResponse(BaseModel):
    """Schema for user response."""
    id: int
    email: str
    name: Optional[str] = None
    role: UserRole
    status: UserStatus
    last_login_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    display_name: str = Field(..., description="Name, or email when no name is set")

    @classmethod
    def from_user_model(cls, user) -> "UserResponse":
        """Create UserResponse from User model."""
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            status=user.status,
            last_login_at=user.last_login_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
            display_name=user.display_name,
        )

    model_config = ConfigDict(from_attributes=True)


class SupervisorSummary(BaseModel):
    """Row of the supervisor list on the settings page."""
    id: int
    email: str
    name: Optional[str] = None
    status: UserStatus
    last_login_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    """Schema for token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token expiry in seconds")
    user: UserResponse


class PageAccessResponse(BaseModel):
    """Result of the page access gate for one page."""
    state: str = Field(..., description="checking_auth, allowed, denied or unauthenticated")
    redirect_to: Optional[str] = Field(None, description="Where the client should navigate, if anywhere")
    role: Optional[UserRole] = None
    required_roles: List[UserRole] = Field(default_factory=list)
