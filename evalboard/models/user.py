"""Identity and role record, one per authenticated principal."""

from typing import Optional, TYPE_CHECKING
from datetime import datetime
from sqlmodel import Field, SQLModel, Column, Relationship
from sqlalchemy import DateTime, Enum as SQLEnum

from .base import BaseModel
from .enums import UserRole, UserStatus

if TYPE_CHECKING:
    from .teacher import Teacher


class User(BaseModel, SQLModel, table=True):
    """Identity record carrying exactly one role."""

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(max_length=255, unique=True, nullable=False, index=True)
    password: str = Field(nullable=False, description="Hashed password")
    name: Optional[str] = Field(default=None, max_length=255)

    role: UserRole = Field(
        sa_column=Column(SQLEnum(UserRole, name="user_role"), nullable=False, index=True),
        description="supervisor or teacher"
    )
    status: UserStatus = Field(
        default=UserStatus.ACTIVE,
        sa_column=Column(SQLEnum(UserStatus, name="user_status"), nullable=False, default=UserStatus.ACTIVE),
    )
    last_login_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    teacher_profile: Optional["Teacher"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"uselist": False},
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"

    @property
    def display_name(self) -> str:
        return self.name or self.email

    def is_active(self) -> bool:
        """Check if user is active."""
        return self.status == UserStatus.ACTIVE

    def is_supervisor(self) -> bool:
        return self.role == UserRole.SUPERVISOR
