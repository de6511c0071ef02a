"""Teacher profile model; the profile id is the paired user id."""

from typing import List, Optional, TYPE_CHECKING
from datetime import date
from sqlmodel import Field, SQLModel, Relationship, Column
from sqlalchemy import Integer, ForeignKey, Text

from .base import BaseModel

if TYPE_CHECKING:
    from .user import User
    from .evaluation import Evaluation


class Teacher(BaseModel, SQLModel, table=True):
    """Teacher profile, editable by supervisors except for its id."""

    __tablename__ = "teachers"

    id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
            autoincrement=False,
        ),
        description="Same value as the paired users.id",
    )
    name: str = Field(max_length=255, nullable=False, index=True)
    subject: Optional[str] = Field(default=None, max_length=100)
    department: Optional[str] = Field(default=None, max_length=100, index=True)
    email: str = Field(max_length=255, nullable=False)
    phone: Optional[str] = Field(default=None, max_length=50)
    join_date: Optional[date] = Field(default=None)
    birth_date: Optional[date] = Field(default=None)
    experience: Optional[str] = Field(default=None, max_length=100)
    education: Optional[str] = Field(default=None, max_length=255)
    bio: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    user: Optional["User"] = Relationship(back_populates="teacher_profile")
    evaluations: List["Evaluation"] = Relationship(back_populates="teacher")

    def __repr__(self) -> str:
        return f"<Teacher(id={self.id}, name={self.name}, department={self.department})>"
