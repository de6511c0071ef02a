"""Base model with timestamp columns shared by every table."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(SQLModel):
    """Common columns: creation and last update timestamps."""

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), nullable=False)
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    def touch(self) -> None:
        """Mark the row as updated now."""
        self.updated_at = utc_now()
