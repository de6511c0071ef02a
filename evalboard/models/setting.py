"""Key/value settings documents (general, evaluation, notifications)."""

from typing import Any, Dict
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import JSON

from .base import BaseModel


class Setting(BaseModel, SQLModel, table=True):
    """One settings document, merged on write."""

    __tablename__ = "settings"

    key: str = Field(primary_key=True, max_length=50)
    value: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    def merge(self, values: Dict[str, Any]) -> None:
        """Update-merge semantics: given keys replace, others are kept."""
        merged = dict(self.value or {})
        merged.update(values)
        self.value = merged
        self.touch()

    def __repr__(self) -> str:
        return f"<Setting(key={self.key})>"
