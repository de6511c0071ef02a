"""Evaluation model: one completed (or draft) scoring form for one teacher."""

from typing import Any, Dict, Optional, TYPE_CHECKING
from sqlmodel import Field, SQLModel, Relationship, Column
from sqlalchemy import JSON, Integer, ForeignKey, Enum as SQLEnum, Text

from .base import BaseModel
from .enums import EvaluationStatus

if TYPE_CHECKING:
    from .teacher import Teacher


class Evaluation(BaseModel, SQLModel, table=True):
    """Evaluation with nested section -> category -> {score, notes} scores.

    Rows are written once and never updated in place; `created_at` is set by
    the server at insert time.
    """

    __tablename__ = "evaluations"

    id: Optional[int] = Field(default=None, primary_key=True)
    teacher_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("teachers.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        description="NULL once the teacher is deleted; the evaluation is kept",
    )
    evaluator_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
    )
    status: EvaluationStatus = Field(
        default=EvaluationStatus.SUBMITTED,
        sa_column=Column(
            SQLEnum(EvaluationStatus, name="evaluation_status"),
            nullable=False,
            default=EvaluationStatus.SUBMITTED,
            index=True,
        ),
    )
    sections: Dict[str, Dict[str, Dict[str, Any]]] = Field(
        sa_column=Column(JSON, nullable=False),
        description="section -> category key -> {score, notes}",
    )
    final_notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    teacher: Optional["Teacher"] = Relationship(back_populates="evaluations")

    def __repr__(self) -> str:
        return f"<Evaluation(id={self.id}, teacher_id={self.teacher_id}, status={self.status})>"
