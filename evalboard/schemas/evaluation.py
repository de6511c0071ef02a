"""Evaluation schemas: score records, the immutable form value and API shapes."""

from typing import Dict, Iterable, List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from evalboard.models.enums import EvaluationSection, EvaluationStatus
from evalboard.schemas.shared import BaseListResponse, PaginationParams
from evalboard.utils.messages import get_message

DEFAULT_SCORE = 3
MIN_SCORE = 1
MAX_SCORE = 5


class ScoreRecord(BaseModel):
    """One category's score and notes."""
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE, description="Raw score on the 1-5 scale")
    notes: str = Field(default="", max_length=1000)


SectionScores = Dict[str, Dict[str, ScoreRecord]]


class EvaluationForm(BaseModel):
    """In-progress evaluation form.

    The form is a value: `with_score`, `with_notes` and `with_final_notes`
    return a new form and leave the original untouched.
    """
    model_config = ConfigDict(frozen=True)

    sections: SectionScores = Field(default_factory=dict)
    final_notes: str = Field(default="", max_length=2000)

    @classmethod
    def initial(cls, categories: Iterable) -> "EvaluationForm":
        """Every active category at the default score with empty notes."""
        sections: SectionScores = {section: {} for section in EvaluationSection.get_all_values()}
        for category in categories:
            if not category.active:
                continue
            sections.setdefault(category.section, {})[category.key] = ScoreRecord(score=DEFAULT_SCORE)
        return cls(sections=sections)

    def _record(self, section: str, key: str) -> ScoreRecord:
        if section not in self.sections:
            raise ValueError(get_message("evaluation", "unknown_section", section=section))
        if key not in self.sections[section]:
            raise ValueError(get_message("evaluation", "unknown_category", category=key, section=section))
        return self.sections[section][key]

    def _replace(self, section: str, key: str, record: ScoreRecord) -> "EvaluationForm":
        sections = {name: dict(records) for name, records in self.sections.items()}
        sections[section][key] = record
        return EvaluationForm(sections=sections, final_notes=self.final_notes)

    def with_score(self, section: str, key: str, score: int) -> "EvaluationForm":
        current = self._record(section, key)
        return self._replace(section, key, ScoreRecord(score=score, notes=current.notes))

    def with_notes(self, section: str, key: str, notes: str) -> "EvaluationForm":
        current = self._record(section, key)
        return self._replace(section, key, ScoreRecord(score=current.score, notes=notes))

    def with_final_notes(self, notes: str) -> "EvaluationForm":
        return EvaluationForm(sections=self.sections, final_notes=notes)

    def scores(self) -> List[int]:
        return [record.score for records in self.sections.values() for record in records.values()]

    def to_storage(self) -> Dict[str, Dict[str, Dict]]:
        """Plain nested dicts for the JSON column."""
        return {
            section: {key: record.model_dump() for key, record in records.items()}
            for section, records in self.sections.items()
        }


# ===== REQUEST SCHEMAS =====

class EvaluationCreate(BaseModel):
    """Completed (or draft) form for one teacher."""
    teacher_id: int = Field(..., description="ID of teacher being evaluated")
    sections: SectionScores = Field(..., description="section -> category key -> {score, notes}")
    final_notes: Optional[str] = Field(None, max_length=2000, description="Final evaluation summary notes")
    status: EvaluationStatus = Field(default=EvaluationStatus.SUBMITTED)

    def to_form(self) -> EvaluationForm:
        return EvaluationForm(sections=self.sections, final_notes=self.final_notes or "")


class EvaluationFilterParams(PaginationParams):
    """Filter parameters for evaluation listing."""
    department: Optional[str] = Field(default=None, description="Filter by teacher department")
    teacher_id: Optional[int] = Field(default=None, description="Filter by teacher")
    min_percent: Optional[int] = Field(default=None, ge=0, le=100, description="Minimum average percent")
    search: Optional[str] = Field(default=None, description="Search in teacher name")
    status: Optional[EvaluationStatus] = Field(default=None, description="Filter by status")


# ===== RESPONSE SCHEMAS =====

class EvaluationListItem(BaseModel):
    """Row of the evaluation list."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    teacher_id: Optional[int] = None
    teacher_name: Optional[str] = None
    department: Optional[str] = None
    evaluator_id: Optional[int] = None
    status: EvaluationStatus
    created_at: datetime
    average_percent: int = Field(..., description="Mean raw score of the evaluation as a percentage")


class EvaluationResponse(EvaluationListItem):
    """Full evaluation with every score record."""
    sections: SectionScores
    final_notes: Optional[str] = None


class EvaluationListResponse(BaseListResponse[EvaluationListItem]):
    """Standardized evaluation list response."""
    pass


class CategoryInfo(BaseModel):
    key: str
    label: str
    description: str = ""
    weight: float = 1.0


class SectionTemplate(BaseModel):
    """Category metadata of one form section."""
    section: EvaluationSection
    title: str
    categories: List[CategoryInfo]


class FormTemplateResponse(BaseModel):
    """What the client needs to render a fresh evaluation form."""
    sections: List[SectionTemplate]
    form: EvaluationForm
    min_score: int = MIN_SCORE
    max_score: int = MAX_SCORE
