"""Dashboard and report schemas."""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from evalboard.models.enums import ReportPeriod
from evalboard.schemas.evaluation import EvaluationListItem


class RankedTeacher(BaseModel):
    """Teacher with its two-stage average, as shown in top lists."""
    teacher_id: int
    name: Optional[str] = None
    subject: Optional[str] = None
    department: Optional[str] = None
    evaluation_count: int = 0
    average_percent: int = Field(..., description="Rounded mean of per-evaluation percentages")


class DashboardResponse(BaseModel):
    """Headline numbers of the dashboard page."""
    total_teachers: int
    completed_evaluations: int
    pending_evaluations: int
    overall_average: int = Field(..., description="Mean of every raw score as a percentage")
    latest_evaluations: List[EvaluationListItem] = Field(default_factory=list)
    top_teachers: List[RankedTeacher] = Field(default_factory=list)


class MonthlyAverage(BaseModel):
    month: int = Field(..., ge=1, le=12)
    average_percent: int
    evaluation_count: int


class GroupAverage(BaseModel):
    name: str
    average_percent: int
    evaluation_count: int


class CategoryAverage(BaseModel):
    key: str
    label: str
    section: str
    average_percent: int


class DepartmentStat(BaseModel):
    """Row of the department statistics table."""
    department: str
    teacher_count: int
    evaluation_count: int
    average_percent: int
    max_percent: int
    min_percent: int


class TeacherDetail(RankedTeacher):
    """Detailed teacher report row with per-category percentages."""
    categories: Dict[str, int] = Field(default_factory=dict)


class ReportResponse(BaseModel):
    """Everything the reports page shows for one department/period filter."""
    period: ReportPeriod
    department: Optional[str] = None
    evaluation_count: int
    top_teachers: List[RankedTeacher] = Field(default_factory=list)
    monthly: List[MonthlyAverage] = Field(default_factory=list)
    departments: List[GroupAverage] = Field(default_factory=list)
    categories: List[CategoryAverage] = Field(default_factory=list)
    department_stats: List[DepartmentStat] = Field(default_factory=list)
    teacher_details: List[TeacherDetail] = Field(default_factory=list)
