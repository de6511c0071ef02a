"""Evaluation category catalogue.

The active catalogue lives in the `evaluation` settings document. When that
document is missing or empty, the seed list below is used.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Optional

from evalboard.models.enums import EvaluationSection


@dataclass(frozen=True)
class Category:
    key: str
    label: str
    section: str
    description: str = ""
    weight: float = 1.0
    active: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        return cls(
            key=data["key"],
            label=data.get("label") or data["key"],
            section=data["section"],
            description=data.get("description") or "",
            weight=float(data.get("weight", 1.0)),
            active=bool(data.get("active", True)),
        )


DEFAULT_CATEGORIES: List[Category] = [
    # Classroom observation
    Category("preparation", "Lesson preparation and planning", "classroom",
             "How well the teacher prepares and plans the lesson"),
    Category("delivery", "Lesson delivery", "classroom",
             "Clarity of explanation and sequencing of ideas"),
    Category("engagement", "Student engagement", "classroom",
             "How far students take part in and interact with the lesson"),
    Category("time", "Class time management", "classroom",
             "Use of the available class time"),
    # Student impact
    Category("understanding", "Subject understanding", "student",
             "How well students understand the material presented"),
    Category("feedback", "Feedback", "student",
             "Giving students appropriate feedback"),
    Category("assessment", "Assessment methods", "student",
             "Variety of the methods used to assess students"),
    # Professional conduct
    Category("knowledge", "Subject knowledge", "professional",
             "The teacher's command of the subject taught"),
    Category("development", "Professional development", "professional",
             "Ongoing effort towards professional development"),
    Category("collaboration", "Collaboration with colleagues", "professional",
             "Level of cooperation with colleagues and administration"),
]


def default_category_dicts() -> List[Dict[str, Any]]:
    return [category.to_dict() for category in DEFAULT_CATEGORIES]


def load_categories(stored: Optional[Iterable[Dict[str, Any]]]) -> List[Category]:
    """Build the catalogue from a stored settings list, falling back to the seed."""
    if not stored:
        return list(DEFAULT_CATEGORIES)
    return [Category.from_dict(item) for item in stored]


def active_categories(categories: Iterable[Category]) -> List[Category]:
    return [category for category in categories if category.active]


def group_by_section(categories: Iterable[Category]) -> Dict[str, List[Category]]:
    """Categories per section, in section order and catalogue order within it."""
    grouped: Dict[str, List[Category]] = {
        section: [] for section in EvaluationSection.get_all_values()
    }
    for category in categories:
        grouped.setdefault(category.section, []).append(category)
    return grouped
