"""Evaluation scoring and aggregation.

Pure functions over evaluation rows (anything with `sections`, `teacher_id`
and `created_at` attributes). Raw scores are on a 1-5 scale and are reported
as percentages (raw x 20).

Two aggregation shapes are used on purpose:

* teacher, department and month aggregates are two-stage: each evaluation is
  reduced to its own percentage first, then those percentages are averaged;
* category aggregates are single-stage: every raw score of the category is
  converted and averaged directly.

Empty input never raises; it yields 0 or an empty mapping.
"""

import math
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, Tuple

from evalboard.core.exceptions import AggregationDataError
from evalboard.models.enums import ReportPeriod

PERCENT_PER_POINT = 20
UNASSIGNED = "unassigned"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negative input."""
    return int(math.floor(value + 0.5))


def to_percent(raw: float) -> int:
    return round_half_up(raw * PERCENT_PER_POINT)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def flatten_scores(evaluation: Any) -> List[int]:
    """Every raw score of an evaluation, in section order."""
    sections = getattr(evaluation, "sections", None)
    if sections is None:
        return []
    if not isinstance(sections, Mapping):
        raise AggregationDataError()

    scores = []
    for records in sections.values():
        if not isinstance(records, Mapping):
            raise AggregationDataError()
        for record in records.values():
            scores.append(_score_of(record))
    return scores


def _score_of(record: Any) -> int:
    if isinstance(record, Mapping):
        score = record.get("score")
    else:
        score = getattr(record, "score", None)
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise AggregationDataError()
    return score


def average_percent(evaluation: Any) -> int:
    """Mean raw score of one evaluation as a percentage; 0 when it has no scores."""
    scores = flatten_scores(evaluation)
    if not scores:
        return 0
    return to_percent(_mean(scores))


def _group_percents(
    evaluations: Iterable[Any],
    key_fn: Callable[[Any], Optional[Hashable]],
    missing_key: Hashable = UNASSIGNED,
) -> Dict[Hashable, List[int]]:
    groups: Dict[Hashable, List[int]] = {}
    for evaluation in evaluations:
        key = key_fn(evaluation)
        if key is None:
            key = missing_key
        groups.setdefault(key, []).append(average_percent(evaluation))
    return groups


def group_average(
    evaluations: Iterable[Any],
    key_fn: Callable[[Any], Optional[Hashable]],
    missing_key: Hashable = UNASSIGNED,
) -> Dict[Hashable, float]:
    """Two-stage mean of per-evaluation percentages per group.

    Groups keep the order in which their key first appears. The means are not
    rounded; callers round for display.
    """
    return {
        key: _mean(percents)
        for key, percents in _group_percents(evaluations, key_fn, missing_key).items()
    }


def group_counts(
    evaluations: Iterable[Any],
    key_fn: Callable[[Any], Optional[Hashable]],
    missing_key: Hashable = UNASSIGNED,
) -> Dict[Hashable, int]:
    """Number of evaluations per group, in the same order as group_average."""
    return {
        key: len(percents)
        for key, percents in _group_percents(evaluations, key_fn, missing_key).items()
    }


def rank(group_averages: Mapping[Hashable, float], n: int) -> List[Tuple[Hashable, float]]:
    """Top-n groups by value, highest first; ties keep their input order."""
    if n <= 0:
        return []
    return sorted(group_averages.items(), key=lambda item: item[1], reverse=True)[:n]


def category_averages(evaluations: Iterable[Any], categories: Iterable[Any]) -> Dict[str, int]:
    """Single-stage mean percentage per category; 0 for categories without scores."""
    evaluations = list(evaluations)
    result: Dict[str, int] = {}
    for category in categories:
        percents = []
        for evaluation in evaluations:
            record = (evaluation.sections or {}).get(category.section, {}).get(category.key)
            if record is not None:
                percents.append(to_percent(_score_of(record)))
        result[category.key] = round_half_up(_mean(percents)) if percents else 0
    return result


def overall_average(evaluations: Iterable[Any]) -> int:
    """Mean of every raw score across all evaluations, as a percentage."""
    scores = [score for evaluation in evaluations for score in flatten_scores(evaluation)]
    if not scores:
        return 0
    return to_percent(_mean(scores))


def by_teacher(evaluation: Any) -> Hashable:
    return evaluation.teacher_id


def by_month(evaluation: Any) -> int:
    return (evaluation.created_at or datetime.now(timezone.utc)).month


def by_department(teachers_by_id: Mapping[Any, Any]) -> Callable[[Any], Optional[str]]:
    """Key function mapping an evaluation to its teacher's department."""

    def _key(evaluation: Any) -> Optional[str]:
        teacher = teachers_by_id.get(evaluation.teacher_id)
        return getattr(teacher, "department", None) or None

    return _key


def monthly_averages(evaluations: Iterable[Any]) -> Dict[int, float]:
    """Two-stage mean per calendar month (1-12), ordered by month."""
    averages = group_average(evaluations, by_month)
    return {month: averages[month] for month in sorted(averages)}


def teacher_category_breakdown(
    evaluations: Iterable[Any], categories: Iterable[Any]
) -> Dict[Hashable, Dict[str, int]]:
    """Per teacher, the single-stage percentage of every category."""
    categories = list(categories)
    per_teacher: Dict[Hashable, List[Any]] = {}
    for evaluation in evaluations:
        per_teacher.setdefault(evaluation.teacher_id, []).append(evaluation)
    return {
        teacher_id: category_averages(rows, categories)
        for teacher_id, rows in per_teacher.items()
    }


def department_stats(
    teacher_averages: Mapping[Hashable, float],
    teachers: Iterable[Any],
    department_averages: Mapping[Hashable, float],
    department_counts: Mapping[Hashable, int],
    missing_key: Hashable = UNASSIGNED,
) -> List[Dict[str, Any]]:
    """Department table: teacher count, evaluation count, average and teacher spread."""
    teachers = list(teachers)
    rows = []
    for department, average in department_averages.items():
        members = [t for t in teachers if (t.department or missing_key) == department]
        member_averages = [
            teacher_averages[t.id] for t in members if t.id in teacher_averages
        ]
        rows.append({
            "department": department,
            "teacher_count": len(members),
            "evaluation_count": department_counts.get(department, 0),
            "average_percent": round_half_up(average),
            "max_percent": round_half_up(max(member_averages)) if member_averages else 0,
            "min_percent": round_half_up(min(member_averages)) if member_averages else 0,
        })
    return rows


def filter_by_period(
    evaluations: Iterable[Any], period: ReportPeriod, now: Optional[datetime] = None
) -> List[Any]:
    """Keep evaluations created inside the period, relative to `now`."""
    now = now or datetime.now(timezone.utc)
    this_year = now.year

    def _keep(evaluation: Any) -> bool:
        created = evaluation.created_at or now
        if period == ReportPeriod.CURRENT:
            return created.year == this_year
        if period == ReportPeriod.PREVIOUS:
            return created.year == this_year - 1
        if period == ReportPeriod.SEMESTER1:
            return created.year == this_year and created.month <= 6
        if period == ReportPeriod.SEMESTER2:
            return created.year == this_year and created.month >= 7
        return True

    return [evaluation for evaluation in evaluations if _keep(evaluation)]


def filter_by_department(
    evaluations: Iterable[Any], teachers_by_id: Mapping[Any, Any], department: Optional[str]
) -> List[Any]:
    """Keep evaluations whose teacher belongs to `department`; None keeps all."""
    if not department:
        return list(evaluations)
    key_fn = by_department(teachers_by_id)
    return [evaluation for evaluation in evaluations if key_fn(evaluation) == department]
