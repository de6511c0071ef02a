# tests/test_aggregator.py

"""
Aggregator Tests - percent conversion, two-stage and single-stage averages,
ranking and report filters.
"""

from datetime import datetime
from types import SimpleNamespace

import pytest

from evalboard.core.exceptions import AggregationDataError
from evalboard.models.enums import ReportPeriod
from evalboard.services import aggregator
from evalboard.utils.categories import Category


def make_eval(teacher_id, scores, created_at=None, section="classroom"):
    """Evaluation row with the given raw scores under one section."""
    records = {f"c{i}": {"score": score, "notes": ""} for i, score in enumerate(scores)}
    return SimpleNamespace(
        teacher_id=teacher_id,
        sections={section: records},
        created_at=created_at or datetime(2026, 3, 1),
    )


def make_teacher(teacher_id, department):
    return SimpleNamespace(id=teacher_id, department=department, name=f"T{teacher_id}", subject=None)


# =============================================================================
# ROUNDING AND PERCENT
# =============================================================================

class TestPercent:

    def test_round_half_up(self):
        assert aggregator.round_half_up(72.5) == 73
        assert aggregator.round_half_up(72.4999) == 72
        assert aggregator.round_half_up(0.5) == 1
        assert aggregator.round_half_up(0) == 0

    def test_to_percent_scale(self):
        assert aggregator.to_percent(1) == 20
        assert aggregator.to_percent(5) == 100
        assert aggregator.to_percent(3.5) == 70

    def test_average_percent_of_one_evaluation(self):
        assert aggregator.average_percent(make_eval(1, [5, 4, 3])) == 80

    def test_average_percent_empty_is_zero(self):
        assert aggregator.average_percent(SimpleNamespace(sections={})) == 0
        assert aggregator.average_percent(SimpleNamespace(sections=None)) == 0

    def test_average_percent_stays_in_range(self):
        for scores in ([1], [5], [1, 5], [2, 2, 3, 4, 5]):
            assert 20 <= aggregator.average_percent(make_eval(1, scores)) <= 100

    def test_malformed_sections_raise(self):
        with pytest.raises(AggregationDataError):
            aggregator.flatten_scores(SimpleNamespace(sections=["not", "a", "mapping"]))
        with pytest.raises(AggregationDataError):
            aggregator.flatten_scores(SimpleNamespace(sections={"classroom": {"prep": {"score": "high"}}}))


# =============================================================================
# GROUPING
# =============================================================================

class TestGroupAverage:

    def test_two_stage_not_flat(self):
        """Teacher with a long and a short evaluation: each evaluation counts once."""
        evaluations = [make_eval(1, [5] * 10), make_eval(1, [1])]
        averages = aggregator.group_average(evaluations, aggregator.by_teacher)
        assert averages[1] == 60.0
        assert aggregator.overall_average(evaluations) == aggregator.to_percent(51 / 11)

    def test_groups_keep_first_appearance_order(self):
        evaluations = [make_eval(2, [3]), make_eval(1, [4]), make_eval(2, [5])]
        averages = aggregator.group_average(evaluations, aggregator.by_teacher)
        assert list(averages) == [2, 1]
        assert averages[2] == 80.0

    def test_missing_key_goes_to_unassigned(self):
        teachers = {1: make_teacher(1, None), 2: make_teacher(2, "Sciences")}
        evaluations = [make_eval(1, [3]), make_eval(2, [5]), make_eval(3, [1])]
        averages = aggregator.group_average(evaluations, aggregator.by_department(teachers))
        assert set(averages) == {"unassigned", "Sciences"}
        assert averages["unassigned"] == 40.0

    def test_counts_match_groups(self):
        evaluations = [make_eval(1, [3]), make_eval(1, [4]), make_eval(2, [5])]
        counts = aggregator.group_counts(evaluations, aggregator.by_teacher)
        assert counts == {1: 2, 2: 1}

    def test_empty_input(self):
        assert aggregator.group_average([], aggregator.by_teacher) == {}
        assert aggregator.overall_average([]) == 0
        assert aggregator.monthly_averages([]) == {}


class TestRank:

    def test_highest_first_and_truncated(self):
        ranked = aggregator.rank({"a": 50.0, "b": 90.0, "c": 70.0}, 2)
        assert ranked == [("b", 90.0), ("c", 70.0)]

    def test_ties_keep_input_order(self):
        ranked = aggregator.rank({"x": 80.0, "y": 80.0, "z": 80.0}, 3)
        assert [key for key, _ in ranked] == ["x", "y", "z"]

    def test_non_positive_n(self):
        assert aggregator.rank({"a": 1.0}, 0) == []


class TestWorkedExamples:
    """Literal cases for the averaging and ranking rules."""

    def test_mixed_scores_average_to_seventy(self):
        assert aggregator.average_percent(make_eval(1, [3, 4, 5, 2])) == 70

    def test_eighty_and_sixty_average_to_seventy(self):
        # 80% over four categories and 60% over two: each evaluation counts once
        evaluations = [make_eval("T", [4, 4, 4, 4]), make_eval("T", [3, 3])]
        assert [aggregator.average_percent(e) for e in evaluations] == [80, 60]
        assert aggregator.group_average(evaluations, aggregator.by_teacher) == {"T": 70.0}

    def test_top_two_of_three_teachers(self):
        assert aggregator.rank({"T": 60, "U": 90, "V": 40}, 2) == [("U", 90), ("T", 60)]

    def test_full_and_minimum_marks_rank_between_peers(self):
        evaluations = [
            make_eval("T", [5, 5, 5]),
            make_eval("T", [1, 1, 1]),
            make_eval("U", [5, 4, 5, 4, 4, 5, 5, 4, 4, 5]),
            make_eval("V", [2, 2]),
        ]
        averages = aggregator.group_average(evaluations, aggregator.by_teacher)
        assert averages["T"] == 60.0
        assert [key for key, _ in aggregator.rank(averages, 2)] == ["U", "T"]

    def test_evaluation_of_deleted_teacher_is_unassigned(self):
        evaluations = [make_eval(None, [5]), make_eval(1, [3])]
        assert aggregator.group_average(evaluations, aggregator.by_teacher) == {"unassigned": 100.0, 1: 60.0}


# =============================================================================
# CATEGORIES AND MONTHS
# =============================================================================

class TestCategoryAverages:

    def test_single_stage_per_category(self):
        categories = [Category("c0", "First", "classroom"), Category("c1", "Second", "classroom")]
        evaluations = [make_eval(1, [5, 1]), make_eval(2, [4])]
        result = aggregator.category_averages(evaluations, categories)
        assert result == {"c0": 90, "c1": 20}

    def test_category_without_scores_is_zero(self):
        categories = [Category("missing", "Missing", "student")]
        assert aggregator.category_averages([make_eval(1, [5])], categories) == {"missing": 0}

    def test_teacher_breakdown(self):
        categories = [Category("c0", "First", "classroom")]
        evaluations = [make_eval(1, [5]), make_eval(1, [3]), make_eval(2, [1])]
        breakdown = aggregator.teacher_category_breakdown(evaluations, categories)
        assert breakdown == {1: {"c0": 80}, 2: {"c0": 20}}


class TestMonthly:

    def test_sorted_by_month(self):
        evaluations = [
            make_eval(1, [5], datetime(2026, 9, 1)),
            make_eval(1, [3], datetime(2026, 2, 1)),
            make_eval(2, [4], datetime(2026, 9, 15)),
        ]
        averages = aggregator.monthly_averages(evaluations)
        assert list(averages) == [2, 9]
        assert averages[9] == 90.0


# =============================================================================
# FILTERS AND DEPARTMENT TABLE
# =============================================================================

class TestFilters:

    NOW = datetime(2026, 10, 19)

    def _rows(self):
        return [
            make_eval(1, [3], datetime(2026, 2, 1)),
            make_eval(1, [3], datetime(2026, 8, 1)),
            make_eval(1, [3], datetime(2025, 5, 1)),
        ]

    @pytest.mark.parametrize("period,expected", [
        (ReportPeriod.CURRENT, 2),
        (ReportPeriod.PREVIOUS, 1),
        (ReportPeriod.SEMESTER1, 1),
        (ReportPeriod.SEMESTER2, 1),
        (ReportPeriod.ALL, 3),
    ])
    def test_period(self, period, expected):
        assert len(aggregator.filter_by_period(self._rows(), period, self.NOW)) == expected

    def test_department(self):
        teachers = {1: make_teacher(1, "Sciences"), 2: make_teacher(2, "Languages")}
        rows = [make_eval(1, [3]), make_eval(2, [3])]
        kept = aggregator.filter_by_department(rows, teachers, "Languages")
        assert [row.teacher_id for row in kept] == [2]
        assert len(aggregator.filter_by_department(rows, teachers, None)) == 2

    def test_department_stats(self):
        teachers = [make_teacher(1, "Sciences"), make_teacher(2, "Sciences"), make_teacher(3, "Languages")]
        teachers_by_id = {t.id: t for t in teachers}
        rows = [make_eval(1, [5]), make_eval(2, [3]), make_eval(3, [4])]
        key_fn = aggregator.by_department(teachers_by_id)

        stats = aggregator.department_stats(
            aggregator.group_average(rows, aggregator.by_teacher),
            teachers,
            aggregator.group_average(rows, key_fn),
            aggregator.group_counts(rows, key_fn),
        )
        sciences = next(row for row in stats if row["department"] == "Sciences")
        assert sciences == {
            "department": "Sciences",
            "teacher_count": 2,
            "evaluation_count": 2,
            "average_percent": 80,
            "max_percent": 100,
            "min_percent": 60,
        }
