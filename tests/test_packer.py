"""Tests for lesson packing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from curriculum.data.models import BlockedDate, BlockedWeek, DateRange, InstructionalPattern, Lesson
from curriculum.exclusions import resolve_weeks
from curriculum.packer import assigned_days, pack_lessons, unassigned_lessons
from curriculum.term_calendar import enumerate_weeks


def make_weeks(start: str, end: str, blocked_dates=(), blocked_weeks=()):
    """Empty WeekPlans for a Sunday-Thursday term."""
    raw = enumerate_weeks(DateRange(start=start, end=end), InstructionalPattern())
    return resolve_weeks(raw, blocked_dates, blocked_weeks)


@pytest.fixture
def one_week():
    """Sun Sep 1 - Thu Sep 5, 2024."""
    return make_weeks("2024-09-01", "2024-09-05")


@pytest.fixture
def two_lessons() -> list[Lesson]:
    return [
        Lesson(id="l1", name="Linear Equations", pacing=2),
        Lesson(id="l2", name="Solving Inequalities", pacing=3),
    ]


class TestPackLessons:
    """Tests for pack_lessons."""

    def test_single_lesson_fills_week(self, one_week):
        packed = pack_lessons(one_week, [Lesson(id="l1", name="Functions", pacing=5)])
        assert [d.lesson_id for d in packed[0].days] == ["l1"] * 5
        assert [d.lesson_name for d in packed[0].days] == ["Functions"] * 5

    def test_lessons_in_order(self, one_week, two_lessons):
        packed = pack_lessons(one_week, two_lessons)
        assert [d.lesson_id for d in packed[0].days] == ["l1", "l1", "l2", "l2", "l2"]

    def test_blocked_day_is_skipped(self, two_lessons):
        weeks = make_weeks("2024-09-01", "2024-09-05", [BlockedDate(date="2024-09-03", label="Sports Day")])
        packed = pack_lessons(weeks, two_lessons)
        assert [d.lesson_id for d in packed[0].days] == ["l1", "l1", None, "l2", "l2"]
        assert packed[0].days[2].block_label == "Sports Day"

    def test_blocked_day_does_not_consume_pacing(self):
        weeks = make_weeks("2024-09-01", "2024-09-05", [BlockedDate(date="2024-09-03")])
        packed = pack_lessons(weeks, [Lesson(id="l1", name="A", pacing=3)])
        assert assigned_days(packed, "l1") == ["2024-09-01", "2024-09-02", "2024-09-04"]

    def test_overflow_leaves_lesson_short(self):
        """Four available days for a five-day lesson."""
        weeks = make_weeks("2024-09-01", "2024-09-05", [BlockedDate(date="2024-09-03")])
        lessons = [Lesson(id="l1", name="A", pacing=5)]
        packed = pack_lessons(weeks, lessons)
        assert len(assigned_days(packed, "l1")) == 4
        assert unassigned_lessons(packed, lessons) == ["l1"]

    def test_later_lessons_get_nothing_on_overflow(self, one_week):
        lessons = [
            Lesson(id="l1", name="A", pacing=4),
            Lesson(id="l2", name="B", pacing=4),
            Lesson(id="l3", name="C", pacing=1),
        ]
        packed = pack_lessons(one_week, lessons)
        assert assigned_days(packed, "l2") == ["2024-09-05"]
        assert assigned_days(packed, "l3") == []
        assert unassigned_lessons(packed, lessons) == ["l2", "l3"]

    def test_days_after_lessons_run_out(self, one_week):
        packed = pack_lessons(one_week, [Lesson(id="l1", name="A", pacing=2)])
        assert [d.lesson_id for d in packed[0].days] == ["l1", "l1", None, None, None]
        assert not any(d.is_assigned for d in packed[0].days[2:])

    def test_no_lessons(self, one_week):
        packed = pack_lessons(one_week, [])
        assert not any(d.is_assigned for d in packed[0].days)

    def test_no_weeks(self, two_lessons):
        assert pack_lessons([], two_lessons) == []

    def test_spans_weeks(self):
        weeks = make_weeks("2024-09-01", "2024-09-12")
        packed = pack_lessons(weeks, [Lesson(id="l1", name="A", pacing=7)])
        assert len(packed[0].available_days) == 5
        assert assigned_days(packed, "l1") == [
            "2024-09-01", "2024-09-02", "2024-09-03", "2024-09-04", "2024-09-05",
            "2024-09-08", "2024-09-09",
        ]

    def test_blocked_week_is_skipped(self):
        weeks = make_weeks(
            "2024-09-01", "2024-09-19",
            blocked_weeks=[BlockedWeek(week_number=2, label="Midterm Break", exclude_from_count=True)],
        )
        packed = pack_lessons(weeks, [Lesson(id="l1", name="A", pacing=6)])
        assert not any(d.is_assigned for d in packed[1].days)
        assert assigned_days(packed, "l1")[-1] == "2024-09-15"

    def test_lesson_ids_per_week(self, one_week, two_lessons):
        packed = pack_lessons(one_week, two_lessons)
        assert packed[0].lesson_ids == ["l1", "l2"]

    def test_week_fields_preserved(self):
        weeks = make_weeks(
            "2024-09-01", "2024-09-19",
            blocked_weeks=[BlockedWeek(week_number=2, label="Midterm Break", exclude_from_count=True)],
        )
        packed = pack_lessons(weeks, [Lesson(id="l1", name="A")])
        for before, after in zip(weeks, packed):
            assert after.week_number == before.week_number
            assert after.display_week_label == before.display_week_label
            assert after.dates == before.dates
            assert after.is_blocked == before.is_blocked
            assert [d.date for d in after.days] == [d.date for d in before.days]


class TestImmutability:
    """Packing never changes its input."""

    def test_input_not_modified(self, one_week, two_lessons):
        snapshot = [w.model_dump() for w in one_week]
        pack_lessons(one_week, two_lessons)
        assert [w.model_dump() for w in one_week] == snapshot

    def test_returns_new_weeks(self, one_week, two_lessons):
        packed = pack_lessons(one_week, two_lessons)
        assert packed[0] is not one_week[0]

    def test_week_plans_are_frozen(self, one_week):
        with pytest.raises(ValidationError):
            one_week[0].week_number = 7
        with pytest.raises(ValidationError):
            one_week[0].days[0].lesson_id = "l1"

    def test_repacking_is_idempotent(self, one_week, two_lessons):
        once = pack_lessons(one_week, two_lessons)
        twice = pack_lessons(once, two_lessons)
        assert twice == once

    def test_repacking_replaces_assignments(self, one_week, two_lessons):
        first = pack_lessons(one_week, two_lessons)
        second = pack_lessons(first, [Lesson(id="x", name="Other", pacing=1)])
        assert [d.lesson_id for d in second[0].days] == ["x", None, None, None, None]
        assert pack_lessons(first, []) == one_week


class TestAssignmentQueries:
    """Tests for assigned_days and unassigned_lessons."""

    def test_unknown_lesson(self, one_week, two_lessons):
        packed = pack_lessons(one_week, two_lessons)
        assert assigned_days(packed, "missing") == []

    def test_all_fit(self, one_week, two_lessons):
        packed = pack_lessons(one_week, two_lessons)
        assert unassigned_lessons(packed, two_lessons) == []
        assert assigned_days(packed, "l2") == ["2024-09-03", "2024-09-04", "2024-09-05"]
