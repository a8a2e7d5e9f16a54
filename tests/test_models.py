"""Tests for Pydantic input models."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from curriculum.data.models import (
    BlockedDate,
    BlockedWeek,
    BlockType,
    DateRange,
    InstructionalPattern,
    Lesson,
    PlanInput,
    PlannerConfig,
    Weekday,
    day_name,
    parse_calendar_date,
    short_date,
)


class TestDateHelpers:
    """Tests for date parsing and formatting helpers."""

    def test_parse_plain_date(self):
        assert parse_calendar_date("2024-09-03") == date(2024, 9, 3)

    def test_parse_iso_datetime_ignores_time(self):
        assert parse_calendar_date("2024-09-03T00:00:00.000Z") == date(2024, 9, 3)
        assert parse_calendar_date("2024-09-03T23:59:00+05:00") == date(2024, 9, 3)

    def test_parse_date_objects(self):
        assert parse_calendar_date(date(2024, 9, 3)) == date(2024, 9, 3)
        assert parse_calendar_date(datetime(2024, 9, 3, 14, 30)) == date(2024, 9, 3)

    def test_unparseable_values(self):
        assert parse_calendar_date("") is None
        assert parse_calendar_date("not a date") is None
        assert parse_calendar_date("2024-13-45") is None
        assert parse_calendar_date(None) is None
        assert parse_calendar_date(20240903) is None

    def test_day_name(self):
        assert day_name(date(2024, 9, 1)) == "Sunday"
        assert day_name(date(2024, 9, 5)) == "Thursday"

    def test_short_date(self):
        assert short_date(date(2024, 9, 1)) == "Sep 1"
        assert short_date(date(2024, 12, 25)) == "Dec 25"


class TestInstructionalPattern:
    """Tests for InstructionalPattern model."""

    def test_default_is_sunday_to_thursday(self):
        pattern = InstructionalPattern()
        assert pattern.days == [
            Weekday.SUNDAY,
            Weekday.MONDAY,
            Weekday.TUESDAY,
            Weekday.WEDNESDAY,
            Weekday.THURSDAY,
        ]
        assert pattern.first_day == Weekday.SUNDAY
        assert pattern.size == 5

    def test_matches(self):
        pattern = InstructionalPattern()
        assert pattern.matches(date(2024, 9, 1))  # Sunday
        assert pattern.matches(date(2024, 9, 5))  # Thursday
        assert not pattern.matches(date(2024, 9, 6))  # Friday
        assert not pattern.matches(date(2024, 9, 7))  # Saturday

    def test_day_names_accepted(self):
        pattern = InstructionalPattern(days=["monday", "Tuesday", "WEDNESDAY"])
        assert pattern.days == [Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY]

    def test_empty_pattern_rejected(self):
        with pytest.raises(ValueError):
            InstructionalPattern(days=[])

    def test_duplicate_days_rejected(self):
        with pytest.raises(ValueError, match="Duplicate weekdays"):
            InstructionalPattern(days=[0, 1, 0])

    def test_invalid_day_rejected(self):
        with pytest.raises(ValueError):
            InstructionalPattern(days=[7])

    def test_str(self):
        assert str(InstructionalPattern()) == "Sun, Mon, Tue, Wed, Thu"


class TestDateRange:
    """Tests for DateRange model."""

    def test_valid_bounds(self):
        date_range = DateRange(start="2024-09-01", end="2024-09-05")
        assert date_range.bounds() == (date(2024, 9, 1), date(2024, 9, 5))

    def test_single_day(self):
        date_range = DateRange(start="2024-09-01", end="2024-09-01")
        assert date_range.bounds() == (date(2024, 9, 1), date(2024, 9, 1))

    def test_date_objects(self):
        date_range = DateRange(start=date(2024, 9, 1), end=date(2024, 9, 5))
        assert date_range.bounds() == (date(2024, 9, 1), date(2024, 9, 5))

    def test_inverted_range(self):
        assert DateRange(start="2024-09-05", end="2024-09-01").bounds() is None

    def test_unparseable_range(self):
        assert DateRange(start="garbage", end="2024-09-01").bounds() is None
        assert DateRange(start="2024-09-01", end="").bounds() is None


class TestExclusions:
    """Tests for BlockedDate and BlockedWeek models."""

    def test_blocked_date_type_alias(self):
        record = BlockedDate.model_validate({"date": "2024-09-03", "label": "Sports Day", "type": "Event"})
        assert record.category == BlockType.EVENT
        assert record.calendar_date == date(2024, 9, 3)

    def test_blocked_date_keeps_bad_date(self):
        record = BlockedDate(date="sometime", label="Unknown")
        assert record.calendar_date is None

    def test_blocked_date_from_date_object(self):
        record = BlockedDate(date=date(2024, 9, 3))
        assert record.date == "2024-09-03"

    def test_blocked_date_ignores_extra_fields(self):
        record = BlockedDate.model_validate({"date": "2024-09-03", "label": "x", "id": 12})
        assert record.label == "x"

    def test_invalid_category(self):
        with pytest.raises(ValueError):
            BlockedDate(date="2024-09-03", category="Party")

    def test_blocked_week_defaults(self):
        record = BlockedWeek(week_number=3)
        assert record.exclude_from_count is False
        assert record.category == BlockType.HOLIDAY
        assert str(record) == "Week 3: Holiday"

    def test_blocked_week_out_of_range_allowed(self):
        assert BlockedWeek(week_number=0).week_number == 0
        assert BlockedWeek(week_number=99).week_number == 99


class TestLesson:
    """Tests for Lesson model."""

    def test_minimal_lesson(self):
        lesson = Lesson(id="l1", name="Linear Equations")
        assert lesson.pacing == 1
        assert lesson.standard == ""

    def test_ccss_alias(self):
        lesson = Lesson.model_validate({
            "id": "l1",
            "name": "Linear Equations",
            "ccss": "CCSS.MATH.CONTENT.HSA.REI.B.3",
            "pacing": 2,
        })
        assert lesson.standard == "CCSS.MATH.CONTENT.HSA.REI.B.3"

    def test_pacing_must_be_positive(self):
        with pytest.raises(ValueError):
            Lesson(id="l1", name="Test", pacing=0)

    def test_empty_id_rejected(self):
        with pytest.raises(ValueError):
            Lesson(id="", name="Test")


class TestPlanInput:
    """Tests for the complete PlanInput model."""

    def test_minimal_input(self):
        plan = PlanInput(date_range=DateRange(start="2024-09-01", end="2024-09-05"))
        assert plan.lessons == []
        assert plan.pattern.size == 5
        assert plan.config.break_label == "Holiday Break"

    def test_total_pacing(self):
        plan = PlanInput(
            date_range=DateRange(start="2024-09-01", end="2024-09-05"),
            lessons=[
                Lesson(id="l1", name="A", pacing=2),
                Lesson(id="l2", name="B", pacing=3),
            ],
        )
        assert plan.total_pacing == 5
        assert plan.get_lesson("l2").name == "B"
        assert plan.get_lesson("missing") is None

    def test_duplicate_lesson_ids(self):
        with pytest.raises(ValueError, match="Duplicate lesson ID"):
            PlanInput(
                date_range=DateRange(start="2024-09-01", end="2024-09-05"),
                lessons=[
                    Lesson(id="l1", name="A"),
                    Lesson(id="l1", name="B"),
                ],
            )

    def test_pattern_as_list(self):
        config = PlannerConfig.model_validate({"pattern": [0, 1, 2, 3, 4]})
        assert config.pattern.first_day == Weekday.MONDAY

    def test_summary(self):
        plan = PlanInput(
            date_range=DateRange(start="2024-09-01", end="2024-09-05"),
            blocked_weeks=[BlockedWeek(week_number=1)],
        )
        summary = plan.summary()
        assert summary["start"] == "2024-09-01"
        assert summary["blocked_weeks"] == 1
        assert summary["pattern"] == "Sun, Mon, Tue, Wed, Thu"
