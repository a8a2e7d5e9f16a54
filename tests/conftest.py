"""Shared fixtures."""

from __future__ import annotations

import sys

import pytest
from loguru import logger

from curriculum.data.models import (
    AcademicInfo,
    BlockedDate,
    BlockedWeek,
    DateRange,
    Lesson,
    PlanInput,
)


@pytest.fixture(autouse=True)
def reset_logger():
    """CLI runs rebind the sink to a captured stream; restore stderr afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture
def sample_plan() -> PlanInput:
    """Three raw weeks, Sun Sep 1 - Thu Sep 19, 2024, with a midterm break."""
    return PlanInput(
        academic=AcademicInfo(course_name="Algebra I", grade_level="Grade 9"),
        date_range=DateRange(start="2024-09-01", end="2024-09-19"),
        blocked_dates=[BlockedDate(date="2024-09-03", label="Sports Day")],
        blocked_weeks=[BlockedWeek(week_number=2, label="Midterm Break", exclude_from_count=True)],
        lessons=[
            Lesson(id="l1", name="Linear Equations", standard="HSA.REI.B.3", pacing=2),
            Lesson(id="l2", name="Solving Inequalities", standard="HSA.REI.B.3", pacing=3),
            Lesson(id="l3", name="Systems of Equations", standard="HSA.REI.C.6", pacing=4),
        ],
    )


@pytest.fixture
def sample_input_data() -> dict:
    """The sample plan as camelCase JSON data."""
    return {
        "academicInfo": {"courseName": "Algebra I", "gradeLevel": "Grade 9"},
        "startDate": "2024-09-01",
        "endDate": "2024-09-19",
        "blockedDates": [{"date": "2024-09-03", "label": "Sports Day", "type": "Event"}],
        "blockedWeeks": [
            {"weekNumber": 2, "label": "Midterm Break", "type": "Holiday", "excludeFromCount": True},
        ],
        "lessons": [
            {"id": "l1", "name": "Linear Equations", "standard": "HSA.REI.B.3", "pacing": 2},
            {"id": "l2", "name": "Solving Inequalities", "standard": "HSA.REI.B.3", "pacing": 3},
            {"id": "l3", "name": "Systems of Equations", "standard": "HSA.REI.C.6", "pacing": 4},
        ],
    }
