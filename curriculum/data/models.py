"""
Pydantic models for the curriculum planner input data.

Date conventions:
- Calendar dates travel as 'YYYY-MM-DD' strings and are parsed leniently
  (ISO datetimes are accepted, their time-of-day is ignored)
- Weekdays follow Python's date.weekday(): 0=Monday through 6=Sunday
- The reference school week runs Sunday to Thursday
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


# =============================================================================
# Constants and Enums
# =============================================================================

class Weekday(int, Enum):
    """Day of week: 0=Monday through 6=Sunday."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


class BlockType(str, Enum):
    """Category of a blocked date or week. Display only."""
    EXAM = "Exam"
    REVISION = "Revision"
    EVENT = "Event"
    HOLIDAY = "Holiday"
    MEETING = "Meeting"


WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
MONTH_ABBREV = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

SCHOOL_WEEK = [
    Weekday.SUNDAY,
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
]

DEFAULT_BREAK_LABEL = "Holiday Break"


# =============================================================================
# Helper Functions
# =============================================================================

def parse_calendar_date(value: Any) -> Optional[date]:
    """
    Parse a calendar date, returning None when it cannot be parsed.

    Accepts date and datetime objects, 'YYYY-MM-DD' strings and ISO
    datetime strings. Time-of-day and UTC offsets are discarded.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if len(text) > 10 and text[10] in "T ":
        text = text[:10]
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def day_name(day: date) -> str:
    """Get the weekday name for a date."""
    return WEEKDAY_NAMES[day.weekday()]


def short_date(day: date) -> str:
    """Format a date as 'Sep 1'."""
    return f"{MONTH_ABBREV[day.month - 1]} {day.day}"


# =============================================================================
# Calendar Models
# =============================================================================

class InstructionalPattern(BaseModel):
    """
    The weekdays that count as instructional.

    The first listed day is the one each week is aligned to.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    days: list[Weekday] = Field(
        default_factory=lambda: list(SCHOOL_WEEK),
        min_length=1,
        max_length=7,
        description="Instructional weekdays, starting with the week's first day",
    )

    @field_validator("days", mode="before")
    @classmethod
    def parse_day_names(cls, value: Any) -> Any:
        """Allow weekday names ('sunday') as well as indices."""
        if not isinstance(value, list):
            return value
        parsed = []
        for item in value:
            if isinstance(item, str) and item.strip().capitalize() in WEEKDAY_NAMES:
                parsed.append(WEEKDAY_NAMES.index(item.strip().capitalize()))
            else:
                parsed.append(item)
        return parsed

    @model_validator(mode="after")
    def validate_unique_days(self) -> "InstructionalPattern":
        """Each weekday may appear only once."""
        if len(set(self.days)) != len(self.days):
            raise ValueError(f"Duplicate weekdays in pattern: {[d.name for d in self.days]}")
        return self

    @property
    def first_day(self) -> Weekday:
        return self.days[0]

    @property
    def size(self) -> int:
        return len(self.days)

    def matches(self, day: date) -> bool:
        """Whether a calendar date falls on an instructional weekday."""
        return day.weekday() in self.days

    def __str__(self) -> str:
        return ", ".join(WEEKDAY_NAMES[d][:3] for d in self.days)


class DateRange(BaseModel):
    """
    Inclusive term date range.

    Values are kept as supplied; use bounds() to get parsed dates.
    """
    model_config = ConfigDict(extra="forbid")

    start: Union[date, str] = Field(description="First day of term (YYYY-MM-DD)")
    end: Union[date, str] = Field(description="Last day of term (YYYY-MM-DD)")

    def bounds(self) -> Optional[tuple[date, date]]:
        """Parsed (start, end), or None if either is invalid or start > end."""
        start = parse_calendar_date(self.start)
        end = parse_calendar_date(self.end)
        if start is None or end is None or start > end:
            return None
        return start, end

    def __str__(self) -> str:
        return f"{self.start} to {self.end}"


# =============================================================================
# Exclusion Models
# =============================================================================

class BlockedDate(BaseModel):
    """A single calendar date removed from instruction."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    date: str = Field(description="Blocked date (YYYY-MM-DD or ISO datetime)")
    label: str = Field(default="", description="Display label, e.g. 'Sports Day'")
    category: BlockType = Field(
        default=BlockType.EVENT,
        validation_alias=AliasChoices("category", "type"),
        description="Display category",
    )

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, value: Any) -> Any:
        if isinstance(value, date):
            return value.isoformat()
        return value

    @property
    def calendar_date(self) -> Optional[date]:
        """The parsed date, or None if unparseable."""
        return parse_calendar_date(self.date)

    def __str__(self) -> str:
        return f"{self.date}: {self.label or self.category.value}"


class BlockedWeek(BaseModel):
    """
    A raw week removed from instruction.

    week_number is the 1-based raw index counted from the week containing
    the term start, not the displayed week number.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    week_number: int = Field(description="Raw week number (1-based)")
    label: str = Field(default="", description="Display label, e.g. 'Midterm Break'")
    category: BlockType = Field(
        default=BlockType.HOLIDAY,
        validation_alias=AliasChoices("category", "type"),
        description="Display category",
    )
    exclude_from_count: bool = Field(
        default=False,
        description="If true, the week takes no entry in the week numbering",
    )

    def __str__(self) -> str:
        return f"Week {self.week_number}: {self.label or self.category.value}"


# =============================================================================
# Lesson Models
# =============================================================================

class Lesson(BaseModel):
    """A lesson unit to lay out across the term."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str = Field(min_length=1, description="Unique identifier")
    name: str = Field(description="Lesson name")
    standard: str = Field(
        default="",
        validation_alias=AliasChoices("standard", "ccss"),
        description="Standard reference tag (e.g. CCSS code)",
    )
    pacing: int = Field(default=1, ge=1, description="Number of instructional days")

    def __str__(self) -> str:
        return f"{self.name} ({self.pacing}d)"


class AcademicInfo(BaseModel):
    """Course details used for headings and detail generation."""
    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)

    grade_level: str = Field(default="Grade 9")
    subject: str = Field(default="Mathematics")
    course_name: str = Field(default="Algebra I")
    term: str = Field(default="Term 1")
    academic_year: str = Field(default="2024-2025")
    teacher_name: str = Field(default="")


# =============================================================================
# Configuration Models
# =============================================================================

class PlannerConfig(BaseModel):
    """Planner-wide configuration settings."""
    model_config = ConfigDict(extra="forbid")

    pattern: InstructionalPattern = Field(
        default_factory=InstructionalPattern,
        description="Instructional weekdays",
    )
    break_label: str = Field(
        default=DEFAULT_BREAK_LABEL,
        min_length=1,
        description="Label for uncounted weeks whose exclusion has no label",
    )

    @field_validator("pattern", mode="before")
    @classmethod
    def parse_pattern_list(cls, value: Any) -> Any:
        """Allow the pattern to be given as a bare list of days."""
        if isinstance(value, list):
            return {"days": value}
        return value


# =============================================================================
# Main Input Model
# =============================================================================

class PlanInput(BaseModel):
    """
    Complete planner input.
    This is the main model for loading and validating a term plan.
    """
    model_config = ConfigDict(extra="forbid")

    config: PlannerConfig = Field(default_factory=PlannerConfig, description="Planner configuration")
    academic: AcademicInfo = Field(default_factory=AcademicInfo, description="Course details")
    date_range: DateRange = Field(description="Term date range")
    blocked_dates: list[BlockedDate] = Field(default_factory=list, description="Day-level exclusions")
    blocked_weeks: list[BlockedWeek] = Field(default_factory=list, description="Week-level exclusions")
    lessons: list[Lesson] = Field(default_factory=list, description="Lessons in teaching order")

    @model_validator(mode="after")
    def validate_no_duplicate_ids(self) -> "PlanInput":
        """Ensure lesson IDs are unique."""
        seen: set[str] = set()
        errors: list[str] = []
        for lesson in self.lessons:
            if lesson.id in seen:
                errors.append(f"Duplicate lesson ID: '{lesson.id}'")
            seen.add(lesson.id)

        if errors:
            raise ValueError("Duplicate ID validation failed:\n" + "\n".join(f"  - {e}" for e in errors))

        return self

    @property
    def pattern(self) -> InstructionalPattern:
        return self.config.pattern

    @property
    def total_pacing(self) -> int:
        """Sum of lesson pacing in days."""
        return sum(l.pacing for l in self.lessons)

    def get_lesson(self, lesson_id: str) -> Optional[Lesson]:
        """Get lesson by ID."""
        for lesson in self.lessons:
            if lesson.id == lesson_id:
                return lesson
        return None

    def summary(self) -> dict[str, Any]:
        """Get a summary of the plan input."""
        return {
            "course_name": self.academic.course_name,
            "start": str(self.date_range.start),
            "end": str(self.date_range.end),
            "pattern": str(self.pattern),
            "blocked_dates": len(self.blocked_dates),
            "blocked_weeks": len(self.blocked_weeks),
            "lessons": len(self.lessons),
            "total_pacing": self.total_pacing,
        }
