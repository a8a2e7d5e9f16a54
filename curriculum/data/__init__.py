"""Data models and loading utilities."""

from .loader import (
    DataValidationError,
    load_lessons_csv,
    load_plan_input,
    parse_plan_input,
    write_lesson_template,
)
from .models import (
    AcademicInfo,
    BlockedDate,
    BlockedWeek,
    BlockType,
    DateRange,
    InstructionalPattern,
    Lesson,
    PlanInput,
    PlannerConfig,
    Weekday,
    parse_calendar_date,
)

__all__ = [
    # Loader
    "DataValidationError",
    "load_lessons_csv",
    "load_plan_input",
    "parse_plan_input",
    "write_lesson_template",
    # Models
    "AcademicInfo",
    "BlockedDate",
    "BlockedWeek",
    "BlockType",
    "DateRange",
    "InstructionalPattern",
    "Lesson",
    "PlanInput",
    "PlannerConfig",
    "Weekday",
    "parse_calendar_date",
]
