"""Curriculum map output models and formatting."""

from .schema import (
    DayPlan,
    WeekPlan,
    CurriculumContent,
    LessonDetail,
    CourseMeta,
    PlanSummary,
    CurriculumMap,
)
from .formatters import (
    # Formatter classes
    JSONFormatter,
    RoadmapFormatter,
    DistributionFormatter,
    LessonViewFormatter,
    # Convenience functions
    format_json,
    format_roadmap,
    print_roadmap,
    format_distribution,
    format_lesson_view,
    # File utilities
    save_json,
)

__all__ = [
    # Schema models
    "DayPlan",
    "WeekPlan",
    "CurriculumContent",
    "LessonDetail",
    "CourseMeta",
    "PlanSummary",
    "CurriculumMap",
    # Formatter classes
    "JSONFormatter",
    "RoadmapFormatter",
    "DistributionFormatter",
    "LessonViewFormatter",
    # Formatter convenience functions
    "format_json",
    "format_roadmap",
    "print_roadmap",
    "format_distribution",
    "format_lesson_view",
    # File utilities
    "save_json",
]
