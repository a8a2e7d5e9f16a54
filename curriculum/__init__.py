"""Curriculum Planner - lays out lesson units across a term's instructional calendar."""

from .planner import build_curriculum_map, build_empty_weeks, build_weeks
from .term_calendar import enumerate_weeks, get_week_date_ranges
from .exclusions import resolve_weeks
from .packer import pack_lessons, assigned_days
from .stats import calculate_instructional_stats, summarize_pacing

__all__ = [
    # Pipeline
    "build_curriculum_map",
    "build_empty_weeks",
    "build_weeks",
    # Engine
    "enumerate_weeks",
    "get_week_date_ranges",
    "resolve_weeks",
    "pack_lessons",
    "assigned_days",
    "calculate_instructional_stats",
    "summarize_pacing",
]
