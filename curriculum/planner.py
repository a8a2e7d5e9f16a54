"""
Term planning pipeline.

Runs the calendar enumerator, exclusion resolver and lesson packer in
sequence, then assembles the curriculum map. Everything is recomputed
from the inputs on each call.
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from .data.models import PlanInput
from .enrichment import DetailProvider, fetch_course_meta, fetch_lesson_content
from .exclusions import resolve_weeks
from .output.schema import CurriculumMap, LessonDetail, PlanSummary, WeekPlan
from .packer import assigned_days, pack_lessons, unassigned_lessons
from .stats import calculate_instructional_stats
from .term_calendar import enumerate_weeks


def build_empty_weeks(plan: PlanInput) -> list[WeekPlan]:
    """Build the roadmap weeks with exclusions applied and no lessons."""
    raw_weeks = enumerate_weeks(plan.date_range, plan.pattern)
    return resolve_weeks(
        raw_weeks,
        plan.blocked_dates,
        plan.blocked_weeks,
        break_label=plan.config.break_label,
    )


def build_weeks(plan: PlanInput) -> list[WeekPlan]:
    """Build the roadmap weeks with lessons assigned."""
    weeks = pack_lessons(build_empty_weeks(plan), plan.lessons)
    logger.debug(
        "Built roadmap: {weeks} weeks, {days} days, {lessons} lessons",
        weeks=len(weeks),
        days=sum(len(w.days) for w in weeks),
        lessons=len(plan.lessons),
    )
    return weeks


def build_curriculum_map(
    plan: PlanInput,
    provider: Optional[DetailProvider] = None,
) -> CurriculumMap:
    """
    Plan a term.

    Args:
        plan: Validated plan input
        provider: Optional source of lesson and course text

    Returns:
        CurriculumMap with the roadmap, lesson details and summary
    """
    weeks = build_weeks(plan)

    stats = calculate_instructional_stats(
        plan.date_range,
        plan.blocked_dates,
        plan.blocked_weeks,
        plan.pattern,
    )
    short = unassigned_lessons(weeks, plan.lessons)
    if short:
        logger.warning(
            "Lessons do not fit in the available days: pacing {total_pacing}, "
            "{available_days} available days, {short_lessons} lesson(s) short",
            total_pacing=plan.total_pacing,
            available_days=stats.total_days,
            short_lessons=len(short),
        )

    content = fetch_lesson_content(provider, plan.academic, plan.lessons)
    details = {
        lesson.id: LessonDetail.from_lesson(
            lesson,
            content[lesson.id],
            assigned_days(weeks, lesson.id),
        )
        for lesson in plan.lessons
    }

    return CurriculumMap(
        academic=plan.academic,
        summary=PlanSummary(
            totalAvailableDays=stats.total_days,
            totalAvailableWeeks=stats.total_weeks,
            totalPacing=plan.total_pacing,
            unassignedLessons=short,
        ),
        weeks=weeks,
        lessonDetails=details,
        course=fetch_course_meta(provider, plan.academic),
    )
