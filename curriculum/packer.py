"""Greedy packing of lessons onto the roadmap's available days."""

from __future__ import annotations

from typing import Iterable, Sequence

from .data.models import Lesson
from .output.schema import WeekPlan


def pack_lessons(weeks: Iterable[WeekPlan], lessons: Sequence[Lesson]) -> list[WeekPlan]:
    """
    Assign lessons to unblocked days in order.

    Walks every day of every week once. Each lesson takes the next
    `pacing` unblocked days; blocked days are skipped without counting
    against the current lesson. Once the lessons run out, remaining days
    stay unassigned. Any assignment already on the input is replaced.

    The input weeks are not modified; new WeekPlans are returned.

    Args:
        weeks: WeekPlans in chronological order
        lessons: Lessons in teaching order

    Returns:
        New WeekPlans with lesson_id and lesson_name filled in
    """
    lesson_idx = 0
    days_in_lesson = 0
    packed: list[WeekPlan] = []

    for week in weeks:
        days = []
        for day in week.days:
            if day.is_blocked or lesson_idx >= len(lessons):
                days.append(day.model_copy(update={"lesson_id": None, "lesson_name": None}))
                continue

            lesson = lessons[lesson_idx]
            days.append(day.model_copy(update={"lesson_id": lesson.id, "lesson_name": lesson.name}))

            days_in_lesson += 1
            if days_in_lesson >= max(1, lesson.pacing):
                lesson_idx += 1
                days_in_lesson = 0

        packed.append(week.model_copy(update={"days": tuple(days)}))

    return packed


def assigned_days(weeks: Iterable[WeekPlan], lesson_id: str) -> list[str]:
    """Dates assigned to a lesson, in chronological order."""
    return [
        day.date
        for week in weeks
        for day in week.days
        if day.lesson_id == lesson_id
    ]


def unassigned_lessons(weeks: Iterable[WeekPlan], lessons: Sequence[Lesson]) -> list[str]:
    """IDs of lessons that received fewer days than their pacing."""
    counts: dict[str, int] = {}
    for week in weeks:
        for day in week.days:
            if day.lesson_id is not None:
                counts[day.lesson_id] = counts.get(day.lesson_id, 0) + 1
    return [l.id for l in lessons if counts.get(l.id, 0) < l.pacing]
