"""
Capacity figures for a term.

Counts the instructional days left after exclusions without building the
full roadmap. The count always matches the number of unblocked days in the
WeekPlans produced by resolve_weeks for the same inputs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .data.models import BlockedDate, BlockedWeek, DateRange, InstructionalPattern, Lesson
from .exclusions import index_blocked_dates, is_day_blocked
from .term_calendar import enumerate_weeks


@dataclass(frozen=True)
class InstructionalStats:
    """Available days and weeks in a term."""
    total_days: int
    total_weeks: int

    def to_dict(self) -> dict:
        return {
            "totalAvailableDays": self.total_days,
            "totalAvailableWeeks": self.total_weeks,
        }


@dataclass(frozen=True)
class PacingSummary:
    """Planned pacing compared with available days."""
    total_pacing: int
    available_days: int

    @property
    def surplus_days(self) -> int:
        """Days left over after all lessons; negative when over capacity."""
        return self.available_days - self.total_pacing

    @property
    def fits(self) -> bool:
        return self.total_pacing <= self.available_days


def calculate_instructional_stats(
    date_range: DateRange,
    blocked_dates: Iterable[BlockedDate] = (),
    blocked_weeks: Iterable[BlockedWeek] = (),
    pattern: Optional[InstructionalPattern] = None,
) -> InstructionalStats:
    """
    Count the available instructional days and weeks.

    A day is unavailable if its date is blocked or its raw week is
    blocked, whatever the week's exclude_from_count flag. Weeks are the
    available days divided by the pattern size, rounded up. An invalid
    range gives zero for both.
    """
    pattern = pattern or InstructionalPattern()
    date_index = index_blocked_dates(blocked_dates)
    blocked_weeks = list(blocked_weeks)

    total_days = sum(
        1
        for raw_week in enumerate_weeks(date_range, pattern)
        for day in raw_week.days
        if not is_day_blocked(day, raw_week.number, date_index, blocked_weeks)
    )

    return InstructionalStats(
        total_days=total_days,
        total_weeks=math.ceil(total_days / pattern.size),
    )


def summarize_pacing(lessons: Sequence[Lesson], stats: InstructionalStats) -> PacingSummary:
    """Compare total lesson pacing with the available days."""
    return PacingSummary(
        total_pacing=sum(l.pacing for l in lessons),
        available_days=stats.total_days,
    )
