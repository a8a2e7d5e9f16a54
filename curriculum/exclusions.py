"""
Exclusion resolution for raw weeks.

Turns raw weeks into WeekPlans by applying day-level and week-level
exclusions:
- A day is blocked if its date matches a blocked date or its raw week
  matches a blocked week (regardless of exclude_from_count)
- A week gets the next sequential number unless its blocked week has
  exclude_from_count set, in which case it is shown under its own label
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from .data.models import (
    DEFAULT_BREAK_LABEL,
    BlockedDate,
    BlockedWeek,
    day_name,
)
from .output.schema import DayPlan, WeekPlan
from .term_calendar import RawWeek, format_date_span


def index_blocked_dates(blocked_dates: Iterable[BlockedDate]) -> dict[date, BlockedDate]:
    """
    Map each parseable blocked date to its first record.

    Records whose date cannot be parsed are left out.
    """
    index: dict[date, BlockedDate] = {}
    for record in blocked_dates:
        day = record.calendar_date
        if day is not None and day not in index:
            index[day] = record
    return index


def find_week_block(
    raw_week_number: int,
    blocked_weeks: Iterable[BlockedWeek],
) -> Optional[BlockedWeek]:
    """Get the first blocked week matching a raw week number."""
    for record in blocked_weeks:
        if record.week_number == raw_week_number:
            return record
    return None


def is_day_blocked(
    day: date,
    raw_week_number: int,
    blocked_dates: dict[date, BlockedDate],
    blocked_weeks: Iterable[BlockedWeek],
) -> bool:
    """Whether a day is removed by a day-level or week-level exclusion."""
    if day in blocked_dates:
        return True
    return find_week_block(raw_week_number, blocked_weeks) is not None


def resolve_weeks(
    raw_weeks: Iterable[RawWeek],
    blocked_dates: Iterable[BlockedDate] = (),
    blocked_weeks: Iterable[BlockedWeek] = (),
    break_label: str = DEFAULT_BREAK_LABEL,
) -> list[WeekPlan]:
    """
    Apply exclusions to raw weeks and number the counted weeks.

    Raw weeks with no instructional days are dropped. Week numbers start
    at 1 and increase by one for every week that is not excluded from
    the count, so they stay gapless whatever is skipped.

    Args:
        raw_weeks: Output of enumerate_weeks
        blocked_dates: Day-level exclusions
        blocked_weeks: Week-level exclusions, matched on raw week number
        break_label: Label for uncounted weeks whose exclusion has none

    Returns:
        WeekPlans in chronological order, with no lessons assigned
    """
    date_index = index_blocked_dates(blocked_dates)
    blocked_weeks = list(blocked_weeks)

    weeks: list[WeekPlan] = []
    counter = 1

    for raw_week in raw_weeks:
        if raw_week.is_empty:
            continue

        week_block = find_week_block(raw_week.number, blocked_weeks)

        days = []
        for day in raw_week.days:
            date_block = date_index.get(day)
            label = (week_block.label if week_block else None) or (date_block.label if date_block else None)
            days.append(DayPlan(
                date=day.isoformat(),
                dayName=day_name(day),
                isBlocked=week_block is not None or date_block is not None,
                blockLabel=label or None,
            ))

        if week_block is not None and week_block.exclude_from_count:
            week_number = None
            display_label = week_block.label or break_label
        else:
            week_number = counter
            counter += 1
            display_label = f"Week {week_number}"

        weeks.append(WeekPlan(
            weekNumber=week_number,
            displayWeekLabel=display_label,
            dates=format_date_span(raw_week.days[0], raw_week.days[-1]),
            days=tuple(days),
            isBlocked=week_block is not None,
            blockLabel=(week_block.label or None) if week_block else None,
        ))

    return weeks
