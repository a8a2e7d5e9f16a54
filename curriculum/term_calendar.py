"""
Calendar enumeration for a term.

Splits a date range into raw weeks: consecutive 7-day buckets aligned to
the instructional pattern's first weekday at or before the term start.
Each bucket keeps only the instructional days that fall inside the range.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

from .data.models import DateRange, InstructionalPattern, short_date


@dataclass(frozen=True)
class RawWeek:
    """A 7-day bucket of the term calendar."""
    number: int
    start: date
    days: tuple[date, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.days


@dataclass(frozen=True)
class WeekRange:
    """Raw week number with a human-readable span, for week pickers."""
    raw_week_number: int
    range: str

    def to_dict(self) -> dict:
        return {"weekNumber": self.raw_week_number, "range": self.range}


def format_date_span(first: date, last: date) -> str:
    """Format a span of dates as 'Sep 1 - Sep 5'."""
    return f"{short_date(first)} - {short_date(last)}"


def align_to_week_start(day: date, pattern: InstructionalPattern) -> date:
    """Move back to the pattern's first weekday on or before the given date."""
    offset = (day.weekday() - pattern.first_day) % 7
    return day - timedelta(days=offset)


def _iter_buckets(start: date, end: date, pattern: InstructionalPattern):
    bucket_start = align_to_week_start(start, pattern)
    number = 1
    while bucket_start <= end:
        yield number, bucket_start
        bucket_start += timedelta(days=7)
        number += 1


def enumerate_weeks(
    date_range: DateRange,
    pattern: Optional[InstructionalPattern] = None,
) -> list[RawWeek]:
    """
    Enumerate the raw weeks of a term.

    Every bucket from the aligned start up to the range end is returned,
    including buckets with no instructional days left after clipping, so
    that raw week numbers stay stable. An invalid or inverted range gives
    an empty list.

    Args:
        date_range: Inclusive term range
        pattern: Instructional weekdays (default Sunday-Thursday)

    Returns:
        Raw weeks in chronological order
    """
    pattern = pattern or InstructionalPattern()
    bounds = date_range.bounds()
    if bounds is None:
        return []
    start, end = bounds

    weeks = []
    for number, bucket_start in _iter_buckets(start, end, pattern):
        days = []
        for offset in range(7):
            day = bucket_start + timedelta(days=offset)
            if day < start or day > end:
                continue
            if pattern.matches(day):
                days.append(day)
        weeks.append(RawWeek(number=number, start=bucket_start, days=tuple(days)))

    return weeks


def get_week_date_ranges(
    date_range: DateRange,
    pattern: Optional[InstructionalPattern] = None,
) -> list[WeekRange]:
    """
    List every raw week of the term with its date span.

    The span runs from the first to the last instructional weekday of the
    bucket, without clipping to the term, and ignores exclusions. A bucket
    whose instructional weekdays all fall before the term start is left
    out but keeps its raw number.
    """
    pattern = pattern or InstructionalPattern()
    bounds = date_range.bounds()
    if bounds is None:
        return []
    start, end = bounds

    offsets = sorted((d - pattern.first_day) % 7 for d in pattern.days)
    ranges = []
    for number, bucket_start in _iter_buckets(start, end, pattern):
        first = bucket_start + timedelta(days=offsets[0])
        last = bucket_start + timedelta(days=offsets[-1])
        if last < start:
            continue
        ranges.append(WeekRange(raw_week_number=number, range=format_date_span(first, last)))

    return ranges
