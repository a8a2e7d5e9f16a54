"""
Output formatters for curriculum maps.

This module provides formatters for different output formats:
- JSON: Complete curriculum map
- Roadmap: Day-by-day table of the term
- Distribution: One row per week listing the lessons taught
- Lesson: Details and assigned days of a single lesson
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional, TextIO

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from .schema import CurriculumMap, DayPlan, WeekPlan


# =============================================================================
# Helpers
# =============================================================================

def describe_day(day: DayPlan) -> str:
    """Short text for a day's roadmap cell."""
    if day.is_blocked:
        return f"Blocked: {day.block_label}" if day.block_label else "Blocked"
    return day.lesson_name or "-"


def describe_week(week: WeekPlan, curriculum: CurriculumMap) -> str:
    """Lessons taught in a week, or its block label if nothing is taught."""
    names = []
    for lesson_id in week.lesson_ids:
        detail = curriculum.lesson_details.get(lesson_id)
        names.append(detail.name if detail else lesson_id)
    if names:
        return ", ".join(names)
    if week.is_blocked:
        return week.block_label or week.display_week_label
    return "-"


# =============================================================================
# JSON Formatter
# =============================================================================

class JSONFormatter:
    """Formats a curriculum map as JSON."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        """
        Initialize JSON formatter.

        Args:
            indent: JSON indentation level
            ensure_ascii: If True, escape non-ASCII characters
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def format(self, curriculum: CurriculumMap) -> str:
        """Format the full map as a JSON string."""
        return curriculum.to_json(indent=self.indent)

    def format_compact(self, curriculum: CurriculumMap) -> str:
        """Format as compact single-line JSON."""
        data = curriculum.to_dict()
        return json.dumps(data, ensure_ascii=self.ensure_ascii, separators=(',', ':'))

    def format_weeks_only(self, curriculum: CurriculumMap) -> str:
        """Format only the weeks array as JSON."""
        weeks_data = [week.model_dump(by_alias=True) for week in curriculum.weeks]
        return json.dumps(weeks_data, indent=self.indent, ensure_ascii=self.ensure_ascii)


def format_json(curriculum: CurriculumMap, indent: int = 2) -> str:
    """Convenience function for JSON formatting."""
    return JSONFormatter(indent=indent).format(curriculum)


# =============================================================================
# Roadmap Formatter
# =============================================================================

class RoadmapFormatter:
    """Formats the day-by-day roadmap."""

    def __init__(self, use_colors: bool = True, width: int | None = None):
        """
        Initialize roadmap formatter.

        Args:
            use_colors: Render a rich table instead of plain text
            width: Console width (None = 110)
        """
        self.use_colors = use_colors
        self.width = width

    def format(self, curriculum: CurriculumMap) -> str:
        if self.use_colors:
            return self._format_rich(curriculum)
        return self._format_plain(curriculum)

    def print(self, curriculum: CurriculumMap, file: TextIO = None) -> None:
        """Print the roadmap to a stream (default: stdout)."""
        if file is None:
            file = sys.stdout

        if self.use_colors:
            console = Console(file=file, width=self.width)
            self._print_rich(curriculum, console)
        else:
            file.write(self._format_plain(curriculum))
            file.write('\n')

    def _format_plain(self, curriculum: CurriculumMap) -> str:
        lines = []
        lines.append("=" * 60)
        lines.append(f"CURRICULUM ROADMAP - {curriculum.academic.course_name}")
        lines.append("=" * 60)
        lines.append("")

        summary = curriculum.summary
        lines.append(f"Available days: {summary.total_available_days}")
        lines.append(f"Available weeks: {summary.total_available_weeks}")
        lines.append(f"Planned pacing: {summary.total_pacing}")
        lines.append("")

        for week in curriculum.weeks:
            lines.append(f"--- {week.display_week_label} ({week.dates}) ---")
            for day in week.days:
                lines.append(f"  {day.day_name:<10} {day.date}: {describe_day(day)}")
            lines.append("")

        return '\n'.join(lines)

    def _format_rich(self, curriculum: CurriculumMap) -> str:
        console = Console(record=True, width=self.width or 110)
        self._print_rich(curriculum, console)
        return console.export_text()

    def _print_rich(self, curriculum: CurriculumMap, console: Console) -> None:
        summary = curriculum.summary
        fit_color = "green" if summary.fits else "red"

        console.print(Panel(
            f"[bold]{escape(curriculum.academic.course_name)}[/bold] "
            f"({escape(curriculum.academic.grade_level)}, {escape(curriculum.academic.term)})",
            title="Curriculum Roadmap",
            subtitle=f"[{fit_color}]{summary.total_pacing}/{summary.total_available_days} days planned[/{fit_color}]",
        ))

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Week", style="bold")
        table.add_column("Day")
        table.add_column("Date", style="dim")
        table.add_column("Lesson")
        table.add_column("Standard", style="dim")

        for week in curriculum.weeks:
            for i, day in enumerate(week.days):
                week_cell = escape(f"{week.display_week_label}\n{week.dates}") if i == 0 else ""
                detail = curriculum.lesson_details.get(day.lesson_id) if day.lesson_id else None
                lesson_cell = escape(describe_day(day))
                if day.is_blocked:
                    lesson_cell = f"[yellow]{lesson_cell}[/yellow]"
                table.add_row(
                    week_cell,
                    day.day_name,
                    day.date,
                    lesson_cell,
                    escape(detail.standard) if detail else "",
                )
            table.add_section()

        console.print(table)


def format_roadmap(curriculum: CurriculumMap, use_colors: bool = True) -> str:
    """Convenience function for roadmap formatting."""
    return RoadmapFormatter(use_colors=use_colors).format(curriculum)


def print_roadmap(curriculum: CurriculumMap, use_colors: bool = True) -> None:
    """Print the roadmap to stdout."""
    RoadmapFormatter(use_colors=use_colors).print(curriculum)


# =============================================================================
# Distribution Formatter
# =============================================================================

class DistributionFormatter:
    """Formats the week-level distribution summary."""

    def __init__(self, use_colors: bool = True, width: int | None = None):
        self.use_colors = use_colors
        self.width = width

    def format(self, curriculum: CurriculumMap) -> str:
        if self.use_colors:
            console = Console(record=True, width=self.width or 110)
            self._print_rich(curriculum, console)
            return console.export_text()
        return self._format_plain(curriculum)

    def _format_plain(self, curriculum: CurriculumMap) -> str:
        lines = []
        lines.append("=" * 60)
        lines.append(f"DISTRIBUTION - {curriculum.academic.course_name}")
        lines.append("=" * 60)

        for week in curriculum.weeks:
            lines.append(f"{week.display_week_label} ({week.dates}): {describe_week(week, curriculum)}")

        return '\n'.join(lines)

    def _print_rich(self, curriculum: CurriculumMap, console: Console) -> None:
        table = Table(title="Weekly Distribution", show_header=True, header_style="bold cyan")
        table.add_column("Week Ref", style="bold")
        table.add_column("Content")

        for week in curriculum.weeks:
            content = escape(describe_week(week, curriculum))
            if not week.lesson_ids and week.is_blocked:
                content = f"[yellow]{content}[/yellow]"
            table.add_row(escape(f"{week.display_week_label}\n{week.dates}"), content)

        console.print(table)


def format_distribution(curriculum: CurriculumMap, use_colors: bool = True) -> str:
    """Convenience function for distribution formatting."""
    return DistributionFormatter(use_colors=use_colors).format(curriculum)


# =============================================================================
# Lesson Formatter
# =============================================================================

class LessonViewFormatter:
    """Formats one lesson's details."""

    def __init__(self, use_colors: bool = True):
        self.use_colors = use_colors

    def format(self, curriculum: CurriculumMap, lesson_id: str) -> Optional[str]:
        """
        Format a lesson's details and assigned days.

        Returns:
            Formatted string, or None if the lesson is not in the map
        """
        detail = curriculum.lesson_details.get(lesson_id)
        if detail is None:
            return None

        if not self.use_colors:
            lines = [
                f"{'=' * 50}",
                f"LESSON: {detail.name} ({detail.id})",
                f"{'=' * 50}",
                f"Standard: {detail.standard}",
                f"Pacing: {detail.pacing} day(s), {len(detail.assigned_days)} assigned",
                f"Days: {', '.join(detail.assigned_days) or '-'}",
                f"Expectations: {detail.expectations}",
                f"Skills: {detail.skills}",
                f"Questions: {detail.questions}",
                f"Strategies: {detail.strategies}",
                f"Activities: {detail.activities}",
            ]
            return '\n'.join(lines)

        console = Console(record=True, width=100)
        console.print(Panel(
            f"[bold]{escape(detail.name)}[/bold] ({escape(detail.id)})\n{escape(detail.standard)}",
            title="Lesson",
        ))

        table = Table(show_header=False, box=None)
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        table.add_row("Pacing", f"{detail.pacing} day(s), {len(detail.assigned_days)} assigned")
        table.add_row("Days", ", ".join(detail.assigned_days) or "-")
        table.add_row("Expectations", escape(detail.expectations))
        table.add_row("Skills", escape(detail.skills))
        table.add_row("Questions", escape(detail.questions))
        table.add_row("Strategies", escape(detail.strategies))
        table.add_row("Activities", escape(detail.activities))

        console.print(table)
        return console.export_text()


def format_lesson_view(curriculum: CurriculumMap, lesson_id: str) -> Optional[str]:
    """Format a single lesson's details."""
    return LessonViewFormatter().format(curriculum, lesson_id)


# =============================================================================
# File Utilities
# =============================================================================

def save_json(curriculum: CurriculumMap, filepath: str | Path, indent: int = 2) -> None:
    """
    Save a curriculum map as a JSON file.

    Args:
        curriculum: CurriculumMap to save
        filepath: Path to save to
        indent: JSON indentation
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    json_str = JSONFormatter(indent=indent).format(curriculum)
    filepath.write_text(json_str, encoding='utf-8')
