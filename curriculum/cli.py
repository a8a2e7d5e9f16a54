"""
Command-line interface for the curriculum planner.

Usage:
    python -m curriculum plan input.json -o plan.json
    python -m curriculum plan input.json --lessons lessons.csv
    python -m curriculum validate input.json
    python -m curriculum stats input.json
    python -m curriculum weeks input.json
    python -m curriculum view plan.json --distribution
    python -m curriculum template lessons.csv
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .data.loader import (
    DataValidationError,
    load_lessons_csv,
    load_plan_input,
    write_lesson_template,
)
from .data.models import PlanInput
from .log import setup_logger
from .output.formatters import (
    DistributionFormatter,
    LessonViewFormatter,
    RoadmapFormatter,
    save_json,
)
from .output.schema import CurriculumMap
from .planner import build_curriculum_map
from .stats import calculate_instructional_stats, summarize_pacing
from .term_calendar import get_week_date_ranges

# Create Typer app
app = typer.Typer(
    name="curriculum",
    help="Lay out lesson units across a school term's instructional calendar.",
    add_completion=False,
)

# Rich console for pretty output
console = Console()


@app.callback()
def configure(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
) -> None:
    """Curriculum planner."""
    setup_logger(level=log_level.upper())


# =============================================================================
# Helper Functions
# =============================================================================

def load_input(input_path: Path, lessons_csv: Optional[Path] = None) -> PlanInput:
    """Load and validate input data, appending any CSV lessons."""
    if not input_path.exists():
        console.print(f"[red]Error:[/red] Input file not found: {input_path}")
        raise typer.Exit(code=1)

    try:
        plan = load_plan_input(input_path)
        if lessons_csv is not None:
            extra = load_lessons_csv(lessons_csv, start_index=len(plan.lessons) + 1)
            plan = PlanInput.model_validate({
                **plan.model_dump(),
                "lessons": [l.model_dump() for l in plan.lessons + extra],
            })
        return plan
    except (OSError, json.JSONDecodeError, DataValidationError, ValueError) as e:
        console.print(f"[red]Error loading input:[/red] {e}")
        raise typer.Exit(code=1)


def load_output(output_path: Path) -> CurriculumMap:
    """Load a saved curriculum map."""
    if not output_path.exists():
        console.print(f"[red]Error:[/red] Output file not found: {output_path}")
        raise typer.Exit(code=1)

    try:
        with open(output_path) as f:
            data = json.load(f)
        return CurriculumMap.model_validate(data)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error loading output:[/red] {e}")
        raise typer.Exit(code=1)


def print_summary(curriculum: CurriculumMap) -> None:
    """Print plan summary to console."""
    summary = curriculum.summary
    status_color = "green" if summary.fits else "red"
    status_text = Text("FITS" if summary.fits else "OVER CAPACITY", style=f"bold {status_color}")

    console.print(Panel(
        status_text,
        title="Plan Status",
        subtitle=escape(curriculum.academic.course_name),
    ))

    table = Table(title="Summary", show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    counted = [w for w in curriculum.weeks if w.is_counted]
    table.add_row("Available Days", str(summary.total_available_days))
    table.add_row("Available Weeks", str(summary.total_available_weeks))
    table.add_row("Planned Pacing", str(summary.total_pacing))
    table.add_row("Roadmap Weeks", f"{len(curriculum.weeks)} ({len(counted)} numbered)")
    table.add_row("Lessons", str(len(curriculum.lesson_details)))
    table.add_row("Short Lessons", str(len(summary.unassigned_lessons)))

    console.print(table)


# =============================================================================
# Commands
# =============================================================================

@app.command()
def plan(
    input_file: Path = typer.Argument(
        ...,
        help="Path to plan input JSON file",
    ),
    lessons: Optional[Path] = typer.Option(
        None,
        "--lessons", "-l",
        help="CSV of lessons to append (template format)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Path to write the curriculum map JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Print the full roadmap",
    ),
) -> None:
    """
    Plan a term.

    Loads the input, lays the lessons out over the available days and
    prints a summary.

    Example:
        python -m curriculum plan input.json -o plan.json
    """
    console.print(f"\n[bold]Loading input from:[/bold] {input_file}")
    plan_input = load_input(input_file, lessons)

    console.print(f"[green]Loaded:[/green] {len(plan_input.lessons)} lessons, "
                  f"{len(plan_input.blocked_dates)} blocked dates, "
                  f"{len(plan_input.blocked_weeks)} blocked weeks")

    curriculum = build_curriculum_map(plan_input)

    console.print()
    print_summary(curriculum)

    if verbose:
        console.print()
        RoadmapFormatter(width=console.width).print(curriculum, file=console.file)

    if curriculum.summary.unassigned_lessons:
        console.print("\n[yellow]Lessons without all their days:[/yellow]")
        for lesson_id in curriculum.summary.unassigned_lessons:
            detail = curriculum.lesson_details[lesson_id]
            console.print(f"  - {escape(detail.name)}: {len(detail.assigned_days)}/{detail.pacing} days")

    if output:
        save_json(curriculum, output)
        console.print(f"\n[green]Curriculum map saved to:[/green] {output}")

    console.print()


@app.command()
def validate(
    input_file: Path = typer.Argument(
        ...,
        help="Path to plan input JSON file to validate",
    ),
) -> None:
    """
    Validate a plan input.

    Checks for:
    - Valid JSON structure
    - Schema compliance
    - Term date range
    - Pacing against available days

    Example:
        python -m curriculum validate input.json
    """
    console.print(f"\n[bold]Validating:[/bold] {input_file}\n")

    if not input_file.exists():
        console.print(f"[red]Error:[/red] File not found: {input_file}")
        raise typer.Exit(code=1)

    # Step 1: JSON parsing
    console.print("[cyan]1. Checking JSON syntax...[/cyan]")
    try:
        with open(input_file) as f:
            json.load(f)
        console.print("   [green]JSON syntax is valid[/green]")
    except json.JSONDecodeError as e:
        console.print(f"   [red]Invalid JSON:[/red] {e}")
        raise typer.Exit(code=1)

    # Step 2: Schema validation
    console.print("[cyan]2. Validating against schema...[/cyan]")
    try:
        plan_input = load_plan_input(input_file)
        console.print("   [green]Schema validation passed[/green]")
    except DataValidationError as e:
        console.print("   [red]Schema validation failed:[/red]")
        for line in str(e).split("\n"):
            console.print(f"   {line}")
        raise typer.Exit(code=1)

    # Step 3: Logical consistency
    console.print("[cyan]3. Checking logical consistency...[/cyan]")
    warnings = []

    bounds = plan_input.date_range.bounds()
    if bounds is None:
        warnings.append(f"Date range {plan_input.date_range} is invalid or inverted; no days will be planned")

    raw_weeks = get_week_date_ranges(plan_input.date_range, plan_input.pattern)
    week_numbers = {r.raw_week_number for r in raw_weeks}
    week_span = f"{raw_weeks[0].raw_week_number}-{raw_weeks[-1].raw_week_number}" if raw_weeks else "none"
    for record in plan_input.blocked_dates:
        day = record.calendar_date
        if day is None:
            warnings.append(f"Blocked date '{record.date}' cannot be parsed and will be ignored")
        elif bounds and not bounds[0] <= day <= bounds[1]:
            warnings.append(f"Blocked date {record.date} is outside the term")
    for record in plan_input.blocked_weeks:
        if record.week_number not in week_numbers:
            warnings.append(f"Blocked week {record.week_number} is outside the term ({week_span})")

    stats = calculate_instructional_stats(
        plan_input.date_range,
        plan_input.blocked_dates,
        plan_input.blocked_weeks,
        plan_input.pattern,
    )
    pacing = summarize_pacing(plan_input.lessons, stats)
    if not pacing.fits:
        warnings.append(
            f"Total pacing ({pacing.total_pacing}) exceeds available days ({pacing.available_days})"
        )

    if warnings:
        console.print("   [yellow]Warnings found:[/yellow]")
        for w in warnings:
            console.print(f"   - {escape(w)}")
    else:
        console.print("   [green]No logical consistency issues[/green]")

    # Summary
    console.print("\n[bold]Summary:[/bold]")
    table = Table(show_header=False, box=None)
    table.add_column("Entity", style="cyan")
    table.add_column("Count", style="white")

    table.add_row("Instructional days", str(plan_input.pattern))
    table.add_row("Raw weeks", str(len(raw_weeks)))
    table.add_row("Blocked dates", str(len(plan_input.blocked_dates)))
    table.add_row("Blocked weeks", str(len(plan_input.blocked_weeks)))
    table.add_row("Lessons", str(len(plan_input.lessons)))
    table.add_row("Total pacing", str(pacing.total_pacing))
    table.add_row("Available days", str(pacing.available_days))

    console.print(table)
    console.print("\n[green]Validation complete.[/green]\n")


@app.command()
def stats(
    input_file: Path = typer.Argument(
        ...,
        help="Path to plan input JSON file",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print as JSON",
    ),
) -> None:
    """
    Show available instructional days and weeks.

    Example:
        python -m curriculum stats input.json
    """
    plan_input = load_input(input_file)

    term_stats = calculate_instructional_stats(
        plan_input.date_range,
        plan_input.blocked_dates,
        plan_input.blocked_weeks,
        plan_input.pattern,
    )
    pacing = summarize_pacing(plan_input.lessons, term_stats)

    if as_json:
        data = {**term_stats.to_dict(), "totalPacing": pacing.total_pacing}
        console.print_json(json.dumps(data))
        return

    table = Table(title="Term Capacity", show_header=True, header_style="bold cyan")
    table.add_column("Metric")
    table.add_column("Value")
    table.add_column("Status")

    fit_color = "green" if pacing.fits else "red"
    table.add_row("Available Days", str(term_stats.total_days), "")
    table.add_row("Available Weeks", str(term_stats.total_weeks), "")
    table.add_row(
        "Planned Pacing",
        str(pacing.total_pacing),
        f"[{fit_color}]{'OK' if pacing.fits else 'OVER'} ({pacing.surplus_days:+d})[/{fit_color}]",
    )

    console.print(table)


@app.command()
def weeks(
    input_file: Path = typer.Argument(
        ...,
        help="Path to plan input JSON file",
    ),
) -> None:
    """
    List the raw weeks of the term, for choosing blocked weeks.

    Example:
        python -m curriculum weeks input.json
    """
    plan_input = load_input(input_file)
    ranges = get_week_date_ranges(plan_input.date_range, plan_input.pattern)

    if not ranges:
        console.print("[yellow]No weeks in the date range[/yellow]")
        return

    blocked = {w.week_number: w for w in plan_input.blocked_weeks}

    table = Table(title="Term Weeks", show_header=True, header_style="bold cyan")
    table.add_column("Raw Week", justify="right")
    table.add_column("Dates")
    table.add_column("Blocked")

    for week_range in ranges:
        record = blocked.get(week_range.raw_week_number)
        table.add_row(
            str(week_range.raw_week_number),
            week_range.range,
            escape(str(record)) if record else "",
        )

    console.print(table)


@app.command()
def view(
    output_file: Path = typer.Argument(
        ...,
        help="Path to curriculum map JSON file",
    ),
    distribution: bool = typer.Option(
        False,
        "--distribution", "-d",
        help="Show the week-level distribution instead of the roadmap",
    ),
    lesson: Optional[str] = typer.Option(
        None,
        "--lesson", "-L",
        help="Show details for a specific lesson ID",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain text output",
    ),
) -> None:
    """
    Display a saved curriculum map.

    Examples:
        python -m curriculum view plan.json
        python -m curriculum view plan.json --distribution
        python -m curriculum view plan.json --lesson lesson-1
    """
    curriculum = load_output(output_file)

    if lesson:
        text = LessonViewFormatter(use_colors=not plain).format(curriculum, lesson)
        if text is None:
            console.print(f"[red]Error:[/red] Lesson '{escape(lesson)}' not found")
            console.print(f"Available lessons: {escape(', '.join(curriculum.lesson_details.keys()))}")
            raise typer.Exit(code=1)
        console.print(text, markup=False, highlight=False)
    elif distribution:
        text = DistributionFormatter(use_colors=not plain).format(curriculum)
        console.print(text, markup=False, highlight=False)
    else:
        text = RoadmapFormatter(use_colors=not plain).format(curriculum)
        console.print(text, markup=False, highlight=False)


@app.command()
def template(
    path: Path = typer.Argument(
        Path("lesson_template.csv"),
        help="Where to write the lesson CSV template",
    ),
) -> None:
    """Write a lesson CSV template."""
    written = write_lesson_template(path)
    console.print(f"[green]Template written to:[/green] {written}")


# =============================================================================
# Main Entry Point
# =============================================================================

def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
