"""Load and validate plan inputs and lesson lists from files."""

from __future__ import annotations

import csv
import json
import re
from pathlib import Path
from typing import Any, Union

from loguru import logger
from pydantic import ValidationError

from .models import Lesson, PlanInput


LESSON_CSV_HEADER = ["Lesson Name", "CCSS Standard", "Pacing (Number of Days)"]

LESSON_CSV_TEMPLATE = (
    "Lesson Name,CCSS Standard,Pacing (Number of Days)\n"
    "Linear Equations,CCSS.MATH.CONTENT.HSA.REI.B.3,2\n"
    "Solving Inequalities,CCSS.MATH.CONTENT.HSA.REI.B.3,3\n"
)

CONFIG_FIELDS = ["pattern", "break_label"]

# Saved exclusion configs and form state use these names
FIELD_RENAMES = {
    "academic_info": "academic",
    "day_exclusions": "blocked_dates",
    "week_exclusions": "blocked_weeks",
}


class DataValidationError(Exception):
    """Raised when plan data fails validation."""
    pass


def load_plan_input(path: Union[str, Path]) -> PlanInput:
    """
    Load and validate a plan input from a JSON file.

    Keys may be camelCase or snake_case. Term dates may be given as a
    date_range object, as top-level start_date/end_date, or inside a
    schedule object. Exclusions may use the saved-config names
    dayExclusions/weekExclusions.

    Args:
        path: Path to the JSON file

    Returns:
        Validated PlanInput

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file isn't valid JSON
        DataValidationError: If the data fails validation
    """
    path = Path(path)

    with open(path) as f:
        data = json.load(f)

    plan = parse_plan_input(data)
    logger.debug(
        "Loaded plan input from {path}: {lessons} lessons, {blocked_dates} blocked dates, "
        "{blocked_weeks} blocked weeks",
        path=str(path),
        **plan.summary(),
    )
    return plan


def parse_plan_input(data: Any) -> PlanInput:
    """Validate raw plan data (already decoded from JSON)."""
    if not isinstance(data, dict):
        raise DataValidationError(f"Plan input must be an object, got {type(data).__name__}")

    converted = _convert_keys_to_snake_case(data)

    schedule = converted.pop("schedule", None)
    if isinstance(schedule, dict):
        converted.setdefault("start_date", schedule.get("start_date"))
        converted.setdefault("end_date", schedule.get("end_date"))

    if "start_date" in converted or "end_date" in converted:
        converted.setdefault("date_range", {
            "start": converted.pop("start_date", None),
            "end": converted.pop("end_date", None),
        })

    for source, target in FIELD_RENAMES.items():
        if source in converted:
            converted.setdefault(target, converted.pop(source))

    config_data = {}
    for field in CONFIG_FIELDS:
        if field in converted:
            config_data[field] = converted.pop(field)

    if config_data:
        converted.setdefault("config", {}).update(config_data)

    try:
        return PlanInput.model_validate(converted)
    except ValidationError as e:
        raise DataValidationError(str(e)) from e


def load_lessons_csv(path: Union[str, Path], start_index: int = 1) -> list[Lesson]:
    """
    Load lessons from a CSV file in the lesson template format.

    The first row is a header and is skipped. Blank rows are ignored.
    Missing names and standards get defaults; pacing is at least 1.

    Args:
        path: Path to the CSV file
        start_index: Number used for the first generated lesson ID

    Returns:
        Lessons in file order, with IDs 'lesson-<n>'
    """
    path = Path(path)

    with open(path, newline="", encoding="utf-8-sig") as f:
        rows = list(csv.reader(f))

    lessons = []
    for row in rows[1:]:
        if not any(cell.strip() for cell in row):
            continue

        name, standard, pacing = (row + ["", "", ""])[:3]
        lessons.append(Lesson(
            id=f"lesson-{start_index + len(lessons)}",
            name=name.strip() or "Untitled Lesson",
            standard=standard.strip() or "No CCSS",
            pacing=_parse_pacing(pacing),
        ))

    return lessons


def write_lesson_template(path: Union[str, Path]) -> Path:
    """Write the lesson CSV template."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(LESSON_CSV_TEMPLATE, encoding="utf-8")
    return path


def _parse_pacing(value: str) -> int:
    """Leading integer of a pacing cell, at least 1."""
    match = re.match(r"\s*(-?\d+)", value)
    if not match:
        return 1
    return max(1, int(match.group(1)))


def _convert_keys_to_snake_case(obj: Any) -> Any:
    """Recursively convert dictionary keys from camelCase to snake_case."""

    def to_snake_case(name: str) -> str:
        name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
        name = re.sub(r'([a-z\d])([A-Z])', r'\1_\2', name)
        return name.lower()

    if isinstance(obj, dict):
        return {to_snake_case(k): _convert_keys_to_snake_case(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_convert_keys_to_snake_case(item) for item in obj]
    else:
        return obj
