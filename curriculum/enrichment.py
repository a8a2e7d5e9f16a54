"""
Descriptive text for lessons and courses.

Lesson and course text come from an external text-generation service,
reached through a DetailProvider. The planner never depends on it: when
the provider is missing, fails, or leaves a lesson out, placeholder text
is used instead.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from loguru import logger
from pydantic import Field, ValidationError

from .data.models import AcademicInfo, Lesson
from .output.schema import CourseMeta, CurriculumContent


PLACEHOLDER_CONTENT = CurriculumContent(
    expectations="Instructional expectations pending...",
    skills="Critical skills pending...",
    questions="Inquiry questions pending...",
    strategies="Teaching strategies pending...",
    activities="Student activities pending...",
)

PLACEHOLDER_COURSE = CourseMeta(
    description="Course description pending...",
    objectives="Learning objectives pending...",
    prerequisites="Prerequisites pending...",
    credits="Course credit pending...",
)


class EnrichmentError(Exception):
    """Raised when a detail provider cannot produce usable text."""
    pass


# Failures that fall back to placeholders. TimeoutError and ConnectionError
# are OSErrors; JSON decode and pydantic validation errors are ValueErrors.
ENRICHMENT_ERRORS = (EnrichmentError, OSError, ValueError)


class LessonContentRecord(CurriculumContent):
    """A provider result for one lesson."""
    lesson_id: str = Field(alias="lessonId")


class DetailProvider(Protocol):
    """Source of descriptive text, such as a text-generation API client."""

    def lesson_details(self, info: AcademicInfo, lessons: Sequence[Lesson]) -> Any:
        """Return a list of per-lesson records, or {"results": [...]}."""
        ...

    def course_meta(self, info: AcademicInfo) -> Any:
        """Return a dict with description, objectives, prerequisites, credits."""
        ...


# =============================================================================
# Prompts
# =============================================================================

def build_lesson_prompt(info: AcademicInfo, lessons: Sequence[Lesson]) -> str:
    """Prompt asking for per-lesson instructional content."""
    lesson_list = "\n".join(
        f"ID: {l.id} | Lesson: {l.name} | CCSS: {l.standard}" for l in lessons
    )
    return (
        f"Generate detailed instructional content for these {info.grade_level} lessons:\n"
        f"{lesson_list}\n\n"
        "Include: expectations, skills, questions, strategies, and activities for each."
    )


def build_course_prompt(info: AcademicInfo) -> str:
    """Prompt asking for a course description and objectives."""
    return (
        f"Generate a professional course description and core learning objectives for a "
        f"{info.grade_level} {info.subject} course named \"{info.course_name}\" for "
        f"{info.term} of the {info.academic_year} academic year."
    )


# =============================================================================
# Fetching with Fallback
# =============================================================================

def _parse_lesson_records(response: Any) -> list[LessonContentRecord]:
    if isinstance(response, dict):
        response = response.get("results")
    if not isinstance(response, list):
        raise EnrichmentError(f"Expected a list of lesson records, got {type(response).__name__}")

    records = []
    for item in response:
        try:
            records.append(LessonContentRecord.model_validate(item))
        except ValidationError as e:
            logger.warning("Skipping malformed lesson record: {error}", error=str(e))
    return records


def fetch_lesson_content(
    provider: Optional[DetailProvider],
    info: AcademicInfo,
    lessons: Sequence[Lesson],
) -> dict[str, CurriculumContent]:
    """
    Get content for each lesson, falling back to placeholders.

    Args:
        provider: Detail provider, or None to use placeholders only
        info: Course details
        lessons: Lessons to describe

    Returns:
        Mapping of every lesson ID to its content
    """
    found: dict[str, CurriculumContent] = {}

    if provider is not None and lessons:
        try:
            for record in _parse_lesson_records(provider.lesson_details(info, lessons)):
                found.setdefault(record.lesson_id, CurriculumContent.model_validate(
                    record.model_dump(exclude={"lesson_id"})
                ))
        except ENRICHMENT_ERRORS as e:
            logger.warning("Lesson detail generation failed, using placeholders: {error}", error=str(e))
            found = {}

    missing = [l.id for l in lessons if l.id not in found]
    if provider is not None and missing:
        logger.info("Placeholder content for {} lesson(s)", len(missing))

    return {l.id: found.get(l.id, PLACEHOLDER_CONTENT) for l in lessons}


def fetch_course_meta(provider: Optional[DetailProvider], info: AcademicInfo) -> CourseMeta:
    """Get course-level text, falling back to placeholders."""
    if provider is None:
        return PLACEHOLDER_COURSE

    try:
        response = provider.course_meta(info)
        if not isinstance(response, dict):
            raise EnrichmentError(f"Expected a course record, got {type(response).__name__}")
        return CourseMeta.model_validate(response)
    except ENRICHMENT_ERRORS as e:
        logger.warning("Course meta generation failed, using placeholders: {error}", error=str(e))
        return PLACEHOLDER_COURSE
