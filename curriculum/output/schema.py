"""
Output schema for planned terms.

This module defines the JSON-serializable output format for a curriculum
plan: the week-by-week roadmap, per-lesson details and summary figures.
Models are frozen; every planning step builds new instances.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from curriculum.data.models import AcademicInfo, Lesson


# =============================================================================
# Roadmap
# =============================================================================

class DayPlan(BaseModel):
    """A single instructional day in the roadmap."""
    date: str  # 'YYYY-MM-DD'
    day_name: str = Field(alias="dayName")
    is_blocked: bool = Field(default=False, alias="isBlocked")
    block_label: Optional[str] = Field(default=None, alias="blockLabel")
    lesson_id: Optional[str] = Field(default=None, alias="lessonId")
    lesson_name: Optional[str] = Field(default=None, alias="lessonName")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @property
    def is_assigned(self) -> bool:
        return self.lesson_id is not None


class WeekPlan(BaseModel):
    """
    One week of the roadmap.

    week_number is None for weeks excluded from the count.
    """
    week_number: Optional[int] = Field(default=None, alias="weekNumber")
    display_week_label: str = Field(alias="displayWeekLabel")
    dates: str  # 'Sep 1 - Sep 5'
    days: tuple[DayPlan, ...] = Field(default_factory=tuple)
    is_blocked: bool = Field(default=False, alias="isBlocked")
    block_label: Optional[str] = Field(default=None, alias="blockLabel")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @property
    def is_counted(self) -> bool:
        return self.week_number is not None

    @property
    def available_days(self) -> list[DayPlan]:
        """Days that are not blocked."""
        return [d for d in self.days if not d.is_blocked]

    @property
    def lesson_ids(self) -> list[str]:
        """IDs of lessons taught this week, in order of first appearance."""
        ids: list[str] = []
        for day in self.days:
            if day.lesson_id is not None and day.lesson_id not in ids:
                ids.append(day.lesson_id)
        return ids


# =============================================================================
# Lesson and Course Details
# =============================================================================

class CurriculumContent(BaseModel):
    """Descriptive text for a lesson."""
    expectations: str
    skills: str
    questions: str
    strategies: str
    activities: str

    model_config = ConfigDict(populate_by_name=True)


class LessonDetail(CurriculumContent):
    """A lesson with its descriptive text and the days it was given."""
    id: str
    name: str
    standard: str = ""
    pacing: int
    assigned_days: list[str] = Field(default_factory=list, alias="assignedDays")

    @classmethod
    def from_lesson(
        cls,
        lesson: Lesson,
        content: CurriculumContent,
        assigned_days: list[str],
    ) -> LessonDetail:
        """Create from a Lesson and its content."""
        return cls(
            id=lesson.id,
            name=lesson.name,
            standard=lesson.standard,
            pacing=lesson.pacing,
            expectations=content.expectations,
            skills=content.skills,
            questions=content.questions,
            strategies=content.strategies,
            activities=content.activities,
            assignedDays=list(assigned_days),
        )

    @property
    def is_fully_assigned(self) -> bool:
        return len(self.assigned_days) == self.pacing


class CourseMeta(BaseModel):
    """Course-level descriptive text."""
    description: str
    objectives: str
    prerequisites: str
    credits: str

    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# Summary
# =============================================================================

class PlanSummary(BaseModel):
    """Capacity figures for the plan."""
    total_available_days: int = Field(alias="totalAvailableDays")
    total_available_weeks: int = Field(alias="totalAvailableWeeks")
    total_pacing: int = Field(alias="totalPacing")
    unassigned_lessons: list[str] = Field(default_factory=list, alias="unassignedLessons")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def fits(self) -> bool:
        return self.total_pacing <= self.total_available_days


# =============================================================================
# Complete Output
# =============================================================================

class CurriculumMap(BaseModel):
    """Complete output for a planned term."""
    academic: AcademicInfo = Field(default_factory=AcademicInfo)
    summary: PlanSummary
    weeks: list[WeekPlan]
    lesson_details: dict[str, LessonDetail] = Field(default_factory=dict, alias="lessonDetails")
    course: CourseMeta

    model_config = ConfigDict(populate_by_name=True)

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return self.model_dump_json(by_alias=True, indent=indent)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return self.model_dump(by_alias=True)

    def days(self) -> list[DayPlan]:
        """All days across all weeks, in order."""
        return [day for week in self.weeks for day in week.days]
