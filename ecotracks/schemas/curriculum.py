"""
Curriculum schemas for EcoTracks.

Defines Pydantic models for the static track catalog:
- Lessons with difficulty level and content sections
- Mini-projects with guided steps, gated on a lesson's quiz
- Multiple-choice quizzes attached to lessons
- Track definitions with dependency validation
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LessonLevel(str, Enum):
    BEGINNER = "beginner"
    LOW_INTERMEDIATE = "low-intermediate"
    INTERMEDIATE = "intermediate"


# -----------------------------------------------------------------------------
# Quiz content
# -----------------------------------------------------------------------------


class Question(BaseModel):
    """One multiple-choice question."""
    model_config = ConfigDict(frozen=True)

    prompt: str
    options: list[str] = Field(..., min_length=2)
    correct_option_index: int = Field(..., ge=0)
    explanation: Optional[str] = None

    @model_validator(mode="after")
    def correct_option_in_range(self):
        if self.correct_option_index >= len(self.options):
            raise ValueError(
                f"correct_option_index {self.correct_option_index} out of range "
                f"for {len(self.options)} options"
            )
        return self


class QuizSpec(BaseModel):
    """Timed quiz attached to a lesson."""
    model_config = ConfigDict(frozen=True)

    questions: list[Question] = Field(..., min_length=1)
    time_limit_seconds: int = Field(default=120, ge=0)
    base_points: int = Field(default=100, ge=0)


# -----------------------------------------------------------------------------
# Track catalog
# -----------------------------------------------------------------------------


class SectionKind(str, Enum):
    TEXT = "text"
    VISUAL = "visual"
    CHECK = "check"  # inline comprehension question, not scored


class LessonSection(BaseModel):
    """One page of lesson content."""
    model_config = ConfigDict(frozen=True)

    kind: SectionKind = SectionKind.TEXT
    title: Optional[str] = None
    content: Optional[str] = None  # markdown
    image_url: Optional[str] = None
    check: Optional[Question] = None

    @model_validator(mode="after")
    def check_matches_kind(self):
        if (self.kind == SectionKind.CHECK) != (self.check is not None):
            raise ValueError("A check question is required on check sections and only there")
        return self


class LessonSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    level: LessonLevel = LessonLevel.BEGINNER
    description: Optional[str] = None
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    sections: list[LessonSection] = []


class ProjectStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    hint: Optional[str] = None
    template: Optional[str] = None


class ProjectSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    required_lesson_id: str
    description: Optional[str] = None
    objective: Optional[str] = None
    steps: list[ProjectStep] = []
    extension_challenge: Optional[str] = None
    scoring_criteria: list[str] = []


class TrackDefinition(BaseModel):
    """
    A themed curriculum unit: ordered lessons and the projects they gate.

    Edges run lesson -> quiz -> project. Every project names the lesson whose
    quiz must be passed before it can be attempted.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: Optional[str] = None
    lessons: list[LessonSpec] = []
    projects: list[ProjectSpec] = []
    quizzes: dict[str, QuizSpec] = {}  # lesson_id -> quiz

    @model_validator(mode="after")
    def references_resolve(self):
        lesson_ids = [lesson.id for lesson in self.lessons]
        duplicates = {lid for lid in lesson_ids if lesson_ids.count(lid) > 1}
        if duplicates:
            raise ValueError(f"Duplicate lesson ids in track {self.id}: {sorted(duplicates)}")

        project_ids = [project.id for project in self.projects]
        duplicates = {pid for pid in project_ids if project_ids.count(pid) > 1}
        if duplicates:
            raise ValueError(f"Duplicate project ids in track {self.id}: {sorted(duplicates)}")

        known = set(lesson_ids)
        for project in self.projects:
            if project.required_lesson_id not in known:
                raise ValueError(
                    f"Project {project.id} requires unknown lesson {project.required_lesson_id}"
                )
        for lesson_id in self.quizzes:
            if lesson_id not in known:
                raise ValueError(f"Quiz defined for unknown lesson {lesson_id}")
        return self

    @property
    def lesson_ids(self) -> list[str]:
        return [lesson.id for lesson in self.lessons]

    @property
    def project_ids(self) -> list[str]:
        return [project.id for project in self.projects]

    def find_lesson(self, lesson_id: str) -> Optional[LessonSpec]:
        for lesson in self.lessons:
            if lesson.id == lesson_id:
                return lesson
        return None

    def find_project(self, project_id: str) -> Optional[ProjectSpec]:
        for project in self.projects:
            if project.id == project_id:
                return project
        return None

    def projects_for_lesson(self, lesson_id: str) -> list[ProjectSpec]:
        """Projects unlocked by passing this lesson's quiz."""
        return [p for p in self.projects if p.required_lesson_id == lesson_id]
