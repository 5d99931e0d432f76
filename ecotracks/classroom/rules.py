"""
Unlock rules - Derive lesson, quiz and project state from progress.

Pure functions of (TrackDefinition, ProgressRecord). Every screen that shows
lock icons or enables buttons goes through these so they all agree.

Gating:
- Lessons are always unlocked, in any order
- A lesson's quiz opens once the lesson is completed
- A project opens once its required lesson's quiz is passed
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ecotracks.schemas import ProgressRecord, TrackDefinition


logger = logging.getLogger(__name__)

PASS_THRESHOLD = 70


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (built-in round() is banker's)."""
    return int(math.floor(value + 0.5))


def is_passing(score: Optional[int]) -> bool:
    return score is not None and score >= PASS_THRESHOLD


@dataclass(frozen=True)
class LessonState:
    """Derived state of one lesson for display."""
    lesson_id: str
    completed: bool
    quiz_available: bool
    quiz_passed: bool
    has_quiz: bool = False
    quiz_score: Optional[int] = None
    unlocked: bool = True  # lessons are never gated

    @property
    def quiz_action(self) -> Optional[str]:
        """'take', 'retake' or None when the quiz can't be started."""
        if not self.quiz_available:
            return None
        return "retake" if self.quiz_passed else "take"


@dataclass(frozen=True)
class ProjectState:
    """Derived state of one project for display."""
    project_id: str
    required_lesson_id: str
    unlocked: bool
    completed: bool
    score: Optional[int] = None

    @property
    def action(self) -> Optional[str]:
        """'start', 'improve' or None while locked."""
        if not self.unlocked:
            return None
        return "improve" if self.completed else "start"


def _warn_orphans(track: TrackDefinition, progress: ProgressRecord):
    lesson_ids = set(track.lesson_ids)
    orphaned = (progress.completed_lessons | set(progress.quiz_scores)) - lesson_ids
    orphaned |= set(progress.project_scores) - set(track.project_ids)
    if orphaned:
        logger.warning(f"Ignoring ids not in track {track.id}: {sorted(orphaned)}")


def get_lesson_states(track: TrackDefinition, progress: ProgressRecord) -> list[LessonState]:
    """Compute state for every lesson in track order."""
    _warn_orphans(track, progress)
    states = []
    for lesson in track.lessons:
        completed = lesson.id in progress.completed_lessons
        score = progress.quiz_scores.get(lesson.id)
        states.append(LessonState(
            lesson_id=lesson.id,
            completed=completed,
            quiz_available=completed,
            quiz_passed=is_passing(score),
            has_quiz=lesson.id in track.quizzes,
            quiz_score=score,
        ))
    return states


def get_project_states(track: TrackDefinition, progress: ProgressRecord) -> list[ProjectState]:
    """Compute state for every project in track order."""
    states = []
    for project in track.projects:
        score = progress.project_scores.get(project.id)
        states.append(ProjectState(
            project_id=project.id,
            required_lesson_id=project.required_lesson_id,
            unlocked=is_passing(progress.quiz_scores.get(project.required_lesson_id)),
            completed=score is not None,
            score=score,
        ))
    return states


def get_progress_percent(track: TrackDefinition, progress: ProgressRecord) -> int:
    """
    Percent of the track's lessons completed (0-100).

    Only lesson completion counts; quizzes and projects are not weighted in.
    Returns 0 for a track without lessons.
    """
    if not track.lessons:
        return 0
    completed = sum(1 for lesson in track.lessons if lesson.id in progress.completed_lessons)
    return round_half_up(100 * completed / len(track.lessons))
