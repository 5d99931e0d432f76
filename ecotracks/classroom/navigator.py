"""
Navigator - Track views and progress actions for the UI.

Provides:
- Track view with lesson/project states and completion percent
- Lesson walkthroughs that complete the lesson at the end
- Quiz sessions wired to the progress store
- Project drafts and submission gated on the quiz rules
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ecotracks.schemas import ProgressRecord, TrackDefinition

from .errors import InvalidTransition, LessonNotFound, ProjectNotFound
from .lesson_walkthrough import LessonWalkthrough
from .progress import ProgressStore
from .project_scoring import ProjectDraft
from .quiz_session import QuizSession
from .registry import TrackRegistry
from .rules import (
    LessonState,
    ProjectState,
    get_lesson_states,
    get_progress_percent,
    get_project_states,
)


logger = logging.getLogger(__name__)


@dataclass
class TrackView:
    """Everything a track page needs, derived from one progress snapshot."""
    track: TrackDefinition
    progress: ProgressRecord
    lessons: list[LessonState]
    projects: list[ProjectState]
    progress_percent: int

    @property
    def completed_count(self) -> int:
        return sum(1 for lesson in self.lessons if lesson.completed)

    @property
    def total_count(self) -> int:
        return len(self.lessons)

    def lesson(self, lesson_id: str) -> LessonState:
        for state in self.lessons:
            if state.lesson_id == lesson_id:
                return state
        raise LessonNotFound(lesson_id)

    def project(self, project_id: str) -> ProjectState:
        for state in self.projects:
            if state.project_id == project_id:
                return state
        raise ProjectNotFound(project_id)


class Navigator:
    """
    Combines TrackRegistry (content) with ProgressStore (learner state).

    All writes go through here so a quiz is only scored after its lesson is
    completed and a project only after its quiz is passed.
    """

    def __init__(self, registry: TrackRegistry, store: ProgressStore):
        """
        Initialize navigator.

        Args:
            registry: Track catalog
            store: Progress store for the current learner
        """
        self.registry = registry
        self.store = store

    def build_view(self, track: TrackDefinition, progress: ProgressRecord) -> TrackView:
        return TrackView(
            track=track,
            progress=progress,
            lessons=get_lesson_states(track, progress),
            projects=get_project_states(track, progress),
            progress_percent=get_progress_percent(track, progress),
        )

    def get_track_view(self, track_id: str) -> TrackView:
        """
        Load current progress and derive the track's state.

        Raises:
            TrackNotFound: If the track id is unknown
        """
        track = self.registry.get(track_id)
        return self.build_view(track, self.store.load(track_id))

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def complete_lesson(self, track_id: str, lesson_id: str) -> TrackView:
        """Mark a lesson completed and return the refreshed view."""
        self.registry.get_lesson(track_id, lesson_id)
        record = self.store.mark_lesson_completed(track_id, lesson_id)
        return self.build_view(self.registry.get(track_id), record)

    def start_lesson(self, track_id: str, lesson_id: str) -> LessonWalkthrough:
        """
        Open a lesson for reading. Lessons are never locked.

        The lesson is marked completed when the walkthrough passes its last
        section; leaving earlier saves nothing.
        """
        lesson = self.registry.get_lesson(track_id, lesson_id)

        def record():
            self.store.mark_lesson_completed(track_id, lesson_id)

        return LessonWalkthrough(lesson.sections, on_complete=record)

    def start_quiz(self, track_id: str, lesson_id: str) -> QuizSession:
        """
        Start a quiz attempt for a completed lesson.

        The session records its percent score in the store when it completes.

        Raises:
            TrackNotFound, LessonNotFound, QuizNotFound: If the ids don't resolve
            InvalidTransition: If the lesson isn't completed yet
        """
        quiz = self.registry.get_quiz(track_id, lesson_id)
        if not self.store.load(track_id).is_lesson_completed(lesson_id):
            raise InvalidTransition(f"Quiz for {lesson_id} is locked until the lesson is completed")

        def record(result):
            self.store.record_quiz_score(track_id, lesson_id, result.score_percent)

        logger.info(f"Starting quiz {track_id}/{lesson_id} ({len(quiz.questions)} questions)")
        return QuizSession.from_spec(quiz, on_complete=record)

    def submit_project(self, track_id: str, project_id: str, score: int) -> TrackView:
        """
        Record an evaluated project submission.

        The evaluator's score is clamped to 0-100. Resubmitting an already
        scored project replaces its score.

        Raises:
            TrackNotFound, ProjectNotFound: If the ids don't resolve
            InvalidTransition: If the project is still locked
        """
        track = self.registry.get(track_id)
        self._require_unlocked(track, project_id)
        record = self.store.record_project_score(track_id, project_id, max(0, min(int(score), 100)))
        return self.build_view(track, record)

    def start_project(self, track_id: str, project_id: str) -> ProjectDraft:
        """
        Open a guided draft for an unlocked project.

        Raises:
            TrackNotFound, ProjectNotFound: If the ids don't resolve
            InvalidTransition: If the project is still locked
        """
        track = self.registry.get(track_id)
        self._require_unlocked(track, project_id)
        return ProjectDraft(self.registry.get_project(track_id, project_id))

    def finish_project(
        self, track_id: str, draft: ProjectDraft, bonus: Optional[float] = None
    ) -> tuple[int, TrackView]:
        """
        Score a finished draft and record the score.

        Returns:
            (score, refreshed track view)
        """
        score = draft.evaluate(bonus)
        return score, self.submit_project(track_id, draft.project_id, score)

    def _require_unlocked(self, track: TrackDefinition, project_id: str):
        self.registry.get_project(track.id, project_id)
        state = self.build_view(track, self.store.load(track.id)).project(project_id)
        if not state.unlocked:
            raise InvalidTransition(
                f"Project {project_id} is locked until the quiz for {state.required_lesson_id} is passed"
            )

    # -------------------------------------------------------------------------
    # Display helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def get_status_indicator(state: LessonState) -> str:
        """
        Get status indicator for list display.

        Returns:
            ★ for quiz passed
            ✓ for completed
            ○ for not started
        """
        if state.quiz_passed:
            return "★"
        if state.completed:
            return "✓"
        return "○"
