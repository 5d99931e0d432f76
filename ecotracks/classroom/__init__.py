"""
EcoTracks Classroom - Runtime components for track progression.

This module provides:
- TrackRegistry: Look up track definitions
- ProgressStore: Persist learner progress
- Unlock rules: Derive lesson/quiz/project state
- LessonWalkthrough: Step through a lesson's sections
- QuizSession: Run one timed quiz attempt
- ProjectDraft: Guided project responses and scoring
- Navigator: Track views and progress actions
- Portfolio: Cross-track summary and badges
"""

from .errors import (
    EcoTracksError,
    NotFound,
    TrackNotFound,
    LessonNotFound,
    ProjectNotFound,
    QuizNotFound,
    InvalidTransition,
    PersistenceError,
)

from .registry import TrackRegistry

from .progress import (
    ProgressStore,
    ProgressKey,
    RecordBackend,
    MemoryBackend,
    SQLiteBackend,
    DEFAULT_PROGRESS_DIR,
    DEFAULT_PROGRESS_DB,
)

from .rules import (
    PASS_THRESHOLD,
    LessonState,
    ProjectState,
    get_lesson_states,
    get_project_states,
    get_progress_percent,
    round_half_up,
)

from .lesson_walkthrough import LessonWalkthrough

from .quiz_session import QuizSession

from .project_scoring import (
    MIN_RESPONSE_LENGTH,
    ProjectDraft,
    is_response_sufficient,
    score_responses,
)

from .navigator import (
    Navigator,
    TrackView,
)

from .portfolio import (
    BADGES,
    Badge,
    Portfolio,
    TrackSummary,
    build_portfolio,
    summarize_track,
)

__all__ = [
    # Errors
    "EcoTracksError",
    "NotFound",
    "TrackNotFound",
    "LessonNotFound",
    "ProjectNotFound",
    "QuizNotFound",
    "InvalidTransition",
    "PersistenceError",
    # Registry
    "TrackRegistry",
    # Progress
    "ProgressStore",
    "ProgressKey",
    "RecordBackend",
    "MemoryBackend",
    "SQLiteBackend",
    "DEFAULT_PROGRESS_DIR",
    "DEFAULT_PROGRESS_DB",
    # Rules
    "PASS_THRESHOLD",
    "LessonState",
    "ProjectState",
    "get_lesson_states",
    "get_project_states",
    "get_progress_percent",
    "round_half_up",
    # Lessons
    "LessonWalkthrough",
    # Quiz
    "QuizSession",
    # Projects
    "MIN_RESPONSE_LENGTH",
    "ProjectDraft",
    "is_response_sufficient",
    "score_responses",
    # Navigator
    "Navigator",
    "TrackView",
    # Portfolio
    "BADGES",
    "Badge",
    "Portfolio",
    "TrackSummary",
    "build_portfolio",
    "summarize_track",
]
