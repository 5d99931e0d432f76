"""
EcoTracks Schemas - Pydantic models for the progression engine.

This module exports all schema classes for:
- Curriculum: tracks, lessons, projects, quizzes
- Progress: per-track learner progress records
- Quiz: session phases and results
"""

# Curriculum schemas
from .curriculum import (
    LessonLevel,
    Question,
    QuizSpec,
    SectionKind,
    LessonSection,
    LessonSpec,
    ProjectStep,
    ProjectSpec,
    TrackDefinition,
)

# Progress schemas
from .progress import (
    Score,
    ProgressRecord,
)

# Quiz schemas
from .quiz import (
    QuizPhase,
    QuizResult,
)

__all__ = [
    # Curriculum
    'LessonLevel',
    'Question',
    'QuizSpec',
    'SectionKind',
    'LessonSection',
    'LessonSpec',
    'ProjectStep',
    'ProjectSpec',
    'TrackDefinition',
    # Progress
    'Score',
    'ProgressRecord',
    # Quiz
    'QuizPhase',
    'QuizResult',
]
