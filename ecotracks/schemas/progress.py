"""
Progress tracking schemas for EcoTracks.

Defines the per-learner, per-track progress ledger. An absent record is
equivalent to an empty one.
"""

from typing import Annotated

from pydantic import BaseModel, Field


Score = Annotated[int, Field(ge=0, le=100)]


class ProgressRecord(BaseModel):
    completed_lessons: set[str] = set()
    quiz_scores: dict[str, Score] = {}     # lesson_id -> percent correct
    project_scores: dict[str, Score] = {}  # project_id -> evaluator score

    def is_lesson_completed(self, lesson_id: str) -> bool:
        return lesson_id in self.completed_lessons

    def is_empty(self) -> bool:
        return not (self.completed_lessons or self.quiz_scores or self.project_scores)
