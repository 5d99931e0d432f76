"""
Quiz session schemas for EcoTracks.

Defines the phases of a timed quiz attempt and its final result.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class QuizPhase(str, Enum):
    IN_PROGRESS = "in_progress"
    AWAITING_ADVANCE = "awaiting_advance"  # answer locked in, waiting for next()
    COMPLETE = "complete"


class QuizResult(BaseModel):
    """
    Outcome of a completed quiz attempt.

    score_percent gates progression; points_earned is the reward currency and
    uses a separate per-question weight, so the two can diverge.
    """
    model_config = ConfigDict(frozen=True)

    score_percent: int = Field(..., ge=0, le=100)
    passed: bool
    points_earned: int = Field(..., ge=0)
    correct_count: int = Field(..., ge=0)
    question_count: int = Field(..., ge=0)
    seconds_used: int = Field(default=0, ge=0)
