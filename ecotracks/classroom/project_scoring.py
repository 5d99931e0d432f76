"""
Project scoring - Guided project drafts and their local score.

A draft collects one written response per project step. Each response must
have at least MIN_RESPONSE_LENGTH characters before moving on. The submitted
draft is scored as:

    round(min(60 + total_length / 50, 85) * completeness + bonus), capped at 100

where completeness is the share of steps answered and bonus is a random
encouragement of up to MAX_BONUS points.
"""

import logging
import random
from typing import Optional

from ecotracks.schemas import ProjectSpec, ProjectStep

from .errors import InvalidTransition
from .rules import round_half_up


logger = logging.getLogger(__name__)

MIN_RESPONSE_LENGTH = 10
BASE_SCORE = 60
MAX_BASE_SCORE = 85
CHARS_PER_POINT = 50
MAX_BONUS = 15


def is_response_sufficient(text: Optional[str]) -> bool:
    return text is not None and len(text.strip()) >= MIN_RESPONSE_LENGTH


def score_responses(
    responses: list[str],
    step_count: int,
    bonus: Optional[float] = None,
) -> int:
    """
    Score a set of step responses.

    Args:
        responses: Response text per step (blank for unanswered steps)
        step_count: Number of steps in the project
        bonus: Extra points; drawn uniformly from [0, MAX_BONUS) when None

    Returns:
        Score from 0 to 100
    """
    if step_count <= 0:
        raise ValueError(f"step_count must be positive, got {step_count}")
    if bonus is None:
        bonus = random.uniform(0, MAX_BONUS)

    total_length = sum(len(r) for r in responses)
    answered = sum(1 for r in responses if r.strip())
    completeness = min(answered, step_count) / step_count
    base = min(BASE_SCORE + total_length / CHARS_PER_POINT, MAX_BASE_SCORE)
    return min(round_half_up(base * completeness + bonus), 100)


class ProjectDraft:
    """Responses being written for one project, step by step."""

    def __init__(self, project: ProjectSpec):
        if not project.steps:
            raise ValueError(f"Project {project.id} has no steps")
        self.project = project
        self.current_index = 0
        self.responses: dict[int, str] = {}

    @property
    def project_id(self) -> str:
        return self.project.id

    @property
    def step_count(self) -> int:
        return len(self.project.steps)

    @property
    def current_step(self) -> ProjectStep:
        return self.project.steps[self.current_index]

    @property
    def current_response(self) -> str:
        return self.responses.get(self.current_index, "")

    def is_last_step(self) -> bool:
        return self.current_index == self.step_count - 1

    def set_response(self, text: str):
        self.responses[self.current_index] = text

    def next(self) -> bool:
        """Move to the next step once the current response is detailed enough."""
        if self.is_last_step() or not is_response_sufficient(self.current_response):
            return False
        self.current_index += 1
        return True

    def previous(self) -> bool:
        if self.current_index == 0:
            return False
        self.current_index -= 1
        return True

    def can_submit(self) -> bool:
        return self.is_last_step() and is_response_sufficient(self.current_response)

    def evaluate(self, bonus: Optional[float] = None) -> int:
        """
        Score the finished draft.

        Raises:
            InvalidTransition: If the draft isn't on its last step with a
                sufficient response
        """
        if not self.can_submit():
            raise InvalidTransition(f"Project {self.project_id} draft is not ready to submit")
        responses = [self.responses.get(i, "") for i in range(self.step_count)]
        score = score_responses(responses, self.step_count, bonus)
        logger.info(f"Project {self.project_id} scored {score}")
        return score
