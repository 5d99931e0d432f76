"""
QuizSession - One timed multiple-choice attempt.

State machine:
    in_progress --select_option--> awaiting_advance --next--> in_progress
                                                     \\-----> complete (last question)
    in_progress --tick (time runs out)--> complete

The timer is driven from outside through tick(), once per elapsed second, so
the rules don't depend on any particular scheduler.
"""

import logging
from typing import Callable, Iterable, Optional, Union

from ecotracks.schemas import Question, QuizPhase, QuizResult, QuizSpec

from .errors import InvalidTransition, PersistenceError
from .rules import PASS_THRESHOLD, round_half_up


logger = logging.getLogger(__name__)

CompletionHook = Callable[[QuizResult], object]


class QuizSession:
    """
    Ephemeral state of a single quiz attempt.

    Sessions are never resumed: abandoning one writes nothing, and a retake
    starts a fresh session.
    """

    def __init__(
        self,
        questions: Iterable[Union[Question, dict]],
        time_limit_seconds: int,
        base_points: int,
        on_complete: Optional[CompletionHook] = None,
    ):
        """
        Build a session in its initial state. Use start() to also apply a
        zero time limit.

        Args:
            questions: Ordered questions (models or plain dicts)
            time_limit_seconds: Countdown length; 0 ends the quiz at once
            base_points: Points shared evenly across questions
            on_complete: Called once with the result when the quiz completes
        """
        self.questions = [
            q if isinstance(q, Question) else Question.model_validate(q)
            for q in questions
        ]
        if not self.questions:
            raise ValueError("A quiz needs at least one question")
        if time_limit_seconds < 0:
            raise ValueError(f"time_limit_seconds must be >= 0, got {time_limit_seconds}")
        if base_points < 0:
            raise ValueError(f"base_points must be >= 0, got {base_points}")

        self.time_limit_seconds = time_limit_seconds
        self.base_points = base_points
        self.points_per_question = base_points // len(self.questions)
        self.on_complete = on_complete

        self.current_index = 0
        self.selected_option_index: Optional[int] = None
        self.correct_count = 0
        self.earned_score = 0
        self.remaining_seconds = time_limit_seconds
        self.phase = QuizPhase.IN_PROGRESS

        self._result: Optional[QuizResult] = None
        self.committed = False
        self.commit_error: Optional[PersistenceError] = None

    @classmethod
    def start(
        cls,
        questions: Iterable[Union[Question, dict]],
        time_limit_seconds: int,
        base_points: int,
        on_complete: Optional[CompletionHook] = None,
    ) -> "QuizSession":
        """Create a session and start its clock."""
        session = cls(questions, time_limit_seconds, base_points, on_complete)
        if session.remaining_seconds <= 0:
            session._complete()
        return session

    @classmethod
    def from_spec(cls, spec: QuizSpec, on_complete: Optional[CompletionHook] = None) -> "QuizSession":
        return cls.start(spec.questions, spec.time_limit_seconds, spec.base_points, on_complete)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Question:
        return self.questions[self.current_index]

    @property
    def seconds_used(self) -> int:
        return self.time_limit_seconds - self.remaining_seconds

    def is_complete(self) -> bool:
        return self.phase == QuizPhase.COMPLETE

    def is_last_question(self) -> bool:
        return self.current_index == len(self.questions) - 1

    def answer_is_correct(self) -> Optional[bool]:
        """Whether the locked-in answer is right; None before answering."""
        if self.selected_option_index is None:
            return None
        return self.selected_option_index == self.current_question.correct_option_index

    def result(self) -> QuizResult:
        """
        Final result of the attempt.

        Raises:
            InvalidTransition: If the quiz hasn't completed yet
        """
        if self._result is None:
            raise InvalidTransition(f"Quiz result requested in phase {self.phase.value}")
        return self._result

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def tick(self) -> bool:
        """
        Advance the countdown by one second.

        Only counts while a question is open; running out completes the quiz
        with any remaining questions unanswered.
        """
        if self.phase != QuizPhase.IN_PROGRESS:
            return False
        self.remaining_seconds = max(0, self.remaining_seconds - 1)
        if self.remaining_seconds == 0:
            logger.info(f"Quiz timed out on question {self.current_index + 1}/{self.question_count}")
            self._complete()
        return True

    def select_option(self, index: int) -> bool:
        """
        Lock in an answer for the current question.

        Returns False (and changes nothing) when an answer is already locked
        in or the quiz is over.

        Raises:
            ValueError: If index is not one of the question's options
        """
        if self.phase != QuizPhase.IN_PROGRESS or self.selected_option_index is not None:
            logger.debug(f"select_option({index}) rejected in phase {self.phase.value}")
            return False

        question = self.current_question
        if not 0 <= index < len(question.options):
            raise ValueError(f"Option index {index} out of range for {len(question.options)} options")

        self.selected_option_index = index
        if index == question.correct_option_index:
            self.correct_count += 1
            self.earned_score += self.points_per_question
        self.phase = QuizPhase.AWAITING_ADVANCE
        return True

    def next(self) -> bool:
        """Move past an answered question, completing the quiz after the last one."""
        if self.phase != QuizPhase.AWAITING_ADVANCE:
            logger.debug(f"next() rejected in phase {self.phase.value}")
            return False

        if self.is_last_question():
            self._complete()
        else:
            self.current_index += 1
            self.selected_option_index = None
            self.phase = QuizPhase.IN_PROGRESS
        return True

    # -------------------------------------------------------------------------
    # Completion
    # -------------------------------------------------------------------------

    def _complete(self):
        self.phase = QuizPhase.COMPLETE
        score_percent = round_half_up(100 * self.correct_count / len(self.questions))
        self._result = QuizResult(
            score_percent=score_percent,
            passed=score_percent >= PASS_THRESHOLD,
            points_earned=self.earned_score,
            correct_count=self.correct_count,
            question_count=len(self.questions),
            seconds_used=self.seconds_used,
        )
        logger.info(
            f"Quiz complete: {self.correct_count}/{len(self.questions)} correct, "
            f"{score_percent}% ({'passed' if self._result.passed else 'not passed'})"
        )
        try:
            self.commit()
        except PersistenceError:
            # Kept on the session; the caller retries with commit()
            pass

    def commit(self) -> bool:
        """
        Hand the result to the completion hook if that hasn't succeeded yet.

        Returns True once the result has been committed.

        Raises:
            InvalidTransition: If the quiz hasn't completed yet
            PersistenceError: If the hook failed to save; the result is kept
        """
        result = self.result()
        if self.committed:
            return True
        if self.on_complete is None:
            self.committed = True
            return True
        try:
            self.on_complete(result)
        except PersistenceError as e:
            self.commit_error = e
            logger.error(f"Could not save quiz result: {e}")
            raise
        self.committed = True
        self.commit_error = None
        return True
