"""
LessonWalkthrough - Step through a lesson's content sections.

Check sections carry an inline question: an answer has to be picked and its
explanation revealed before moving on. Advancing past the last section
completes the lesson.
"""

import logging
from typing import Callable, Iterable, Optional

from ecotracks.schemas import LessonSection, SectionKind


logger = logging.getLogger(__name__)


class LessonWalkthrough:
    """Reading position within one lesson. Nothing is saved until the end."""

    def __init__(
        self,
        sections: Iterable[LessonSection],
        on_complete: Optional[Callable[[], object]] = None,
    ):
        self.sections = list(sections)
        self.on_complete = on_complete

        self.current_index = 0
        self.selected_option_index: Optional[int] = None
        self.explanation_shown = False
        self.completed = False

    @property
    def section_count(self) -> int:
        return len(self.sections)

    @property
    def current_section(self) -> Optional[LessonSection]:
        """Section on screen; None for a lesson without content."""
        if not self.sections:
            return None
        return self.sections[self.current_index]

    def is_last_section(self) -> bool:
        return self.current_index >= len(self.sections) - 1

    def awaiting_answer(self) -> bool:
        """Whether the current check question still needs to be answered and revealed."""
        section = self.current_section
        return (
            section is not None
            and section.kind == SectionKind.CHECK
            and not self.explanation_shown
        )

    def answer_is_correct(self) -> Optional[bool]:
        section = self.current_section
        if section is None or section.check is None or self.selected_option_index is None:
            return None
        return self.selected_option_index == section.check.correct_option_index

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def select_option(self, index: int) -> bool:
        """
        Pick an answer on a check section. The pick can change until the
        explanation is revealed.

        Raises:
            ValueError: If index is not one of the question's options
        """
        if self.completed or not self.awaiting_answer():
            return False
        options = self.current_section.check.options
        if not 0 <= index < len(options):
            raise ValueError(f"Option index {index} out of range for {len(options)} options")
        self.selected_option_index = index
        return True

    def next(self) -> bool:
        """
        Move forward one step.

        On a check section the first call reveals the explanation and the
        second moves on. On the last section this completes the lesson.
        Returns False when rejected (no answer picked, or already complete).

        Raises:
            PersistenceError: If saving the completion failed; the walkthrough
                stays on its last section so the call can be repeated
        """
        if self.completed:
            return False

        if self.awaiting_answer():
            if self.selected_option_index is None:
                logger.debug("next() rejected: check question not answered")
                return False
            self.explanation_shown = True
            return True

        if self.is_last_section():
            self._complete()
        else:
            self.current_index += 1
            self._reset_check()
        return True

    def previous(self) -> bool:
        if self.completed or self.current_index == 0:
            return False
        self.current_index -= 1
        self._reset_check()
        return True

    def _reset_check(self):
        self.selected_option_index = None
        self.explanation_shown = False

    def _complete(self):
        # Hook first, so a failed save leaves the walkthrough incomplete
        if self.on_complete is not None:
            self.on_complete()
        self.completed = True
        logger.info(f"Lesson walkthrough finished after {self.section_count} sections")
