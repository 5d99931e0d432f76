"""Tests for the quiz state machine."""

import pytest

from ecotracks.classroom import InvalidTransition, PersistenceError, QuizSession
from ecotracks.schemas import QuizPhase

from conftest import make_questions


def answer_all(session: QuizSession, choices: list[int]):
    for choice in choices:
        assert session.select_option(choice)
        assert session.next()


class TestQuizStart:
    def test_initial_state(self):
        session = QuizSession.start(make_questions(3), 60, 100)
        assert session.phase == QuizPhase.IN_PROGRESS
        assert session.current_index == 0
        assert session.selected_option_index is None
        assert session.correct_count == 0
        assert session.earned_score == 0
        assert session.remaining_seconds == 60
        assert session.points_per_question == 33

    def test_accepts_question_models(self, track):
        session = QuizSession.from_spec(track.quizzes["L1"])
        assert session.question_count == 3
        assert session.current_question.prompt == "Question 1?"

    def test_empty_questions_rejected(self):
        with pytest.raises(ValueError):
            QuizSession.start([], 60, 100)

    def test_negative_settings_rejected(self):
        with pytest.raises(ValueError):
            QuizSession.start(make_questions(1), -1, 100)
        with pytest.raises(ValueError):
            QuizSession.start(make_questions(1), 60, -5)

    def test_zero_time_limit_completes_immediately(self):
        results = []
        session = QuizSession.start(make_questions(3), 0, 100, on_complete=results.append)
        assert session.is_complete()
        assert session.result().score_percent == 0
        assert session.result().passed is False
        assert len(results) == 1

    def test_result_before_completion_raises(self):
        session = QuizSession.start(make_questions(2), 60, 100)
        with pytest.raises(InvalidTransition):
            session.result()


class TestQuizAnswering:
    def test_two_of_three_is_sixty_seven_percent(self):
        session = QuizSession.start(make_questions(3), 60, 100)
        answer_all(session, [0, 0, 1])

        result = session.result()
        assert result.score_percent == 67
        assert result.passed is False
        assert result.correct_count == 2
        assert result.question_count == 3
        assert result.points_earned == 66

    def test_all_correct_passes(self):
        session = QuizSession.start(make_questions(4), 60, 100)
        answer_all(session, [0, 0, 0, 0])
        assert session.result().score_percent == 100
        assert session.result().passed is True
        assert session.result().points_earned == 100

    def test_exactly_threshold_passes(self):
        session = QuizSession.start(make_questions(10), 60, 100)
        answer_all(session, [0] * 7 + [1] * 3)
        assert session.result().score_percent == 70
        assert session.result().passed is True

    def test_select_moves_to_awaiting_advance(self):
        session = QuizSession.start(make_questions(2), 60, 100)
        assert session.select_option(1)
        assert session.phase == QuizPhase.AWAITING_ADVANCE
        assert session.answer_is_correct() is False

    def test_second_select_is_rejected(self):
        session = QuizSession.start(make_questions(2), 60, 100)
        session.select_option(0)
        assert session.select_option(1) is False
        assert session.selected_option_index == 0
        assert session.correct_count == 1

    def test_next_before_answer_is_rejected(self):
        session = QuizSession.start(make_questions(2), 60, 100)
        assert session.next() is False
        assert session.current_index == 0

    def test_out_of_range_option(self):
        session = QuizSession.start(make_questions(1), 60, 100)
        with pytest.raises(ValueError):
            session.select_option(3)
        assert session.phase == QuizPhase.IN_PROGRESS

    def test_next_resets_selection(self):
        session = QuizSession.start(make_questions(2), 60, 100)
        session.select_option(0)
        session.next()
        assert session.current_index == 1
        assert session.selected_option_index is None
        assert session.answer_is_correct() is None
        assert session.is_last_question()

    def test_transitions_rejected_after_completion(self):
        session = QuizSession.start(make_questions(1), 60, 100)
        answer_all(session, [0])
        assert session.is_complete()
        assert session.select_option(0) is False
        assert session.next() is False
        assert session.tick() is False


class TestQuizTimer:
    def test_tick_counts_down(self):
        session = QuizSession.start(make_questions(2), 5, 100)
        assert session.tick()
        assert session.remaining_seconds == 4
        assert session.seconds_used == 1

    def test_timeout_completes_with_answers_so_far(self):
        results = []
        session = QuizSession.start(make_questions(3), 3, 90, on_complete=results.append)
        session.select_option(0)
        session.next()
        for _ in range(3):
            session.tick()

        assert session.is_complete()
        assert session.remaining_seconds == 0
        result = session.result()
        assert result.correct_count == 1
        assert result.score_percent == 33
        assert result.points_earned == 30
        assert result.seconds_used == 3
        assert results == [result]

    def test_timer_paused_while_awaiting_advance(self):
        session = QuizSession.start(make_questions(2), 2, 100)
        session.select_option(0)
        assert session.tick() is False
        assert session.remaining_seconds == 2


class TestQuizCommit:
    def test_hook_called_once(self):
        results = []
        session = QuizSession.start(make_questions(1), 60, 100, on_complete=results.append)
        answer_all(session, [0])
        assert session.committed
        assert session.commit() is True
        assert len(results) == 1

    def test_without_hook_is_committed(self):
        session = QuizSession.start(make_questions(1), 60, 100)
        answer_all(session, [0])
        assert session.committed

    def test_commit_before_completion_raises(self):
        session = QuizSession.start(make_questions(1), 60, 100)
        with pytest.raises(InvalidTransition):
            session.commit()

    def test_failed_save_is_retryable(self):
        attempts = []

        def flaky(result):
            attempts.append(result)
            if len(attempts) == 1:
                raise PersistenceError("disk full")

        session = QuizSession.start(make_questions(2), 60, 100, on_complete=flaky)
        answer_all(session, [0, 0])

        assert session.is_complete()
        assert session.committed is False
        assert isinstance(session.commit_error, PersistenceError)
        assert session.result().score_percent == 100

        assert session.commit() is True
        assert session.committed
        assert session.commit_error is None
        assert len(attempts) == 2

    def test_commit_reraises_persistence_error(self):
        def broken(result):
            raise PersistenceError("read-only")

        session = QuizSession.start(make_questions(1), 60, 100, on_complete=broken)
        answer_all(session, [0])
        with pytest.raises(PersistenceError):
            session.commit()
        assert session.committed is False
