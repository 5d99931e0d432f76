"""
Schema validation tests for EcoTracks.

Tests the Pydantic models to ensure they validate correctly.
"""

import pytest
from pydantic import ValidationError

from ecotracks.schemas import (
    # Curriculum
    LessonLevel,
    Question,
    QuizSpec,
    LessonSpec,
    ProjectSpec,
    TrackDefinition,
    LessonSection,
    SectionKind,
    ProjectStep,
    # Progress
    ProgressRecord,
    # Quiz
    QuizPhase,
    QuizResult,
)


class TestQuestionSchemas:
    """Test quiz content schemas."""

    def test_question_valid(self):
        q = Question(prompt="What is CO₂?", options=["A gas", "A vitamin"], correct_option_index=0)
        assert q.correct_option_index == 0
        assert q.explanation is None

    def test_question_correct_index_out_of_range(self):
        with pytest.raises(ValidationError):
            Question(prompt="?", options=["a", "b"], correct_option_index=2)

    def test_question_needs_two_options(self):
        with pytest.raises(ValidationError):
            Question(prompt="?", options=["a"], correct_option_index=0)

    def test_quiz_spec_defaults(self):
        quiz = QuizSpec(questions=[Question(prompt="?", options=["a", "b"], correct_option_index=1)])
        assert quiz.time_limit_seconds == 120
        assert quiz.base_points == 100

    def test_quiz_spec_requires_questions(self):
        with pytest.raises(ValidationError):
            QuizSpec(questions=[])

    def test_quiz_spec_negative_time_limit(self):
        q = Question(prompt="?", options=["a", "b"], correct_option_index=0)
        with pytest.raises(ValidationError):
            QuizSpec(questions=[q], time_limit_seconds=-1)


class TestTrackDefinition:
    """Test track catalog schema and its reference checks."""

    def test_valid_track(self, track):
        assert track.lesson_ids == ["L1", "L2"]
        assert track.project_ids == ["P1"]
        assert track.lessons[1].level == LessonLevel.INTERMEDIATE
        assert "L1" in track.quizzes

    def test_project_with_unknown_lesson(self):
        with pytest.raises(ValidationError):
            TrackDefinition(
                id="t",
                title="T",
                lessons=[LessonSpec(id="L1", title="One")],
                projects=[ProjectSpec(id="P1", title="P", required_lesson_id="L9")],
            )

    def test_quiz_for_unknown_lesson(self):
        q = Question(prompt="?", options=["a", "b"], correct_option_index=0)
        with pytest.raises(ValidationError):
            TrackDefinition(
                id="t",
                title="T",
                lessons=[LessonSpec(id="L1", title="One")],
                quizzes={"L2": QuizSpec(questions=[q])},
            )

    def test_duplicate_lesson_ids(self):
        with pytest.raises(ValidationError):
            TrackDefinition(
                id="t",
                title="T",
                lessons=[LessonSpec(id="L1", title="One"), LessonSpec(id="L1", title="Again")],
            )

    def test_duplicate_project_ids(self):
        with pytest.raises(ValidationError):
            TrackDefinition(
                id="t",
                title="T",
                lessons=[LessonSpec(id="L1", title="One")],
                projects=[
                    ProjectSpec(id="P1", title="P", required_lesson_id="L1"),
                    ProjectSpec(id="P1", title="P again", required_lesson_id="L1"),
                ],
            )

    def test_invalid_level(self):
        with pytest.raises(ValidationError):
            LessonSpec(id="L1", title="One", level="expert")

    def test_track_is_immutable(self, track):
        with pytest.raises(ValidationError):
            track.title = "Changed"

    def test_empty_track_allowed(self):
        track = TrackDefinition(id="empty", title="Empty")
        assert track.lessons == []
        assert track.projects == []

    def test_find_helpers(self, track):
        assert track.find_lesson("L2").title == "Lesson Two"
        assert track.find_lesson("missing") is None
        assert track.find_project("P1").required_lesson_id == "L1"
        assert track.find_project("missing") is None
        assert [p.id for p in track.projects_for_lesson("L1")] == ["P1"]
        assert track.projects_for_lesson("L2") == []


class TestLessonContent:
    """Test lesson sections and project steps."""

    def test_text_section_default(self):
        section = LessonSection(title="Intro", content="Hello")
        assert section.kind == SectionKind.TEXT
        assert section.check is None

    def test_check_section_needs_question(self):
        with pytest.raises(ValidationError):
            LessonSection(kind="check", title="Check")

    def test_question_only_on_check_sections(self):
        q = Question(prompt="?", options=["a", "b"], correct_option_index=0)
        with pytest.raises(ValidationError):
            LessonSection(kind="text", content="x", check=q)
        assert LessonSection(kind="check", check=q).check == q

    def test_fixture_sections(self, track):
        kinds = [s.kind for s in track.find_lesson("L1").sections]
        assert kinds == [SectionKind.TEXT, SectionKind.CHECK, SectionKind.VISUAL]
        assert track.find_lesson("L2").sections == []

    def test_project_step_optional_fields(self):
        step = ProjectStep(title="Plan", description="Write a plan")
        assert step.hint is None
        assert step.template is None
        project = ProjectSpec(id="P1", title="P", required_lesson_id="L1", steps=[step])
        assert project.steps[0].title == "Plan"
        assert project.scoring_criteria == []


class TestProgressSchemas:
    """Test progress record schema."""

    def test_empty_record(self):
        record = ProgressRecord()
        assert record.is_empty()
        assert record.completed_lessons == set()

    def test_score_out_of_range(self):
        with pytest.raises(ValidationError):
            ProgressRecord(quiz_scores={"L1": 101})
        with pytest.raises(ValidationError):
            ProgressRecord(project_scores={"P1": -1})

    def test_json_roundtrip_keeps_set(self):
        record = ProgressRecord(completed_lessons={"L1", "L2"}, quiz_scores={"L1": 80})
        restored = ProgressRecord.model_validate(record.model_dump(mode="json"))
        assert restored == record
        assert restored.is_lesson_completed("L2")


class TestQuizSchemas:
    """Test quiz phase and result schemas."""

    def test_phase_values(self):
        assert QuizPhase.IN_PROGRESS.value == "in_progress"
        assert QuizPhase.AWAITING_ADVANCE.value == "awaiting_advance"
        assert QuizPhase.COMPLETE.value == "complete"

    def test_result_valid(self):
        result = QuizResult(
            score_percent=67, passed=False, points_earned=66,
            correct_count=2, question_count=3,
        )
        assert result.seconds_used == 0

    def test_result_percent_range(self):
        with pytest.raises(ValidationError):
            QuizResult(
                score_percent=150, passed=True, points_earned=0,
                correct_count=0, question_count=1,
            )
