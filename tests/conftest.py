"""Shared fixtures for EcoTracks tests."""

import pytest

from ecotracks.classroom import Navigator, ProgressStore, TrackRegistry
from ecotracks.schemas import TrackDefinition


def make_questions(count: int = 3) -> list[dict]:
    """Questions whose correct answer is always option 0."""
    return [
        {
            "prompt": f"Question {i + 1}?",
            "options": ["right", "wrong", "also wrong"],
            "correct_option_index": 0,
            "explanation": f"Explanation {i + 1}",
        }
        for i in range(count)
    ]


def make_sections() -> list[dict]:
    """Text, check, visual: the check sits in the middle."""
    return [
        {"title": "Intro", "content": "Some **markdown**."},
        {"kind": "check", "title": "Check", "check": make_questions(1)[0]},
        {"kind": "visual", "title": "Diagram", "content": "Look.", "image_url": "https://example.com/a.png"},
    ]


def make_steps(count: int = 2) -> list[dict]:
    return [
        {"title": f"Step {i + 1}", "description": f"Do part {i + 1}", "hint": "Think small"}
        for i in range(count)
    ]


@pytest.fixture
def track() -> TrackDefinition:
    """
    Lessons L1, L2; project P1 requires L1; L1 has a three-question quiz.

    L1 has three sections with a check in the middle, L2 has none. P1 has two steps.
    """
    return TrackDefinition.model_validate({
        "id": "t1",
        "title": "Test Track",
        "lessons": [
            {"id": "L1", "title": "Lesson One", "level": "beginner", "sections": make_sections()},
            {"id": "L2", "title": "Lesson Two", "level": "intermediate"},
        ],
        "projects": [
            {"id": "P1", "title": "Project One", "required_lesson_id": "L1", "steps": make_steps(2)},
        ],
        "quizzes": {
            "L1": {"questions": make_questions(3), "time_limit_seconds": 60, "base_points": 100},
        },
    })


@pytest.fixture
def store() -> ProgressStore:
    return ProgressStore.in_memory(learner_id="learner-1")


@pytest.fixture
def registry(track) -> TrackRegistry:
    return TrackRegistry([track])


@pytest.fixture
def navigator(registry, store) -> Navigator:
    return Navigator(registry, store)
