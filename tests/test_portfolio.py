"""Tests for the cross-track portfolio."""

from ecotracks.classroom import ProgressStore, TrackRegistry, build_portfolio, summarize_track
from ecotracks.classroom.portfolio import earned_badges, skill_level
from ecotracks.schemas import ProgressRecord


class TestTrackSummary:
    def test_counts_and_scores(self, track):
        progress = ProgressRecord(
            completed_lessons={"L1", "L2", "gone"},
            quiz_scores={"L1": 100},
            project_scores={"P1": 75, "gone-p": 10},
        )
        summary = summarize_track(track, progress)
        assert summary.lessons_completed == 2
        assert summary.total_lessons == 2
        assert summary.projects_completed == 1
        assert summary.average_score == 75
        assert summary.highest_score == 75

    def test_empty(self, track):
        summary = summarize_track(track, ProgressRecord())
        assert summary.average_score == 0
        assert summary.skill_level == "Beginner"

    def test_skill_levels(self):
        assert skill_level(0) == "Beginner"
        assert skill_level(3) == "Low Intermediate"
        assert skill_level(5) == "Intermediate"


class TestBadges:
    def test_nothing_earned(self):
        assert earned_badges(0, 0, 0) == []

    def test_thresholds(self):
        ids = [b.id for b in earned_badges(3, 1, 92)]
        assert ids == ["first-lesson", "quick-learner", "first-project", "high-achiever"]


class TestBuildPortfolio:
    def test_across_tracks(self):
        registry = TrackRegistry.default()
        store = ProgressStore.in_memory()
        for lesson_id in ("ai-1", "ai-2"):
            store.mark_lesson_completed("ai-innovation", lesson_id)
        store.mark_lesson_completed("environmental-innovation", "env-1")
        store.record_project_score("environmental-innovation", "proj-env-1", 90)

        portfolio = build_portfolio(registry, store)
        assert [t.track_id for t in portfolio.tracks] == ["ai-innovation", "environmental-innovation"]
        assert portfolio.total_lessons == 3
        assert portfolio.total_projects == 1
        assert portfolio.highest_score == 90
        assert {b.id for b in portfolio.badges} == {
            "first-lesson", "quick-learner", "first-project", "high-achiever",
        }
