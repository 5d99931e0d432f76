"""
Portfolio - Cross-track achievements for one learner.

Summarizes each track (lessons, projects, scores) and awards badges from the
combined totals.
"""

from dataclasses import dataclass, field

from ecotracks.schemas import ProgressRecord, TrackDefinition

from .progress import ProgressStore
from .registry import TrackRegistry
from .rules import round_half_up


@dataclass(frozen=True)
class Badge:
    id: str
    title: str
    description: str
    kind: str         # lessons, projects or score
    requirement: int


BADGES = (
    Badge("first-lesson", "First Steps", "Complete your first lesson", "lessons", 1),
    Badge("quick-learner", "Quick Learner", "Complete 3 lessons", "lessons", 3),
    Badge("knowledge-seeker", "Knowledge Seeker", "Complete 6 lessons", "lessons", 6),
    Badge("first-project", "Builder", "Complete your first project", "projects", 1),
    Badge("project-master", "Project Master", "Complete 3 projects", "projects", 3),
    Badge("high-achiever", "High Achiever", "Score 90+ on a project", "score", 90),
)


@dataclass(frozen=True)
class TrackSummary:
    track_id: str
    title: str
    lessons_completed: int
    total_lessons: int
    projects_completed: int
    total_projects: int
    average_score: int
    highest_score: int

    @property
    def skill_level(self) -> str:
        return skill_level(self.lessons_completed)


@dataclass
class Portfolio:
    tracks: list[TrackSummary] = field(default_factory=list)
    badges: list[Badge] = field(default_factory=list)

    @property
    def total_lessons(self) -> int:
        return sum(t.lessons_completed for t in self.tracks)

    @property
    def total_projects(self) -> int:
        return sum(t.projects_completed for t in self.tracks)

    @property
    def highest_score(self) -> int:
        return max((t.highest_score for t in self.tracks), default=0)


def skill_level(lessons_completed: int) -> str:
    if lessons_completed >= 5:
        return "Intermediate"
    if lessons_completed >= 3:
        return "Low Intermediate"
    return "Beginner"


def summarize_track(track: TrackDefinition, progress: ProgressRecord) -> TrackSummary:
    """Summarize one track, ignoring ids that are no longer in it."""
    lessons = [lid for lid in track.lesson_ids if lid in progress.completed_lessons]
    scores = [
        progress.project_scores[pid]
        for pid in track.project_ids
        if pid in progress.project_scores
    ]
    return TrackSummary(
        track_id=track.id,
        title=track.title,
        lessons_completed=len(lessons),
        total_lessons=len(track.lessons),
        projects_completed=len(scores),
        total_projects=len(track.projects),
        average_score=round_half_up(sum(scores) / len(scores)) if scores else 0,
        highest_score=max(scores, default=0),
    )


def earned_badges(total_lessons: int, total_projects: int, highest_score: int) -> list[Badge]:
    totals = {"lessons": total_lessons, "projects": total_projects, "score": highest_score}
    return [badge for badge in BADGES if totals[badge.kind] >= badge.requirement]


def build_portfolio(registry: TrackRegistry, store: ProgressStore) -> Portfolio:
    """Summarize every catalog track for the store's learner."""
    portfolio = Portfolio(
        tracks=[summarize_track(track, store.load(track.id)) for track in registry.list_tracks()]
    )
    portfolio.badges = earned_badges(
        portfolio.total_lessons, portfolio.total_projects, portfolio.highest_score
    )
    return portfolio
