"""
TrackRegistry - Read-only lookup of track definitions.

Provides:
- Track lookup by id with NotFound signalling
- Lesson, project and quiz lookup within a track
- Catalog ordering for track lists
"""

from pathlib import Path
from typing import Iterable, Iterator, Optional

from ecotracks.schemas import LessonSpec, ProjectSpec, QuizSpec, TrackDefinition
from ecotracks.utils.catalog_loader import load_catalog

from .errors import LessonNotFound, ProjectNotFound, QuizNotFound, TrackNotFound


class TrackRegistry:
    """
    Static catalog of tracks, keyed by track id.

    Definitions are immutable; the registry never changes after construction.
    """

    def __init__(self, tracks: Iterable[TrackDefinition]):
        self._tracks: dict[str, TrackDefinition] = {}
        for track in tracks:
            if track.id in self._tracks:
                raise ValueError(f"Duplicate track id: {track.id}")
            self._tracks[track.id] = track

    @classmethod
    def from_directory(cls, catalog_dir: Optional[Path] = None) -> "TrackRegistry":
        """Build a registry from a directory of YAML track files."""
        return cls(load_catalog(catalog_dir))

    @classmethod
    def default(cls) -> "TrackRegistry":
        """Registry over the catalog shipped with the package."""
        return cls.from_directory()

    def __contains__(self, track_id: object) -> bool:
        return track_id in self._tracks

    def __len__(self) -> int:
        return len(self._tracks)

    def __iter__(self) -> Iterator[TrackDefinition]:
        return iter(self._tracks.values())

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get(self, track_id: str) -> TrackDefinition:
        """
        Get a track definition.

        Raises:
            TrackNotFound: If no track has this id
        """
        track = self._tracks.get(track_id)
        if track is None:
            raise TrackNotFound(track_id)
        return track

    def list_tracks(self) -> list[TrackDefinition]:
        """All tracks in catalog order."""
        return list(self._tracks.values())

    def track_ids(self) -> list[str]:
        return list(self._tracks)

    def get_lesson(self, track_id: str, lesson_id: str) -> LessonSpec:
        lesson = self.get(track_id).find_lesson(lesson_id)
        if lesson is None:
            raise LessonNotFound(lesson_id)
        return lesson

    def get_project(self, track_id: str, project_id: str) -> ProjectSpec:
        project = self.get(track_id).find_project(project_id)
        if project is None:
            raise ProjectNotFound(project_id)
        return project

    def get_quiz(self, track_id: str, lesson_id: str) -> QuizSpec:
        """
        Get the quiz attached to a lesson.

        Raises:
            TrackNotFound, LessonNotFound: If the ids don't resolve
            QuizNotFound: If the lesson has no quiz
        """
        track = self.get(track_id)
        if track.find_lesson(lesson_id) is None:
            raise LessonNotFound(lesson_id)
        quiz = track.quizzes.get(lesson_id)
        if quiz is None:
            raise QuizNotFound(lesson_id)
        return quiz
