"""
Error taxonomy for the progression engine.

None of these are fatal: NotFound maps to a placeholder state in the UI,
InvalidTransition marks a caller bug, PersistenceError is retryable.
"""


class EcoTracksError(Exception):
    """Base class for all EcoTracks errors."""


class NotFound(EcoTracksError, KeyError):
    """Unknown track, lesson, project or quiz id."""

    def __init__(self, kind: str, identifier: str):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found: {identifier}")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return self.args[0]


class TrackNotFound(NotFound):
    def __init__(self, track_id: str):
        super().__init__("Track", track_id)


class LessonNotFound(NotFound):
    def __init__(self, lesson_id: str):
        super().__init__("Lesson", lesson_id)


class ProjectNotFound(NotFound):
    def __init__(self, project_id: str):
        super().__init__("Project", project_id)


class QuizNotFound(NotFound):
    def __init__(self, lesson_id: str):
        super().__init__("Quiz for lesson", lesson_id)


class InvalidTransition(EcoTracksError):
    """Operation not permitted in the current state."""


class PersistenceError(EcoTracksError):
    """The progress backend failed to read or write a record."""
