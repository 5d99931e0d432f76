"""
ProgressStore - Persist learner progress per track.

Stores one ProgressRecord per (learner, track):
- Completed lesson ids
- Quiz scores per lesson (percent correct)
- Project scores per project

Records live behind a small key-value backend so the same store can run
against SQLite (~/.ecotracks/progress.db) or an in-memory dict.
"""

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import NamedTuple, Optional, Protocol

from pydantic import ValidationError

from ecotracks.schemas import ProgressRecord

from .errors import PersistenceError


logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_DIR = Path.home() / ".ecotracks"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"


class ProgressKey(NamedTuple):
    learner_id: str
    track_id: str


class RecordBackend(Protocol):
    """Durable per-key storage for serialized progress records."""

    def get(self, key: ProgressKey) -> Optional[dict]:
        ...

    def put(self, key: ProgressKey, record: dict) -> None:
        ...


# -----------------------------------------------------------------------------
# Backends
# -----------------------------------------------------------------------------


class MemoryBackend:
    """In-process backend for tests and guest sessions."""

    def __init__(self):
        self._records: dict[ProgressKey, str] = {}

    def get(self, key: ProgressKey) -> Optional[dict]:
        raw = self._records.get(key)
        return json.loads(raw) if raw is not None else None

    def put(self, key: ProgressKey, record: dict):
        # Serialize so callers can't mutate stored state through shared references
        self._records[key] = json.dumps(record)

    def __len__(self) -> int:
        return len(self._records)


class SQLiteBackend:
    """
    SQLite backend, one row per (learner, track).

    The record body is stored as JSON so the schema survives new progress
    fields without migrations.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize backend.

        Args:
            db_path: Path to progress.db (default: ~/.ecotracks/progress.db)
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS progress_records (
                    learner_id TEXT NOT NULL,
                    track_id TEXT NOT NULL,
                    record JSON NOT NULL,
                    updated_at TEXT NOT NULL,
                    PRIMARY KEY (learner_id, track_id)
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def get(self, key: ProgressKey) -> Optional[dict]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT record FROM progress_records
                   WHERE learner_id = ? AND track_id = ?""",
                (key.learner_id, key.track_id)
            )
            row = cursor.fetchone()
            return json.loads(row["record"]) if row else None
        finally:
            conn.close()

    def put(self, key: ProgressKey, record: dict):
        conn = self._get_connection()
        try:
            now = datetime.now().isoformat()
            body = json.dumps(record)
            conn.execute(
                """INSERT INTO progress_records (learner_id, track_id, record, updated_at)
                   VALUES (?, ?, ?, ?)
                   ON CONFLICT(learner_id, track_id) DO UPDATE SET
                     record = ?,
                     updated_at = ?""",
                (key.learner_id, key.track_id, body, now, body, now)
            )
            conn.commit()
        finally:
            conn.close()


# -----------------------------------------------------------------------------
# Store
# -----------------------------------------------------------------------------


def _validate_score(score: int) -> int:
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValueError(f"Score must be an integer, got {score!r}")
    if not 0 <= score <= 100:
        raise ValueError(f"Score must be between 0 and 100, got {score}")
    return score


class ProgressStore:
    """
    Per-learner progress ledger over a RecordBackend.

    Every mutation writes through to the backend before returning and hands
    back the freshly written record; callers derive unlock state from that
    record rather than from a cached copy.
    """

    def __init__(self, backend: RecordBackend, learner_id: str = "default"):
        """
        Initialize progress store.

        Args:
            backend: Storage for serialized records
            learner_id: Learner the store is scoped to
        """
        self.backend = backend
        self.learner_id = learner_id

    @classmethod
    def in_memory(cls, learner_id: str = "default") -> "ProgressStore":
        return cls(MemoryBackend(), learner_id)

    @classmethod
    def sqlite(cls, db_path: Optional[Path] = None, learner_id: str = "default") -> "ProgressStore":
        return cls(SQLiteBackend(db_path), learner_id)

    def _key(self, track_id: str) -> ProgressKey:
        return ProgressKey(self.learner_id, track_id)

    def _read(self, track_id: str) -> ProgressRecord:
        try:
            raw = self.backend.get(self._key(track_id))
        except (sqlite3.Error, OSError, ValueError) as e:
            logger.error(f"Failed to load progress for {self.learner_id}/{track_id}: {e}")
            raise PersistenceError(f"Could not load progress for track {track_id}") from e
        if raw is None:
            return ProgressRecord()
        try:
            return ProgressRecord.model_validate(raw)
        except ValidationError as e:
            raise PersistenceError(f"Stored progress for track {track_id} is corrupt") from e

    def _write(self, track_id: str, record: ProgressRecord) -> ProgressRecord:
        try:
            self.backend.put(self._key(track_id), record.model_dump(mode="json"))
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Failed to save progress for {self.learner_id}/{track_id}: {e}")
            raise PersistenceError(f"Could not save progress for track {track_id}") from e
        return record

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def load(self, track_id: str) -> ProgressRecord:
        """Get the record for a track; an empty record if none exists yet."""
        return self._read(track_id)

    def mark_lesson_completed(self, track_id: str, lesson_id: str) -> ProgressRecord:
        """Mark a lesson as completed. Completing it again is a no-op."""
        record = self._read(track_id)
        if lesson_id in record.completed_lessons:
            return record
        updated = record.model_copy(
            update={"completed_lessons": record.completed_lessons | {lesson_id}}
        )
        logger.info(f"Lesson completed: {self.learner_id}/{track_id}/{lesson_id}")
        return self._write(track_id, updated)

    def record_quiz_score(self, track_id: str, lesson_id: str, score: int) -> ProgressRecord:
        """Store a quiz score, replacing any earlier attempt."""
        _validate_score(score)
        record = self._read(track_id)
        updated = record.model_copy(
            update={"quiz_scores": {**record.quiz_scores, lesson_id: score}}
        )
        logger.info(f"Quiz score recorded: {self.learner_id}/{track_id}/{lesson_id} = {score}")
        return self._write(track_id, updated)

    def record_project_score(self, track_id: str, project_id: str, score: int) -> ProgressRecord:
        """Store a project score, replacing any earlier submission."""
        _validate_score(score)
        record = self._read(track_id)
        updated = record.model_copy(
            update={"project_scores": {**record.project_scores, project_id: score}}
        )
        logger.info(f"Project score recorded: {self.learner_id}/{track_id}/{project_id} = {score}")
        return self._write(track_id, updated)
