"""Whole-snapshot persistence of the verse catalog and progress.

Every save rewrites the full snapshot inside one transaction. Records are
stored as JSON produced by the pydantic models, so each row is field-tagged
and can be read back without knowing the column layout.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Tuple

from pydantic import ValidationError

from models.progress import MemoryProgress, ReviewSession
from models.verse import MasteryLevel, MemoryVerse, default_verses
from .database import get_conn, init_db

logger = logging.getLogger(__name__)

Snapshot = Tuple[List[MemoryVerse], MemoryProgress]


class PersistenceGateway(Protocol):
    def load(self) -> Snapshot: ...

    def save(self, verses: Sequence[MemoryVerse], progress: MemoryProgress) -> bool: ...


def reconcile(verses: List[MemoryVerse], progress: MemoryProgress) -> Snapshot:
    """Recount the catalog-derived counters after a load."""
    progress.total_verses = len(verses)
    progress.verses_memorized = sum(1 for verse in verses if verse.mastery_level == MasteryLevel.MASTERED)
    return verses, progress


def seed_snapshot() -> Snapshot:
    return reconcile(default_verses(), MemoryProgress())


class SqliteGateway:
    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self._initialized = False

    def _ensure_db(self) -> None:
        if not self._initialized:
            init_db(self.db_path)
            self._initialized = True

    def load(self) -> Snapshot:
        try:
            self._ensure_db()
            with get_conn(self.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT record FROM memory_progress WHERE id = 1")
                progress_row = cursor.fetchone()
                if not progress_row:
                    logger.info("No saved snapshot in %s, starting from the seed catalog", self.db_path)
                    return seed_snapshot()
                progress = MemoryProgress.model_validate_json(progress_row["record"])
                cursor.execute("SELECT record FROM memory_verses ORDER BY position ASC")
                verses = [MemoryVerse.model_validate_json(row["record"]) for row in cursor.fetchall()]
                cursor.execute("SELECT record FROM review_sessions ORDER BY position ASC")
                progress.sessions = [ReviewSession.model_validate_json(row["record"]) for row in cursor.fetchall()]
        except (sqlite3.Error, ValidationError) as exc:
            logger.warning("Could not load snapshot from %s (%s), starting from the seed catalog", self.db_path, exc)
            return seed_snapshot()
        logger.info("Loaded %d verses and %d sessions from %s", len(verses), len(progress.sessions), self.db_path)
        return reconcile(verses, progress)

    def save(self, verses: Sequence[MemoryVerse], progress: MemoryProgress) -> bool:
        """Write the whole snapshot. Failures are logged and reported, never raised."""
        try:
            self._ensure_db()
            verse_rows = [
                (
                    str(verse.id),
                    position,
                    int(verse.mastery_level),
                    verse.next_review.isoformat() if verse.next_review else None,
                    verse.model_dump_json(),
                )
                for position, verse in enumerate(verses)
            ]
            session_rows = [
                (str(session.id), position, session.date.isoformat(), session.model_dump_json())
                for position, session in enumerate(progress.sessions)
            ]
            progress_record = progress.model_dump_json(exclude={"sessions"})
            with get_conn(self.db_path) as conn:
                with conn:
                    cursor = conn.cursor()
                    cursor.execute("DELETE FROM memory_verses")
                    cursor.execute("DELETE FROM review_sessions")
                    cursor.executemany(
                        """
                        INSERT INTO memory_verses (id, position, mastery_level, next_review, record)
                        VALUES (?, ?, ?, ?, ?)
                        """,
                        verse_rows,
                    )
                    cursor.executemany(
                        "INSERT INTO review_sessions (id, position, date, record) VALUES (?, ?, ?, ?)",
                        session_rows,
                    )
                    cursor.execute(
                        """
                        INSERT INTO memory_progress (id, record, saved_at)
                        VALUES (1, ?, datetime('now'))
                        ON CONFLICT(id) DO UPDATE SET
                            record = excluded.record,
                            saved_at = excluded.saved_at
                        """,
                        (progress_record,),
                    )
        except (sqlite3.Error, ValueError, TypeError, OSError) as exc:
            logger.warning("Saving snapshot to %s failed: %s", self.db_path, exc)
            return False
        return True


class InMemoryGateway:
    """Keeps the last snapshot as JSON strings; for tests and throwaway sessions."""

    def __init__(self, snapshot: Optional[Snapshot] = None):
        self._verses: Optional[List[str]] = None
        self._progress: Optional[str] = None
        self.saves = 0
        if snapshot is not None:
            self.save(*snapshot)

    def load(self) -> Snapshot:
        if self._progress is None:
            return seed_snapshot()
        verses = [MemoryVerse.model_validate_json(record) for record in self._verses or []]
        return reconcile(verses, MemoryProgress.model_validate_json(self._progress))

    def save(self, verses: Sequence[MemoryVerse], progress: MemoryProgress) -> bool:
        self._verses = [verse.model_dump_json() for verse in verses]
        self._progress = progress.model_dump_json()
        self.saves += 1
        return True
