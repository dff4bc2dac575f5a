from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from models.progress import ReviewSession
from models.verse import MemoryVerse
from utils.catalog import VerseCatalog, VerseId
from utils.clock import Calendar, Clock, SystemClock, ensure_aware
from utils.grading import TypedGrade, check_blanks, grade_typed_recall
from utils.mastery import MasteryTransition, review_interval, transition
from utils.practice import build_blanks
from utils.progress import ProgressTracker

logger = logging.getLogger(__name__)


class ReviewStatus(str, Enum):
    RECORDED = "recorded"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ReviewOutcome:
    status: ReviewStatus
    verse: Optional[MemoryVerse] = None
    transition: Optional[MasteryTransition] = None

    @property
    def found(self) -> bool:
        return self.status == ReviewStatus.RECORDED


NOT_FOUND = ReviewOutcome(status=ReviewStatus.NOT_FOUND)


@dataclass
class SessionTally:
    """Reviews recorded since the last completed session."""

    verses_reviewed: int = 0
    correct_answers: int = 0

    def add(self, correct: bool) -> None:
        self.verses_reviewed += 1
        if correct:
            self.correct_answers += 1


class ReviewScheduler:
    """Grades feed in here; catalog, progress and the saved snapshot move together.

    The scheduler owns no locks. One instance serves one user and callers
    serialize access to it.
    """

    def __init__(
        self,
        catalog: VerseCatalog,
        tracker: ProgressTracker,
        gateway=None,
        clock: Optional[Clock] = None,
        grading_config: Optional[Dict[str, Any]] = None,
    ):
        if catalog.progress is not tracker.progress:
            raise ValueError("catalog and tracker must share one MemoryProgress")
        self.catalog = catalog
        self.tracker = tracker
        self.gateway = gateway
        self.clock = clock or SystemClock()
        self.grading_config = grading_config
        self.tally = SessionTally()

    @classmethod
    def from_gateway(
        cls,
        gateway,
        clock: Optional[Clock] = None,
        calendar: Optional[Calendar] = None,
        grading_config: Optional[Dict[str, Any]] = None,
    ) -> "ReviewScheduler":
        verses, progress = gateway.load()
        return cls(
            VerseCatalog(verses, progress),
            ProgressTracker(progress, calendar),
            gateway=gateway,
            clock=clock,
            grading_config=grading_config,
        )

    @property
    def progress(self):
        return self.tracker.progress

    def _now(self, now: Optional[datetime]) -> datetime:
        return ensure_aware(now if now is not None else self.clock.now())

    def persist(self) -> bool:
        if self.gateway is None:
            return True
        return self.gateway.save(self.catalog.verses, self.progress)

    # Catalog mutations

    def add_verse(self, verse: MemoryVerse, now: Optional[datetime] = None) -> MemoryVerse:
        self.catalog.add(verse, self._now(now))
        self.persist()
        return verse

    def remove_verse(self, verse_id: VerseId) -> Optional[MemoryVerse]:
        verse = self.catalog.remove(verse_id)
        if verse is not None:
            self.persist()
        return verse

    def toggle_favorite(self, verse_id: VerseId) -> Optional[MemoryVerse]:
        verse = self.catalog.toggle_favorite(verse_id)
        if verse is not None:
            self.persist()
        return verse

    def update_notes(self, verse_id: VerseId, notes: str) -> Optional[MemoryVerse]:
        verse = self.catalog.update_notes(verse_id, notes)
        if verse is not None:
            self.persist()
        return verse

    # Reviews

    def due_verses(self, as_of: Optional[datetime] = None) -> List[MemoryVerse]:
        return self.catalog.due(self._now(as_of))

    def record_review(self, verse_id: VerseId, correct: bool, now: Optional[datetime] = None) -> ReviewOutcome:
        """Apply one graded attempt to a verse and to the progress counters.

        Unknown ids return a NOT_FOUND outcome and change nothing.
        """
        verse = self.catalog.get(verse_id)
        if verse is None:
            return NOT_FOUND
        now = self._now(now)

        verse.review_count += 1
        verse.last_reviewed = now
        self.tracker.record_attempt(correct)

        step = transition(verse.mastery_level, correct)
        verse.mastery_level = step.level
        if correct:
            verse.correct_count += 1
        if step.became_mastered:
            self.tracker.record_mastered()

        verse.next_review = self.tracker.calendar.add_days(now, review_interval(step.level))
        self.tracker.update_streak(now)
        self.tally.add(correct)
        logger.debug(
            "Reviewed %s (%s): %s -> %s, next review %s",
            verse.reference,
            "correct" if correct else "missed",
            step.previous.title,
            step.level.title,
            verse.next_review.isoformat(),
        )
        self.persist()
        return ReviewOutcome(status=ReviewStatus.RECORDED, verse=verse, transition=step)

    def review_typed(self, verse_id: VerseId, user_text: str, now: Optional[datetime] = None):
        """Grade a typed recall and record it. Returns (outcome, grade); grade is None when not found."""
        verse = self.catalog.get(verse_id)
        if verse is None:
            return NOT_FOUND, None
        grade: TypedGrade = grade_typed_recall(verse.text, user_text, self.grading_config)
        return self.record_review(verse.id, grade.correct, now), grade

    def review_blanks(self, verse_id: VerseId, answers: Sequence[str], seed: int = 0, now: Optional[datetime] = None):
        """Check fill-in-the-blank answers for the blanks generated from `seed` and record the result."""
        verse = self.catalog.get(verse_id)
        if verse is None:
            return NOT_FOUND, None
        _, hidden = build_blanks(verse.text, random.Random(seed))
        correct, matched, total = check_blanks(hidden, answers)
        return self.record_review(verse.id, correct, now), (matched, total)

    # Sessions

    def complete_session(
        self,
        verses_reviewed: int,
        correct_answers: int,
        duration: float,
        now: Optional[datetime] = None,
    ) -> ReviewSession:
        session = self.tracker.complete_session(verses_reviewed, correct_answers, duration, self._now(now))
        self.tally = SessionTally()
        logger.info(
            "Session complete: %d/%d correct in %ds",
            correct_answers,
            verses_reviewed,
            int(duration),
        )
        self.persist()
        return session

    def complete_session_from_tally(self, duration: float, now: Optional[datetime] = None) -> ReviewSession:
        """Close the current session using the reviews recorded since the last one."""
        tally = self.tally
        return self.complete_session(tally.verses_reviewed, tally.correct_answers, duration, now)
