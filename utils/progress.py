from __future__ import annotations

from datetime import datetime
from typing import Optional

from models.progress import MemoryProgress, ReviewSession
from models.verse import MemoryVerse
from utils.clock import Calendar


def overall_accuracy(progress: MemoryProgress) -> float:
    return progress.overall_accuracy


def verse_accuracy(verse: MemoryVerse) -> float:
    return verse.accuracy


class ProgressTracker:
    """Streak, accuracy and session bookkeeping over one MemoryProgress."""

    def __init__(self, progress: Optional[MemoryProgress] = None, calendar: Optional[Calendar] = None):
        self.progress = progress if progress is not None else MemoryProgress()
        self.calendar = calendar or Calendar()

    def record_attempt(self, correct: bool) -> None:
        self.progress.total_reviews += 1
        if correct:
            self.progress.total_correct += 1

    def record_mastered(self) -> None:
        self.progress.verses_memorized += 1

    def update_streak(self, now: datetime) -> int:
        """Count consecutive calendar days with at least one review.

        Same day is a no-op, the following day extends the streak, and any
        longer gap restarts it at 1.
        """
        progress = self.progress
        today = self.calendar.day_of(now)
        last_day = progress.last_review_day
        if last_day is None:
            progress.current_streak = 1
        elif last_day == today:
            return progress.current_streak
        elif last_day == self.calendar.previous_day(today):
            progress.current_streak += 1
        else:
            progress.current_streak = 1
        progress.last_review_day = today
        if progress.current_streak > progress.longest_streak:
            progress.longest_streak = progress.current_streak
        return progress.current_streak

    def is_streak_alive(self, now: datetime) -> bool:
        last_day = self.progress.last_review_day
        if last_day is None:
            return False
        today = self.calendar.day_of(now)
        return last_day in (today, self.calendar.previous_day(today))

    def effective_streak(self, now: datetime) -> int:
        """Streak as the user would see it today; a lapsed streak reads 0 without being reset."""
        if not self.is_streak_alive(now):
            return 0
        return self.progress.current_streak

    def complete_session(
        self,
        verses_reviewed: int,
        correct_answers: int,
        duration: float,
        now: datetime,
    ) -> ReviewSession:
        session = ReviewSession(
            date=now,
            verses_reviewed=verses_reviewed,
            correct_answers=correct_answers,
            duration=duration,
        )
        self.progress.sessions.append(session)
        self.progress.minutes_practiced += int(duration // 60)
        return session
