from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Union
from uuid import UUID

from models.progress import MemoryProgress
from models.verse import MasteryLevel, MemoryVerse, VerseCategory
from utils.clock import ensure_aware
from utils.mastery import mastery_distribution

VerseId = Union[UUID, str]

_DISTANT_PAST = datetime.min.replace(tzinfo=timezone.utc)


def _as_uuid(verse_id: VerseId) -> Optional[UUID]:
    if isinstance(verse_id, UUID):
        return verse_id
    try:
        return UUID(str(verse_id))
    except ValueError:
        return None


class VerseCatalog:
    """The memorized-verse records of one user.

    Shares the progress aggregate so that adding or removing a verse keeps
    `total_verses` in step with the collection.
    """

    def __init__(self, verses: Optional[Iterable[MemoryVerse]] = None, progress: Optional[MemoryProgress] = None):
        self._verses: List[MemoryVerse] = list(verses or [])
        self.progress = progress if progress is not None else MemoryProgress(total_verses=len(self._verses))

    def __len__(self) -> int:
        return len(self._verses)

    def __iter__(self):
        return iter(self._verses)

    @property
    def verses(self) -> List[MemoryVerse]:
        return list(self._verses)

    def get(self, verse_id: VerseId) -> Optional[MemoryVerse]:
        key = _as_uuid(verse_id)
        if key is None:
            return None
        for verse in self._verses:
            if verse.id == key:
                return verse
        return None

    def add(self, verse: MemoryVerse, now: datetime) -> MemoryVerse:
        verse.next_review = ensure_aware(now)
        self._verses.append(verse)
        self.progress.total_verses += 1
        return verse

    def remove(self, verse_id: VerseId) -> Optional[MemoryVerse]:
        verse = self.get(verse_id)
        if verse is None:
            return None
        self._verses.remove(verse)
        self.progress.total_verses = max(0, self.progress.total_verses - 1)
        return verse

    def toggle_favorite(self, verse_id: VerseId) -> Optional[MemoryVerse]:
        verse = self.get(verse_id)
        if verse is None:
            return None
        verse.is_favorite = not verse.is_favorite
        return verse

    def update_notes(self, verse_id: VerseId, notes: str) -> Optional[MemoryVerse]:
        verse = self.get(verse_id)
        if verse is None:
            return None
        verse.notes = notes
        return verse

    # Views

    def due(self, as_of: datetime) -> List[MemoryVerse]:
        """Verses with no scheduled review or one at or before `as_of`, most overdue first."""
        as_of = ensure_aware(as_of)
        due = [verse for verse in self._verses if verse.next_review is None or verse.next_review <= as_of]
        return sorted(due, key=lambda verse: verse.next_review or _DISTANT_PAST)

    def mastered(self) -> List[MemoryVerse]:
        return self.by_level(MasteryLevel.MASTERED)

    def new(self) -> List[MemoryVerse]:
        return self.by_level(MasteryLevel.NEW)

    def favorites(self) -> List[MemoryVerse]:
        return [verse for verse in self._verses if verse.is_favorite]

    def by_level(self, level: MasteryLevel) -> List[MemoryVerse]:
        return [verse for verse in self._verses if verse.mastery_level == level]

    def filtered(self, category: Optional[VerseCategory] = None, search: Optional[str] = None) -> List[MemoryVerse]:
        result = self._verses
        if category is not None:
            result = [verse for verse in result if verse.category == category]
        query = (search or "").lower()
        if query:
            result = [
                verse
                for verse in result
                if query in verse.reference.lower() or query in verse.text.lower()
            ]
        return sorted(result, key=lambda verse: verse.date_added, reverse=True)

    def mastery_distribution(self) -> Dict[MasteryLevel, int]:
        return mastery_distribution(verse.mastery_level for verse in self._verses)
