from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from models.progress import MemoryProgress
from models.verse import MasteryLevel, MemoryVerse, MemoryVerseCreate, VerseCategory, VerseDifficulty
from utils.catalog import VerseCatalog

NOW = datetime(2024, 5, 1, 9, tzinfo=timezone.utc)


def _verse(reference: str, text: str = "The Lord is my shepherd", **kwargs) -> MemoryVerse:
    return MemoryVerse(reference=reference, text=text, **kwargs)


def test_add_schedules_now_and_counts():
    catalog = VerseCatalog()
    verse = catalog.add(_verse("Psalm 23:1"), NOW)
    assert verse.next_review == NOW
    assert catalog.progress.total_verses == 1
    assert catalog.get(str(verse.id)) is verse


def test_remove_missing_id_is_noop():
    catalog = VerseCatalog(progress=MemoryProgress(total_verses=0))
    assert catalog.remove(uuid4()) is None
    assert catalog.remove("not-a-uuid") is None
    assert catalog.progress.total_verses == 0


def test_remove_clamps_total_at_zero():
    verse = _verse("John 11:35", "Jesus wept.")
    catalog = VerseCatalog([verse], MemoryProgress(total_verses=0))
    assert catalog.remove(verse.id) is verse
    assert len(catalog) == 0
    assert catalog.progress.total_verses == 0


def test_toggle_favorite_and_notes():
    verse = _verse("Psalm 46:1")
    catalog = VerseCatalog([verse])
    assert catalog.toggle_favorite(verse.id).is_favorite is True
    assert catalog.favorites() == [verse]
    assert catalog.update_notes(verse.id, "memorize before Sunday").notes == "memorize before Sunday"
    assert catalog.toggle_favorite(uuid4()) is None
    assert catalog.update_notes(uuid4(), "x") is None


def test_due_orders_absent_first_then_oldest():
    never = _verse("A 1:1")
    late = _verse("B 1:1", next_review=NOW - timedelta(days=3))
    recent = _verse("C 1:1", next_review=NOW - timedelta(hours=1))
    future = _verse("D 1:1", next_review=NOW + timedelta(days=1))
    catalog = VerseCatalog([recent, future, late, never])
    assert catalog.due(NOW) == [never, late, recent]


def test_due_includes_exact_boundary():
    verse = _verse("E 1:1", next_review=NOW)
    assert VerseCatalog([verse]).due(NOW) == [verse]


def test_level_views():
    new = _verse("A 1:1")
    mastered = _verse("B 1:1", mastery_level=MasteryLevel.MASTERED)
    catalog = VerseCatalog([new, mastered])
    assert catalog.new() == [new]
    assert catalog.mastered() == [mastered]
    assert catalog.mastery_distribution()[MasteryLevel.MASTERED] == 1


def test_filtered_matches_category_and_text_case_insensitively():
    older = _verse("Psalm 23:1", "The Lord is my shepherd", category=VerseCategory.PEACE, date_added=NOW - timedelta(days=2))
    newer = _verse("Psalm 46:1", "God is our refuge and strength", category=VerseCategory.PEACE, date_added=NOW)
    other = _verse("John 3:16", "For God so loved the world", category=VerseCategory.LOVE, date_added=NOW - timedelta(days=1))
    catalog = VerseCatalog([older, newer, other])
    assert catalog.filtered(VerseCategory.PEACE) == [newer, older]
    assert catalog.filtered(search="GOD") == [newer, other]
    assert catalog.filtered(VerseCategory.PEACE, "psalm 23") == [older]
    assert catalog.filtered(VerseCategory.LOVE, "shepherd") == []


def test_accuracy_helpers():
    verse = _verse("A 1:1", review_count=3, correct_count=2)
    assert verse.formatted_accuracy == "66%"
    assert _verse("B 1:1").accuracy == 0.0


def test_correct_count_cannot_exceed_review_count():
    with pytest.raises(ValidationError):
        _verse("A 1:1", review_count=1, correct_count=2)


def test_create_enforces_word_limit():
    with pytest.raises(ValidationError):
        MemoryVerseCreate(reference="Long 1:1", text="word " * 21, difficulty=VerseDifficulty.EASY)
    with pytest.raises(ValidationError):
        MemoryVerseCreate(reference="  ", text="text")
    ok = MemoryVerseCreate(reference=" John 11:35 ", text="Jesus wept.", difficulty=VerseDifficulty.EASY)
    assert ok.reference == "John 11:35"


def test_filtered_does_not_trim_search_text():
    psalm = _verse("Psalm 23:1", "The Lord is my shepherd", date_added=NOW)
    catalog = VerseCatalog([psalm])
    assert catalog.filtered(search="") == [psalm]
    assert catalog.filtered(search="   ") == []
    assert catalog.filtered(search=" lord ") == [psalm]
