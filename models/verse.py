from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from datetime import datetime, timezone
from enum import Enum, IntEnum
from uuid import UUID, uuid4


class MasteryLevel(IntEnum):
    NEW = 0
    LEARNING = 1
    FAMILIAR = 2
    CONFIDENT = 3
    MASTERED = 4

    @property
    def title(self) -> str:
        return self.name.title()


class VerseCategory(str, Enum):
    FAITH = "Faith"
    HOPE = "Hope"
    LOVE = "Love"
    PEACE = "Peace"
    STRENGTH = "Strength"
    WISDOM = "Wisdom"
    COMFORT = "Comfort"
    SALVATION = "Salvation"
    PRAISE = "Praise"
    GUIDANCE = "Guidance"


class VerseDifficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    @property
    def word_limit(self) -> int:
        return {"Easy": 20, "Medium": 40, "Hard": 100}[self.value]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryVerseBase(BaseModel):
    reference: str
    text: str
    translation: str = "NIV"
    category: VerseCategory = VerseCategory.FAITH
    difficulty: VerseDifficulty = VerseDifficulty.MEDIUM

    @field_validator("reference", "text")
    @classmethod
    def strip_required(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Reference and text are required")
        return v


class MemoryVerseCreate(MemoryVerseBase):
    notes: str = ""

    @model_validator(mode="after")
    def check_word_limit(self):
        words = len(self.text.split())
        if words > self.difficulty.word_limit:
            raise ValueError(
                f"{self.difficulty.value} verses are limited to {self.difficulty.word_limit} words (got {words})"
            )
        return self


class MemoryVerse(MemoryVerseBase):
    id: UUID = Field(default_factory=uuid4)
    date_added: datetime = Field(default_factory=_utcnow)
    last_reviewed: Optional[datetime] = None
    next_review: Optional[datetime] = None
    review_count: int = Field(default=0, ge=0)
    correct_count: int = Field(default=0, ge=0)
    mastery_level: MasteryLevel = MasteryLevel.NEW
    is_favorite: bool = False
    notes: str = ""

    @model_validator(mode="after")
    def check_counts(self):
        if self.correct_count > self.review_count:
            raise ValueError("correct_count cannot exceed review_count")
        return self

    @property
    def accuracy(self) -> float:
        if self.review_count <= 0:
            return 0.0
        return self.correct_count / self.review_count

    @property
    def formatted_accuracy(self) -> str:
        return f"{int(self.accuracy * 100)}%"

    @classmethod
    def from_create(cls, payload: MemoryVerseCreate) -> "MemoryVerse":
        return cls(**payload.model_dump())


def default_verses() -> List[MemoryVerse]:
    """Starter catalog used when no snapshot has been saved yet."""
    seed = [
        (
            "John 3:16",
            "For God so loved the world that he gave his one and only Son, that whoever believes in him shall not perish but have eternal life.",
            VerseCategory.LOVE,
            VerseDifficulty.MEDIUM,
        ),
        (
            "Jeremiah 29:11",
            "For I know the plans I have for you, declares the Lord, plans to prosper you and not to harm you, plans to give you hope and a future.",
            VerseCategory.HOPE,
            VerseDifficulty.MEDIUM,
        ),
        (
            "Philippians 4:13",
            "I can do all this through him who gives me strength.",
            VerseCategory.STRENGTH,
            VerseDifficulty.EASY,
        ),
        (
            "Psalm 23:1",
            "The Lord is my shepherd, I lack nothing.",
            VerseCategory.PEACE,
            VerseDifficulty.EASY,
        ),
        (
            "Romans 8:28",
            "And we know that in all things God works for the good of those who love him, who have been called according to his purpose.",
            VerseCategory.FAITH,
            VerseDifficulty.MEDIUM,
        ),
        (
            "Proverbs 3:5-6",
            "Trust in the Lord with all your heart and lean not on your own understanding; in all your ways submit to him, and he will make your paths straight.",
            VerseCategory.WISDOM,
            VerseDifficulty.MEDIUM,
        ),
        (
            "Isaiah 41:10",
            "So do not fear, for I am with you; do not be dismayed, for I am your God. I will strengthen you and help you; I will uphold you with my righteous right hand.",
            VerseCategory.COMFORT,
            VerseDifficulty.HARD,
        ),
        (
            "Psalm 46:1",
            "God is our refuge and strength, an ever-present help in trouble.",
            VerseCategory.STRENGTH,
            VerseDifficulty.EASY,
        ),
    ]
    return [
        MemoryVerse(reference=reference, text=text, translation="NIV", category=category, difficulty=difficulty)
        for reference, text, category, difficulty in seed
    ]
