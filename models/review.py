from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum


class PracticeMode(str, Enum):
    FLASHCARD = "flashcard"
    FILL_BLANK = "fill_blank"
    TYPE_VERSE = "type_verse"
    REFERENCE = "reference"


class ReviewCreate(BaseModel):
    correct: bool


class TypedReviewCreate(BaseModel):
    user_text: str = ""


class BlanksReviewCreate(BaseModel):
    answers: List[str] = Field(default_factory=list)
    seed: int = 0


class SessionTallyCreate(BaseModel):
    duration: float = Field(ge=0, description="Session length in seconds")


class NotesUpdate(BaseModel):
    notes: str = ""


class ReviewResult(BaseModel):
    verse_id: str
    previous_level: int
    mastery_level: int
    mastery_title: str
    became_mastered: bool
    next_review: Optional[str] = None
    current_streak: int
    similarity_percent: Optional[int] = None
    correct: bool
