from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import date, datetime
from uuid import UUID, uuid4


class SessionCreate(BaseModel):
    verses_reviewed: int = Field(ge=0)
    correct_answers: int = Field(ge=0)
    duration: float = Field(ge=0, description="Session length in seconds")

    @model_validator(mode="after")
    def check_correct_answers(self):
        if self.correct_answers > self.verses_reviewed:
            raise ValueError("correct_answers cannot exceed verses_reviewed")
        return self


class ReviewSession(SessionCreate):
    id: UUID = Field(default_factory=uuid4)
    date: datetime

    @property
    def accuracy(self) -> float:
        if self.verses_reviewed <= 0:
            return 0.0
        return self.correct_answers / self.verses_reviewed


class MemoryProgress(BaseModel):
    total_verses: int = 0
    verses_memorized: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    last_review_day: Optional[date] = None
    total_reviews: int = 0
    total_correct: int = 0
    minutes_practiced: int = 0
    sessions: List[ReviewSession] = Field(default_factory=list)

    @property
    def overall_accuracy(self) -> float:
        if self.total_reviews <= 0:
            return 0.0
        return self.total_correct / self.total_reviews

    @property
    def streak_status(self) -> str:
        if self.current_streak == 0:
            return "Start practicing!"
        if self.current_streak == 1:
            return "1 day streak"
        return f"{self.current_streak} day streak"
