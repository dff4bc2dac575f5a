from .verse import MemoryVerse, MemoryVerseCreate, MasteryLevel, VerseCategory, VerseDifficulty, default_verses
from .progress import MemoryProgress, ReviewSession, SessionCreate
from .review import (
    BlanksReviewCreate,
    NotesUpdate,
    PracticeMode,
    ReviewCreate,
    ReviewResult,
    SessionTallyCreate,
    TypedReviewCreate,
)

__all__ = [
    'MemoryVerse', 'MemoryVerseCreate', 'MasteryLevel', 'VerseCategory', 'VerseDifficulty', 'default_verses',
    'MemoryProgress', 'ReviewSession', 'SessionCreate',
    'BlanksReviewCreate', 'NotesUpdate', 'PracticeMode', 'ReviewCreate', 'ReviewResult',
    'SessionTallyCreate', 'TypedReviewCreate',
]
