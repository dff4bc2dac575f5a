import random
import re
from typing import Any, Dict, List, Optional, Tuple

from models.review import PracticeMode
from models.verse import MemoryVerse

BLANK = "____"
PRACTICE_MODE_OPTIONS: List[Tuple[str, str]] = [
    (PracticeMode.FLASHCARD.value, "Flip cards to reveal verse"),
    (PracticeMode.FILL_BLANK.value, "Fill in missing words"),
    (PracticeMode.TYPE_VERSE.value, "Type the complete verse"),
    (PracticeMode.REFERENCE.value, "Match verse to reference"),
]


def normalize_practice_mode(mode: Optional[str]) -> PracticeMode:
    if not mode:
        return PracticeMode.FLASHCARD
    try:
        return PracticeMode(mode.strip().lower())
    except ValueError:
        return PracticeMode.FLASHCARD


def first_letters(text: str) -> str:
    tokens = re.split(r"(\s+)", text)
    initials = []
    for token in tokens:
        if not token or token.isspace():
            initials.append(token)
        else:
            initials.append(token[0])
    return "".join(initials).strip()


def blank_positions(word_count: int, rng: random.Random) -> List[int]:
    """Pick a quarter of the words (at least two) to hide."""
    if word_count <= 0:
        return []
    count = min(max(word_count // 4, 2), word_count)
    return sorted(rng.sample(range(word_count), count))


def build_blanks(text: str, rng: Optional[random.Random] = None) -> Tuple[str, List[str]]:
    """Return the masked verse and the hidden words in reading order."""
    rng = rng or random.Random()
    words = text.split(" ")
    positions = set(blank_positions(len(words), rng))
    masked = []
    hidden = []
    for index, word in enumerate(words):
        if index in positions:
            masked.append(BLANK)
            hidden.append(word)
        else:
            masked.append(word)
    return " ".join(masked), hidden


def build_prompt(verse: MemoryVerse, mode: PracticeMode, seed: int = 0) -> Dict[str, Any]:
    """What a client shows for one practice card. The answer stays server side for blanks."""
    prompt: Dict[str, Any] = {
        "verse_id": str(verse.id),
        "mode": mode.value,
        "reference": verse.reference,
        "translation": verse.translation,
    }
    if mode == PracticeMode.FLASHCARD:
        prompt["hint"] = first_letters(verse.text)
    elif mode == PracticeMode.FILL_BLANK:
        masked, hidden = build_blanks(verse.text, random.Random(seed))
        prompt["masked_text"] = masked
        prompt["blank_count"] = len(hidden)
        prompt["seed"] = seed
    elif mode == PracticeMode.TYPE_VERSE:
        prompt["word_count"] = len(verse.text.split())
    elif mode == PracticeMode.REFERENCE:
        prompt.pop("reference")
        prompt["text"] = verse.text
    return prompt
