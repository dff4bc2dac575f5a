from Levenshtein import ratio as lev_ratio
from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import Dict, Any, List, Sequence, Tuple
from config import load_config


@dataclass(frozen=True)
class TypedGrade:
    correct: bool
    similarity: float

    @property
    def percent(self) -> int:
        return int(self.similarity * 100)


def _normalize(text: str) -> str:
    return (text or "").strip().lower()


def word_overlap(expected: str, actual: str) -> float:
    """Share of the distinct expected words that appear in the answer."""
    expected_words = set(_normalize(expected).split())
    if not expected_words:
        return 0.0
    actual_words = set(_normalize(actual).split())
    return len(expected_words & actual_words) / len(expected_words)


def similarity(expected: str, actual: str, method: str = "levenshtein") -> float:
    expected_clean = _normalize(expected)
    actual_clean = _normalize(actual)
    if not expected_clean or not actual_clean:
        return 0.0
    if expected_clean == actual_clean:
        return 1.0
    if method == "word_overlap":
        return word_overlap(expected_clean, actual_clean)
    return lev_ratio(actual_clean, expected_clean)


def grade_typed_recall(full_text: str, user_text: str, config: Dict[str, Any] = None) -> TypedGrade:
    """Grade a typed recall of the whole verse against the configured threshold."""
    if not config:
        config = load_config()
    grading_config = config.get('grading', {})
    threshold = grading_config.get('typed_threshold', 0.8)
    method = grading_config.get('method', 'levenshtein')

    if not user_text or not user_text.strip():
        return TypedGrade(correct=False, similarity=0.0)

    score = similarity(full_text, user_text, method)
    return TypedGrade(correct=score >= threshold, similarity=score)


def check_blanks(expected_words: Sequence[str], answers: Sequence[str]) -> Tuple[bool, int, int]:
    """Compare fill-in-the-blank answers word by word; every blank must match."""
    total = len(expected_words)
    matched = 0
    for index, word in enumerate(expected_words):
        answer = answers[index] if index < len(answers) else ""
        if answer.strip().lower() == word.lower():
            matched += 1
    return matched == total, matched, total


def token_diff(expected_text: str, actual_text: str) -> Dict[str, List[Dict[str, str]]]:
    """Compute a whitespace-token diff so a client can highlight mistakes."""
    expected_tokens = expected_text.split() if expected_text else []
    actual_tokens = actual_text.split() if actual_text else []
    matcher = SequenceMatcher(None, expected_tokens, actual_tokens)
    expected: List[Dict[str, str]] = []
    actual: List[Dict[str, str]] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            for token in expected_tokens[i1:i2]:
                expected.append({"token": token, "status": "match"})
            for token in actual_tokens[j1:j2]:
                actual.append({"token": token, "status": "match"})
        elif tag == "delete":
            for token in expected_tokens[i1:i2]:
                expected.append({"token": token, "status": "missing"})
        elif tag == "insert":
            for token in actual_tokens[j1:j2]:
                actual.append({"token": token, "status": "extra"})
        elif tag == "replace":
            for token in expected_tokens[i1:i2]:
                expected.append({"token": token, "status": "substitution"})
            for token in actual_tokens[j1:j2]:
                actual.append({"token": token, "status": "substitution"})
    return {"expected": expected, "actual": actual}
