from dataclasses import dataclass
from typing import Dict, Iterable

from models.verse import MasteryLevel

REVIEW_INTERVAL_DAYS = {
    MasteryLevel.NEW: 0,
    MasteryLevel.LEARNING: 1,
    MasteryLevel.FAMILIAR: 3,
    MasteryLevel.CONFIDENT: 7,
    MasteryLevel.MASTERED: 14,
}


@dataclass(frozen=True)
class MasteryTransition:
    previous: MasteryLevel
    level: MasteryLevel
    became_mastered: bool = False


def review_interval(level: MasteryLevel) -> int:
    """Days until the next review for a verse sitting at `level`."""
    return REVIEW_INTERVAL_DAYS[MasteryLevel(level)]


def transition(level: MasteryLevel, correct: bool) -> MasteryTransition:
    """Move one stage up on a correct answer, one stage down on a miss.

    A miss never sends a verse back to New: New is only the state before the
    first review, so New and Learning both land on Learning.
    """
    level = MasteryLevel(level)
    if correct:
        if level >= MasteryLevel.MASTERED:
            return MasteryTransition(previous=level, level=level)
        new_level = MasteryLevel(level + 1)
        return MasteryTransition(
            previous=level,
            level=new_level,
            became_mastered=new_level == MasteryLevel.MASTERED,
        )
    if level > MasteryLevel.LEARNING:
        return MasteryTransition(previous=level, level=MasteryLevel(level - 1))
    return MasteryTransition(previous=level, level=MasteryLevel.LEARNING)


def mastery_distribution(levels: Iterable[MasteryLevel]) -> Dict[MasteryLevel, int]:
    distribution = {level: 0 for level in MasteryLevel}
    for level in levels:
        distribution[MasteryLevel(level)] += 1
    return distribution


def mastery_percent(mastered: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round((mastered / total) * 100, 1)
