from fastapi import APIRouter, Depends, status
from typing import Optional

from models.progress import SessionCreate
from models.review import BlanksReviewCreate, ReviewCreate, ReviewResult, SessionTallyCreate, TypedReviewCreate
from routes.deps import get_scheduler, verse_not_found, verse_payload
from utils.grading import token_diff
from utils.practice import PRACTICE_MODE_OPTIONS, build_prompt, normalize_practice_mode
from utils.scheduler import ReviewOutcome, ReviewScheduler

router = APIRouter()


def _result(outcome: ReviewOutcome, scheduler: ReviewScheduler, correct: bool, similarity_percent: Optional[int] = None) -> ReviewResult:
    verse = outcome.verse
    step = outcome.transition
    return ReviewResult(
        verse_id=str(verse.id),
        previous_level=int(step.previous),
        mastery_level=int(step.level),
        mastery_title=step.level.title,
        became_mastered=step.became_mastered,
        next_review=verse.next_review.isoformat() if verse.next_review else None,
        current_streak=scheduler.progress.current_streak,
        similarity_percent=similarity_percent,
        correct=correct,
    )


@router.get("/due")
async def due_verses(scheduler: ReviewScheduler = Depends(get_scheduler)):
    """Verses to review right now, most overdue first."""
    verses = scheduler.due_verses()
    return {"count": len(verses), "verses": [verse_payload(verse) for verse in verses]}


@router.get("/modes")
async def practice_modes():
    return [{"mode": mode, "description": description} for mode, description in PRACTICE_MODE_OPTIONS]


@router.post("/session", status_code=status.HTTP_201_CREATED)
async def complete_session(payload: SessionCreate, scheduler: ReviewScheduler = Depends(get_scheduler)):
    session = scheduler.complete_session(payload.verses_reviewed, payload.correct_answers, payload.duration)
    return {
        "session": session.model_dump(mode="json"),
        "minutes_practiced": scheduler.progress.minutes_practiced,
    }


@router.post("/session/tally", status_code=status.HTTP_201_CREATED)
async def complete_session_from_tally(payload: SessionTallyCreate, scheduler: ReviewScheduler = Depends(get_scheduler)):
    session = scheduler.complete_session_from_tally(payload.duration)
    return {
        "session": session.model_dump(mode="json"),
        "minutes_practiced": scheduler.progress.minutes_practiced,
    }


@router.get("/{verse_id}/practice")
async def practice_prompt(
    verse_id: str,
    mode: Optional[str] = None,
    seed: int = 0,
    scheduler: ReviewScheduler = Depends(get_scheduler),
):
    verse = scheduler.catalog.get(verse_id)
    if verse is None:
        raise verse_not_found()
    return build_prompt(verse, normalize_practice_mode(mode), seed)


@router.post("/{verse_id}", response_model=ReviewResult)
async def submit_review(verse_id: str, payload: ReviewCreate, scheduler: ReviewScheduler = Depends(get_scheduler)):
    """Record a self-graded attempt (flashcard or reference quiz)."""
    outcome = scheduler.record_review(verse_id, payload.correct)
    if not outcome.found:
        raise verse_not_found()
    return _result(outcome, scheduler, payload.correct)


@router.post("/{verse_id}/typed")
async def submit_typed_review(verse_id: str, payload: TypedReviewCreate, scheduler: ReviewScheduler = Depends(get_scheduler)):
    """Grade a typed recall against the verse text, then record it."""
    outcome, grade = scheduler.review_typed(verse_id, payload.user_text)
    if not outcome.found:
        raise verse_not_found()
    result = _result(outcome, scheduler, grade.correct, grade.percent)
    return {
        "result": result.model_dump(),
        "diff": token_diff(outcome.verse.text, payload.user_text),
    }


@router.post("/{verse_id}/blanks", response_model=ReviewResult)
async def submit_blanks_review(verse_id: str, payload: BlanksReviewCreate, scheduler: ReviewScheduler = Depends(get_scheduler)):
    outcome, score = scheduler.review_blanks(verse_id, payload.answers, payload.seed)
    if not outcome.found:
        raise verse_not_found()
    matched, total = score
    return _result(outcome, scheduler, matched == total, int(matched / total * 100) if total else 0)
