from fastapi import APIRouter, Depends

from routes.deps import get_scheduler
from utils.mastery import mastery_percent
from utils.progress import overall_accuracy
from utils.scheduler import ReviewScheduler

router = APIRouter()


@router.get("")
async def memory_stats(scheduler: ReviewScheduler = Depends(get_scheduler)):
    """Progress dashboard: streaks, accuracy, practice time and mastery spread."""
    progress = scheduler.progress
    now = scheduler.clock.now()
    distribution = scheduler.catalog.mastery_distribution()
    recent_sessions = progress.sessions[-10:]
    streak = scheduler.tracker.effective_streak(now)
    return {
        "total_verses": progress.total_verses,
        "verses_memorized": progress.verses_memorized,
        "mastery_percent": mastery_percent(progress.verses_memorized, progress.total_verses),
        "current_streak": streak,
        "longest_streak": progress.longest_streak,
        "streak_status": progress.streak_status if streak else "Start practicing!",
        "last_review_day": progress.last_review_day.isoformat() if progress.last_review_day else None,
        "total_reviews": progress.total_reviews,
        "total_correct": progress.total_correct,
        "overall_accuracy": round(overall_accuracy(progress) * 100, 1),
        "minutes_practiced": progress.minutes_practiced,
        "due_now": len(scheduler.due_verses(now)),
        "mastery_distribution": {level.title: count for level, count in distribution.items()},
        "recent_sessions": [
            {**session.model_dump(mode="json"), "accuracy": round(session.accuracy * 100, 1)}
            for session in recent_sessions
        ],
    }
