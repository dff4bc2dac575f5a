from typing import Any, Dict

from fastapi import HTTPException, Request

from models.verse import MemoryVerse
from utils.progress import verse_accuracy
from utils.scheduler import ReviewScheduler


def get_scheduler(request: Request) -> ReviewScheduler:
    """FastAPI dependency returning the process-wide scheduler built at startup."""
    return request.app.state.scheduler


def verse_not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Verse not found")


def verse_payload(verse: MemoryVerse) -> Dict[str, Any]:
    payload = verse.model_dump(mode="json")
    payload["mastery_title"] = verse.mastery_level.title
    payload["accuracy"] = verse_accuracy(verse)
    payload["formatted_accuracy"] = verse.formatted_accuracy
    return payload
