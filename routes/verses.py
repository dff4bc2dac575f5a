from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from models.review import NotesUpdate
from models.verse import MemoryVerse, MemoryVerseCreate, VerseCategory
from routes.deps import get_scheduler, verse_not_found, verse_payload
from utils.scheduler import ReviewScheduler

router = APIRouter()


@router.get("")
async def list_verses(
    category: Optional[VerseCategory] = None,
    search: Optional[str] = None,
    view: str = Query("all", pattern="^(all|due|mastered|new|favorites)$"),
    scheduler: ReviewScheduler = Depends(get_scheduler),
):
    """List verses for one of the catalog views, narrowed by category and search text."""
    catalog = scheduler.catalog
    if view == "due":
        verses = scheduler.due_verses()
    elif view == "mastered":
        verses = catalog.mastered()
    elif view == "new":
        verses = catalog.new()
    elif view == "favorites":
        verses = catalog.favorites()
    else:
        verses = catalog.filtered(category, search)
    if view != "all" and (category is not None or search):
        allowed = {verse.id for verse in catalog.filtered(category, search)}
        verses = [verse for verse in verses if verse.id in allowed]
    return {"view": view, "count": len(verses), "verses": [verse_payload(verse) for verse in verses]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_verse(payload: MemoryVerseCreate, scheduler: ReviewScheduler = Depends(get_scheduler)):
    verse = scheduler.add_verse(MemoryVerse.from_create(payload))
    return verse_payload(verse)


@router.get("/{verse_id}")
async def get_verse(verse_id: str, scheduler: ReviewScheduler = Depends(get_scheduler)):
    verse = scheduler.catalog.get(verse_id)
    if verse is None:
        raise verse_not_found()
    return verse_payload(verse)


@router.delete("/{verse_id}")
async def delete_verse(verse_id: str, scheduler: ReviewScheduler = Depends(get_scheduler)):
    verse = scheduler.remove_verse(verse_id)
    if verse is None:
        raise verse_not_found()
    return {"deleted": str(verse.id), "total_verses": scheduler.progress.total_verses}


@router.post("/{verse_id}/favorite")
async def toggle_favorite(verse_id: str, scheduler: ReviewScheduler = Depends(get_scheduler)):
    verse = scheduler.toggle_favorite(verse_id)
    if verse is None:
        raise verse_not_found()
    return verse_payload(verse)


@router.put("/{verse_id}/notes")
async def update_notes(verse_id: str, payload: NotesUpdate, scheduler: ReviewScheduler = Depends(get_scheduler)):
    verse = scheduler.update_notes(verse_id, payload.notes)
    if verse is None:
        raise verse_not_found()
    return verse_payload(verse)
