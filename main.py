import argparse
import logging
import uvicorn
from fastapi import FastAPI
from contextlib import asynccontextmanager

import sys
from pathlib import Path

# Add project root to path for package imports
base_dir = Path(__file__).parent
sys.path.insert(0, str(base_dir))

from db.database import init_db, resolve_db_path
from db.gateway import SqliteGateway
from config import load_config
from routes import verses_router, review_router, stats_router
from utils.clock import SystemClock, calendar_from_name
from utils.scheduler import ReviewScheduler

logger = logging.getLogger("versecoach")


def build_scheduler(config: dict) -> ReviewScheduler:
    """Load the saved snapshot (or the seed catalog) into a ready scheduler."""
    db_path = resolve_db_path(config["storage"]["db_name"])
    return ReviewScheduler.from_gateway(
        SqliteGateway(db_path),
        clock=SystemClock(),
        calendar=calendar_from_name(config["calendar"]["timezone"]),
        grading_config=config,
    )


# First-run init
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: load config and snapshot unless a test already installed a scheduler
    if getattr(app.state, "scheduler", None) is None:
        app.state.scheduler = build_scheduler(load_config())
    yield
    # Shutdown: final save of the in-memory snapshot
    app.state.scheduler.persist()


app = FastAPI(
    title="VerseCoach",
    description="Local-first scripture memorization with spaced repetition",
    lifespan=lifespan,
)

# Include routers
app.include_router(verses_router, prefix="/verses", tags=["verses"])
app.include_router(review_router, prefix="/review", tags=["review"])
app.include_router(stats_router, prefix="/stats", tags=["stats"])


@app.get("/")
async def home():
    return {"app": "VerseCoach", "routes": ["/verses", "/review/due", "/stats"]}


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="VerseCoach App")
    parser.add_argument("--init", action="store_true", help="Initialize DB and config")
    parser.add_argument("--dev", action="store_true", help="Run in dev mode with reload")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.dev else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.init:
        config = load_config()  # Ensures config is copied if missing
        init_db(resolve_db_path(config["storage"]["db_name"]))
        logger.info("DB initialized and config copied to ~/.versecoach/")
        sys.exit(0)
    # Run server
    uvicorn.run("main:app", host="127.0.0.1", port=args.port, reload=args.dev, log_level="debug" if args.dev else "info")
