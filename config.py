import tomllib
import shutil
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv
import os

CONFIG_DIR = Path.home() / ".versecoach"
CONFIG_PATH = CONFIG_DIR / "config.toml"
PROJECT_CONFIG_EXAMPLE = Path(__file__).parent / "config.toml"

GRADING_METHODS = ("levenshtein", "word_overlap")


def load_config() -> Dict[str, Any]:
    """Load config from ~/.versecoach/config.toml, copy example if missing, load .env overrides."""
    load_dotenv()  # Load .env for overrides (e.g., VERSECOACH_TIMEZONE env var)
    if not CONFIG_PATH.exists():
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        shutil.copy(PROJECT_CONFIG_EXAMPLE, CONFIG_PATH)
    with open(CONFIG_PATH, "rb") as f:
        config = tomllib.load(f)

    calendar_cfg = config.get("calendar", {})
    config["calendar"] = {
        "timezone": os.getenv("VERSECOACH_TIMEZONE", calendar_cfg.get("timezone", "UTC")),
    }
    grading_cfg = config.get("grading", {})
    method = os.getenv("GRADING_METHOD", grading_cfg.get("method", "levenshtein")).strip().lower()
    config["grading"] = {
        "typed_threshold": float(os.getenv(
            "TYPED_RECALL_THRESHOLD",
            grading_cfg.get("typed_threshold", 0.8)
        )),
        "method": method if method in GRADING_METHODS else "levenshtein",
    }
    storage_cfg = config.get("storage", {})
    config["storage"] = {
        "db_name": os.getenv("VERSECOACH_DB_NAME", storage_cfg.get("db_name", "versecoach.db")),
    }
    return config


def get_config_value(section: str, key: str, default: Optional[Any] = None) -> Any:
    """Get nested config value, e.g., get_config_value('calendar', 'timezone')."""
    config = load_config()
    value = config.get(section, {}).get(key, default)
    return value
