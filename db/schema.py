# SQL schema for the VerseCoach snapshot store

SCHEMA_VERSION = 1

SCHEMA_SQL = """
-- Memory verses (one JSON record per verse)
CREATE TABLE IF NOT EXISTS memory_verses (
    id TEXT PRIMARY KEY,
    position INTEGER NOT NULL,
    mastery_level INTEGER NOT NULL DEFAULT 0 CHECK(mastery_level BETWEEN 0 AND 4),
    next_review TEXT,
    record TEXT NOT NULL
);

-- Aggregate progress (single row)
CREATE TABLE IF NOT EXISTS memory_progress (
    id INTEGER PRIMARY KEY CHECK(id = 1),
    record TEXT NOT NULL,
    saved_at TEXT NOT NULL DEFAULT (datetime('now'))
);

-- Completed review sessions
CREATE TABLE IF NOT EXISTS review_sessions (
    id TEXT PRIMARY KEY,
    position INTEGER NOT NULL,
    date TEXT NOT NULL,
    record TEXT NOT NULL
);
"""

# Indexes for performance
INDEXES_SQL = """
CREATE INDEX IF NOT EXISTS idx_memory_verses_position ON memory_verses (position);
CREATE INDEX IF NOT EXISTS idx_memory_verses_next_review ON memory_verses (next_review);
CREATE INDEX IF NOT EXISTS idx_review_sessions_position ON review_sessions (position);
"""
