"""SQL schema definitions for the gita-pro database.

Defines the app_state key-value table holding the revealed verse set and the
lessons table holding verses saved by the user.
"""

# Key under which the revealed verse numbers are stored in app_state
REVEALED_VERSES_KEY = "revealed_verses"

# SQL to create the app_state table (small key-value store)
CREATE_APP_STATE_TABLE = """
CREATE TABLE IF NOT EXISTS app_state (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT DEFAULT (datetime('now'))
);
"""

# SQL to create the lessons table (verses saved as lessons)
CREATE_LESSONS_TABLE = """
CREATE TABLE IF NOT EXISTS lessons (
    id TEXT PRIMARY KEY,
    verse_number TEXT NOT NULL UNIQUE,
    title TEXT NOT NULL,
    content TEXT NOT NULL DEFAULT '',
    transliteration TEXT NOT NULL DEFAULT '',
    translation TEXT NOT NULL DEFAULT '',
    application TEXT NOT NULL DEFAULT '',
    created_at TEXT,
    saved_at TEXT
);
"""

CREATE_LESSONS_SAVED_AT_INDEX = """
CREATE INDEX IF NOT EXISTS idx_lessons_saved_at
ON lessons(saved_at);
"""

# All schema creation statements in order
ALL_SCHEMA_STATEMENTS = [
    CREATE_APP_STATE_TABLE,
    CREATE_LESSONS_TABLE,
    CREATE_LESSONS_SAVED_AT_INDEX,
]

# Column order used by Lesson.from_row()
LESSON_COLUMNS = (
    "id, verse_number, title, content, transliteration, translation, "
    "application, created_at, saved_at"
)
