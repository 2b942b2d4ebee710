"""Shared fixtures for gita-pro tests."""

import random

import pytest

from gita_pro.services.gita_api import Verse, VerseNetworkError


def make_verse(verse_number: str, **fields) -> Verse:
    """Build a Verse with placeholder text fields."""
    defaults = {
        "sanskrit_text": f"sanskrit {verse_number}",
        "transliteration": f"transliteration {verse_number}",
        "word_meanings": f"meanings {verse_number}",
        "translation": f"translation {verse_number}",
        "commentary": f"purport {verse_number}",
    }
    defaults.update(fields)
    return Verse(verse_number=verse_number, **defaults)


class ScriptedSource:
    """Verse source that replays a script of verses and errors.

    The last entry repeats once the script runs out.
    """

    def __init__(self, *script):
        self.script = list(script)
        self.calls: list[tuple[int, int]] = []

    def fetch_verse(self, chapter: int, verse_index: int) -> Verse:
        self.calls.append((chapter, verse_index))
        index = min(len(self.calls) - 1, len(self.script) - 1)
        item = self.script[index]
        if isinstance(item, Exception):
            raise item
        return item


class MemoryStore:
    """In-memory revealed verse store that records every save."""

    def __init__(self, initial=None):
        self.verses: set[str] = set(initial or ())
        self.saves: list[set[str]] = []

    def load_revealed_verses(self) -> set[str]:
        return set(self.verses)

    def save_revealed_verses(self, verse_numbers) -> None:
        self.verses = set(verse_numbers)
        self.saves.append(set(verse_numbers))


class FailingStore(MemoryStore):
    """Store whose saves always fail."""

    def save_revealed_verses(self, verse_numbers) -> None:
        raise OSError("disk full")


@pytest.fixture
def api_key_env(monkeypatch):
    """Set the required RapidAPI key environment variable."""
    monkeypatch.setenv("GITA_RAPIDAPI_KEY", "test-api-key")


@pytest.fixture
def tmp_db_path(tmp_path):
    """Temporary SQLite database path."""
    return tmp_path / "db" / "gita.db"


@pytest.fixture
def memory_store():
    """Empty in-memory revealed verse store."""
    return MemoryStore()


@pytest.fixture
def seeded_rng():
    """Deterministic random generator."""
    return random.Random(42)


@pytest.fixture
def network_error():
    """A transient network failure."""
    return VerseNetworkError("Connection refused")


@pytest.fixture
def sample_api_record():
    """A verse record as returned by the verse API."""
    return {
        "verseNumber": "2.47",
        "sanskrit verse": "कर्मण्येवाधिकारस्ते मा फलेषु कदाचन",
        "english transliteration": "karmaṇy evādhikāras te mā phaleṣu kadācana",
        "word meanings": "karmaṇi—in prescribed duties; eva—certainly",
        "translation": "You have a right to perform your prescribed duty, "
        "but you are not entitled to the fruits of action.",
        "purport": "There are three considerations here.",
    }
