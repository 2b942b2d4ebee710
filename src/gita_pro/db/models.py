"""Data models for gita-pro database entities.

Provides the Lesson dataclass with serialization to/from database rows.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from gita_pro.services.gita_api import Verse


@dataclass
class Lesson:
    """A verse the user saved for later study.

    Attributes:
        id: Unique lesson ID (e.g., "lesson_3f2a9c0d41b7")
        verse_number: Verse the lesson was derived from
        title: Display title (e.g., "Verse 2.47")
        content: Sanskrit text of the verse
        transliteration: English transliteration
        translation: English translation
        application: Commentary on applying the verse
        created_at: ISO timestamp when the lesson was created
        saved_at: ISO timestamp when the lesson was last saved
    """

    id: str
    verse_number: str
    title: str
    content: str = ""
    transliteration: str = ""
    translation: str = ""
    application: str = ""
    created_at: Optional[str] = None
    saved_at: Optional[str] = None

    @classmethod
    def from_verse(cls, verse: Verse) -> "Lesson":
        """Create a new lesson from a revealed verse.

        Args:
            verse: The verse to save

        Returns:
            Lesson instance with a fresh ID and timestamps
        """
        now = datetime.now().isoformat()
        return cls(
            id=cls.generate_id(),
            verse_number=verse.verse_number,
            title=f"Verse {verse.verse_number}",
            content=verse.sanskrit_text,
            transliteration=verse.transliteration,
            translation=verse.translation,
            application=verse.commentary,
            created_at=now,
            saved_at=now,
        )

    @classmethod
    def from_row(cls, row: tuple) -> "Lesson":
        """Create a Lesson from a database row tuple.

        Args:
            row: Database row tuple with columns in LESSON_COLUMNS order

        Returns:
            Lesson instance
        """
        return cls(
            id=row[0],
            verse_number=row[1],
            title=row[2],
            content=row[3] or "",
            transliteration=row[4] or "",
            translation=row[5] or "",
            application=row[6] or "",
            created_at=row[7],
            saved_at=row[8],
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert Lesson to dictionary."""
        return {
            "id": self.id,
            "verse_number": self.verse_number,
            "title": self.title,
            "content": self.content,
            "transliteration": self.transliteration,
            "translation": self.translation,
            "application": self.application,
            "created_at": self.created_at,
            "saved_at": self.saved_at,
        }

    @property
    def display_date(self) -> str:
        """Date shown in lesson lists (saved date, falling back to created)."""
        timestamp = self.saved_at or self.created_at
        if not timestamp:
            return ""
        return timestamp[:10]

    @classmethod
    def generate_id(cls) -> str:
        """Generate a new unique lesson ID."""
        return f"lesson_{uuid.uuid4().hex[:12]}"
