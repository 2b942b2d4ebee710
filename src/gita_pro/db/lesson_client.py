"""Read-write database client for saved lessons.

Provides CRUD operations for the lessons table.
"""

from datetime import datetime
from typing import Optional

from gita_pro.db.client import DatabaseClient
from gita_pro.db.models import Lesson
from gita_pro.db.schema import LESSON_COLUMNS


class LessonClient(DatabaseClient):
    """Client for lesson CRUD operations.

    A verse can be saved once; saving it again replaces the earlier lesson's
    content and bumps its saved_at timestamp.
    """

    def save_lesson(self, lesson: Lesson) -> Lesson:
        """Save a lesson.

        Args:
            lesson: Lesson to store

        Returns:
            The stored lesson as read back from the database
        """
        if lesson.saved_at is None:
            lesson.saved_at = datetime.now().isoformat()
        if lesson.created_at is None:
            lesson.created_at = lesson.saved_at

        with self.transaction() as conn:
            conn.execute(
                f"""
                INSERT INTO lessons ({LESSON_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(verse_number) DO UPDATE SET
                    title = excluded.title,
                    content = excluded.content,
                    transliteration = excluded.transliteration,
                    translation = excluded.translation,
                    application = excluded.application,
                    saved_at = excluded.saved_at
                """,
                (
                    lesson.id,
                    lesson.verse_number,
                    lesson.title,
                    lesson.content,
                    lesson.transliteration,
                    lesson.translation,
                    lesson.application,
                    lesson.created_at,
                    lesson.saved_at,
                ),
            )

        return self.get_lesson_by_verse(lesson.verse_number)

    def get_lesson(self, lesson_id: str) -> Optional[Lesson]:
        """Get a lesson by ID.

        Args:
            lesson_id: The lesson ID

        Returns:
            Lesson or None if not found
        """
        cursor = self.connection.cursor()
        cursor.execute(f"SELECT {LESSON_COLUMNS} FROM lessons WHERE id = ?", (lesson_id,))
        row = cursor.fetchone()

        if row:
            return Lesson.from_row(tuple(row))
        return None

    def get_lesson_by_verse(self, verse_number: str) -> Optional[Lesson]:
        """Get the lesson saved for a verse.

        Args:
            verse_number: Verse number (e.g., "2.47")

        Returns:
            Lesson or None if the verse hasn't been saved
        """
        cursor = self.connection.cursor()
        cursor.execute(
            f"SELECT {LESSON_COLUMNS} FROM lessons WHERE verse_number = ?",
            (verse_number,),
        )
        row = cursor.fetchone()

        if row:
            return Lesson.from_row(tuple(row))
        return None

    def list_lessons(self, limit: Optional[int] = None) -> list[Lesson]:
        """List saved lessons, most recently saved first.

        Args:
            limit: Maximum number of results

        Returns:
            List of lessons
        """
        query = f"SELECT {LESSON_COLUMNS} FROM lessons ORDER BY saved_at DESC, rowid DESC"
        params: tuple = ()

        if limit:
            query += " LIMIT ?"
            params = (limit,)

        cursor = self.connection.cursor()
        cursor.execute(query, params)
        return [Lesson.from_row(tuple(row)) for row in cursor.fetchall()]

    def delete_lesson(self, lesson_id: str) -> bool:
        """Delete a lesson.

        Args:
            lesson_id: The lesson ID

        Returns:
            True if deleted, False if not found
        """
        with self.transaction() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM lessons WHERE id = ?", (lesson_id,))
            return cursor.rowcount > 0

    def count_lessons(self) -> int:
        """Count saved lessons."""
        cursor = self.connection.cursor()
        cursor.execute("SELECT COUNT(*) FROM lessons")
        return cursor.fetchone()[0]
