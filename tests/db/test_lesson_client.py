"""Tests for LessonClient and the Lesson model."""

import pytest

from conftest import make_verse
from gita_pro.db.lesson_client import LessonClient
from gita_pro.db.models import Lesson


@pytest.fixture
def lesson_client(tmp_db_path):
    client = LessonClient(tmp_db_path)
    yield client
    client.close()


class TestLessonModel:
    """Tests for Lesson construction and serialization."""

    def test_from_verse(self):
        """A lesson copies the verse text."""
        lesson = Lesson.from_verse(make_verse("2.47"))

        assert lesson.id.startswith("lesson_")
        assert lesson.verse_number == "2.47"
        assert lesson.title == "Verse 2.47"
        assert lesson.content == "sanskrit 2.47"
        assert lesson.transliteration == "transliteration 2.47"
        assert lesson.translation == "translation 2.47"
        assert lesson.application == "purport 2.47"
        assert lesson.created_at == lesson.saved_at

    def test_from_row_round_trip(self):
        """from_row reads columns in schema order."""
        row = (
            "lesson_abc",
            "3.5",
            "Verse 3.5",
            "content",
            "translit",
            "translation",
            "application",
            "2024-01-01T12:00:00",
            "2024-01-02T12:00:00",
        )

        lesson = Lesson.from_row(row)

        assert lesson.id == "lesson_abc"
        assert lesson.verse_number == "3.5"
        assert lesson.to_dict()["saved_at"] == "2024-01-02T12:00:00"

    def test_display_date_prefers_saved_at(self):
        """The saved date is shown when present."""
        lesson = Lesson(
            id="lesson_abc",
            verse_number="1.1",
            title="Verse 1.1",
            created_at="2024-01-01T12:00:00",
            saved_at="2024-02-03T08:00:00",
        )
        assert lesson.display_date == "2024-02-03"

        lesson.saved_at = None
        assert lesson.display_date == "2024-01-01"

    def test_generated_ids_are_unique(self):
        """IDs don't collide."""
        assert len({Lesson.generate_id() for _ in range(100)}) == 100


class TestLessonClient:
    """Tests for lesson CRUD operations."""

    def test_save_and_get(self, lesson_client):
        """A saved lesson can be fetched by ID."""
        saved = lesson_client.save_lesson(Lesson.from_verse(make_verse("2.47")))

        fetched = lesson_client.get_lesson(saved.id)

        assert fetched == saved
        assert fetched.title == "Verse 2.47"

    def test_get_missing(self, lesson_client):
        """Unknown IDs return None."""
        assert lesson_client.get_lesson("lesson_missing") is None

    def test_fills_in_timestamps(self, lesson_client):
        """Lessons without timestamps get them on save."""
        lesson = Lesson(id="lesson_manual", verse_number="4.7", title="Verse 4.7")

        saved = lesson_client.save_lesson(lesson)

        assert saved.saved_at is not None
        assert saved.created_at == saved.saved_at

    def test_resaving_a_verse_replaces_it(self, lesson_client):
        """A verse is saved once; saving again updates the existing lesson."""
        first = lesson_client.save_lesson(Lesson.from_verse(make_verse("2.47")))
        second = lesson_client.save_lesson(
            Lesson.from_verse(make_verse("2.47", translation="updated"))
        )

        assert lesson_client.count_lessons() == 1
        assert second.id == first.id
        assert second.translation == "updated"

    def test_list_newest_first(self, lesson_client):
        """Lessons are listed by saved_at, newest first."""
        for number, saved_at in [("1.1", "2024-01-01"), ("1.2", "2024-03-01"), ("1.3", "2024-02-01")]:
            lesson = Lesson.from_verse(make_verse(number))
            lesson.saved_at = saved_at
            lesson_client.save_lesson(lesson)

        lessons = lesson_client.list_lessons()

        assert [lesson.verse_number for lesson in lessons] == ["1.2", "1.3", "1.1"]

    def test_list_with_limit(self, lesson_client):
        """limit caps the number of results."""
        for number in ("1.1", "1.2", "1.3"):
            lesson_client.save_lesson(Lesson.from_verse(make_verse(number)))

        assert len(lesson_client.list_lessons(limit=2)) == 2

    def test_list_empty(self, lesson_client):
        """No lessons gives an empty list."""
        assert lesson_client.list_lessons() == []

    def test_delete(self, lesson_client):
        """Deleting removes the lesson."""
        saved = lesson_client.save_lesson(Lesson.from_verse(make_verse("2.47")))

        assert lesson_client.delete_lesson(saved.id) is True
        assert lesson_client.get_lesson(saved.id) is None
        assert lesson_client.count_lessons() == 0

    def test_delete_missing(self, lesson_client):
        """Deleting an unknown lesson reports False."""
        assert lesson_client.delete_lesson("lesson_missing") is False
