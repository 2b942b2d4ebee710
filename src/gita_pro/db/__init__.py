"""Database layer for gita-pro.

Provides SQLite clients for the revealed verse state and saved lessons.
"""

from gita_pro.db.lesson_client import LessonClient
from gita_pro.db.models import Lesson
from gita_pro.db.state_client import StateClient

__all__ = ["LessonClient", "Lesson", "StateClient"]
