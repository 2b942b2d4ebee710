"""Key-value state storage for gita-pro.

Stores the set of revealed verse numbers as a JSON array under a fixed key.
The whole set is rewritten on every save.
"""

import json
import logging
from typing import Iterable, Optional

from gita_pro.db.client import DatabaseClient
from gita_pro.db.schema import REVEALED_VERSES_KEY

logger = logging.getLogger(__name__)


class StateClient(DatabaseClient):
    """Durable store for the revealed verse set."""

    def get_value(self, key: str) -> Optional[str]:
        """Get a raw stored value.

        Args:
            key: State key

        Returns:
            Stored text or None if the key is absent
        """
        cursor = self.connection.cursor()
        cursor.execute("SELECT value FROM app_state WHERE key = ?", (key,))
        row = cursor.fetchone()
        return row[0] if row else None

    def set_value(self, key: str, value: str) -> None:
        """Insert or replace a raw stored value.

        Args:
            key: State key
            value: Text to store
        """
        with self.transaction() as conn:
            conn.execute(
                """
                INSERT INTO app_state (key, value, updated_at)
                VALUES (?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value),
            )

    def load_revealed_verses(self) -> set[str]:
        """Load the revealed verse numbers.

        Returns:
            Set of verse numbers (empty if nothing stored or the stored value
            is unreadable)
        """
        raw = self.get_value(REVEALED_VERSES_KEY)
        if raw is None:
            return set()

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable revealed verse state: {e}")
            return set()

        if not isinstance(data, list):
            logger.warning(f"Ignoring revealed verse state of type {type(data).__name__}")
            return set()

        return {str(verse_number) for verse_number in data}

    def save_revealed_verses(self, verse_numbers: Iterable[str]) -> None:
        """Replace the stored revealed verse numbers.

        Args:
            verse_numbers: Complete set of revealed verse numbers
        """
        payload = json.dumps(sorted(verse_numbers))
        self.set_value(REVEALED_VERSES_KEY, payload)

    def clear_revealed_verses(self) -> None:
        """Remove the revealed verse record entirely."""
        with self.transaction() as conn:
            conn.execute("DELETE FROM app_state WHERE key = ?", (REVEALED_VERSES_KEY,))
