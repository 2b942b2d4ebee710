"""Base SQLite client for gita-pro.

Owns the lazily opened connection, transactions, and schema setup shared by
StateClient and LessonClient.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from gita_pro.db.schema import ALL_SCHEMA_STATEMENTS


class DatabaseClient:
    """SQLite database client.

    The schema is created on first connection, so a client can be pointed at
    a path that doesn't exist yet.

    Attributes:
        db_path: Path to the SQLite database file
        connection: Active database connection
    """

    def __init__(self, db_path: Path):
        """Initialize the database client.

        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = Path(db_path)
        self._connection: Optional[sqlite3.Connection] = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self._connection = sqlite3.connect(self.db_path, check_same_thread=False)
            self._connection.row_factory = sqlite3.Row
            self.initialize_schema()

        return self._connection

    def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """Context manager for database transactions.

        Yields:
            SQLite connection with active transaction
        """
        conn = self.connection
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    def initialize_schema(self) -> None:
        """Create tables and indexes if they don't exist."""
        conn = self.connection
        cursor = conn.cursor()
        for statement in ALL_SCHEMA_STATEMENTS:
            cursor.execute(statement)
        conn.commit()
