"""Database manager for SQLite connections and path management."""

import sqlite3
from contextlib import contextmanager
from config import Config, get_migrations_dir


class DatabaseManager:
    """Opens one SQLite connection per operation.

    Services share a DatabaseManager across the classification worker
    threads, so connections are never cached. Each file connection runs in
    WAL mode so snapshot reads don't block feedback writes, and waits up to
    ``config.db_busy_timeout`` seconds for the write lock.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        self.config = config

    @contextmanager
    def connect(self):
        """Open a connection, closing it when the block exits.

        Yields:
            sqlite3.Connection: Database connection.
        """
        db_path = self.get_db_path()
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(db_path, timeout=self.config.db_busy_timeout)
        try:
            conn.execute("PRAGMA journal_mode=WAL")
            yield conn
        finally:
            conn.close()

    def get_db_path(self):
        """Get the database file path (data_dir/filename)."""
        return self.config.db_path

    def get_migrations_dir(self):
        return get_migrations_dir()
