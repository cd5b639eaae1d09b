from config import load_config
from db.manager import DatabaseManager


class TestDatabaseManager:
    """Tests for DatabaseManager."""

    def test_connect_creates_data_dir(self, test_config):
        """Test that the data directory is created on first connect."""
        db_manager = DatabaseManager(test_config)

        with db_manager.connect() as conn:
            conn.execute("CREATE TABLE t (x INTEGER)")

        assert db_manager.get_db_path().exists()

    def test_connections_use_wal(self, test_config):
        """Test that file connections run in WAL mode."""
        db_manager = DatabaseManager(test_config)

        with db_manager.connect() as conn:
            mode = conn.execute("PRAGMA journal_mode").fetchone()[0]

        assert mode == "wal"

    def test_busy_timeout_from_config(self, tmp_path):
        """Test that the write-lock wait comes from [database] busy_timeout."""
        path = tmp_path / "autocat.toml"
        path.write_text(
            f'base_dir = "{tmp_path.as_posix()}"\n'
            "[database]\n"
            "busy_timeout = 2.5\n"
        )
        db_manager = DatabaseManager(load_config(path))

        with db_manager.connect() as conn:
            timeout_ms = conn.execute("PRAGMA busy_timeout").fetchone()[0]

        assert timeout_ms == 2500
