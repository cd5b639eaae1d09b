#!/usr/bin/env python3

import sqlite3
from pathlib import Path
from typing import List, Set
from logger import get_logger

logger = get_logger(__name__)


def init_schema_migrations_table(conn: sqlite3.Connection) -> None:
    conn.execute("""
        CREATE TABLE IF NOT EXISTS schema_migrations (
            migration_file TEXT PRIMARY KEY,
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)
    conn.commit()


def get_applied_migrations(conn: sqlite3.Connection) -> Set[str]:
    cursor = conn.execute("SELECT migration_file FROM schema_migrations")
    return {row[0] for row in cursor.fetchall()}


def get_available_migrations(migrations_dir: Path) -> List[str]:
    if not migrations_dir.exists():
        return []
    return sorted(path.name for path in migrations_dir.glob("*.sql"))


def apply_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> List[str]:
    """Apply every pending migration in file name order.

    Args:
        conn: Connection to migrate.
        migrations_dir: Directory containing the .sql migration files.

    Returns:
        Names of the migrations applied by this call.

    Raises:
        sqlite3.Error: If a migration fails. That migration is rolled back.
    """
    init_schema_migrations_table(conn)
    applied = get_applied_migrations(conn)
    pending = [
        m for m in get_available_migrations(migrations_dir) if m not in applied
    ]

    for migration_file in pending:
        sql = (migrations_dir / migration_file).read_text()
        try:
            conn.executescript(sql)
            conn.execute(
                "INSERT INTO schema_migrations (migration_file) VALUES (?)",
                (migration_file,),
            )
            conn.commit()
            logger.info(f"Applied migration: {migration_file}")
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Error applying migration {migration_file}: {e}")
            raise

    return pending


def cmd_status(args, db_manager):
    """Show migration status."""
    if not db_manager.get_db_path().exists():
        logger.info(
            "Database does not exist. Run 'python -m cli migrate apply' to create it."
        )
        return

    with db_manager.connect() as conn:
        init_schema_migrations_table(conn)
        applied = get_applied_migrations(conn)
        available = get_available_migrations(db_manager.get_migrations_dir())

        if not available:
            logger.info("No migrations found.")
            return

        logger.info("Migration Status:")
        logger.info("================")
        for migration in available:
            status_text = "APPLIED" if migration in applied else "PENDING"
            logger.info(f"{migration}: {status_text}")

        pending_count = len([m for m in available if m not in applied])
        logger.info(f"\nTotal migrations: {len(available)}")
        logger.info(f"Pending: {pending_count}")


def cmd_apply(args, db_manager):
    """Apply pending migrations."""
    with db_manager.connect() as conn:
        applied = apply_migrations(conn, db_manager.get_migrations_dir())

    if applied:
        logger.info(f"Successfully applied {len(applied)} migration(s).")
    else:
        logger.info("No pending migrations.")


def setup_parser(subparsers):
    """Setup migrate subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "migrate",
        help="Database migrations",
        description="Manage database schema migrations",
    )

    migrate_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available migration commands",
        dest="subcommand",
        required=True,
    )

    status_parser = migrate_subparsers.add_parser(
        "status", help="Show migration status"
    )
    status_parser.set_defaults(func=cmd_status)

    apply_parser = migrate_subparsers.add_parser(
        "apply", help="Apply pending migrations"
    )
    apply_parser.set_defaults(func=cmd_apply)
