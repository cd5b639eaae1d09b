"""Helper utilities for tests."""

from datetime import date
from decimal import Decimal
from pathlib import Path
import sqlite3

from cli.migrate import apply_migrations
from models.transaction import Transaction


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    apply_migrations(conn, migrations_dir)


def make_transaction(
    description: str,
    user_id: str = "user-1",
    amount: str = "10.00",
    transaction_date: date = date(2025, 1, 15),
    category_id=None,
) -> Transaction:
    """Build a Transaction with a checksum derived from its fields."""
    return Transaction.create_with_checksum(
        raw_data=f"{user_id},{transaction_date.isoformat()},{description},{amount}",
        user_id=user_id,
        transaction_date=transaction_date,
        description=description,
        amount=Decimal(amount),
        category_id=category_id,
    )
