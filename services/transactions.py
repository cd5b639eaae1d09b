"""Transaction service for database operations."""

from typing import List, Optional
from datetime import date
from decimal import Decimal
from models.transaction import Transaction

# SQL Query Constants
_TRANSACTION_FIELDS = """id, user_id, transaction_date, description, amount,
       category_id, auto_confidence"""

# Automatically generate placeholders from field count
_TRANSACTION_INSERT_PLACEHOLDERS = (
    f"({', '.join(['?'] * len(_TRANSACTION_FIELDS.split(',')))})"
)

_UPDATABLE_FIELDS = {"category_id", "auto_confidence"}


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db_manager):
        """Initialize the transaction service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def create(self, transaction: Transaction) -> Transaction:
        """Create a single transaction in the database.

        Args:
            transaction: Transaction object to insert.

        Returns:
            The same Transaction object (already has its ID from checksum).

        Raises:
            sqlite3.IntegrityError: If a transaction with the same ID exists.
        """
        with self.db_manager.connect() as conn:
            conn.execute(
                f"""
                INSERT INTO transactions ({_TRANSACTION_FIELDS})
                VALUES {_TRANSACTION_INSERT_PLACEHOLDERS}
                """,
                self._transaction_to_row(transaction),
            )
            conn.commit()

        return transaction

    def bulk_create(self, transactions: List[Transaction]) -> int:
        """Create multiple transactions in a single database transaction.

        Duplicates (same checksum ID) are ignored.

        Args:
            transactions: List of Transaction objects to insert.

        Returns:
            Number of transactions inserted.
        """
        if not transactions:
            return 0

        with self.db_manager.connect() as conn:
            before = conn.total_changes
            conn.executemany(
                f"""
                INSERT OR IGNORE INTO transactions ({_TRANSACTION_FIELDS})
                VALUES {_TRANSACTION_INSERT_PLACEHOLDERS}
                """,
                [self._transaction_to_row(t) for t in transactions],
            )
            conn.commit()
            return conn.total_changes - before

    def batch_update(
        self, transactions: List[Transaction], field_names: List[str]
    ) -> int:
        """Update specified fields for multiple transactions.

        Args:
            transactions: List of Transaction objects to update.
            field_names: Field names to update. Supported fields:
                        'category_id', 'auto_confidence'

        Returns:
            Number of transactions updated.

        Raises:
            ValueError: If unsupported field names are provided.
        """
        if not transactions:
            return 0

        if not field_names:
            raise ValueError("field_names cannot be empty")

        invalid_fields = set(field_names) - _UPDATABLE_FIELDS
        if invalid_fields:
            raise ValueError(f"Unsupported field names: {invalid_fields}")

        set_clause = ", ".join([f"{field} = ?" for field in field_names])

        # Field values followed by transaction ID for the WHERE clause
        data = [
            tuple(getattr(t, field) for field in field_names) + (t.id,)
            for t in transactions
        ]

        with self.db_manager.connect() as conn:
            cursor = conn.executemany(
                f"""
                UPDATE transactions
                SET {set_clause}
                WHERE id = ?
                """,
                data,
            )
            conn.commit()
            return cursor.rowcount

    def update(self, transaction: Transaction, field_names: List[str]) -> bool:
        """Update specified fields for a single transaction.

        Args:
            transaction: Transaction object to update.
            field_names: Field names to update (see batch_update).

        Returns:
            True if update was successful, False otherwise.
        """
        return self.batch_update([transaction], field_names) > 0

    def find(self, transaction_id: str) -> Optional[Transaction]:
        """Get a single transaction by ID.

        Args:
            transaction_id: The transaction checksum ID.

        Returns:
            Transaction object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_FIELDS}
                FROM transactions
                WHERE id = ?
                """,
                (transaction_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_transaction(row)
            return None

    def find_by_user(self, user_id: str) -> List[Transaction]:
        """Get all transactions for a user.

        Args:
            user_id: The owning user.

        Returns:
            List of Transaction objects ordered by transaction_date (newest first).
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_FIELDS}
                FROM transactions
                WHERE user_id = ?
                ORDER BY transaction_date DESC, id
                """,
                (user_id,),
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def add_category(self, transaction_id: str, category_id: int) -> bool:
        """Assign a secondary category to a transaction.

        Args:
            transaction_id: The transaction checksum ID.
            category_id: The category to assign.

        Returns:
            True if the assignment was added, False if it already existed.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT OR IGNORE INTO transaction_categories (transaction_id, category_id)
                VALUES (?, ?)
                """,
                (transaction_id, category_id),
            )
            conn.commit()
            return cursor.rowcount > 0

    def find_secondary_category_ids(self, transaction_id: str) -> List[int]:
        """Get the secondary category IDs assigned to a transaction.

        Args:
            transaction_id: The transaction checksum ID.

        Returns:
            List of category IDs in assignment order.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                SELECT category_id FROM transaction_categories
                WHERE transaction_id = ?
                ORDER BY created_at, category_id
                """,
                (transaction_id,),
            )
            return [row[0] for row in cursor.fetchall()]

    def find_needing_review(
        self, user_id: str, review_category_id: Optional[int], limit: int = 50
    ) -> List[Transaction]:
        """Get a user's transactions that still need a manual category.

        A transaction needs review when it sits in the reserved review
        category, or when it has neither a category nor any secondary
        category assignment.

        Args:
            user_id: The owning user.
            review_category_id: ID of the "Needs Review" category, if any.
            limit: Maximum number of transactions returned.

        Returns:
            List of Transaction objects ordered by date (newest first).
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_FIELDS}
                FROM transactions t
                WHERE t.user_id = ?
                  AND (
                    t.category_id = ?
                    OR (
                      t.category_id IS NULL
                      AND NOT EXISTS (
                        SELECT 1 FROM transaction_categories tc
                        WHERE tc.transaction_id = t.id
                      )
                    )
                  )
                ORDER BY t.transaction_date DESC, t.id
                LIMIT ?
                """,
                (user_id, review_category_id, limit),
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def _transaction_to_row(self, t: Transaction) -> tuple:
        """Convert a Transaction to a tuple in _TRANSACTION_FIELDS order."""
        return (
            t.id,
            t.user_id,
            t.transaction_date.isoformat(),
            t.description,
            float(t.amount),
            t.category_id,
            t.auto_confidence,
        )

    def _row_to_transaction(self, row: tuple) -> Transaction:
        """Convert a database row to a Transaction object.

        Args:
            row: Database row tuple.

        Returns:
            Transaction object.
        """
        return Transaction(
            id=row[0],
            user_id=row[1],
            transaction_date=date.fromisoformat(row[2]),
            description=row[3],
            amount=Decimal(str(row[4])),
            category_id=row[5],
            auto_confidence=row[6],
        )
