"""Learned pattern service for database operations."""

from datetime import datetime
from typing import List, Optional
from models.learned_pattern import LearnedPattern

_PATTERN_SELECT_FIELDS = (
    "id, user_id, pattern, category_id, confidence, match_count, last_used"
)


class LearnedPatternService:
    """Service for managing per-user learned patterns."""

    def __init__(self, db_manager):
        """Initialize the learned pattern service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_by_user(
        self, user_id: str, merchant: Optional[str] = None
    ) -> List[LearnedPattern]:
        """Get a user's learned patterns.

        Args:
            user_id: The owning user.
            merchant: Optional merchant token. When given, only patterns that
                      contain it or are contained in it are returned.

        Returns:
            List of LearnedPattern objects ordered by confidence (highest
            first), then match count.
        """
        query = f"""
            SELECT {_PATTERN_SELECT_FIELDS}
            FROM learned_patterns
            WHERE user_id = ?
        """
        params = [user_id]

        if merchant is not None:
            query += " AND (instr(pattern, ?) > 0 OR instr(?, pattern) > 0)"
            params.extend([merchant, merchant])

        query += " ORDER BY confidence DESC, match_count DESC, id"

        with self.db_manager.connect() as conn:
            cursor = conn.execute(query, params)
            return [self._row_to_pattern(row) for row in cursor.fetchall()]

    def find(
        self, user_id: str, pattern: str, category_id: int
    ) -> Optional[LearnedPattern]:
        """Get the learned pattern for a (user, pattern, category) triple.

        Args:
            user_id: The owning user.
            pattern: Merchant token.
            category_id: Target category ID.

        Returns:
            LearnedPattern object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_PATTERN_SELECT_FIELDS}
                FROM learned_patterns
                WHERE user_id = ? AND pattern = ? AND category_id = ?
                """,
                (user_id, pattern, category_id),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_pattern(row)
            return None

    def upsert(
        self,
        user_id: str,
        pattern: str,
        category_id: int,
        confidence_delta: float,
        initial_confidence: float,
    ) -> LearnedPattern:
        """Create a learned pattern or reinforce the existing one.

        This is a single INSERT ... ON CONFLICT statement, so the confidence
        increment is evaluated by SQLite and concurrent calls for the same
        triple can neither create duplicates nor lose increments.

        Args:
            user_id: The owning user.
            pattern: Merchant token.
            category_id: Target category ID.
            confidence_delta: Amount added to the confidence of an existing
                              pattern (result capped at 1.0).
            initial_confidence: Confidence of a newly created pattern.

        Returns:
            The pattern as stored after the write.
        """
        now = datetime.now().isoformat()

        with self.db_manager.connect() as conn:
            conn.execute(
                """
                INSERT INTO learned_patterns
                    (user_id, pattern, category_id, confidence, match_count, last_used)
                VALUES (?, ?, ?, MIN(1.0, MAX(0.0, ?)), 1, ?)
                ON CONFLICT (user_id, pattern, category_id) DO UPDATE SET
                    confidence = MIN(1.0, learned_patterns.confidence + ?),
                    match_count = learned_patterns.match_count + 1,
                    last_used = excluded.last_used
                """,
                (
                    user_id,
                    pattern,
                    category_id,
                    initial_confidence,
                    now,
                    confidence_delta,
                ),
            )
            conn.commit()

        return self.find(user_id, pattern, category_id)

    def delete(self, pattern_id: int) -> bool:
        """Delete a learned pattern by ID.

        Args:
            pattern_id: The learned pattern ID.

        Returns:
            True if a pattern was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM learned_patterns WHERE id = ?", (pattern_id,)
            )
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_pattern(self, row: tuple) -> LearnedPattern:
        """Convert a database row to a LearnedPattern object."""
        return LearnedPattern(
            id=row[0],
            user_id=row[1],
            pattern=row[2],
            category_id=row[3],
            confidence=row[4],
            match_count=row[5],
            last_used=datetime.fromisoformat(row[6]),
        )
