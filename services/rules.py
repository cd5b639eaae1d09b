"""Rule service for database operations."""

from typing import List, Optional
from models.rule import Rule

_RULE_SELECT_FIELDS = "id, name, pattern, category_id, confidence, priority, is_active"


class RuleService:
    """Service for managing categorization rules."""

    def __init__(self, db_manager):
        """Initialize the rule service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Rule]:
        """Get all rules, active or not.

        Returns:
            List of Rule objects ordered by priority (highest first), then name.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_RULE_SELECT_FIELDS}
                FROM categorization_rules
                ORDER BY priority DESC, name
                """
            )
            return [self._row_to_rule(row) for row in cursor.fetchall()]

    def find_active(self) -> List[Rule]:
        """Get the rules used for matching.

        Returns:
            List of active Rule objects ordered by priority (highest first).
            Rules with equal priority keep their creation order.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_RULE_SELECT_FIELDS}
                FROM categorization_rules
                WHERE is_active = 1
                ORDER BY priority DESC, id
                """
            )
            return [self._row_to_rule(row) for row in cursor.fetchall()]

    def find(self, rule_id: int) -> Optional[Rule]:
        """Get a single rule by ID.

        Args:
            rule_id: The rule ID to find.

        Returns:
            Rule object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_RULE_SELECT_FIELDS} FROM categorization_rules WHERE id = ?",
                (rule_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_rule(row)
            return None

    def find_by_name_and_pattern(self, name: str, pattern: str) -> Optional[Rule]:
        """Get a rule with exactly this name and pattern.

        Args:
            name: Rule name.
            pattern: Rule pattern text.

        Returns:
            Rule object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_RULE_SELECT_FIELDS}
                FROM categorization_rules
                WHERE name = ? AND pattern = ?
                """,
                (name, pattern),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_rule(row)
            return None

    def create(
        self,
        name: str,
        pattern: str,
        category_id: int,
        confidence: float,
        priority: int = 1,
        is_active: bool = True,
    ) -> Rule:
        """Create a new rule.

        Args:
            name: Human-readable rule name.
            pattern: Case-insensitive regular expression.
            category_id: Target category ID.
            confidence: Confidence in [0, 1].
            priority: Evaluation priority (higher first).
            is_active: Whether the rule takes part in matching.

        Returns:
            The created Rule object with id populated.

        Raises:
            ValueError: If confidence is outside [0, 1].
        """
        if not 0.0 <= confidence <= 1.0:
            raise ValueError(f"Rule confidence must be in [0, 1], got {confidence}")

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO categorization_rules
                    (name, pattern, category_id, confidence, priority, is_active)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (name, pattern, category_id, confidence, priority, int(is_active)),
            )
            conn.commit()

            return Rule(
                id=cursor.lastrowid,
                name=name,
                pattern=pattern,
                category_id=category_id,
                confidence=confidence,
                priority=priority,
                is_active=is_active,
            )

    def set_active(self, rule_id: int, is_active: bool) -> bool:
        """Enable or disable a rule.

        Args:
            rule_id: The rule ID to update.
            is_active: New active flag.

        Returns:
            True if the rule was updated, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "UPDATE categorization_rules SET is_active = ? WHERE id = ?",
                (int(is_active), rule_id),
            )
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_rule(self, row: tuple) -> Rule:
        """Convert a database row to a Rule object."""
        return Rule(
            id=row[0],
            name=row[1],
            pattern=row[2],
            category_id=row[3],
            confidence=row[4],
            priority=row[5],
            is_active=bool(row[6]),
        )
