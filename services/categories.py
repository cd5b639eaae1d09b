"""Category service for database operations."""

from typing import List, Optional
from models.category import Category

_CATEGORY_SELECT_FIELDS = "id, name, parent_id, color, icon, is_system"

# Tables whose rows keep a category alive
_CATEGORY_REFERENCES = [
    ("categorization_rules", "category_id"),
    ("learned_patterns", "category_id"),
    ("transactions", "category_id"),
    ("transaction_categories", "category_id"),
    ("categories", "parent_id"),
]


class CategoryInUseError(Exception):
    """Raised when deleting a category that is still referenced."""


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db_manager):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Category]:
        """Get all categories from the database.

        Returns:
            List of Category objects, ordered by name.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories ORDER BY name"
            )
            return [self._row_to_category(row) for row in cursor.fetchall()]

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories WHERE id = ?",
                (category_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_category(row)
            return None

    def find_by_name(self, name: str) -> Optional[Category]:
        """Get a single category by name.

        Args:
            name: The category name to find (case-sensitive).

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories WHERE name = ?",
                (name,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_category(row)
            return None

    def create(
        self,
        name: str,
        parent_id: Optional[int] = None,
        color: Optional[str] = None,
        icon: Optional[str] = None,
        is_system: bool = False,
    ) -> Category:
        """Create a new category.

        Args:
            name: Category name (must be unique).
            parent_id: Optional parent category ID. The parent must be a
                       top-level category.
            color: Optional display color.
            icon: Optional display icon.
            is_system: Whether this is a protected system category.

        Returns:
            The created Category object with id populated.

        Raises:
            ValueError: If the parent does not exist or is itself a child.
            sqlite3.IntegrityError: If the name is already taken.
        """
        if parent_id is not None:
            parent = self.find(parent_id)
            if parent is None:
                raise ValueError(f"Parent category with ID {parent_id} not found")
            if parent.parent_id is not None:
                raise ValueError(
                    f"Category '{parent.name}' is a subcategory and cannot be a parent"
                )

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO categories (name, parent_id, color, icon, is_system)
                VALUES (?, ?, ?, ?, ?)
                """,
                (name, parent_id, color, icon, int(is_system)),
            )
            conn.commit()

            return Category(
                id=cursor.lastrowid,
                name=name,
                parent_id=parent_id,
                color=color,
                icon=icon,
                is_system=is_system,
            )

    def get_or_create_system(
        self, name: str, color: Optional[str] = None, icon: Optional[str] = None
    ) -> Category:
        """Get a system category by name, creating it if missing.

        Args:
            name: Category name.
            color: Display color used when the category is created.
            icon: Display icon used when the category is created.

        Returns:
            The existing or newly created Category.
        """
        existing = self.find_by_name(name)
        if existing:
            return existing

        # Concurrent first callers race on the unique name; the loser re-reads
        with self.db_manager.connect() as conn:
            conn.execute(
                """
                INSERT OR IGNORE INTO categories (name, color, icon, is_system)
                VALUES (?, ?, ?, 1)
                """,
                (name, color, icon),
            )
            conn.commit()

        return self.find_by_name(name)

    def count_references(self, category_id: int) -> int:
        """Count rows in other tables that point at a category.

        Args:
            category_id: The category ID to check.

        Returns:
            Total number of referencing rows.
        """
        total = 0
        with self.db_manager.connect() as conn:
            for table, column in _CATEGORY_REFERENCES:
                cursor = conn.execute(
                    f"SELECT COUNT(*) FROM {table} WHERE {column} = ?",
                    (category_id,),
                )
                total += cursor.fetchone()[0]
        return total

    def delete(self, category_id: int) -> bool:
        """Delete a category by ID.

        Deletion never cascades: referenced categories are refused.

        Args:
            category_id: The category ID to delete.

        Returns:
            True if category was deleted, False if not found.

        Raises:
            ValueError: If the category is a system category.
            CategoryInUseError: If rules, learned patterns, transactions or
                                child categories still reference it.
        """
        category = self.find(category_id)
        if category is None:
            return False

        if category.is_system:
            raise ValueError(f"System category '{category.name}' cannot be deleted")

        references = self.count_references(category_id)
        if references:
            raise CategoryInUseError(
                f"Category '{category.name}' is referenced by {references} record(s)"
            )

        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_category(self, row: tuple) -> Category:
        """Convert a database row to a Category object."""
        return Category(
            id=row[0],
            name=row[1],
            parent_id=row[2],
            color=row[3],
            icon=row[4],
            is_system=bool(row[5]),
        )
