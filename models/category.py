"""Category model for transaction categorization."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Category:
    """Represents a transaction category.

    Attributes:
        id: Unique identifier (auto-generated).
        name: Category name (unique).
        parent_id: Optional parent category ID. Only two levels are allowed.
        color: Optional display color (e.g. "#D97706").
        icon: Optional display icon.
        is_system: True for seeded defaults, which users cannot delete.
    """

    id: int
    name: str
    parent_id: Optional[int] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    is_system: bool = False
