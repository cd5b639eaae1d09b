"""Rule model for static pattern-based categorization."""

from dataclasses import dataclass


@dataclass
class Rule:
    """An admin-authored regular expression mapped to a category.

    Rules are global (not per-user) and read-only during matching.

    Attributes:
        id: Unique identifier (auto-generated).
        name: Human-readable name, shown in classification reasons.
        pattern: Case-insensitive regular expression.
        category_id: Target category ID.
        confidence: Fixed confidence in [0, 1].
        priority: Higher priorities are evaluated first.
        is_active: Inactive rules are never matched.
    """

    id: int
    name: str
    pattern: str
    category_id: int
    confidence: float
    priority: int = 1
    is_active: bool = True
