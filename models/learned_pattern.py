"""LearnedPattern model for per-user feedback-derived categorization."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class LearnedPattern:
    """A merchant token a user has assigned to a category.

    There is at most one row per (user_id, pattern, category_id).

    Attributes:
        id: Unique identifier (auto-generated).
        user_id: Owning user.
        pattern: Merchant token (plain text, not a regex).
        category_id: Target category ID.
        confidence: Confidence in [0, 1], grows with each reinforcement.
        match_count: Number of times the user confirmed this mapping.
        last_used: Timestamp of the latest reinforcement.
    """

    id: int
    user_id: str
    pattern: str
    category_id: int
    confidence: float
    match_count: int
    last_used: datetime
