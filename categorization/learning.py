"""Matching against a user's learned patterns."""

from typing import List
from models.classification import CandidateMatch, SOURCE_LEARNED
from models.learned_pattern import LearnedPattern
from categorization.similarity import jaccard_similarity

DEFAULT_SIMILARITY_FLOOR = 0.6


def _overlaps(pattern: str, merchant: str, normalized: str) -> bool:
    """Cheap containment pre-filter before scoring similarity."""
    return (
        pattern in merchant
        or pattern in normalized
        or merchant in pattern
        or normalized in pattern
    )


def match_learned_patterns(
    normalized: str,
    merchant: str,
    user_id: str,
    patterns: List[LearnedPattern],
    similarity_floor: float = DEFAULT_SIMILARITY_FLOOR,
) -> List[CandidateMatch]:
    """Find the learned patterns of a user that match a description.

    A pattern matches when its text overlaps the merchant token or the
    normalized description, and its similarity to the normalized description
    is strictly above the floor. The floor keeps incidental overlaps (shared
    common words) from producing strong matches.

    Args:
        normalized: Normalized description.
        merchant: Merchant token extracted from the description.
        user_id: The requesting user. Patterns of other users are ignored.
        patterns: The user's patterns, ordered by confidence (highest first).
        similarity_floor: Minimum similarity, exclusive.

    Returns:
        Candidates with confidence = pattern confidence * similarity.
    """
    candidates = []
    for pattern in patterns:
        if pattern.user_id != user_id or not pattern.pattern:
            continue
        if not _overlaps(pattern.pattern, merchant, normalized):
            continue

        similarity = jaccard_similarity(normalized, pattern.pattern)
        if similarity > similarity_floor:
            candidates.append(
                CandidateMatch(
                    category_id=pattern.category_id,
                    confidence=pattern.confidence * similarity,
                    source=SOURCE_LEARNED,
                    explanation=(
                        "Learned from previous categorizations "
                        f"({pattern.match_count} times)"
                    ),
                )
            )
    return candidates
