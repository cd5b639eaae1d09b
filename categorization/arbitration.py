"""Ranking of candidate matches into a final classification."""

from typing import List
from models.classification import (
    CandidateMatch,
    ClassificationResult,
    SOURCE_LEARNED,
)

DEFAULT_REVIEW_THRESHOLD = 0.8
NO_MATCH_REASON = "No matching patterns found"


def rank_candidates(candidates: List[CandidateMatch]) -> List[CandidateMatch]:
    """Order candidates from most to least trusted.

    Higher confidence ranks first. At equal confidence a learned candidate
    ranks above a rule candidate: the user's own correction history takes
    precedence over generic static rules. Remaining ties keep input order.
    """
    return sorted(
        candidates,
        key=lambda c: (-c.confidence, 0 if c.source == SOURCE_LEARNED else 1),
    )


def arbitrate(
    candidates: List[CandidateMatch],
    review_threshold: float = DEFAULT_REVIEW_THRESHOLD,
) -> ClassificationResult:
    """Pick the winning candidate.

    Args:
        candidates: Candidates from all matchers, in any order.
        review_threshold: Results below this confidence are flagged for review.

    Returns:
        The classification of the top-ranked candidate, or an uncategorized
        result flagged for review when there are no candidates.
    """
    if not candidates:
        return ClassificationResult(
            category_id=None,
            confidence=0.0,
            reason=NO_MATCH_REASON,
            needs_review=True,
        )

    best = rank_candidates(candidates)[0]
    return ClassificationResult(
        category_id=best.category_id,
        confidence=best.confidence,
        reason=best.explanation,
        needs_review=best.confidence < review_threshold,
    )
