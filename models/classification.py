"""Value objects produced by the categorization engine."""

from dataclasses import dataclass
from typing import Optional

SOURCE_RULE = "rule"
SOURCE_LEARNED = "learned"


def clamp_confidence(value: float) -> float:
    """Clamp a confidence score into [0, 1]."""
    return max(0.0, min(1.0, float(value)))


@dataclass(frozen=True)
class CandidateMatch:
    """A possible category for a description, from one matcher."""

    category_id: int
    confidence: float
    source: str  # SOURCE_RULE or SOURCE_LEARNED
    explanation: str

    def __post_init__(self):
        object.__setattr__(self, "confidence", clamp_confidence(self.confidence))


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of classifying a single description.

    A result with category_id None and needs_review True is a normal outcome,
    not an error.
    """

    category_id: Optional[int]
    confidence: float
    reason: str
    needs_review: bool
