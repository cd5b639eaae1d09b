"""Transaction auto-categorization from static rules and learned feedback."""

from categorization.text import normalize_description, extract_merchant_name
from categorization.similarity import jaccard_similarity
from categorization.engine import (
    CategorizationEngine,
    CategorizationSnapshot,
    classify_description,
)

__all__ = [
    "normalize_description",
    "extract_merchant_name",
    "jaccard_similarity",
    "CategorizationEngine",
    "CategorizationSnapshot",
    "classify_description",
]
