"""Description normalization and merchant-name extraction."""

import re

_NON_WORD = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")

# Tried in order; the first capture longer than 2 characters wins.
_MERCHANT_PATTERNS = [
    # Everything before a run of digits or an asterisk
    re.compile(r"^([^0-9*]+?)(?:\s+\d|\s*\*|$)"),
    # Everything before a trailing transaction-type word
    re.compile(r"^(.*?)\s+(?:purchase|payment|debit|credit)", re.IGNORECASE),
    # Everything before a date-like token
    re.compile(r"^(.*?)\s+\d{2}/\d{2}"),
]

_MIN_TOKEN_LENGTH = 3
_FALLBACK_TOKEN_COUNT = 3


def normalize_description(description: str) -> str:
    """Convert a raw description into its canonical comparison form.

    Lower-cases the text, replaces anything that is not a letter, digit or
    whitespace with a space, collapses whitespace and trims. Idempotent.

    Args:
        description: Raw transaction description.

    Returns:
        Normalized description, possibly empty.
    """
    text = _NON_WORD.sub(" ", description.lower())
    return _WHITESPACE.sub(" ", text).strip()


def extract_merchant_name(description: str) -> str:
    """Extract a short merchant token from a description.

    The description is normalized first, so raw and normalized input give
    the same result.

    Args:
        description: Raw or normalized transaction description.

    Returns:
        Merchant token. Empty only when no word is longer than 2 characters.
    """
    normalized = normalize_description(description)

    for pattern in _MERCHANT_PATTERNS:
        match = pattern.match(normalized)
        if match and len(match.group(1).strip()) >= _MIN_TOKEN_LENGTH:
            return match.group(1).strip()

    words = [w for w in normalized.split(" ") if len(w) >= _MIN_TOKEN_LENGTH]
    return " ".join(words[:_FALLBACK_TOKEN_COUNT])
