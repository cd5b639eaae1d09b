"""Token-set similarity between descriptions and learned patterns."""


def jaccard_similarity(first: str, second: str) -> float:
    """Compute the Jaccard similarity of two whitespace-separated token sets.

    Returns 0.0 when both strings have no tokens.
    """
    tokens_a = set(first.split())
    tokens_b = set(second.split())

    union = tokens_a | tokens_b
    if not union:
        return 0.0
    return len(tokens_a & tokens_b) / len(union)
