import pytest

from categorization.similarity import jaccard_similarity


class TestJaccardSimilarity:
    """Tests for jaccard_similarity."""

    def test_identical_strings(self):
        """Test that a non-empty string is fully similar to itself."""
        assert jaccard_similarity("costco wholesale", "costco wholesale") == 1.0

    def test_both_empty(self):
        """Test that two empty strings have similarity 0."""
        assert jaccard_similarity("", "") == 0.0

    def test_one_empty(self):
        """Test that an empty string shares nothing with a non-empty one."""
        assert jaccard_similarity("", "costco") == 0.0

    def test_disjoint(self):
        """Test that strings without shared tokens have similarity 0."""
        assert jaccard_similarity("uber trip", "netflix com") == 0.0

    def test_partial_overlap(self):
        """Test intersection over union on partially overlapping tokens."""
        assert jaccard_similarity("costco wholesale 445", "costco wholesale") == pytest.approx(2 / 3)

    def test_duplicates_are_collapsed(self):
        """Test that repeated tokens count once."""
        assert jaccard_similarity("shell shell oil", "shell oil") == 1.0

    @pytest.mark.parametrize(
        "first,second",
        [
            ("a b c", "b c d"),
            ("starbucks store", "starbucks"),
            ("", "x"),
        ],
    )
    def test_symmetric(self, first, second):
        """Test that argument order does not matter."""
        assert jaccard_similarity(first, second) == jaccard_similarity(second, first)
