import pytest

from categorization.arbitration import arbitrate, rank_candidates
from models.classification import CandidateMatch, SOURCE_LEARNED, SOURCE_RULE


def rule(category_id, confidence):
    return CandidateMatch(category_id, confidence, SOURCE_RULE, f"Matched rule: {category_id}")


def learned(category_id, confidence):
    return CandidateMatch(
        category_id, confidence, SOURCE_LEARNED, "Learned from previous categorizations (1 times)"
    )


class TestRankCandidates:
    """Tests for rank_candidates."""

    def test_orders_by_confidence(self):
        """Test that higher confidence ranks first."""
        ranked = rank_candidates([rule(1, 0.7), rule(2, 0.95), learned(3, 0.8)])

        assert [c.category_id for c in ranked] == [2, 3, 1]

    @pytest.mark.parametrize("learned_first", [True, False])
    def test_learned_wins_ties(self, learned_first):
        """Test that learned candidates outrank rules at equal confidence."""
        candidates = [learned(1, 0.85), rule(2, 0.85)]
        if not learned_first:
            candidates.reverse()

        assert rank_candidates(candidates)[0].category_id == 1

    def test_equal_rules_keep_input_order(self):
        """Test that remaining ties are stable."""
        ranked = rank_candidates([rule(5, 0.9), rule(4, 0.9), rule(6, 0.9)])

        assert [c.category_id for c in ranked] == [5, 4, 6]


class TestArbitrate:
    """Tests for arbitrate."""

    def test_no_candidates(self):
        """Test the uncategorized result when nothing matched."""
        result = arbitrate([])

        assert result.category_id is None
        assert result.confidence == 0.0
        assert result.reason == "No matching patterns found"
        assert result.needs_review is True

    def test_best_candidate_selected(self):
        """Test that the top candidate becomes the result."""
        result = arbitrate([rule(1, 0.7), rule(2, 0.9)])

        assert result.category_id == 2
        assert result.confidence == 0.9
        assert result.reason == "Matched rule: 2"
        assert result.needs_review is False

    def test_threshold_is_exclusive(self):
        """Test that confidence equal to the threshold needs no review."""
        assert arbitrate([rule(1, 0.8)]).needs_review is False
        assert arbitrate([rule(1, 0.79)]).needs_review is True

    def test_custom_threshold(self):
        """Test a configured review threshold."""
        assert arbitrate([rule(1, 0.9)], review_threshold=0.95).needs_review is True


class TestCandidateMatch:
    """Tests for CandidateMatch."""

    def test_confidence_is_clamped(self):
        """Test that confidence is kept within [0, 1]."""
        assert rule(1, 1.4).confidence == 1.0
        assert rule(1, -0.2).confidence == 0.0
