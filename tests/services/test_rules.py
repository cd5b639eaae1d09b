import pytest


class TestRuleService:
    """Tests for RuleService."""

    @pytest.fixture
    def category(self, services):
        return services.categories.create("Shopping")

    def test_create_rule(self, services, category):
        """Test creating a rule."""
        rule = services.rules.create("Amazon", "amazon|amzn", category.id, 0.8)

        assert rule.id > 0
        assert rule.priority == 1
        assert rule.is_active is True
        assert services.rules.find(rule.id) == rule

    def test_create_rejects_invalid_confidence(self, services, category):
        """Test that confidence must be within [0, 1]."""
        with pytest.raises(ValueError):
            services.rules.create("Bad", "x", category.id, 1.2)

    def test_find_active_ordered_by_priority(self, services, category):
        """Test that active rules come back highest priority first."""
        services.rules.create("Low", "a", category.id, 0.8, priority=1)
        services.rules.create("High", "b", category.id, 0.8, priority=10)
        services.rules.create("Also Low", "c", category.id, 0.8, priority=1)

        rules = services.rules.find_active()

        assert [r.name for r in rules] == ["High", "Low", "Also Low"]

    def test_find_active_excludes_inactive(self, services, category):
        """Test that disabled rules are not returned for matching."""
        rule = services.rules.create("Amazon", "amazon", category.id, 0.8)
        services.rules.create("Target", "target", category.id, 0.8)

        assert services.rules.set_active(rule.id, False) is True

        assert [r.name for r in services.rules.find_active()] == ["Target"]
        assert len(services.rules.find_all()) == 2

    def test_set_active_not_found(self, services):
        """Test toggling a non-existent rule returns False."""
        assert services.rules.set_active(9999, True) is False

    def test_find_by_name_and_pattern(self, services, category):
        """Test exact lookup on name and pattern."""
        services.rules.create("Amazon", "amazon", category.id, 0.8)

        assert services.rules.find_by_name_and_pattern("Amazon", "amazon") is not None
        assert services.rules.find_by_name_and_pattern("Amazon", "amzn") is None
        assert services.rules.find_by_name_and_pattern("amazon", "amazon") is None
