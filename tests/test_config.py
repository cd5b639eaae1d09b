from pathlib import Path

import pytest

from config import CategorizationSettings, Config, load_config


class TestLoadConfig:
    """Tests for load_config."""

    def test_creates_default_file(self, tmp_path):
        """Test that a missing config file is written with defaults."""
        path = tmp_path / "autocat.toml"

        config = load_config(path)

        assert path.exists()
        assert config.db_filename == "autocat.db"
        assert config.categorization == CategorizationSettings()

    def test_round_trip_of_default_file(self, tmp_path):
        """Test that the written defaults load back unchanged."""
        path = tmp_path / "autocat.toml"
        written = load_config(path)

        assert load_config(path) == written

    def test_reads_categorization_table(self, tmp_path):
        """Test that policy values can be tuned from TOML."""
        path = tmp_path / "autocat.toml"
        path.write_text(
            'base_dir = "/tmp/autocat"\n'
            "[categorization]\n"
            "review_threshold = 0.9\n"
            "similarity_floor = 0.5\n"
            "max_workers = 2\n"
            'review_category = "Inbox"\n'
        )

        config = load_config(path)

        assert config.base_dir == Path("/tmp/autocat")
        assert config.db_data_dir == Path("/tmp/autocat/db")
        assert config.categorization.review_threshold == 0.9
        assert config.categorization.similarity_floor == 0.5
        assert config.categorization.initial_confidence == 0.8
        assert config.categorization.worker_count == 2
        assert config.categorization.review_category == "Inbox"


class TestConfig:
    """Tests for Config."""

    def test_db_path(self, test_config):
        """Test that the database path joins data dir and filename."""
        assert test_config.db_path == test_config.db_data_dir / "test.db"

    def test_default_worker_count(self):
        """Test that zero workers means one per CPU."""
        assert CategorizationSettings(max_workers=0).worker_count >= 1
        assert isinstance(Config.default().categorization, CategorizationSettings)


class TestCategorizationSettings:
    """Tests for CategorizationSettings validation."""

    @pytest.mark.parametrize(
        "overrides",
        [
            {"review_threshold": 7.5},
            {"review_threshold": -0.1},
            {"similarity_floor": 1.5},
            {"initial_confidence": -0.2},
            {"reinforcement_step": -0.3},
            {"reinforcement_step": 0.0},
            {"max_workers": -3},
        ],
    )
    def test_rejects_out_of_range_values(self, overrides):
        """Test that policy values outside their range are refused."""
        with pytest.raises(ValueError, match=next(iter(overrides))):
            CategorizationSettings(**overrides)

    def test_accepts_boundaries(self):
        """Test that the inclusive bounds are allowed."""
        settings = CategorizationSettings(
            review_threshold=1.0,
            similarity_floor=0.0,
            initial_confidence=1.0,
            reinforcement_step=1.0,
            max_workers=0,
        )

        assert settings.review_threshold == 1.0

    def test_load_config_rejects_bad_table(self, tmp_path):
        """Test that a bad [categorization] table fails at load time."""
        path = tmp_path / "autocat.toml"
        path.write_text(
            "[categorization]\n"
            "review_threshold = 7.5\n"
            "reinforcement_step = -1.0\n"
            "max_workers = -3\n"
        )

        with pytest.raises(ValueError, match="review_threshold"):
            load_config(path)

    def test_feedback_never_lowers_confidence(self, services):
        """Test that repeated feedback only raises a pattern's confidence."""
        groceries = services.categories.create("Groceries")
        engine = services.categorizer

        first = engine.record_feedback("COSTCO WHOLESALE #445", groceries.id, "u1")
        second = engine.record_feedback("COSTCO WHOLESALE #445", groceries.id, "u1")

        assert second.match_count == 2
        assert second.confidence >= first.confidence
