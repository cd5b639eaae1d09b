import logging

import pytest

from logger import LOGGER_NAME, get_log_file, get_logger, setup_logging


@pytest.fixture
def configured_logger(test_config):
    """Set up logging for a test and detach its handlers afterwards."""
    logger = setup_logging(test_config)
    yield logger
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestGetLogger:
    """Tests for get_logger."""

    def test_application_logger(self):
        """Test that no name gives the application logger."""
        assert get_logger().name == LOGGER_NAME

    def test_module_logger_is_child(self):
        """Test that module names become children of the application logger."""
        assert get_logger("categorization.engine").name == "autocat.categorization.engine"
        assert get_logger("autocat.cli").name == "autocat.cli"
        assert get_logger("autocat").name == "autocat"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_writes_dated_file_with_component_and_thread(self, test_config, configured_logger):
        """Test that child loggers reach the dated log file."""
        get_logger("categorization.engine").warning("classified 3 transactions")
        for handler in configured_logger.handlers:
            handler.flush()

        log_file = get_log_file(test_config)
        text = log_file.read_text()

        assert log_file.name.startswith("autocat-")
        assert "autocat.categorization.engine - MainThread - WARNING" in text
        assert "classified 3 transactions" in text

    def test_repeated_setup_replaces_handlers(self, test_config, configured_logger):
        """Test that calling setup twice doesn't duplicate handlers."""
        setup_logging(test_config)

        assert len(configured_logger.handlers) == 2
        assert configured_logger.level == logging.DEBUG
