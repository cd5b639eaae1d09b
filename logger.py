"""Logging configuration for autocat.

Everything logs under the ``autocat`` logger. Modules take a child logger
(``autocat.categorization.engine`` and so on) so the file log shows which
component, and which classification worker thread, wrote each line.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional
from config import Config

LOGGER_NAME = "autocat"

FILE_FORMAT = "%(asctime)s - %(name)s - %(threadName)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s - %(message)s"


def get_log_file(config: Config) -> Path:
    """Get today's log file path (log_dir/autocat-YYYY-MM-DD.log)."""
    return config.log_dir / f"{LOGGER_NAME}-{date.today().isoformat()}.log"


def setup_logging(config: Config) -> logging.Logger:
    """Attach a dated file handler and a console handler to the autocat logger.

    Safe to call more than once; earlier handlers are replaced.

    Args:
        config: Application configuration containing log settings.

    Returns:
        The configured ``autocat`` logger.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level)
    logger.handlers.clear()

    file_handler = logging.FileHandler(get_log_file(config), encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get the application logger or one of its children.

    Args:
        name: Module name such as ``__name__``. A leading ``autocat.`` is not
              required.

    Returns:
        ``autocat`` when name is None, otherwise ``autocat.<name>``.
    """
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
