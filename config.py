"""Configuration management for autocat.

Reads configuration from ~/.config/autocat.toml and creates default config if needed.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional
import tomllib
import tomli_w


@dataclass
class CategorizationSettings:
    """Tunable policy values for the categorization engine.

    The review threshold and similarity floor are uncalibrated defaults,
    not validated business thresholds.
    """

    review_threshold: float = 0.8
    similarity_floor: float = 0.6
    initial_confidence: float = 0.8
    reinforcement_step: float = 0.1
    max_workers: int = 0  # 0 means os.cpu_count()
    review_category: str = "Needs Review"

    def __post_init__(self):
        """Validate policy values.

        Raises:
            ValueError: If a threshold or confidence is outside [0, 1], the
                reinforcement step is not positive, or max_workers is negative.
        """
        for name in ("review_threshold", "similarity_floor", "initial_confidence"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")
        if not 0.0 < self.reinforcement_step <= 1.0:
            raise ValueError(
                f"reinforcement_step must be in (0, 1], got {self.reinforcement_step}"
            )
        if self.max_workers < 0:
            raise ValueError(f"max_workers must be >= 0, got {self.max_workers}")

    @property
    def worker_count(self) -> int:
        """Get the thread pool size used for bulk classification."""
        return self.max_workers or os.cpu_count() or 1


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    categorization: CategorizationSettings = field(
        default_factory=CategorizationSettings
    )
    db_busy_timeout: float = 30.0

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "autocat"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="autocat.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "autocat.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def get_seed_dir() -> Path:
    """Get the path to the directory holding the seed data files."""
    return Path(__file__).parent / "db" / "seed"


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Args:
        config_path: Optional explicit path. Defaults to ~/.config/autocat.toml.

    Returns:
        Config object with loaded or default values.
    """
    config_path = config_path or get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config, config_path)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "autocat"))

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", "autocat.db")
    db_busy_timeout = float(db_config.get("busy_timeout", 30.0))

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    defaults = CategorizationSettings()
    cat_config = data.get("categorization", {})
    categorization = CategorizationSettings(
        review_threshold=float(
            cat_config.get("review_threshold", defaults.review_threshold)
        ),
        similarity_floor=float(
            cat_config.get("similarity_floor", defaults.similarity_floor)
        ),
        initial_confidence=float(
            cat_config.get("initial_confidence", defaults.initial_confidence)
        ),
        reinforcement_step=float(
            cat_config.get("reinforcement_step", defaults.reinforcement_step)
        ),
        max_workers=int(cat_config.get("max_workers", defaults.max_workers)),
        review_category=cat_config.get("review_category", defaults.review_category),
    )

    return Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        log_level=log_level,
        log_dir=log_dir,
        categorization=categorization,
        db_busy_timeout=db_busy_timeout,
    )


def _write_config(config: Config, config_path: Path) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
        config_path: Destination of the TOML file.
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)

    settings = config.categorization
    data = {
        "base_dir": str(config.base_dir),
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
            "busy_timeout": config.db_busy_timeout,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "categorization": {
            "review_threshold": settings.review_threshold,
            "similarity_floor": settings.similarity_floor,
            "initial_confidence": settings.initial_confidence,
            "reinforcement_step": settings.reinforcement_step,
            "max_workers": settings.max_workers,
            "review_category": settings.review_category,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
