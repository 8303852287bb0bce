"""
Settings management for instafilter.

Thumbnail batching and logging preferences are read from an INI file. The
file is optional; missing sections or keys fall back to the defaults below.
"""

import logging
import os
from configparser import ConfigParser
from pathlib import Path
from typing import Optional, Union

from ..core import InvalidParameterError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Settings:
    """Engine settings backed by a settings.ini file."""

    # Environment variable naming the settings file
    ENV_VAR = "INSTAFILTER_SETTINGS"

    # Sections and keys
    SECTION_THUMBNAILS = "thumbnails"
    SECTION_ENGINE = "engine"
    KEY_BATCH_SIZE = "batch_size"
    KEY_SIZE = "size"
    KEY_MAX_WORKERS = "max_workers"
    KEY_LOG_LEVEL = "log_level"

    DEFAULTS = {
        SECTION_THUMBNAILS: {
            KEY_BATCH_SIZE: "6",
            KEY_SIZE: "150",
            KEY_MAX_WORKERS: "6",
        },
        SECTION_ENGINE: {
            KEY_LOG_LEVEL: "INFO",
        },
    }

    LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

    def __init__(self, path: Optional[PathLike] = None):
        """
        Initialize settings from ``path``, or from the file named by
        ``INSTAFILTER_SETTINGS`` when no path is given. With neither, the
        defaults are used and nothing is read from disk.
        """
        if path is None:
            env_path = os.environ.get(self.ENV_VAR)
            path = env_path if env_path else None
        self.path: Optional[Path] = Path(path) if path is not None else None
        self.config = ConfigParser()
        self._load()

    def _load(self) -> None:
        """Load defaults, then overlay the settings file if it exists."""
        self.config.read_dict(self.DEFAULTS)
        if self.path is not None and self.path.exists():
            self.config.read(self.path)
            logger.debug("Loaded settings from %s", self.path)
        elif self.path is not None:
            logger.debug("Settings file %s not found, using defaults", self.path)

    def save(self, path: Optional[PathLike] = None) -> Path:
        """Write settings to ``path`` (or the path they were loaded from)."""
        target = Path(path) if path is not None else self.path
        if target is None:
            raise InvalidParameterError("No settings path to save to")
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w") as f:
            self.config.write(f)
        self.path = target
        return target

    def _get_positive_int(self, section: str, key: str) -> int:
        raw = self.config.get(section, key)
        try:
            value = int(raw)
        except ValueError:
            raise InvalidParameterError(
                f"Setting [{section}] {key} must be an integer, got {raw!r}"
            ) from None
        if value <= 0:
            raise InvalidParameterError(f"Setting [{section}] {key} must be positive, got {value}")
        return value

    def _set_positive_int(self, section: str, key: str, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidParameterError(
                f"Setting [{section}] {key} must be a positive integer, got {value!r}"
            )
        self.config.set(section, key, str(value))

    @property
    def batch_size(self) -> int:
        """Number of thumbnails rendered per batch (default: 6)."""
        return self._get_positive_int(self.SECTION_THUMBNAILS, self.KEY_BATCH_SIZE)

    def set_batch_size(self, value: int) -> None:
        self._set_positive_int(self.SECTION_THUMBNAILS, self.KEY_BATCH_SIZE, value)

    @property
    def thumbnail_size(self) -> int:
        """Edge length of the thumbnail bounding box (default: 150)."""
        return self._get_positive_int(self.SECTION_THUMBNAILS, self.KEY_SIZE)

    def set_thumbnail_size(self, value: int) -> None:
        self._set_positive_int(self.SECTION_THUMBNAILS, self.KEY_SIZE, value)

    @property
    def max_workers(self) -> int:
        """Worker threads per batch (default: 6)."""
        return self._get_positive_int(self.SECTION_THUMBNAILS, self.KEY_MAX_WORKERS)

    def set_max_workers(self, value: int) -> None:
        self._set_positive_int(self.SECTION_THUMBNAILS, self.KEY_MAX_WORKERS, value)

    @property
    def log_level(self) -> str:
        """Level name for the package logger (default: 'INFO')."""
        level = self.config.get(self.SECTION_ENGINE, self.KEY_LOG_LEVEL).strip().upper()
        if level not in self.LOG_LEVELS:
            raise InvalidParameterError(
                f"Setting [{self.SECTION_ENGINE}] {self.KEY_LOG_LEVEL} must be one of "
                f"{', '.join(self.LOG_LEVELS)}, got {level!r}"
            )
        return level

    def set_log_level(self, level: str) -> None:
        if not isinstance(level, str) or level.upper() not in self.LOG_LEVELS:
            raise InvalidParameterError(f"Unknown log level {level!r}")
        self.config.set(self.SECTION_ENGINE, self.KEY_LOG_LEVEL, level.upper())
