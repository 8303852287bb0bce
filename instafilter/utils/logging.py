"""Logging helpers for instafilter."""

from __future__ import annotations

import logging
from typing import Optional, Union

LOGGER_NAME = "instafilter"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_LOGGER: Optional[logging.Logger] = None


def get_logger(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Return the package logger, attaching a stream handler on first use.

    ``level`` (a level name such as ``"DEBUG"`` or a ``logging`` constant)
    is applied on every call that passes one.
    """

    global _LOGGER
    if _LOGGER is None:
        _LOGGER = logging.getLogger(LOGGER_NAME)
        if not _LOGGER.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(LOG_FORMAT)
            handler.setFormatter(formatter)
            _LOGGER.addHandler(handler)
        _LOGGER.setLevel(logging.INFO)
    if level is not None:
        _LOGGER.setLevel(level.upper() if isinstance(level, str) else level)
    return _LOGGER
