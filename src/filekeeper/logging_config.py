from __future__ import annotations

import logging
import os
from typing import Optional, TextIO

ENV_LOG_LEVEL = "FILEKEEPER_LOG_LEVEL"

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"

LOGGER_NAME = "filekeeper"


def resolve_log_level(default_level: int = logging.INFO) -> int:
    """Level named by FILEKEEPER_LOG_LEVEL, or ``default_level`` if unset or unknown."""
    level_name = os.getenv(ENV_LOG_LEVEL)
    if not level_name:
        return default_level
    level = logging.getLevelName(level_name.strip().upper())
    return level if isinstance(level, int) else default_level


def configure_logging(
    default_level: int = logging.INFO,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Send filekeeper's log records (save/load failures, history updates) to ``stream``.

    Only the ``filekeeper`` logger is touched; the root logger and the host
    application's handlers are left alone. Calling it again replaces the
    handler installed by the previous call instead of stacking another one.
    Defaults to stderr. The library itself never calls this.
    """
    level = resolve_log_level(default_level)
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_filekeeper_handler", False):
            logger.removeHandler(handler)
            handler.close()

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._filekeeper_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
