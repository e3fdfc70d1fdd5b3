"""Logging configuration for textalgos.

Library modules only log to children of the ``textalgos`` logger
(``textalgos.dates``, ``textalgos.distance``); handlers are attached here.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import Config
from .paths import log_dir as default_log_dir

LOG_FILENAME = "textalgos.log"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class SafeRotatingFileHandler(RotatingFileHandler):
    """Rotating handler that keeps logging when the file cannot be rotated.

    On Windows another process holding the log open makes rollover fail with
    PermissionError; in that case the current file keeps growing.
    """

    def doRollover(self) -> None:
        try:
            super().doRollover()
        except OSError:
            if self.stream is None:
                self.stream = self._open()


def setup_logging(
    config: Config | None = None,
    log_dir: Path | None = None,
) -> logging.Logger:
    """Attach console and rotating-file handlers to the ``textalgos`` logger.

    The level comes from ``config.log_level`` (INFO without a config); the
    file lands in ``log_dir`` or paths.log_dir(). Calling it again replaces
    the previous handlers.
    """
    level = config.level_number() if config is not None else logging.INFO
    target_dir = log_dir or default_log_dir()
    target_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("textalgos")
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers: list[logging.Handler] = [
        logging.StreamHandler(),
        SafeRotatingFileHandler(
            target_dir / LOG_FILENAME,
            maxBytes=1_000_000,
            backupCount=3,
            encoding="utf-8",
        ),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to %s at %s", target_dir / LOG_FILENAME, logging.getLevelName(level))
    return logger
