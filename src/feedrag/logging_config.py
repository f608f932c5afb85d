"""Logger setup shared by the CLI and the GUI.

Both front ends log under the ``feedrag`` namespace. The CLI stays quiet
(warnings only) unless ``--verbose`` is given; the GUI reports INFO so
rejected inputs and unavailable break-even figures leave a trace. Setting
``FEEDRAG_LOG_FILE`` mirrors the output into a file.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import log_file_from_env

LOGGER_NAME = "feedrag"
_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(
    verbose: bool = False,
    default_level: int = logging.WARNING,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Configure and return the ``feedrag`` logger.

    ``verbose`` forces DEBUG; otherwise ``default_level`` applies. With no
    explicit ``log_file`` the path from ``FEEDRAG_LOG_FILE`` is used. Calling
    it again replaces the handlers installed by the previous call.
    """

    level = logging.DEBUG if verbose else default_level
    if log_file is None:
        log_file = log_file_from_env()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_FORMAT, datefmt="%H:%M:%S")
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging at %s%s", logging.getLevelName(level), f" to {log_file}" if log_file else "")
    return logger


__all__ = ["LOGGER_NAME", "setup_logging"]
