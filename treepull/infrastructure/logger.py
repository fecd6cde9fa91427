"""
Package-wide logger for treepull.

Log records go to stderr; stdout carries only command output.
"""

import logging
import sys


LOGGER_NAME = "treepull"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _build_logger() -> logging.Logger:
    _logger = logging.getLogger(LOGGER_NAME)
    if not _logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        _logger.addHandler(handler)
    _logger.setLevel(logging.INFO)
    _logger.propagate = False
    return _logger


logger = _build_logger()


__all__ = ["logger", "LOGGER_NAME"]
