"""Diagnostic logger gated by the number of -v flags."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "sshhooks"

# -v count -> level.  Quiet by default: ssh output is all the user sees.
_LEVELS = (logging.ERROR, logging.INFO, logging.DEBUG)


def level_for(verbosity: int) -> int:
    try:
        return _LEVELS[verbosity]
    except IndexError:
        return logging.DEBUG  # Maximum verbosity


def make_logger(verbosity: int = 0, stream: Optional[TextIO] = None) -> logging.Logger:
    """Configure and return the sshh logger.

    Lines look like ``sshh: warning: ...`` on stderr.  Calling this again
    replaces the handler instead of stacking a second one.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(_Formatter())
    logger.addHandler(handler)
    logger.setLevel(level_for(verbosity))
    logger.propagate = False
    return logger


class _Formatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return f"sshh: {record.levelname.lower()}: {record.getMessage()}"
