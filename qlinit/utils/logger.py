"""
logger.py - Logging setup for qlinit

Library code logs through module loggers under the "qlinit" namespace.
The command line attaches a single stderr handler to that namespace.
"""

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "qlinit"
LOG_FORMAT = "%(levelname)s: %(message)s"


def get_runner_logger(debug_mode: bool = False, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Get the qlinit logger, configured for console output

    Calling this more than once replaces the handler added by the previous
    call, so there is only ever one.

    Args:
        debug_mode: Emit debug messages as well as info and above
        stream: Stream to write to, stderr by default

    Returns:
        The configured logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    for old_handler in [h for h in logger.handlers if getattr(h, "_qlinit_runner", False)]:
        logger.removeHandler(old_handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(handler, "_qlinit_runner", True)
    logger.addHandler(handler)

    return logger
