"""
test_logger.py - Tests for logging setup
"""

import io
import logging

from qlinit.utils.logger import LOGGER_NAME, get_runner_logger


def runner_handlers(logger):
    return [h for h in logger.handlers if getattr(h, "_qlinit_runner", False)]


def test_runner_logger_output():
    stream = io.StringIO()
    logger = get_runner_logger(stream=stream)

    logger.info("Languages from configuration: ['go']")
    logger.debug("hidden")

    assert logger.name == LOGGER_NAME
    assert stream.getvalue() == "INFO: Languages from configuration: ['go']\n"


def test_runner_logger_debug_mode():
    stream = io.StringIO()
    logger = get_runner_logger(debug_mode=True, stream=stream)

    logging.getLogger("qlinit.core.config").debug("Loading config")

    assert logger.level == logging.DEBUG
    assert "DEBUG: Loading config" in stream.getvalue()


def test_runner_logger_single_handler():
    get_runner_logger()
    logger = get_runner_logger(debug_mode=True)

    assert len(runner_handlers(logger)) == 1
