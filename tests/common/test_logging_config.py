"""
Tests for logging setup
"""

import logging

from multichain.logging_config import setup_logging


def test_setup_logging_replaces_handlers():
    name = "multichain.test"
    setup_logging(logging.DEBUG, name)
    setup_logging(logging.DEBUG, name)

    logger = logging.getLogger(name)
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
