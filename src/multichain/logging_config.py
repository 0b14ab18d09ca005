"""
Logging configuration for multichain
"""

import logging
import sys


def setup_logging(level: int = logging.INFO, logger_name: str | None = None) -> None:
    """
    Configure console logging with timestamp, module and line number information

    Args:
        level: Logging level (default: INFO)
        logger_name: Logger to configure (default: root logger)
    """
    formatter = logging.Formatter(
        fmt="%(asctime)s - %(levelname)-8s %(name)s %(filename)s:%(lineno)d %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    target = logging.getLogger(logger_name)
    target.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in target.handlers[:]:
        target.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    target.addHandler(console_handler)
