"""Logging configuration for the proxy."""

import logging
import sys
from typing import Union


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Set up the proxy logger with a stdout handler and a timestamped format."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("anthroq")
    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Propagate to the root logger so pytest's caplog sees records
    logger.propagate = True

    return logger
