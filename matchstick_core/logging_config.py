"""
Logging configuration for the matchstick_core namespace.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import Optional


def debug_enabled() -> bool:
    return os.getenv('MATCHSTICK_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on')


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> None:
    """
    Configures the 'matchstick_core' logger.

    Args:
        level: Logging level; defaults to DEBUG when MATCHSTICK_DEBUG is set, else INFO.
        log_file: Optional path to also write logs to.
    """
    if level is None:
        level = logging.DEBUG if debug_enabled() else logging.INFO

    logger = logging.getLogger('matchstick_core')
    logger.setLevel(level)

    # Avoid duplicate handlers when called twice (Flask reloader, repeated CLI runs in tests)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug('Logging initialized.')
