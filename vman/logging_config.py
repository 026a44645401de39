"""
Logging configuration for the POM Version Manager.
"""

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = 'vman'

VERBOSE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
CONSOLE_FORMAT = '%(levelname)s - %(message)s'


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name of console records."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            # Records are shared between handlers; the file handler must see the plain name
            record.levelname = levelname


def _supports_color(stream) -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    return hasattr(stream, 'isatty') and stream.isatty()


def setup_logging(level: str = "INFO", log_file: Optional[str] = None, verbose: bool = False,
                  use_colors: Optional[bool] = None) -> logging.Logger:
    """
    Set up logging for a version manager run.

    Console output goes to stderr so that reports printed on stdout stay clean.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file; it always receives DEBUG output
        verbose: Include timestamps, logger names and source locations on the console
        use_colors: Force colored console output on or off. Auto-detects if None.

    Returns:
        The configured 'vman' logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file else numeric_level)
    logger.handlers.clear()
    logger.propagate = False

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)

    console_format = VERBOSE_FORMAT if verbose else CONSOLE_FORMAT
    if use_colors is None:
        use_colors = _supports_color(sys.stderr)
    if use_colors:
        console_handler.setFormatter(ColoredFormatter(console_format))
    else:
        console_handler.setFormatter(logging.Formatter(console_format))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(VERBOSE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Name of the module/logger

    Returns:
        Logger instance under the 'vman' namespace
    """
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
