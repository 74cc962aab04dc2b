#!/usr/bin/env python3
"""
Logging for the sprite codec
Every module logs under the 'sprite_codec' logger; the CLI attaches the handlers
"""

import logging
import os
import sys
from typing import List, Optional, Union

from .constants import ENV_DEBUG

LOGGER_NAME = 'sprite_codec'
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_DATE_FORMAT = '%H:%M:%S'


def debug_enabled() -> bool:
    """True when SPRITE_CODEC_DEBUG asks for debug output."""
    return os.environ.get(ENV_DEBUG, '').lower() in ('1', 'true', 'yes')


def resolve_level(level: Union[str, int]) -> int:
    """
    Turn a level name or number into a logging level.

    The debug environment switch wins over whatever was asked for.

    Raises:
        ValueError: For names outside LOG_LEVELS
    """
    if debug_enabled():
        return logging.DEBUG
    if isinstance(level, int):
        return level
    name = level.upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level}")
    return getattr(logging, name)


def _handlers(level: int, log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level: Union[str, int] = "INFO",
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach stderr (and optionally file) output to the package logger.

    Calling it again replaces and closes the handlers of the previous call,
    so repeated CLI runs in one process don't duplicate output.

    Args:
        level: Level name from LOG_LEVELS or a logging constant
        log_file: Also append records to this file

    Returns:
        The package logger
    """
    numeric_level = resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    try:
        handlers = _handlers(numeric_level, log_file)
    except OSError as e:
        handlers = _handlers(numeric_level, None)
        logger.addHandler(handlers[0])
        logger.warning(f"Could not open log file {log_file}: {e}")
    else:
        for handler in handlers:
            logger.addHandler(handler)

    # Records stop here instead of reaching the root logger
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Logger for one module, e.g. get_logger('tile_encoder').

    Names already under the package logger are used as given.
    """
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{LOGGER_NAME}.{name}')
