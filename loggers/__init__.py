# -*- coding: utf-8 -*-
"""
Fuzzy ARAS Logging Package
==========================

Two-channel logging system:
  * **ConsoleLogger**: concise, colour-coded monitoring output
  * **DebugLogger**: exhaustive structured JSON for post-hoc inspection

Library modules log through ``logging.getLogger('fuzzy_aras')``; the debug
logger intercepts those records.

Usage::

    from loggers import setup_logging
    console, debug = setup_logging('result')
"""

import logging
from typing import Optional, Tuple

from .context import Colors, LogContext, PhaseMetrics
from .console_logger import ConsoleLogger
from .debug_logger import DebugLogger
from .decorators import (
    LOGGER_NAME,
    log_execution,
    log_exceptions,
    log_context,
    timed_operation,
)


def setup_logging(
    output_dir: str = 'result',
    use_color: Optional[bool] = None,
) -> Tuple[ConsoleLogger, DebugLogger]:
    """Create and return both loggers.

    Parameters
    ----------
    output_dir : str
        Root output directory; debug JSON goes to ``<output_dir>/logs/``.
    use_color : bool, optional
        Force colour on/off; auto-detected when ``None``.

    Returns
    -------
    tuple[ConsoleLogger, DebugLogger]
    """
    console = ConsoleLogger(use_color=use_color)
    debug = DebugLogger(output_dir=f'{output_dir}/logs')
    return console, debug


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    return logging.getLogger(name)


def get_module_logger(module_name: str) -> logging.Logger:
    return logging.getLogger(f'{LOGGER_NAME}.{module_name}')


__all__ = [
    # Primary API
    'setup_logging',
    'get_logger',
    'get_module_logger',
    'ConsoleLogger',
    'DebugLogger',

    # Context & metrics
    'Colors',
    'LogContext',
    'PhaseMetrics',

    # Decorators & context managers
    'LOGGER_NAME',
    'log_execution',
    'log_exceptions',
    'log_context',
    'timed_operation',
]
