# -*- coding: utf-8 -*-
"""
Logging Decorators and Context Managers
=======================================

``log_execution`` / ``log_exceptions`` wrap calculation entry points;
``log_context`` and ``timed_operation`` annotate blocks of work. All of
them emit through the stdlib ``fuzzy_aras`` logger, which the debug logger
intercepts.
"""

from __future__ import annotations

import time
import logging
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, Optional

from .context import LogContext

LOGGER_NAME = 'fuzzy_aras'


# =============================================================================
# Decorators
# =============================================================================

def log_execution(
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
    show_result: bool = False,
) -> Callable:
    """Decorator that logs function entry, exit, and timing."""

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            log = logger or logging.getLogger(LOGGER_NAME)
            func_name = func.__qualname__
            log.log(level, f'Calling {func_name}')

            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                elapsed = time.perf_counter() - start
                log.error(f'{func_name} failed after {elapsed:.3f}s: {exc}')
                raise
            elapsed = time.perf_counter() - start
            if show_result:
                log.log(level, f'{func_name} returned {repr(result)[:100]} ({elapsed:.3f}s)')
            else:
                log.log(level, f'{func_name} completed ({elapsed:.3f}s)')
            return result

        return wrapper
    return decorator


def log_exceptions(
    logger: Optional[logging.Logger] = None,
    level: int = logging.ERROR,
    reraise: bool = True,
) -> Callable:
    """Decorator that logs unhandled exceptions with traceback.

    With ``reraise=False`` the wrapped call returns ``None`` after logging.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            log = logger or logging.getLogger(LOGGER_NAME)
            try:
                return func(*args, **kwargs)
            except Exception as exc:
                log.log(level, f'Exception in {func.__qualname__}: {exc}',
                        exc_info=True)
                if reraise:
                    raise
                return None
        return wrapper
    return decorator


# =============================================================================
# Context Managers
# =============================================================================

@contextmanager
def log_context(**kwargs: Any) -> Generator[None, None, None]:
    """Temporarily inject key/value pairs into the thread-local log context."""
    for key, value in kwargs.items():
        LogContext.set(key, value)
    try:
        yield
    finally:
        for key in kwargs:
            LogContext.remove(key)


@contextmanager
def timed_operation(
    logger: logging.Logger,
    operation: str,
    level: int = logging.INFO,
) -> Generator[None, None, None]:
    """Context manager that logs start / finish with elapsed time."""
    start = time.perf_counter()
    logger.log(level, f'Starting: {operation}')
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logger.log(level, f'Finished: {operation} ({elapsed:.3f}s)')


__all__ = [
    'LOGGER_NAME',
    'log_execution',
    'log_exceptions',
    'log_context',
    'timed_operation',
]
