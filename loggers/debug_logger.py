# -*- coding: utf-8 -*-
"""
Structured Debug Logger for the Fuzzy ARAS Pipeline
===================================================

Records every detail of a run into a single JSON array file
(``<output>/logs/debug_<timestamp>.json``): the stdlib ``fuzzy_aras``
records plus structured payloads such as intermediate step matrices.

Each entry carries: timestamp, level, module, function, line, phase,
message and an optional *data* payload.
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .context import Colors, LogContext
from .decorators import LOGGER_NAME


class DebugLogger:
    """Accumulates structured log entries and flushes to a JSON array file."""

    def __init__(self, output_dir: str = 'result/logs'):
        self._dir = Path(output_dir)
        self._dir.mkdir(parents=True, exist_ok=True)
        ts = datetime.now().strftime('%Y%m%d_%H%M%S')
        self._path = self._dir / f'debug_{ts}.json'
        self._entries: List[Dict[str, Any]] = []

        # Capture records emitted through ``logging.getLogger('fuzzy_aras')``
        self._stdlib_logger = logging.getLogger(LOGGER_NAME)
        self._stdlib_logger.setLevel(logging.DEBUG)
        self._handler = _InterceptHandler(self)
        self._stdlib_logger.addHandler(self._handler)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def debug(self, message: str, *, data: Any = None) -> None:
        self._add('DEBUG', message, data=data)

    def info(self, message: str, *, data: Any = None) -> None:
        self._add('INFO', message, data=data)

    def warning(self, message: str, *, data: Any = None) -> None:
        self._add('WARNING', message, data=data)

    def error(self, message: str, *, data: Any = None) -> None:
        self._add('ERROR', message, data=data)

    def exception(self, message: str, exc: Optional[BaseException] = None) -> None:
        tb = traceback.format_exc() if exc is None else traceback.format_exception(
            type(exc), exc, exc.__traceback__)
        self._add('ERROR', message, data={'traceback': tb})

    def log_data(self, label: str, payload: Any) -> None:
        """Store an arbitrary structured payload (step matrices, dicts, ...)."""
        self._add('DATA', label, data=payload)

    # ------------------------------------------------------------------
    # Flush / close
    # ------------------------------------------------------------------

    def flush(self) -> str:
        """Write accumulated entries to disk and return the file path."""
        with open(self._path, 'w', encoding='utf-8') as fh:
            json.dump(self._entries, fh, indent=2, default=_json_default,
                      ensure_ascii=False)
        return str(self._path)

    def close(self) -> str:
        """Flush and detach the stdlib intercept handler."""
        path = self.flush()
        self.detach()
        return path

    def detach(self) -> None:
        """Stop capturing ``fuzzy_aras`` records without writing a file."""
        self._stdlib_logger.removeHandler(self._handler)

    @property
    def path(self) -> str:
        return str(self._path)

    @property
    def entries(self) -> List[Dict[str, Any]]:
        return list(self._entries)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _add(self, level: str, message: str, *, data: Any = None,
             module: str = '', function: str = '', line: int = 0) -> None:
        ctx = LogContext.get()
        entry: Dict[str, Any] = {
            'timestamp': datetime.now().isoformat(),
            'level': level,
            'module': module,
            'function': function,
            'line': line,
            'phase': ctx.get('phase', ''),
            'problem': ctx.get('problem', ''),
            'message': Colors.strip(str(message)),
        }
        if data is not None:
            entry['data'] = data
        self._entries.append(entry)


# ------------------------------------------------------------------
# Stdlib-compatible intercept handler
# ------------------------------------------------------------------

class _InterceptHandler(logging.Handler):
    """Bridges stdlib ``logging`` records into :class:`DebugLogger`."""

    def __init__(self, debug_logger: DebugLogger):
        super().__init__(level=logging.DEBUG)
        self._dl = debug_logger

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._dl._add(
                level=record.levelname,
                message=record.getMessage(),
                module=record.module,
                function=record.funcName,
                line=record.lineno,
            )
        except Exception:
            self.handleError(record)


# ------------------------------------------------------------------
# JSON serialisation helper
# ------------------------------------------------------------------

def _json_default(obj: Any) -> Any:
    """Fallback serialiser for numpy / pandas objects."""
    import numpy as np
    import pandas as pd
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, pd.DataFrame):
        return obj.reset_index().to_dict(orient='records')
    if isinstance(obj, pd.Series):
        return obj.to_dict()
    return str(obj)


__all__ = ['DebugLogger']
