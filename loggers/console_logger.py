# -*- coding: utf-8 -*-
"""
Console Logger for the Fuzzy ARAS Pipeline
==========================================

Concise, colour-coded output for interactive runs: phase banners with
timing, one-line steps, compact metric lines and fixed-width tables. The
end-of-run summary prints the utility ranking.
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Optional, Sequence, TextIO

from .context import Colors, LogContext, PhaseMetrics


# Width of the banner / separator lines
_LINE_W = 70


class ConsoleLogger:
    """Structured console logger for pipeline runs."""

    def __init__(self, use_color: Optional[bool] = None,
                 stream: Optional[TextIO] = None):
        self._color = Colors.supports_color() if use_color is None else use_color
        self._stream = stream
        self._phases: List[PhaseMetrics] = []

    @property
    def phases(self) -> List[PhaseMetrics]:
        return list(self._phases)

    # ------------------------------------------------------------------
    # Colour / write helpers
    # ------------------------------------------------------------------

    def _c(self, text: str, *codes: str) -> str:
        if not self._color:
            return text
        return ''.join(codes) + text + Colors.RESET

    def _write(self, msg: str) -> None:
        stream = self._stream or sys.stdout
        stream.write(msg + '\n')
        stream.flush()

    # ------------------------------------------------------------------
    # Banners & separators
    # ------------------------------------------------------------------

    def banner(self, title: str, subtitle: str = '') -> None:
        """Print a prominent banner (e.g. at startup)."""
        self._write('')
        self._write(self._c('=' * _LINE_W, Colors.BOLD, Colors.BLUE))
        self._write(self._c(f'  {title}', Colors.BOLD, Colors.BRIGHT_WHITE))
        if subtitle:
            self._write(self._c(f'  {subtitle}', Colors.DIM))
        self._write(self._c('=' * _LINE_W, Colors.BOLD, Colors.BLUE))

    def separator(self, char: str = '-') -> None:
        self._write(self._c(char * _LINE_W, Colors.DIM))

    # ------------------------------------------------------------------
    # Phase management (context manager)
    # ------------------------------------------------------------------

    @contextmanager
    def phase(self, name: str, number: Optional[int] = None,
              total_phases: int = 3) -> Generator['_PhaseCtx', None, None]:
        """Context manager that prints phase start / end with timing.

        Example::

            with console.phase('Fuzzy ARAS Calculation') as p:
                result = calculator.calculate(...)
                p.metric('Best alternative', result.best_alternative)
        """
        if number is None:
            number = len(self._phases) + 1
        label = f'[{number}/{total_phases}] {name}'
        metrics = PhaseMetrics(name=name, start_time=time.time())
        self._phases.append(metrics)
        LogContext.set('phase', name)

        self._write('')
        self._write(self._c(f'>> {label}', Colors.BOLD, Colors.CYAN))

        try:
            yield _PhaseCtx(self, metrics)
        except Exception as exc:
            metrics.end_time = time.time()
            metrics.status = 'failed'
            self._write(self._c(
                f'   FAIL  {label}  ({metrics.elapsed:.2f}s): {type(exc).__name__}: {exc}',
                Colors.RED, Colors.BOLD,
            ))
            raise
        else:
            metrics.end_time = time.time()
            metrics.status = 'completed'
            self._write(self._c(f'   OK    {label}  ({metrics.elapsed:.2f}s)', Colors.GREEN))
        finally:
            LogContext.remove('phase')

    # ------------------------------------------------------------------
    # Step / metric / table helpers
    # ------------------------------------------------------------------

    def step(self, message: str) -> None:
        """Print a substep inside the current phase."""
        self._write(self._c(f'   . {message}', Colors.WHITE))

    def metric(self, label: str, value: Any, unit: str = '') -> None:
        """Print a key-value metric."""
        val_str = f'{value:.6f}' if isinstance(value, float) else str(value)
        suffix = f' {unit}' if unit else ''
        self._write(self._c(f'     {label}: ', Colors.DIM) + f'{val_str}{suffix}')

    def metrics(self, data: Dict[str, Any]) -> None:
        """Print a set of metrics on a single line, comma-separated."""
        parts = [f'{k}={v:.6f}' if isinstance(v, float) else f'{k}={v}'
                 for k, v in data.items()]
        self._write(self._c('     ', Colors.DIM) + ', '.join(parts))

    def table(self, headers: Sequence[str], rows: Sequence[Sequence[str]],
              col_widths: Optional[Sequence[int]] = None, indent: int = 6) -> None:
        """Print a compact fixed-width table; numeric cells are right-aligned."""
        if col_widths is None:
            col_widths = [
                max([len(h)] + [len(str(r[i])) for r in rows]) + 2
                for i, h in enumerate(headers)
            ]
        pad = ' ' * indent
        self._write(self._c(
            pad + '  '.join(f'{h:^{w}}' for h, w in zip(headers, col_widths)),
            Colors.BOLD))
        self._write(pad + '  '.join('-' * w for w in col_widths))
        for row in rows:
            cells = []
            for c, w in zip(row, col_widths):
                try:
                    float(str(c))
                    cells.append(f'{c:>{w}}')
                except ValueError:
                    cells.append(f'{c:<{w}}')
            self._write(pad + '  '.join(cells))

    # ------------------------------------------------------------------
    # Informational / warning / error
    # ------------------------------------------------------------------

    def info(self, message: str) -> None:
        self._write(self._c(f'  i {message}', Colors.GREEN))

    def success(self, message: str) -> None:
        self._write(self._c(f'  OK {message}', Colors.BRIGHT_GREEN, Colors.BOLD))

    def warning(self, message: str) -> None:
        self._write(self._c(f'  ! {message}', Colors.YELLOW))

    def error(self, message: str) -> None:
        self._write(self._c(f'  X {message}', Colors.RED, Colors.BOLD))

    # ------------------------------------------------------------------
    # Run summary
    # ------------------------------------------------------------------

    def show_run_summary(self, result: Any) -> None:
        """Print the utility ranking of a ``PipelineResult``."""
        aras = result.aras_result
        problem = result.problem

        self._write('')
        self._write(self._c('=' * _LINE_W, Colors.BOLD, Colors.BLUE))
        self._write(self._c('  RESULTS SUMMARY (Fuzzy ARAS)', Colors.BOLD, Colors.BRIGHT_WHITE))
        self._write(self._c('=' * _LINE_W, Colors.BOLD, Colors.BLUE))

        self._write(self._c('\n  PROBLEM', Colors.BOLD))
        self.metric('Alternatives', problem.n_alternatives)
        self.metric('Criteria', f'{problem.n_criteria} '
                    f'({sum(1 for c in problem.criteria if c.is_benefit)} benefit, '
                    f'{sum(1 for c in problem.criteria if not c.is_benefit)} cost)')
        self.metric('Experts', problem.n_experts)

        if aras.is_empty:
            self.warning('No ranking: the problem has an empty dimension')
        else:
            self._write(self._c('\n  RANKING (degree of utility)', Colors.BOLD))
            rows = [
                [str(int(row['Rank'])), str(alt), f"{row['S']:.6f}", f"{row['K']:.6f}"]
                for alt, row in aras.to_frame().sort_values('Rank').iterrows()
            ]
            self.table(['Rank', 'Alternative', 'S', 'K'], rows)
            self.metric('Optimal S0', aras.optimal_value)
            self.metric('Best alternative', aras.best_alternative)

        self._write(self._c(f'\n  RUNTIME : {result.execution_time:.3f}s', Colors.BOLD))
        self._write(self._c('=' * _LINE_W, Colors.BOLD, Colors.BLUE))

    def show_completion(self, output_dir: str = 'result') -> None:
        """Print the final 'analysis complete' box."""
        self._write('')
        self._write(self._c('=' * _LINE_W, Colors.BOLD, Colors.GREEN))
        self._write(self._c('  ANALYSIS COMPLETE', Colors.BOLD, Colors.BRIGHT_GREEN))
        self._write(self._c('=' * _LINE_W, Colors.BOLD, Colors.GREEN))
        self._write(f'  Outputs saved to {output_dir}/:')
        self._write('    results/  ranking and step tables (CSV / JSON)')
        self._write('    logs/     structured debug log (JSON)')
        self._write(self._c('=' * _LINE_W, Colors.BOLD, Colors.GREEN))


# ------------------------------------------------------------------
# Phase context helper returned by ConsoleLogger.phase()
# ------------------------------------------------------------------

class _PhaseCtx:
    """Lightweight proxy for logging detail inside a phase block."""

    def __init__(self, logger: ConsoleLogger, metrics: PhaseMetrics):
        self._logger = logger
        self.metrics = metrics

    def detail(self, message: str) -> None:
        self._logger.step(message)

    def metric(self, label: str, value: Any, unit: str = '') -> None:
        self.metrics.details[label] = value
        self._logger.metric(label, value, unit)

    def metrics_line(self, data: Dict[str, Any]) -> None:
        self.metrics.details.update(data)
        self._logger.metrics(data)

    def warning(self, message: str) -> None:
        self._logger.warning(message)


__all__ = ['ConsoleLogger']
