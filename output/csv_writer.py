# -*- coding: utf-8 -*-
"""
CSV & JSON Data Writer for the Fuzzy ARAS Pipeline
==================================================

All structured numerical output (ranking, intermediate fuzzy step
matrices, full result dump, run summary) is persisted through this single
writer class. Every file lands in ``result/results/``.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
import pandas as pd
from pathlib import Path
from typing import Any, Dict, List
import logging

from mcdm.fuzzy.aras import FUZZY_STEPS, FuzzyARASResult

_logger = logging.getLogger('fuzzy_aras')


class CsvWriter:
    """Write CSV / JSON result files into ``<base_dir>/results/``."""

    def __init__(self, base_output_dir: str = 'result', float_format: str = '%.8f'):
        self.results_dir = Path(base_output_dir) / 'results'
        self.results_dir.mkdir(parents=True, exist_ok=True)
        self.float_format = float_format
        self._saved_files: List[str] = []

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _record(self, path: Path) -> str:
        s = str(path)
        self._saved_files.append(s)
        return s

    def _save_csv(self, df: pd.DataFrame, name: str, **kwargs) -> str:
        path = self.results_dir / name
        df.to_csv(path, float_format=self.float_format, **kwargs)
        return self._record(path)

    def _save_json(self, obj: Any, name: str) -> str:
        path = self.results_dir / name
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(obj, f, indent=2, default=str, ensure_ascii=False)
        return self._record(path)

    def get_saved_files(self) -> List[str]:
        return list(self._saved_files)

    # ==================================================================
    #  1. RANKING
    # ==================================================================

    def save_ranking(self, result: FuzzyARASResult) -> str:
        """Crisp optimality, utility and rank per alternative, best first.

        The optimal alternative is prepended with its own S and K = 1.
        """
        df = result.to_frame()
        # flag by position, labels need not be unique
        df['Best'] = [i == result.best_alternative_index for i in range(len(df))]
        df = df.sort_values('Rank', kind='stable')
        if not result.is_empty:
            optimal = pd.DataFrame(
                {'S': [result.optimal_value],
                 'K': [1.0 if result.optimal_value != 0 else 0.0],
                 'Rank': [0],
                 'Best': [False]},
                index=pd.Index([result.row_labels[0]], name='Alternative'),
            )
            df = pd.concat([optimal, df])
        return self._save_csv(df, 'aras_ranking.csv')

    # ==================================================================
    #  2. INTERMEDIATE STEPS
    # ==================================================================

    def save_aggregated_terms(self, result: FuzzyARASResult) -> str:
        """Experts' raw codes per (alternative, criterion)."""
        df = pd.DataFrame(result.aggregated_terms, index=result.alternatives,
                          columns=result.criteria).rename_axis('Alternative')
        return self._save_csv(df, 'aras_expert_terms.csv')

    def save_step_tables(self, result: FuzzyARASResult) -> Dict[str, str]:
        """One long-format CSV per fuzzy step (``aras_<step>.csv``)."""
        saved = {}
        for step in FUZZY_STEPS:
            saved[step] = self._save_csv(result.fuzzy_frame(step), f'aras_{step}.csv')
        return saved

    def save_result_json(self, result: FuzzyARASResult) -> str:
        """Every step of the run as one JSON document."""
        return self._save_json(result.to_dict(), 'aras_result.json')

    # ==================================================================
    #  3. RUN METADATA
    # ==================================================================

    def save_problem(self, problem_dict: Dict[str, Any]) -> str:
        """Echo of the input problem, re-loadable with ``ProblemLoader``."""
        return self._save_json(problem_dict, 'problem.json')

    def save_execution_summary(self, problem: Any, result: FuzzyARASResult,
                               execution_time: float) -> str:
        summary = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'problem': problem.name,
            'n_alternatives': problem.n_alternatives,
            'n_criteria': problem.n_criteria,
            'n_experts': problem.n_experts,
            'cost_criteria': [c.label for c in problem.criteria if not c.is_benefit],
            'optimal_value': result.optimal_value,
            'best_alternative': result.best_alternative,
            'best_alternative_index': result.best_alternative_index,
            'execution_time_s': round(execution_time, 6),
        }
        return self._save_json(summary, 'execution_summary.json')

    def save_config_snapshot(self, config: Any) -> str:
        return self._save_json(config.to_dict(), 'config_snapshot.json')


__all__ = ['CsvWriter']
