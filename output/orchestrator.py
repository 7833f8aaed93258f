# -*- coding: utf-8 -*-
"""
Output Orchestrator
===================

Central hub coordinating the output writers: one ``save_all()`` call
persists the ranking, the intermediate step tables and the run metadata.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from loggers import timed_operation
from mcdm.fuzzy.aras import FuzzyARASResult

from .csv_writer import CsvWriter

logger = logging.getLogger('fuzzy_aras')


class OutputOrchestrator:
    """Coordinate saving all results in one call."""

    def __init__(self, base_output_dir: str = 'result', float_format: str = '%.8f'):
        self.base_dir = base_output_dir
        self.csv = CsvWriter(base_output_dir, float_format=float_format)

    def save_all(
        self,
        problem: Any,
        result: FuzzyARASResult,
        execution_time: float,
        config: Optional[Any] = None,
        save_step_tables: bool = True,
    ) -> Dict[str, Any]:
        """Persist every artefact and return a summary dict."""
        from data_loader import problem_to_dict

        with timed_operation(logger, 'result export', level=logging.DEBUG):
            # 1. Ranking
            self.csv.save_ranking(result)
            logger.info('Saved: aras_ranking.csv')

            # 2. Intermediate steps
            if save_step_tables and not result.is_empty:
                self.csv.save_aggregated_terms(result)
                saved_steps = self.csv.save_step_tables(result)
                logger.info(f'Saved: aras_<step>.csv ({len(saved_steps)} files)')
            self.csv.save_result_json(result)
            logger.info('Saved: aras_result.json')

            # 3. Input echo and run metadata
            self.csv.save_problem(problem_to_dict(problem))
            self.csv.save_execution_summary(problem, result, execution_time)
            logger.info('Saved: problem.json, execution_summary.json')

            if config is not None:
                self.csv.save_config_snapshot(config)
                logger.info('Saved: config_snapshot.json')

        total = len(self.csv.get_saved_files())
        logger.info(f'Total output files: {total}')
        logger.info(f'All results saved to {self.base_dir}')

        return {
            'saved_files': self.csv.get_saved_files(),
            'total': total,
        }

    def get_saved_files(self) -> List[str]:
        return [f for f in self.csv.get_saved_files() if Path(f).exists()]


__all__ = ['OutputOrchestrator']
