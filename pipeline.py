# -*- coding: utf-8 -*-
"""
Fuzzy ARAS Pipeline Orchestrator
================================

Three-phase pipeline:

  Phase 1  Problem Loading & Validation   (JSON file, object or default)
  Phase 2  Fuzzy ARAS Calculation         (aggregation, normalisation, utility)
  Phase 3  Result Export                  (CSV / JSON)
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from config import Config, get_default_config
from data_loader import DecisionProblem, ProblemLoader
from loggers import log_context, setup_logging
from mcdm.fuzzy import FUZZY_STEPS, FuzzyARAS, FuzzyARASResult
from output import OutputOrchestrator


# =========================================================================
# Result container
# =========================================================================

@dataclass
class PipelineResult:
    """Container for all pipeline results."""
    problem: DecisionProblem
    aras_result: FuzzyARASResult

    # Meta
    execution_time: float = 0.0
    saved_files: List[str] = field(default_factory=list)
    config: Optional[Config] = None

    def get_ranking_df(self) -> pd.DataFrame:
        """Alternatives sorted by rank with S and K."""
        return (self.aras_result.to_frame()
                .sort_values('Rank')
                .reset_index())


# =========================================================================
# Pipeline
# =========================================================================

class FuzzyARASPipeline:
    """
    Fuzzy ARAS ranking of alternatives from experts' linguistic judgments.

    Steps
    -----
    * Linguistic term resolution to triangular fuzzy numbers
    * Expert aggregation into five-component fuzzy numbers
    * Optimal alternative, normalisation, weighting, row sums
    * Defuzzification and degree of utility
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or get_default_config()
        self.config.paths.ensure_directories()

        # Logging (console + debug JSON)
        self.console, self.debug_log = setup_logging(self.config.output_dir)
        self.logger = logging.getLogger('fuzzy_aras')

        self.output_orch = OutputOrchestrator(
            base_output_dir=self.config.output_dir,
            float_format=self.config.output.float_format,
        )

    # -----------------------------------------------------------------
    # Main entry point
    # -----------------------------------------------------------------

    def run(self, problem: Union[DecisionProblem, str, Path, None] = None) -> PipelineResult:
        """Execute the full pipeline and return results.

        *problem* may be a ``DecisionProblem``, a path to a JSON problem
        file, or ``None`` for the configured default problem.
        """
        start_time = time.time()
        saved_files: List[str] = []

        try:
            self.console.banner('Fuzzy ARAS Decision Analysis',
                                subtitle='Additive Ratio Assessment with linguistic judgments')

            # Phase 1: Problem Loading & Validation
            with self.console.phase('Problem Loading & Validation') as ph:
                problem = self._load_problem(problem)
                ph.detail(f'{problem.name}: {problem.n_alternatives} alternatives, '
                          f'{problem.n_criteria} criteria, {problem.n_experts} experts')
                unknown = problem.unknown_codes()
                n_unknown = sum(len(codes) for codes in unknown.values())
                if n_unknown:
                    ph.warning(f'{n_unknown} unknown term code(s) treated as (0, 0, 0)')

            with log_context(problem=problem.name):
                # Phase 2: Fuzzy ARAS Calculation
                with self.console.phase('Fuzzy ARAS Calculation') as ph:
                    aras_result = self._calculate(problem)
                    if aras_result.is_empty:
                        ph.warning('Empty dimension: nothing to rank')
                    else:
                        ph.metric('Optimal S0', aras_result.optimal_value)
                        ph.metric('Best alternative', aras_result.best_alternative)

                execution_time = time.time() - start_time

                # Phase 3: Result Export
                with self.console.phase('Result Export') as ph:
                    if self.config.output.export:
                        summary = self.output_orch.save_all(
                            problem=problem,
                            result=aras_result,
                            execution_time=execution_time,
                            config=self.config,
                            save_step_tables=self.config.output.save_step_tables,
                        )
                        saved_files = summary['saved_files']
                        ph.metric('Files', summary['total'])
                    else:
                        ph.detail('Export disabled')

            self.console.separator()
            self.console.info(f'Pipeline completed in {execution_time:.2f}s')
            self.console.info(f'Outputs -> {self.config.output_dir}')
            self.console.separator()

            return PipelineResult(
                problem=problem,
                aras_result=aras_result,
                execution_time=execution_time,
                saved_files=saved_files,
                config=self.config,
            )
        finally:
            # Debug log is flushed even when a phase raises
            if self.config.output.save_debug_log:
                self.debug_log.close()
            else:
                self.debug_log.detach()

    # -----------------------------------------------------------------
    # Phase 1: Problem Loading
    # -----------------------------------------------------------------

    def _load_problem(self, problem: Union[DecisionProblem, str, Path, None]) -> DecisionProblem:
        if problem is None:
            self.logger.info('No problem file given, using the default problem')
            problem = DecisionProblem.default(self.config.problem)
        elif not isinstance(problem, DecisionProblem):
            problem = ProblemLoader(self.config).load(problem)
        problem.validate(self.config.problem)
        self.logger.info(
            f'Problem {problem.name!r}: {problem.n_alternatives} alternatives, '
            f'{problem.n_criteria} criteria '
            f'({sum(1 for c in problem.criteria if not c.is_benefit)} cost), '
            f'{problem.n_experts} experts'
        )
        return problem

    # -----------------------------------------------------------------
    # Phase 2: Calculation
    # -----------------------------------------------------------------

    def _calculate(self, problem: DecisionProblem) -> FuzzyARASResult:
        calculator = FuzzyARAS(epsilon=self.config.aggregation.geometric_mean_epsilon)
        result = calculator.calculate(
            problem.n_alternatives, problem.n_criteria, problem.n_experts,
            problem.polarities,
            problem.criteria_vocabulary, problem.alternative_vocabulary,
            problem.criteria_judgments, problem.alternative_judgments,
            alternative_labels=problem.alternatives,
            criteria_labels=problem.criteria_labels,
        )

        if not result.is_empty:
            for step in FUZZY_STEPS:
                self.debug_log.log_data(
                    f'step:{step}', result.fuzzy_frame(step).reset_index().to_dict('records'))
            self.debug_log.log_data('step:utility', {
                'defuzzified': result.defuzzified_scalars,
                'utilities': result.utilities,
                'best_alternative_index': result.best_alternative_index,
            })
        return result


# =========================================================================
# Convenience function
# =========================================================================

def run_pipeline(
    problem: Union[DecisionProblem, str, Path, None] = None,
    config: Optional[Config] = None,
) -> PipelineResult:
    """Run the full pipeline. Returns PipelineResult."""
    pipeline = FuzzyARASPipeline(config)
    return pipeline.run(problem)
