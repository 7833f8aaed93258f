# -*- coding: utf-8 -*-
"""Decision problem definition, resizing and JSON loading.

This module is the data layer in front of the Fuzzy ARAS engine:

1. ``DecisionProblem`` holds everything one calculation needs: labels,
   criterion polarities, the two linguistic vocabularies and the experts'
   judgment matrices (``[expert][criterion]`` and
   ``[expert][alternative][criterion]``).
2. Changing a dimension reallocates every affected matrix and copies the
   overlapping cells; new cells get the default term codes (``"M"`` for
   criteria, ``"G"`` for alternatives) and new labels ``"<prefix> <n>"``.
3. ``validate()`` surfaces configuration errors (bad vocabularies, counts
   outside ``[1, 20]``, ragged matrices) before the engine runs. The
   engine itself only checks matrix shapes.
4. ``ProblemLoader`` reads problem files in JSON.

Notes
-----
Every edit returns a new ``DecisionProblem``; no operation modifies a
problem or its matrices in place.

JSON layout (all keys but ``alternatives`` / ``criteria`` optional)::

    {
      "name": "supplier selection",
      "alternatives": ["S1", "S2"],            # or a count
      "criteria": [{"label": "Price", "type": "cost"}, "Quality"],
      "experts": ["E1", "E2"],                 # or a count
      "criteria_terms": [{"code": "L", "label": "Low", "value": [0, 0.1, 0.3]}, ...],
      "alternative_terms": [...],
      "criteria_judgments": [["H", "M"], ["VH", "M"]],
      "alternative_judgments": [[["G", "F"], ["F", "VG"]], ...]
    }
"""

import copy
import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set, TypeVar, Union

from config import Config, ProblemConfig, get_config
from loggers.decorators import log_exceptions
from mcdm.fuzzy import (
    CriterionSpec,
    CriterionType,
    FuzzyARASResult,
    LinguisticTermVocabulary,
    compute,
    default_alternative_vocabulary,
    default_criteria_vocabulary,
)
from mcdm.fuzzy.aggregation import collect_expert_terms

logger = logging.getLogger('fuzzy_aras')

T = TypeVar('T')


class ProblemDefinitionError(ValueError):
    """Raised when a decision problem is unusable for a calculation."""

    def __init__(self, problems: Sequence[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


# =========================================================================
# Reallocate-and-copy helpers
# =========================================================================

def create_2d(rows: int, cols: int, fill: T) -> List[List[T]]:
    return [[fill] * cols for _ in range(rows)]


def create_3d(d1: int, d2: int, d3: int, fill: T) -> List[List[List[T]]]:
    return [create_2d(d2, d3, fill) for _ in range(d1)]


def resize_labels(prev: Sequence[str], new_count: int, prefix: str) -> List[str]:
    """Keep existing labels, pad with ``"<prefix> <n>"`` (1-based)."""
    return [prev[i] if i < len(prev) else f"{prefix} {i + 1}" for i in range(new_count)]


def resize_2d(prev: Sequence[Sequence[T]], rows: int, cols: int, fill: T) -> List[List[T]]:
    """New ``rows × cols`` matrix with the overlapping cells of *prev*."""
    resized = create_2d(rows, cols, fill)
    for r in range(min(rows, len(prev))):
        for c in range(min(cols, len(prev[r]))):
            resized[r][c] = prev[r][c]
    return resized


def resize_3d(prev: Sequence[Sequence[Sequence[T]]], d1: int, d2: int, d3: int,
              fill: T) -> List[List[List[T]]]:
    """New ``d1 × d2 × d3`` cube with the overlapping cells of *prev*."""
    resized = create_3d(d1, d2, d3, fill)
    for i in range(min(d1, len(prev))):
        for j in range(min(d2, len(prev[i]))):
            for k in range(min(d3, len(prev[i][j]))):
                resized[i][j][k] = prev[i][j][k]
    return resized


# =========================================================================
# Decision problem
# =========================================================================

@dataclass
class DecisionProblem:
    """Complete input of one Fuzzy ARAS calculation."""
    alternatives: List[str]
    criteria: List[CriterionSpec]
    experts: List[str]
    criteria_judgments: List[List[str]]                 # [expert][criterion]
    alternative_judgments: List[List[List[str]]]        # [expert][alternative][criterion]
    criteria_vocabulary: LinguisticTermVocabulary = field(
        default_factory=default_criteria_vocabulary)
    alternative_vocabulary: LinguisticTermVocabulary = field(
        default_factory=default_alternative_vocabulary)
    name: str = "problem"

    # ------------------------------------------------------------------
    # Dimensions
    # ------------------------------------------------------------------

    @property
    def n_alternatives(self) -> int:
        return len(self.alternatives)

    @property
    def n_criteria(self) -> int:
        return len(self.criteria)

    @property
    def n_experts(self) -> int:
        return len(self.experts)

    @property
    def criteria_labels(self) -> List[str]:
        return [c.label for c in self.criteria]

    @property
    def polarities(self) -> List[CriterionType]:
        return [c.polarity for c in self.criteria]

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def blank(cls, n_alternatives: int, n_criteria: int, n_experts: int,
              config: Optional[ProblemConfig] = None, **kwargs) -> 'DecisionProblem':
        """Problem of the given size filled with the default term codes."""
        cfg = config or get_config().problem
        return cls(
            alternatives=resize_labels([], n_alternatives, cfg.alternative_prefix),
            criteria=[CriterionSpec(label)
                      for label in resize_labels([], n_criteria, cfg.criterion_prefix)],
            experts=resize_labels([], n_experts, cfg.expert_prefix),
            criteria_judgments=create_2d(n_experts, n_criteria, cfg.default_criteria_term),
            alternative_judgments=create_3d(n_experts, n_alternatives, n_criteria,
                                            cfg.default_alternative_term),
            **kwargs,
        )

    @classmethod
    def default(cls, config: Optional[ProblemConfig] = None) -> 'DecisionProblem':
        """Problem with the configured default dimensions."""
        cfg = config or get_config().problem
        return cls.blank(cfg.n_alternatives, cfg.n_criteria, cfg.n_experts, cfg,
                         name="default")

    # ------------------------------------------------------------------
    # Edits (each returns a new problem)
    # ------------------------------------------------------------------

    def resize(self, n_alternatives: Optional[int] = None,
               n_criteria: Optional[int] = None,
               n_experts: Optional[int] = None,
               config: Optional[ProblemConfig] = None) -> 'DecisionProblem':
        """
        Change dimensions, preserving overlapping cells and labels.

        Raises
        ------
        ProblemDefinitionError
            If a requested count is outside the configured bounds.
        """
        cfg = config or get_config().problem
        n_alt = self.n_alternatives if n_alternatives is None else n_alternatives
        n_crit = self.n_criteria if n_criteria is None else n_criteria
        n_exp = self.n_experts if n_experts is None else n_experts

        problems = []
        for label, value in (('alternatives', n_alt), ('criteria', n_crit), ('experts', n_exp)):
            try:
                cfg.check_count(f"number of {label}", value)
            except ValueError as exc:
                problems.append(str(exc))
        if problems:
            raise ProblemDefinitionError(problems)

        criteria = [self.criteria[j] if j < self.n_criteria else CriterionSpec(label)
                    for j, label in enumerate(
                        resize_labels(self.criteria_labels, n_crit, cfg.criterion_prefix))]
        return replace(
            self,
            alternatives=resize_labels(self.alternatives, n_alt, cfg.alternative_prefix),
            criteria=criteria,
            experts=resize_labels(self.experts, n_exp, cfg.expert_prefix),
            criteria_judgments=resize_2d(self.criteria_judgments, n_exp, n_crit,
                                         cfg.default_criteria_term),
            alternative_judgments=resize_3d(self.alternative_judgments, n_exp, n_alt, n_crit,
                                            cfg.default_alternative_term),
        )

    def reset_judgments(self, config: Optional[ProblemConfig] = None) -> 'DecisionProblem':
        """Same dimensions and vocabularies, default labels and term codes."""
        cfg = config or get_config().problem
        fresh = DecisionProblem.blank(self.n_alternatives, self.n_criteria, self.n_experts, cfg)
        criteria = [CriterionSpec(spec.label, c.polarity)
                    for spec, c in zip(fresh.criteria, self.criteria)]
        return replace(fresh, criteria=criteria,
                       criteria_vocabulary=self.criteria_vocabulary,
                       alternative_vocabulary=self.alternative_vocabulary,
                       name=self.name)

    def with_vocabularies(self,
                          criteria_vocabulary: Optional[LinguisticTermVocabulary] = None,
                          alternative_vocabulary: Optional[LinguisticTermVocabulary] = None,
                          ) -> 'DecisionProblem':
        return replace(
            self,
            criteria_vocabulary=(self.criteria_vocabulary if criteria_vocabulary is None
                                 else criteria_vocabulary),
            alternative_vocabulary=(self.alternative_vocabulary if alternative_vocabulary is None
                                    else alternative_vocabulary),
        )

    def with_polarity(self, criterion: int,
                      polarity: Union[CriterionType, str]) -> 'DecisionProblem':
        criteria = list(self.criteria)
        criteria[criterion] = CriterionSpec(criteria[criterion].label, polarity)
        return replace(self, criteria=criteria)

    def with_criteria_judgment(self, expert: int, criterion: int, code: str) -> 'DecisionProblem':
        judgments = copy.deepcopy(self.criteria_judgments)
        judgments[expert][criterion] = code
        return replace(self, criteria_judgments=judgments)

    def with_alternative_judgment(self, expert: int, alternative: int, criterion: int,
                                  code: str) -> 'DecisionProblem':
        judgments = copy.deepcopy(self.alternative_judgments)
        judgments[expert][alternative][criterion] = code
        return replace(self, alternative_judgments=judgments)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def aggregated_terms(self) -> List[List[str]]:
        """Experts' codes per (alternative, criterion), e.g. ``"[G, F]"``."""
        return collect_expert_terms(self.alternative_judgments)

    def unknown_codes(self) -> Dict[str, Set[str]]:
        """Codes used in the judgments but missing from their vocabulary."""
        used_criteria = {code for row in self.criteria_judgments for code in row}
        used_alternatives = {code for matrix in self.alternative_judgments
                             for row in matrix for code in row}
        return {
            'criteria': used_criteria - set(self.criteria_vocabulary.codes),
            'alternatives': used_alternatives - set(self.alternative_vocabulary.codes),
        }

    def problems(self, config: Optional[ProblemConfig] = None) -> List[str]:
        """Every configuration error of this problem (empty when valid)."""
        cfg = config or get_config().problem
        found: List[str] = []

        for label, value in (('alternatives', self.n_alternatives),
                             ('criteria', self.n_criteria),
                             ('experts', self.n_experts)):
            try:
                cfg.check_count(f"number of {label}", value)
            except ValueError as exc:
                found.append(str(exc))

        if len(self.criteria_judgments) != self.n_experts or any(
                len(row) != self.n_criteria for row in self.criteria_judgments):
            found.append(f"criteria judgments must be {self.n_experts} x {self.n_criteria}")
        if len(self.alternative_judgments) != self.n_experts or any(
                len(matrix) != self.n_alternatives
                or any(len(row) != self.n_criteria for row in matrix)
                for matrix in self.alternative_judgments):
            found.append(f"alternative judgments must be {self.n_experts} x "
                         f"{self.n_alternatives} x {self.n_criteria}")

        found.extend(f"criteria vocabulary: {p}" for p in self.criteria_vocabulary.problems())
        found.extend(f"alternative vocabulary: {p}"
                     for p in self.alternative_vocabulary.problems())
        return found

    def validate(self, config: Optional[ProblemConfig] = None) -> 'DecisionProblem':
        """Raise :class:`ProblemDefinitionError` if unusable; return ``self``."""
        found = self.problems(config)
        if found:
            raise ProblemDefinitionError(found)
        for kind, codes in self.unknown_codes().items():
            if codes:
                logger.warning(f"Unknown {kind} term codes resolve to (0, 0, 0): "
                               f"{', '.join(sorted(codes))}")
        return self

    # ------------------------------------------------------------------
    # Calculation
    # ------------------------------------------------------------------

    def solve(self, epsilon: Optional[float] = None) -> FuzzyARASResult:
        """Run Fuzzy ARAS on this problem (no validation)."""
        eps = get_config().aggregation.geometric_mean_epsilon if epsilon is None else epsilon
        return compute(
            self.n_alternatives, self.n_criteria, self.n_experts,
            self.polarities,
            self.criteria_vocabulary, self.alternative_vocabulary,
            self.criteria_judgments, self.alternative_judgments,
            alternative_labels=self.alternatives,
            criteria_labels=self.criteria_labels,
            epsilon=eps,
        )


# =========================================================================
# JSON (de)serialisation
# =========================================================================

def problem_to_dict(problem: DecisionProblem) -> Dict[str, Any]:
    return {
        'name': problem.name,
        'alternatives': list(problem.alternatives),
        'criteria': [{'label': c.label, 'type': c.polarity.value} for c in problem.criteria],
        'experts': list(problem.experts),
        'criteria_terms': problem.criteria_vocabulary.to_list(),
        'alternative_terms': problem.alternative_vocabulary.to_list(),
        'criteria_judgments': copy.deepcopy(problem.criteria_judgments),
        'alternative_judgments': copy.deepcopy(problem.alternative_judgments),
    }


class ProblemLoader:
    """
    Build :class:`DecisionProblem` objects from JSON files or dicts.

    Missing judgment cells are padded with the configured default codes and
    missing vocabularies fall back to the built-in seven-term scales. The
    loaded problem is validated before it is returned.
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or get_config()

    @log_exceptions()
    def load(self, path: Union[str, Path]) -> DecisionProblem:
        path = Path(path)
        logger.info(f'Loading decision problem from {path}')
        try:
            with open(path, 'r', encoding='utf-8') as fh:
                data = json.load(fh)
        except json.JSONDecodeError as exc:
            raise ProblemDefinitionError([f"{path}: invalid JSON ({exc})"]) from exc
        problem = self.from_dict(data)
        if problem.name == 'problem':
            problem = replace(problem, name=path.stem)
        return problem

    def save(self, problem: DecisionProblem, path: Union[str, Path]) -> str:
        with open(path, 'w', encoding='utf-8') as fh:
            json.dump(problem_to_dict(problem), fh, indent=2, ensure_ascii=False)
        return str(path)

    def from_dict(self, data: Dict[str, Any]) -> DecisionProblem:
        cfg = self.config.problem
        if not isinstance(data, dict):
            raise ProblemDefinitionError(["problem definition must be a JSON object"])
        missing = [key for key in ('alternatives', 'criteria') if key not in data]
        if missing:
            raise ProblemDefinitionError([f"missing key: {key}" for key in missing])

        try:
            alternatives = self._labels(data['alternatives'], cfg.alternative_prefix)
            criteria = self._criteria(data['criteria'], cfg.criterion_prefix)
            n_experts_hint = len(data.get('criteria_judgments') or []) or cfg.n_experts
            experts = self._labels(data.get('experts', n_experts_hint), cfg.expert_prefix)
            criteria_vocabulary = (
                LinguisticTermVocabulary.from_list(data['criteria_terms'])
                if 'criteria_terms' in data else default_criteria_vocabulary())
            alternative_vocabulary = (
                LinguisticTermVocabulary.from_list(data['alternative_terms'])
                if 'alternative_terms' in data else default_alternative_vocabulary())
        except (KeyError, TypeError, ValueError) as exc:
            raise ProblemDefinitionError([f"malformed problem definition: {exc}"]) from exc

        criteria_codes = self._codes(data.get('criteria_judgments', []), 2,
                                     'criteria_judgments')
        alternative_codes = self._codes(data.get('alternative_judgments', []), 3,
                                        'alternative_judgments')

        n_alt, n_crit, n_exp = len(alternatives), len(criteria), len(experts)
        problem = DecisionProblem(
            alternatives=alternatives,
            criteria=criteria,
            experts=experts,
            criteria_judgments=resize_2d(criteria_codes, n_exp, n_crit,
                                         cfg.default_criteria_term),
            alternative_judgments=resize_3d(alternative_codes, n_exp, n_alt, n_crit,
                                            cfg.default_alternative_term),
            criteria_vocabulary=criteria_vocabulary,
            alternative_vocabulary=alternative_vocabulary,
            name=str(data.get('name', 'problem')),
        )
        return problem.validate(cfg)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _labels(value: Any, prefix: str) -> List[str]:
        if isinstance(value, int):
            return resize_labels([], value, prefix)
        return [str(v) for v in value]

    @staticmethod
    def _criteria(value: Any, prefix: str) -> List[CriterionSpec]:
        if isinstance(value, int):
            return [CriterionSpec(label) for label in resize_labels([], value, prefix)]
        criteria = []
        for j, item in enumerate(value):
            if isinstance(item, dict):
                criteria.append(CriterionSpec(
                    str(item.get('label', f"{prefix} {j + 1}")),
                    item.get('type', CriterionType.BENEFIT),
                ))
            else:
                criteria.append(CriterionSpec(str(item)))
        return criteria

    @classmethod
    def _codes(cls, value: Any, depth: int, key: str) -> Any:
        """*depth* levels of nested lists of codes, whitespace stripped."""
        if depth == 0:
            if not isinstance(value, str):
                raise ProblemDefinitionError(
                    [f"{key}: term codes must be strings, got {value!r}"])
            return value.strip()
        if not isinstance(value, list):
            raise ProblemDefinitionError([f"{key}: expected a list, got {value!r}"])
        return [cls._codes(item, depth - 1, key) for item in value]


def load_problem(path: Union[str, Path], config: Optional[Config] = None) -> DecisionProblem:
    """Shortcut for ``ProblemLoader(config).load(path)``."""
    return ProblemLoader(config).load(path)
