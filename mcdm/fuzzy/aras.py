# -*- coding: utf-8 -*-
"""
Fuzzy ARAS Method
=================

Fuzzy Additive Ratio ASsessment with linguistic group judgments.

Mathematical Foundation:
    1. Resolve the experts' linguistic codes to TFNs
    2. Aggregate experts per cell into five-component numbers
       x̃_ij = (l, l', m, u', u); criteria weights w̃_j likewise
    3. Optimal alternative x̃_0j = max_i x̃_ij (benefit) or min_i x̃_ij (cost),
       componentwise
    4. Normalize the matrix [x̃_0; x̃_1 … x̃_n]:
       - benefit: r̃_ij = x̃_ij / Σ_i u_ij
       - cost:    r̃_ij = (1/u, 1/u', 1/m, 1/l', 1/l)_ij / Σ_i (1/l_ij)
    5. Weight: d̃_ij = r̃_ij ⊗ w̃_j (componentwise)
    6. Optimality function S̃_i = Σ_j d̃_ij, crisp S_i = mean of components
    7. Degree of utility K_i = S_i / S_0; best alternative = max K_i

Degenerate arithmetic never raises: a zero normalization denominator
yields an all-zero column and a zero optimal score yields zero utilities.

Reference:
    Turskis, Z., & Zavadskas, E.K. (2010). A new fuzzy additive ratio
    assessment method (ARAS-F). Transport, 25(4), 423-432.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from loggers.decorators import log_execution

from .base import (
    FUZZY5_COMPONENTS,
    CriterionType,
    FiveComponentFuzzyNumber,
    TriangularFuzzyNumber,
    tfn_array,
    to_fuzzy5_grid,
)
from .aggregation import (
    GEOMETRIC_MEAN_EPSILON,
    aggregate_experts,
    collect_expert_terms,
    resolve_judgments,
)
from .vocabulary import LinguisticTermVocabulary

logger = logging.getLogger('fuzzy_aras')

OPTIMAL_LABEL = 'A0 (optimal)'

PolarityLike = Union[CriterionType, str]


# =========================================================================
# Pipeline stages (array in, array out; last axis = (l, l', m, u', u))
# =========================================================================

def select_optimal_row(aggregates: np.ndarray,
                       polarities: Sequence[PolarityLike]) -> np.ndarray:
    """
    Synthetic optimal alternative, one five-component number per criterion.

    Each component is reduced independently over the alternatives axis:
    max for benefit criteria, min for cost criteria.

    Parameters
    ----------
    aggregates : np.ndarray
        Shape ``(n_alternatives, n_criteria, 5)``.
    polarities : sequence
        One :class:`CriterionType` (or ``'benefit'``/``'cost'``) per criterion.
    """
    agg = np.asarray(aggregates, dtype=float)
    optimal = np.empty(agg.shape[1:], dtype=float)
    for j, polarity in enumerate(polarities):
        if CriterionType.coerce(polarity) is CriterionType.BENEFIT:
            optimal[j] = agg[:, j, :].max(axis=0)
        else:
            optimal[j] = agg[:, j, :].min(axis=0)
    return optimal


def normalize_matrix(combined: np.ndarray,
                     polarities: Sequence[PolarityLike]) -> np.ndarray:
    """
    Normalize the combined ``(1 + n_alternatives, n_criteria, 5)`` matrix.

    Benefit columns are divided by ``c_plus = Σ_i u_ij``. Cost columns are
    first inverted by reciprocal-and-reverse, ``(1/u, 1/u', 1/m, 1/l', 1/l)``,
    then divided by ``a_minus = Σ_i 1/l_ij``. A zero or non-finite
    denominator leaves the whole column at zero; other non-finite cells
    become zero.
    """
    combined = np.asarray(combined, dtype=float)
    normalized = np.zeros_like(combined)

    for j, polarity in enumerate(polarities):
        column = combined[:, j, :]

        if CriterionType.coerce(polarity) is CriterionType.BENEFIT:
            c_plus = column[:, 4].sum()
            if c_plus == 0 or not np.isfinite(c_plus):
                logger.warning(f'Benefit criterion {j}: sum of upper bounds is {c_plus}, '
                               f'column normalized to zero')
                continue
            cells = column / c_plus
            normalized[:, j, :] = np.where(np.isfinite(cells), cells, 0.0)
            continue

        with np.errstate(divide='ignore', invalid='ignore'):
            inverted = 1.0 / column[:, ::-1]
            a_minus = (1.0 / column[:, 0]).sum()
            if a_minus == 0 or not np.isfinite(a_minus):
                logger.warning(f'Cost criterion {j}: reciprocal sum of lower bounds '
                               f'is {a_minus}, column normalized to zero')
                continue
            cells = inverted / a_minus
        # zero inner components are only possible for hand-built inputs
        normalized[:, j, :] = np.where(np.isfinite(cells), cells, 0.0)

    return normalized


def apply_weights(normalized: np.ndarray, weights: np.ndarray) -> np.ndarray:
    """Componentwise ``normalized[i, j] * weights[j]``; non-finite products become 0."""
    with np.errstate(invalid='ignore', over='ignore'):
        weighted = np.asarray(normalized, dtype=float) * np.asarray(weights, dtype=float)[np.newaxis]
    return np.where(np.isfinite(weighted), weighted, 0.0)


def sum_rows(weighted: np.ndarray) -> np.ndarray:
    """Optimality function: componentwise sum over criteria, shape ``(rows, 5)``."""
    return np.asarray(weighted, dtype=float).sum(axis=1)


def defuzzify(sums: np.ndarray) -> np.ndarray:
    """Mean of the five components of each row."""
    return np.asarray(sums, dtype=float).sum(axis=-1) / 5


def degree_of_utility(scalars: Sequence[float]) -> Tuple[List[float], int]:
    """
    Utilities relative to the optimal score ``scalars[0]`` and the best index.

    The best alternative is the first index holding the maximum utility;
    ``-1`` when there are no alternatives.
    """
    scalars = [float(s) for s in scalars]
    if not scalars:
        return [], -1
    optimal = scalars[0]
    if optimal != 0:
        utilities = [s / optimal for s in scalars[1:]]
    else:
        logger.warning('Optimal alternative scores 0; all utilities set to 0')
        utilities = [0.0] * (len(scalars) - 1)

    best_index = -1
    best_utility = -np.inf
    for i, utility in enumerate(utilities):
        if utility > best_utility:
            best_utility = utility
            best_index = i
    return utilities, best_index


# =========================================================================
# Result container
# =========================================================================

FUZZY_STEPS = (
    'criteria_weights',
    'alternative_aggregates',
    'optimal_row',
    'normalized_matrix',
    'weighted_matrix',
    'row_sums',
)


@dataclass
class FuzzyARASResult:
    """
    Every intermediate step of one Fuzzy ARAS run.

    Attributes:
        alternatives: Alternative labels (row ``i`` ↔ ``alternatives[i]``)
        criteria: Criterion labels
        aggregated_terms: Experts' codes per (alternative, criterion)
        criteria_triangular: Resolved criteria judgments ``[expert][criterion]``
        alternative_triangular: Resolved ratings ``[expert][alternative][criterion]``
        criteria_weights: Aggregated criterion weights
        alternative_aggregates: Aggregated ratings ``[alternative][criterion]``
        optimal_row: Optimal alternative per criterion
        normalized_matrix: ``[1 + n_alternatives][criterion]``, row 0 = optimal
        weighted_matrix: Same shape as ``normalized_matrix``
        row_sums: Optimality function per row
        defuzzified_scalars: Crisp optimality per row, index 0 = optimal
        utilities: Degree of utility per alternative
        best_alternative_index: Index of the best alternative, -1 if none
    """
    alternatives: List[str]
    criteria: List[str]
    aggregated_terms: List[List[str]] = field(default_factory=list)
    criteria_triangular: List[List[TriangularFuzzyNumber]] = field(default_factory=list)
    alternative_triangular: List[List[List[TriangularFuzzyNumber]]] = field(default_factory=list)
    criteria_weights: List[FiveComponentFuzzyNumber] = field(default_factory=list)
    alternative_aggregates: List[List[FiveComponentFuzzyNumber]] = field(default_factory=list)
    optimal_row: List[FiveComponentFuzzyNumber] = field(default_factory=list)
    normalized_matrix: List[List[FiveComponentFuzzyNumber]] = field(default_factory=list)
    weighted_matrix: List[List[FiveComponentFuzzyNumber]] = field(default_factory=list)
    row_sums: List[FiveComponentFuzzyNumber] = field(default_factory=list)
    defuzzified_scalars: List[float] = field(default_factory=list)
    utilities: List[float] = field(default_factory=list)
    best_alternative_index: int = -1

    @classmethod
    def empty(cls, alternatives: Optional[List[str]] = None,
              criteria: Optional[List[str]] = None) -> 'FuzzyARASResult':
        """Neutral result for incomplete input."""
        return cls(alternatives=list(alternatives or []), criteria=list(criteria or []))

    @property
    def is_empty(self) -> bool:
        return not self.defuzzified_scalars

    @property
    def optimal_value(self) -> float:
        """Crisp optimality of the optimal alternative (``S_0``)."""
        return self.defuzzified_scalars[0] if self.defuzzified_scalars else 0.0

    @property
    def best_alternative(self) -> Optional[str]:
        if self.best_alternative_index < 0:
            return None
        return self.alternatives[self.best_alternative_index]

    @property
    def row_labels(self) -> List[str]:
        """Labels of the combined matrix rows (optimal first)."""
        return [OPTIMAL_LABEL] + list(self.alternatives)

    @property
    def ranks(self) -> pd.Series:
        """Rank 1 = highest utility; equal utilities keep index order."""
        if self.is_empty:
            return pd.Series(dtype=int, name='Rank')
        utilities = pd.Series(self.utilities, index=self.alternatives, dtype=float)
        return utilities.rank(ascending=False, method='first').astype(int)

    def to_frame(self) -> pd.DataFrame:
        """Crisp optimality ``S``, utility ``K`` and rank per alternative."""
        if self.is_empty:
            return pd.DataFrame(columns=['S', 'K', 'Rank']).rename_axis('Alternative')
        return pd.DataFrame({
            'S': np.asarray(self.defuzzified_scalars[1:], dtype=float),
            'K': np.asarray(self.utilities, dtype=float),
            'Rank': self.ranks.to_numpy(),
        }, index=pd.Index(self.alternatives, name='Alternative'))

    def top_n(self, n: int = 10) -> pd.DataFrame:
        """Best *n* alternatives ordered by rank."""
        return self.to_frame().nsmallest(n, 'Rank')

    def fuzzy_frame(self, step: str) -> pd.DataFrame:
        """
        One fuzzy step as a table with columns ``l, l_prime, m, u_prime, u``.

        Parameters
        ----------
        step : str
            One of ``FUZZY_STEPS``.
        """
        if step not in FUZZY_STEPS:
            raise ValueError(f"Unknown step {step!r}; choose from {', '.join(FUZZY_STEPS)}")
        grid = getattr(self, step)

        if step in ('criteria_weights', 'optimal_row'):
            index = pd.Index(self.criteria, name='Criterion')
            cells = list(grid)
        elif step == 'row_sums':
            index = pd.Index(self.row_labels, name='Alternative')
            cells = list(grid)
        else:
            rows = self.alternatives if step == 'alternative_aggregates' else self.row_labels
            index = pd.MultiIndex.from_product(
                [rows, self.criteria], names=['Alternative', 'Criterion'])
            cells = [cell for row in grid for cell in row]

        if not cells:
            return pd.DataFrame(columns=list(FUZZY5_COMPONENTS))
        return pd.DataFrame([c.as_tuple() for c in cells], index=index,
                            columns=list(FUZZY5_COMPONENTS))

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly dictionary of every step."""
        def _plain(obj):
            if isinstance(obj, (TriangularFuzzyNumber, FiveComponentFuzzyNumber)):
                return list(obj.as_tuple())
            if isinstance(obj, list):
                return [_plain(item) for item in obj]
            return obj

        return {
            'alternatives': list(self.alternatives),
            'criteria': list(self.criteria),
            'aggregated_terms': _plain(self.aggregated_terms),
            'criteria_triangular': _plain(self.criteria_triangular),
            'alternative_triangular': _plain(self.alternative_triangular),
            'criteria_weights': _plain(self.criteria_weights),
            'alternative_aggregates': _plain(self.alternative_aggregates),
            'optimal_row': _plain(self.optimal_row),
            'normalized_matrix': _plain(self.normalized_matrix),
            'weighted_matrix': _plain(self.weighted_matrix),
            'row_sums': _plain(self.row_sums),
            'defuzzified_scalars': list(self.defuzzified_scalars),
            'utilities': list(self.utilities),
            'best_alternative_index': self.best_alternative_index,
            'best_alternative': self.best_alternative,
        }


# =========================================================================
# Calculator
# =========================================================================

def _check_shape(name: str, data: Any, shape: Tuple[int, ...]) -> None:
    """Raise ``ValueError`` unless nested lists *data* have *shape*."""
    if not shape:
        return
    if isinstance(data, str) or len(data) != shape[0]:
        got = 'a string' if isinstance(data, str) else f'length {len(data)}'
        raise ValueError(f"{name}: expected length {shape[0]}, got {got}")
    for item in data:
        _check_shape(name, item, shape[1:])


class FuzzyARAS:
    """
    Fuzzy ARAS calculator for linguistic group decision making.

    Parameters:
        epsilon: Substitute for non-positive values inside geometric means

    Example:
        >>> calculator = FuzzyARAS()
        >>> result = calculator.calculate(
        ...     2, 1, 2, ['benefit'],
        ...     default_criteria_vocabulary(), default_alternative_vocabulary(),
        ...     [['M'], ['M']],
        ...     [[['G'], ['F']], [['G'], ['F']]])
        >>> result.best_alternative_index
        0
    """

    def __init__(self, epsilon: float = GEOMETRIC_MEAN_EPSILON):
        self.epsilon = epsilon

    @log_execution()
    def calculate(self,
                  num_alternatives: int,
                  num_criteria: int,
                  num_experts: int,
                  criterion_polarities: Sequence[PolarityLike],
                  criteria_vocabulary: LinguisticTermVocabulary,
                  alternative_vocabulary: LinguisticTermVocabulary,
                  criteria_judgments: Sequence[Sequence[str]],
                  alternative_judgments: Sequence[Sequence[Sequence[str]]],
                  alternative_labels: Optional[Sequence[str]] = None,
                  criteria_labels: Optional[Sequence[str]] = None,
                  ) -> FuzzyARASResult:
        """
        Run every step of Fuzzy ARAS.

        Args:
            num_alternatives, num_criteria, num_experts: Problem dimensions
            criterion_polarities: Benefit/cost per criterion
            criteria_vocabulary: Terms for criterion importance
            alternative_vocabulary: Terms for alternative performance
            criteria_judgments: Codes ``[expert][criterion]``
            alternative_judgments: Codes ``[expert][alternative][criterion]``
            alternative_labels, criteria_labels: Optional display labels

        Returns:
            FuzzyARASResult with all intermediate steps
        """
        for name, count in (('num_alternatives', num_alternatives),
                            ('num_criteria', num_criteria),
                            ('num_experts', num_experts)):
            if count < 0:
                raise ValueError(f"{name} must be non-negative, got {count}")

        alternatives = (list(alternative_labels) if alternative_labels is not None
                        else [f'A{i + 1}' for i in range(num_alternatives)])
        criteria = (list(criteria_labels) if criteria_labels is not None
                    else [f'C{j + 1}' for j in range(num_criteria)])

        if min(num_alternatives, num_criteria, num_experts) == 0:
            logger.info('Incomplete problem dimensions '
                        f'({num_alternatives} alternatives, {num_criteria} criteria, '
                        f'{num_experts} experts); returning empty result')
            return FuzzyARASResult.empty(alternatives, criteria)

        _check_shape('alternative_labels', alternatives, (num_alternatives,))
        _check_shape('criteria_labels', criteria, (num_criteria,))
        _check_shape('criterion_polarities', list(criterion_polarities), (num_criteria,))
        _check_shape('criteria_judgments', criteria_judgments, (num_experts, num_criteria))
        _check_shape('alternative_judgments', alternative_judgments,
                     (num_experts, num_alternatives, num_criteria))
        polarities = [CriterionType.coerce(p) for p in criterion_polarities]

        # Step 1: Linguistic codes -> TFNs
        criteria_triangular = resolve_judgments(criteria_judgments, criteria_vocabulary)
        alternative_triangular = resolve_judgments(alternative_judgments, alternative_vocabulary)

        # Step 2: Expert aggregation
        weights = aggregate_experts(tfn_array(criteria_triangular), epsilon=self.epsilon)
        aggregates = aggregate_experts(tfn_array(alternative_triangular), epsilon=self.epsilon)

        # Step 3: Optimal alternative
        optimal = select_optimal_row(aggregates, polarities)
        combined = np.concatenate([optimal[np.newaxis], aggregates], axis=0)

        # Step 4-6: Normalize, weight, sum, defuzzify
        normalized = normalize_matrix(combined, polarities)
        weighted = apply_weights(normalized, weights)
        sums = sum_rows(weighted)
        scalars = defuzzify(sums)

        # Step 7: Degree of utility
        utilities, best_index = degree_of_utility(scalars)

        logger.info(f'Fuzzy ARAS: S0={scalars[0]:.6f}, best alternative '
                    f'{alternatives[best_index]!r} (K={utilities[best_index]:.6f})')

        return FuzzyARASResult(
            alternatives=alternatives,
            criteria=criteria,
            aggregated_terms=collect_expert_terms(alternative_judgments),
            criteria_triangular=criteria_triangular,
            alternative_triangular=alternative_triangular,
            criteria_weights=to_fuzzy5_grid(weights),
            alternative_aggregates=to_fuzzy5_grid(aggregates),
            optimal_row=to_fuzzy5_grid(optimal),
            normalized_matrix=to_fuzzy5_grid(normalized),
            weighted_matrix=to_fuzzy5_grid(weighted),
            row_sums=to_fuzzy5_grid(sums),
            defuzzified_scalars=[float(s) for s in scalars],
            utilities=utilities,
            best_alternative_index=best_index,
        )


def compute(num_alternatives: int,
            num_criteria: int,
            num_experts: int,
            criterion_polarities: Sequence[PolarityLike],
            criteria_vocabulary: LinguisticTermVocabulary,
            alternative_vocabulary: LinguisticTermVocabulary,
            criteria_judgments: Sequence[Sequence[str]],
            alternative_judgments: Sequence[Sequence[Sequence[str]]],
            *,
            alternative_labels: Optional[Sequence[str]] = None,
            criteria_labels: Optional[Sequence[str]] = None,
            epsilon: float = GEOMETRIC_MEAN_EPSILON) -> FuzzyARASResult:
    """Functional entry point; see :meth:`FuzzyARAS.calculate`."""
    return FuzzyARAS(epsilon=epsilon).calculate(
        num_alternatives, num_criteria, num_experts,
        criterion_polarities,
        criteria_vocabulary, alternative_vocabulary,
        criteria_judgments, alternative_judgments,
        alternative_labels=alternative_labels,
        criteria_labels=criteria_labels,
    )


__all__ = [
    'OPTIMAL_LABEL',
    'FUZZY_STEPS',
    'select_optimal_row',
    'normalize_matrix',
    'apply_weights',
    'sum_rows',
    'defuzzify',
    'degree_of_utility',
    'FuzzyARASResult',
    'FuzzyARAS',
    'compute',
]
