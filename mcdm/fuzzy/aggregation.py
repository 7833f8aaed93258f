# -*- coding: utf-8 -*-
"""
Judgment Resolution and Expert Aggregation
==========================================

1. Resolve: linguistic codes → TFNs through a vocabulary lookup
   (unknown codes become the zero TFN).
2. Aggregate: the K experts' TFNs for one cell → five-component number

       l  = min_k l_k
       l' = (Π_k l_k)^(1/K)
       m  = (Π_k m_k)^(1/K)
       u' = (Π_k u_k)^(1/K)
       u  = max_k u_k

Non-positive values in a geometric mean
---------------------------------------
Boundary terms such as "Very low" ``(0, 0, 0.1)`` make zero components an
ordinary occurrence. Every value ``<= 0`` is replaced by a small positive
``epsilon`` (default ``1e-10``) before multiplying, so the mean shrinks
towards zero without collapsing to exactly zero. The same rule applies to
criteria weights and alternative ratings.
"""

import logging
from typing import Any, List, Sequence

import numpy as np

from .base import (
    FiveComponentFuzzyNumber,
    TriangularFuzzyNumber,
    tfn_array,
)
from .vocabulary import LinguisticTermVocabulary

logger = logging.getLogger('fuzzy_aras')

GEOMETRIC_MEAN_EPSILON = 1e-10


def resolve_judgments(codes: Any, vocabulary: LinguisticTermVocabulary) -> Any:
    """
    Map a (nested) list of term codes to TFNs of the same shape.

    Works for the ``[expert][criterion]`` matrix as well as the
    ``[expert][alternative][criterion]`` cube.
    Any leaf that is not a list is looked up as a code, so ``None`` or a
    number resolves to the zero TFN like any other unknown code.
    """
    if not isinstance(codes, (list, tuple)):
        return vocabulary.resolve(codes)
    return [resolve_judgments(item, vocabulary) for item in codes]


def geometric_mean(values: Any, axis: int = 0,
                   epsilon: float = GEOMETRIC_MEAN_EPSILON) -> Any:
    """
    n-th root of the product of *values* along *axis*.

    Values ``<= 0`` are substituted with *epsilon* before multiplying.
    Returns a float for 1-D input, an array otherwise.
    """
    arr = np.asarray(values, dtype=float)
    n = arr.shape[axis]
    if n == 0:
        raise ValueError("Geometric mean of an empty sequence is undefined")
    non_positive = arr <= 0
    if non_positive.any():
        logger.debug(
            f'Geometric mean over {int(non_positive.sum())} non-positive '
            f'value(s); substituting {epsilon:g}'
        )
        arr = np.where(non_positive, epsilon, arr)
    result = np.prod(arr, axis=axis) ** (1.0 / n)
    if np.ndim(result) == 0:
        return float(result)
    return result


def aggregate_experts(triangles: np.ndarray,
                      epsilon: float = GEOMETRIC_MEAN_EPSILON) -> np.ndarray:
    """
    Aggregate over the leading (expert) axis.

    Parameters
    ----------
    triangles : np.ndarray
        Shape ``(n_experts, ..., 3)`` with components ``(l, m, u)``.

    Returns
    -------
    np.ndarray
        Shape ``(..., 5)`` with components ``(l, l', m, u', u)``.
    """
    tri = np.asarray(triangles, dtype=float)
    if tri.shape[0] == 0:
        raise ValueError("Cannot aggregate judgments of zero experts")
    lower, modal, upper = tri[..., 0], tri[..., 1], tri[..., 2]
    return np.stack([
        lower.min(axis=0),
        geometric_mean(lower, axis=0, epsilon=epsilon),
        geometric_mean(modal, axis=0, epsilon=epsilon),
        geometric_mean(upper, axis=0, epsilon=epsilon),
        upper.max(axis=0),
    ], axis=-1)


def aggregate_fuzzy(triangles: Sequence[TriangularFuzzyNumber],
                    epsilon: float = GEOMETRIC_MEAN_EPSILON) -> FiveComponentFuzzyNumber:
    """
    Collapse one cell's expert TFNs into a :class:`FiveComponentFuzzyNumber`.

    Examples
    --------
    >>> tfn = TriangularFuzzyNumber(0.3, 0.5, 0.7)
    >>> aggregate_fuzzy([tfn, tfn])
    F5(0.3000, 0.3000, 0.5000, 0.7000, 0.7000)
    """
    if len(triangles) == 0:
        raise ValueError("Cannot aggregate an empty list of judgments")
    aggregated = aggregate_experts(tfn_array(list(triangles)), epsilon=epsilon)
    return FiveComponentFuzzyNumber.from_sequence(aggregated.tolist())


def collect_expert_terms(alternative_judgments: Sequence[Sequence[Sequence[str]]]
                         ) -> List[List[str]]:
    """
    Per (alternative, criterion), list the experts' codes as ``"[G, F, ...]"``.

    Input is indexed ``[expert][alternative][criterion]``.
    """
    if not alternative_judgments:
        return []
    n_alternatives = len(alternative_judgments[0])
    n_criteria = len(alternative_judgments[0][0]) if n_alternatives else 0
    return [
        [
            '[' + ', '.join(str(expert[i][j]) for expert in alternative_judgments) + ']'
            for j in range(n_criteria)
        ]
        for i in range(n_alternatives)
    ]


__all__ = [
    'GEOMETRIC_MEAN_EPSILON',
    'resolve_judgments',
    'geometric_mean',
    'aggregate_experts',
    'aggregate_fuzzy',
    'collect_expert_terms',
]
