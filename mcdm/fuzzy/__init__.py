# -*- coding: utf-8 -*-
"""
Fuzzy MCDM Methods Module
=========================

Fuzzy ARAS (Additive Ratio ASsessment) for group decisions expressed as
linguistic terms.

Core Components:
    - TriangularFuzzyNumber: A single expert's judgment (l, m, u)
    - FiveComponentFuzzyNumber: Aggregate of several experts (l, l', m, u', u)
    - LinguisticTermVocabulary: Immutable code -> TFN scale
    - FuzzyARAS / compute: The full calculation pipeline

Example Usage:
    >>> from mcdm.fuzzy import compute, default_criteria_vocabulary, default_alternative_vocabulary
    >>>
    >>> result = compute(
    ...     2, 1, 2, ['benefit'],
    ...     default_criteria_vocabulary(), default_alternative_vocabulary(),
    ...     criteria_judgments=[['M'], ['M']],
    ...     alternative_judgments=[[['G'], ['F']], [['G'], ['F']]],
    ... )
    >>> result.to_frame()
"""

# Core fuzzy types
from .base import (
    TFN_COMPONENTS,
    FUZZY5_COMPONENTS,
    CriterionType,
    CriterionSpec,
    TriangularFuzzyNumber,
    FiveComponentFuzzyNumber,
)

# Linguistic scales
from .vocabulary import (
    VocabularyError,
    LinguisticTerm,
    LinguisticTermVocabulary,
    CRITERIA_TERMS,
    ALTERNATIVE_TERMS,
    default_criteria_vocabulary,
    default_alternative_vocabulary,
)

# Pipeline stages
from .aggregation import (
    GEOMETRIC_MEAN_EPSILON,
    resolve_judgments,
    geometric_mean,
    aggregate_experts,
    aggregate_fuzzy,
)
from .aras import (
    OPTIMAL_LABEL,
    FUZZY_STEPS,
    select_optimal_row,
    normalize_matrix,
    apply_weights,
    sum_rows,
    defuzzify,
    degree_of_utility,
    FuzzyARAS,
    FuzzyARASResult,
    compute,
)

__all__ = [
    # Core types
    'TFN_COMPONENTS',
    'FUZZY5_COMPONENTS',
    'CriterionType',
    'CriterionSpec',
    'TriangularFuzzyNumber',
    'FiveComponentFuzzyNumber',
    # Vocabularies
    'VocabularyError',
    'LinguisticTerm',
    'LinguisticTermVocabulary',
    'CRITERIA_TERMS',
    'ALTERNATIVE_TERMS',
    'default_criteria_vocabulary',
    'default_alternative_vocabulary',
    # Stages
    'GEOMETRIC_MEAN_EPSILON',
    'resolve_judgments',
    'geometric_mean',
    'aggregate_experts',
    'aggregate_fuzzy',
    'select_optimal_row',
    'normalize_matrix',
    'apply_weights',
    'sum_rows',
    'defuzzify',
    'degree_of_utility',
    # Method
    'OPTIMAL_LABEL',
    'FUZZY_STEPS',
    'FuzzyARAS',
    'FuzzyARASResult',
    'compute',
]
