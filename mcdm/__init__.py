# -*- coding: utf-8 -*-
from typing import Dict
"""
Multi-Criteria Decision Making Module
=====================================

Submodules
----------
fuzzy
    Fuzzy ARAS with linguistic group judgments

Usage
-----
>>> from mcdm.fuzzy import FuzzyARAS, LinguisticTermVocabulary
"""

from .fuzzy import FuzzyARAS, FuzzyARASResult, compute


__all__ = [
    'FuzzyARAS', 'FuzzyARASResult', 'compute',
]


def get_all_calculators() -> Dict[str, type]:
    """
    Get dictionary of available MCDM calculators.

    Returns
    -------
    Dict[str, class]
        Dictionary of calculator classes keyed by method name.
    """
    return {
        'fuzzy_aras': FuzzyARAS,
    }
