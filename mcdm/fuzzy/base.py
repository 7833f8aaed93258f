# -*- coding: utf-8 -*-
"""
Fuzzy Number Base Classes
=========================

Value types shared by every stage of the Fuzzy ARAS pipeline:
- TriangularFuzzyNumber (TFN): a single expert's linguistic judgment
- FiveComponentFuzzyNumber: the aggregate of several experts' TFNs
- CriterionType / CriterionSpec: benefit or cost polarity per criterion

Mathematical Foundation:
    A Triangular Fuzzy Number is denoted as Ã = (l, m, u) where:
    - l: lower bound (minimum possible value)
    - m: modal value (most likely value)
    - u: upper bound (maximum possible value)

    Judgments of K experts are aggregated into a five-component number
        Ã = (l, l', m, u', u)
    with l = min l_k, u = max u_k and l', m, u' the geometric means of
    the experts' lower, modal and upper values.

Stage functions work on numpy arrays whose last axis holds the components
in the order given by ``TFN_COMPONENTS`` / ``FUZZY5_COMPONENTS``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Sequence, Tuple, Union

import numpy as np


TFN_COMPONENTS: Tuple[str, ...] = ("l", "m", "u")
FUZZY5_COMPONENTS: Tuple[str, ...] = ("l", "l_prime", "m", "u_prime", "u")


class CriterionType(Enum):
    """Polarity of a criterion column."""
    BENEFIT = "benefit"
    COST = "cost"

    @classmethod
    def coerce(cls, value: Union["CriterionType", str]) -> "CriterionType":
        """Accept an enum member or its (case-insensitive) string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown criterion type {value!r}; expected 'benefit' or 'cost'"
            ) from None


@dataclass(frozen=True)
class CriterionSpec:
    """A criterion column: display label plus benefit/cost polarity."""
    label: str
    polarity: CriterionType = CriterionType.BENEFIT

    def __post_init__(self):
        object.__setattr__(self, "polarity", CriterionType.coerce(self.polarity))

    @property
    def is_benefit(self) -> bool:
        return self.polarity is CriterionType.BENEFIT


@dataclass(frozen=True)
class TriangularFuzzyNumber:
    """
    Triangular Fuzzy Number (TFN) representation.

    Unlike a general-purpose TFN the components are kept exactly as given:
    the ordering ``l <= m <= u`` is checked when a vocabulary is validated,
    not here, so the zero number used for unknown codes stays representable.

    Attributes:
        l: Lower bound (minimum)
        m: Modal value (most likely)
        u: Upper bound (maximum)

    Example:
        >>> tfn = TriangularFuzzyNumber(0.3, 0.5, 0.7)
        >>> tfn.as_tuple()
        (0.3, 0.5, 0.7)
    """
    l: float  # Lower bound
    m: float  # Modal value (most likely)
    u: float  # Upper bound

    @classmethod
    def zero(cls) -> "TriangularFuzzyNumber":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "TriangularFuzzyNumber":
        """Build from any 3-element sequence ``(l, m, u)``."""
        if len(values) != 3:
            raise ValueError(f"A triangular fuzzy number needs 3 values, got {len(values)}")
        l, m, u = (float(v) for v in values)
        return cls(l, m, u)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.l, self.m, self.u)

    def as_array(self) -> np.ndarray:
        return np.array(self.as_tuple(), dtype=float)

    @property
    def is_ordered(self) -> bool:
        """``True`` when ``l <= m <= u``."""
        return self.l <= self.m <= self.u

    @property
    def is_degenerate(self) -> bool:
        """``True`` when the support collapses (``l == u``)."""
        return self.l == self.u

    def __repr__(self) -> str:
        return f"TFN({self.l:.4f}, {self.m:.4f}, {self.u:.4f})"


@dataclass(frozen=True)
class FiveComponentFuzzyNumber:
    """
    Five-component fuzzy number ``(l, l', m, u', u)``.

    Produced by expert aggregation and carried through optimal-row
    selection, normalization, weighting and summation. No ordering
    invariant holds: mixing min/max with geometric means can legitimately
    give ``l' >= m``.
    """
    l: float
    l_prime: float
    m: float
    u_prime: float
    u: float

    @classmethod
    def zero(cls) -> "FiveComponentFuzzyNumber":
        return cls(0.0, 0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "FiveComponentFuzzyNumber":
        if len(values) != 5:
            raise ValueError(f"A five-component fuzzy number needs 5 values, got {len(values)}")
        return cls(*(float(v) for v in values))

    def as_tuple(self) -> Tuple[float, float, float, float, float]:
        return (self.l, self.l_prime, self.m, self.u_prime, self.u)

    def as_array(self) -> np.ndarray:
        return np.array(self.as_tuple(), dtype=float)

    def __add__(self, other: "FiveComponentFuzzyNumber") -> "FiveComponentFuzzyNumber":
        return FiveComponentFuzzyNumber(
            self.l + other.l,
            self.l_prime + other.l_prime,
            self.m + other.m,
            self.u_prime + other.u_prime,
            self.u + other.u,
        )

    def __mul__(self, other: "FiveComponentFuzzyNumber") -> "FiveComponentFuzzyNumber":
        # Componentwise product, as used for weighting
        return FiveComponentFuzzyNumber(
            self.l * other.l,
            self.l_prime * other.l_prime,
            self.m * other.m,
            self.u_prime * other.u_prime,
            self.u * other.u,
        )

    def defuzzify(self) -> float:
        """Arithmetic mean of the five components."""
        return (self.l + self.l_prime + self.m + self.u_prime + self.u) / 5

    def __repr__(self) -> str:
        return (f"F5({self.l:.4f}, {self.l_prime:.4f}, {self.m:.4f}, "
                f"{self.u_prime:.4f}, {self.u:.4f})")


# =========================================================================
# Array <-> object conversion
# =========================================================================

def tfn_array(grid: Any) -> np.ndarray:
    """Stack a (nested) list of TFNs into an array with a trailing axis of 3."""
    if isinstance(grid, TriangularFuzzyNumber):
        return grid.as_array()
    items = [tfn_array(item) for item in grid]
    if not items:
        return np.zeros((0, 3))
    return np.stack(items)


def fuzzy5_array(grid: Any) -> np.ndarray:
    """Stack a (nested) list of five-component numbers into an array."""
    if isinstance(grid, FiveComponentFuzzyNumber):
        return grid.as_array()
    items = [fuzzy5_array(item) for item in grid]
    if not items:
        return np.zeros((0, 5))
    return np.stack(items)


def to_tfn_grid(arr: np.ndarray) -> Union[TriangularFuzzyNumber, List]:
    """Inverse of :func:`tfn_array`."""
    arr = np.asarray(arr, dtype=float)
    if arr.ndim == 1:
        return TriangularFuzzyNumber.from_sequence(arr.tolist())
    return [to_tfn_grid(sub) for sub in arr]


def to_fuzzy5_grid(arr: np.ndarray) -> Union[FiveComponentFuzzyNumber, List]:
    """Inverse of :func:`fuzzy5_array`."""
    arr = np.asarray(arr, dtype=float)
    if arr.ndim == 1:
        return FiveComponentFuzzyNumber.from_sequence(arr.tolist())
    return [to_fuzzy5_grid(sub) for sub in arr]


__all__ = [
    'TFN_COMPONENTS',
    'FUZZY5_COMPONENTS',
    'CriterionType',
    'CriterionSpec',
    'TriangularFuzzyNumber',
    'FiveComponentFuzzyNumber',
    'tfn_array',
    'fuzzy5_array',
    'to_tfn_grid',
    'to_fuzzy5_grid',
]
