# -*- coding: utf-8 -*-
"""
Unit tests for the fuzzy value types.

Covers:
  - CriterionType / CriterionSpec polarity coercion
  - TriangularFuzzyNumber construction and predicates
  - FiveComponentFuzzyNumber arithmetic and defuzzification
  - Array <-> object conversion helpers
"""

import numpy as np
import pytest

from mcdm.fuzzy.base import (
    CriterionSpec,
    CriterionType,
    FiveComponentFuzzyNumber,
    TriangularFuzzyNumber,
    fuzzy5_array,
    tfn_array,
    to_fuzzy5_grid,
    to_tfn_grid,
)


# ---------------------------------------------------------------------------
# Polarity
# ---------------------------------------------------------------------------

class TestCriterionType:
    @pytest.mark.parametrize("value", ["cost", "COST", " Cost ", CriterionType.COST])
    def test_coerce_cost(self, value):
        assert CriterionType.coerce(value) is CriterionType.COST

    def test_coerce_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown criterion type"):
            CriterionType.coerce("neutral")

    def test_spec_defaults_to_benefit(self):
        spec = CriterionSpec("Quality")
        assert spec.polarity is CriterionType.BENEFIT
        assert spec.is_benefit

    def test_spec_accepts_string_polarity(self):
        spec = CriterionSpec("Price", "cost")
        assert spec.polarity is CriterionType.COST
        assert not spec.is_benefit


# ---------------------------------------------------------------------------
# TriangularFuzzyNumber
# ---------------------------------------------------------------------------

class TestTriangularFuzzyNumber:
    def test_zero(self):
        assert TriangularFuzzyNumber.zero().as_tuple() == (0.0, 0.0, 0.0)

    def test_from_sequence(self):
        tfn = TriangularFuzzyNumber.from_sequence([0.1, 0.3, 0.5])
        assert tfn == TriangularFuzzyNumber(0.1, 0.3, 0.5)

    def test_from_sequence_wrong_length(self):
        with pytest.raises(ValueError):
            TriangularFuzzyNumber.from_sequence([0.1, 0.3])

    def test_ordering_predicates(self):
        assert TriangularFuzzyNumber(0.3, 0.5, 0.7).is_ordered
        assert not TriangularFuzzyNumber(0.5, 0.3, 0.7).is_ordered
        assert TriangularFuzzyNumber(0.4, 0.4, 0.4).is_degenerate
        assert not TriangularFuzzyNumber(0.0, 0.0, 0.1).is_degenerate

    def test_is_immutable(self):
        tfn = TriangularFuzzyNumber(0.3, 0.5, 0.7)
        with pytest.raises(AttributeError):
            tfn.l = 0.0

    def test_repr(self):
        assert repr(TriangularFuzzyNumber(0.3, 0.5, 0.7)) == "TFN(0.3000, 0.5000, 0.7000)"


# ---------------------------------------------------------------------------
# FiveComponentFuzzyNumber
# ---------------------------------------------------------------------------

class TestFiveComponentFuzzyNumber:
    def test_add_is_componentwise(self):
        a = FiveComponentFuzzyNumber(0.1, 0.2, 0.3, 0.4, 0.5)
        b = FiveComponentFuzzyNumber(1.0, 1.0, 1.0, 1.0, 1.0)
        assert (a + b).as_tuple() == pytest.approx((1.1, 1.2, 1.3, 1.4, 1.5))

    def test_mul_is_componentwise(self):
        a = FiveComponentFuzzyNumber(0.1, 0.2, 0.3, 0.4, 0.5)
        b = FiveComponentFuzzyNumber(2.0, 3.0, 4.0, 5.0, 6.0)
        assert (a * b).as_tuple() == pytest.approx((0.2, 0.6, 1.2, 2.0, 3.0))

    def test_defuzzify_is_mean_of_components(self):
        f = FiveComponentFuzzyNumber(0.1, 0.2, 0.3, 0.4, 0.5)
        assert f.defuzzify() == pytest.approx(0.3)

    def test_no_ordering_invariant(self):
        f = FiveComponentFuzzyNumber(0.1, 0.6, 0.5, 0.9, 1.0)
        assert f.l_prime > f.m

    def test_from_sequence_wrong_length(self):
        with pytest.raises(ValueError):
            FiveComponentFuzzyNumber.from_sequence([1, 2, 3])


# ---------------------------------------------------------------------------
# Conversion helpers
# ---------------------------------------------------------------------------

class TestConversion:
    def test_tfn_array_shape(self):
        grid = [[TriangularFuzzyNumber(0, 0.1, 0.3)] * 3 for _ in range(2)]
        arr = tfn_array(grid)
        assert arr.shape == (2, 3, 3)
        assert arr[1, 2].tolist() == [0, 0.1, 0.3]

    def test_empty_grid(self):
        assert tfn_array([]).shape == (0, 3)
        assert fuzzy5_array([]).shape == (0, 5)

    def test_grid_round_trip(self):
        arr = np.arange(20, dtype=float).reshape(2, 2, 5)
        grid = to_fuzzy5_grid(arr)
        assert isinstance(grid[1][0], FiveComponentFuzzyNumber)
        np.testing.assert_array_equal(fuzzy5_array(grid), arr)

    def test_to_tfn_grid_single(self):
        assert to_tfn_grid(np.array([0.1, 0.2, 0.3])) == TriangularFuzzyNumber(0.1, 0.2, 0.3)
