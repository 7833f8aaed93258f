# -*- coding: utf-8 -*-
"""
Unit tests for linguistic term vocabularies.

Covers:
  - Default seven-term scales
  - resolve() lookup, unknown codes, duplicate codes
  - Validation rules (term count, ordering, degenerate support)
  - Immutable edits and serialisation
"""

import pytest

from mcdm.fuzzy.base import TriangularFuzzyNumber
from mcdm.fuzzy.vocabulary import (
    LinguisticTerm,
    LinguisticTermVocabulary,
    VocabularyError,
    default_alternative_vocabulary,
    default_criteria_vocabulary,
)


def _term(code, l, m, u):
    return LinguisticTerm(code, code, TriangularFuzzyNumber(l, m, u))


# ---------------------------------------------------------------------------
# Default scales
# ---------------------------------------------------------------------------

class TestDefaultScales:
    def test_criteria_codes(self):
        assert default_criteria_vocabulary().codes == ["VL", "L", "ML", "M", "MH", "H", "VH"]

    def test_alternative_codes(self):
        assert default_alternative_vocabulary().codes == ["VP", "P", "MP", "F", "MG", "G", "VG"]

    @pytest.mark.parametrize("code,expected", [
        ("VP", (0.0, 0.0, 0.1)),
        ("F", (0.3, 0.5, 0.7)),
        ("G", (0.7, 0.7, 1.0)),
        ("VG", (0.9, 1.0, 1.0)),
    ])
    def test_alternative_values(self, code, expected):
        assert default_alternative_vocabulary().resolve(code).as_tuple() == expected

    def test_defaults_are_valid(self):
        assert default_criteria_vocabulary().is_valid
        assert default_alternative_vocabulary().is_valid

    def test_defaults_are_equal_but_independent(self):
        assert default_criteria_vocabulary() == default_criteria_vocabulary()
        assert default_criteria_vocabulary() != default_alternative_vocabulary()


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

class TestResolve:
    def test_unknown_code_is_zero(self):
        assert default_criteria_vocabulary().resolve("XX") == TriangularFuzzyNumber.zero()

    def test_lookup_is_case_sensitive(self):
        assert default_criteria_vocabulary().resolve("vh") == TriangularFuzzyNumber.zero()

    def test_duplicate_code_last_wins(self):
        vocab = LinguisticTermVocabulary([_term("A", 0, 0.1, 0.2), _term("A", 0.5, 0.6, 0.7)])
        assert vocab.resolve("A").as_tuple() == (0.5, 0.6, 0.7)

    def test_contains(self):
        vocab = default_criteria_vocabulary()
        assert "MH" in vocab
        assert "MG" not in vocab


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class TestValidation:
    def test_too_few_terms(self):
        vocab = LinguisticTermVocabulary([_term("A", 0, 0.5, 1)])
        assert any("at least 2" in p for p in vocab.problems())
        with pytest.raises(VocabularyError):
            vocab.validate()

    def test_unordered_term(self):
        vocab = LinguisticTermVocabulary([_term("A", 0, 0.5, 1), _term("B", 0.6, 0.4, 0.8)])
        problems = vocab.problems()
        assert len(problems) == 1
        assert "'B'" in problems[0]

    def test_degenerate_term(self):
        vocab = LinguisticTermVocabulary([_term("A", 0, 0.5, 1), _term("B", 0.4, 0.4, 0.4)])
        assert any("must differ" in p for p in vocab.problems())

    def test_duplicate_and_empty_codes(self):
        vocab = LinguisticTermVocabulary(
            [_term("A", 0, 0.5, 1), _term("A", 0, 0.2, 1), _term(" ", 0, 0.1, 0.2)])
        problems = vocab.problems()
        assert any("duplicate" in p for p in problems)
        assert any("empty code" in p for p in problems)

    @pytest.mark.parametrize("bad", [float("inf"), float("nan")])
    def test_non_finite_component(self, bad):
        vocab = LinguisticTermVocabulary([_term("A", 0, 0.5, bad), _term("B", 0.1, 0.5, 1.0)])
        problems = vocab.problems()
        assert len(problems) == 1
        assert "finite" in problems[0]
        assert not vocab.is_valid

    def test_error_lists_every_problem(self):
        vocab = LinguisticTermVocabulary([_term("B", 0.4, 0.4, 0.4)])
        with pytest.raises(VocabularyError) as info:
            vocab.validate()
        assert len(info.value.problems) == 2

    def test_validate_returns_self(self):
        vocab = default_alternative_vocabulary()
        assert vocab.validate() is vocab


# ---------------------------------------------------------------------------
# Edits and serialisation
# ---------------------------------------------------------------------------

class TestEdits:
    def test_with_term_replaces_in_place_order(self):
        vocab = default_alternative_vocabulary()
        edited = vocab.with_term(_term("F", 0.2, 0.5, 0.8))
        assert edited.codes == vocab.codes
        assert edited.resolve("F").as_tuple() == (0.2, 0.5, 0.8)
        assert vocab.resolve("F").as_tuple() == (0.3, 0.5, 0.7)

    def test_with_term_appends_new_code(self):
        edited = default_alternative_vocabulary().with_term(_term("EX", 0.95, 1.0, 1.0))
        assert edited.codes[-1] == "EX"
        assert len(edited) == 8

    def test_without_term(self):
        edited = default_alternative_vocabulary().without_term("VP")
        assert "VP" not in edited
        assert len(edited) == 6

    def test_list_round_trip(self):
        vocab = default_criteria_vocabulary()
        data = vocab.to_list()
        assert data[0] == {"code": "VL", "label": "Very low (VL)", "value": [0.0, 0.0, 0.1]}
        assert LinguisticTermVocabulary.from_list(data) == vocab

    def test_from_dict_label_defaults_to_code(self):
        term = LinguisticTerm.from_dict({"code": "X", "value": [0, 0.5, 1]})
        assert term.label == "X"
