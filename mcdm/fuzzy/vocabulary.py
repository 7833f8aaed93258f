# -*- coding: utf-8 -*-
"""
Linguistic Term Vocabularies
============================

A vocabulary is an ordered, immutable set of linguistic terms, each mapping
a short code (``"VL"``, ``"G"``, ...) to a triangular fuzzy number. Two
vocabularies take part in every calculation: one for criterion-importance
judgments and one for alternative-performance judgments.

Editing a vocabulary (``with_term``, ``without_term``) returns a new
instance; a vocabulary handed to a calculation is never mutated.

Default scales (seven terms each):

    =====  ===================  ==================
    Code   Criteria             TFN
    =====  ===================  ==================
    VL/VP  Very low / poor      (0.0, 0.0, 0.1)
    L/P    Low / Poor           (0.0, 0.1, 0.3)
    ML/MP  Medium low / poor    (0.1, 0.3, 0.5)
    M/F    Medium / Fair        (0.3, 0.5, 0.7)
    MH/MG  Medium high / good   (0.5, 0.7, 0.9)
    H/G    High / Good          (0.7, 0.7, 1.0)
    VH/VG  Very high / good     (0.9, 1.0, 1.0)
    =====  ===================  ==================
"""

import math
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Sequence, Tuple

from .base import TriangularFuzzyNumber


class VocabularyError(ValueError):
    """Raised when a vocabulary cannot be used for a calculation."""

    def __init__(self, problems: Sequence[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


@dataclass(frozen=True)
class LinguisticTerm:
    """A named qualitative judgment mapped to a TFN."""
    code: str
    label: str
    value: TriangularFuzzyNumber

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "label": self.label,
                "value": list(self.value.as_tuple())}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LinguisticTerm":
        code = str(data["code"])
        return cls(
            code=code,
            label=str(data.get("label", code)),
            value=TriangularFuzzyNumber.from_sequence(data["value"]),
        )


class LinguisticTermVocabulary:
    """
    Immutable ordered collection of :class:`LinguisticTerm`.

    Parameters
    ----------
    terms : iterable of LinguisticTerm
        Terms in display order. Codes should be unique; when they are not,
        :meth:`resolve` uses the last definition and :meth:`validate`
        reports the duplicate.

    Examples
    --------
    >>> vocab = default_alternative_vocabulary()
    >>> vocab.resolve("G")
    TFN(0.7000, 0.7000, 1.0000)
    >>> vocab.resolve("??")
    TFN(0.0000, 0.0000, 0.0000)
    """

    MIN_TERMS = 2

    def __init__(self, terms: Iterable[LinguisticTerm]):
        self._terms: Tuple[LinguisticTerm, ...] = tuple(terms)
        self._lookup: Dict[str, TriangularFuzzyNumber] = {
            t.code: t.value for t in self._terms
        }

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def resolve(self, code: str) -> TriangularFuzzyNumber:
        """Return the TFN for *code*, or the zero TFN for an unknown code."""
        if not isinstance(code, str):
            return TriangularFuzzyNumber.zero()
        return self._lookup.get(code, TriangularFuzzyNumber.zero())

    @property
    def terms(self) -> Tuple[LinguisticTerm, ...]:
        return self._terms

    @property
    def codes(self) -> List[str]:
        return [t.code for t in self._terms]

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self) -> Iterator[LinguisticTerm]:
        return iter(self._terms)

    def __contains__(self, code: object) -> bool:
        return code in self._lookup

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinguisticTermVocabulary):
            return NotImplemented
        return self._terms == other._terms

    def __hash__(self) -> int:
        return hash(self._terms)

    def __repr__(self) -> str:
        return f"LinguisticTermVocabulary({', '.join(self.codes)})"

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def problems(self) -> List[str]:
        """List every reason this vocabulary is unusable (empty when valid)."""
        found: List[str] = []
        if len(self._terms) < self.MIN_TERMS:
            found.append(
                f"vocabulary needs at least {self.MIN_TERMS} terms, has {len(self._terms)}"
            )
        duplicates = [code for code, n in Counter(self.codes).items() if n > 1]
        if duplicates:
            found.append(f"duplicate term codes: {', '.join(duplicates)}")
        for term in self._terms:
            if not term.code.strip():
                found.append("term with empty code")
            if not all(math.isfinite(v) for v in term.value.as_tuple()):
                found.append(f"term {term.code!r}: components must be finite, got {term.value!r}")
                continue
            if not term.value.is_ordered:
                found.append(f"term {term.code!r}: expected l <= m <= u, got {term.value!r}")
            elif term.value.is_degenerate:
                found.append(f"term {term.code!r}: l and u must differ, got {term.value!r}")
        return found

    def validate(self) -> "LinguisticTermVocabulary":
        """Raise :class:`VocabularyError` if unusable; return ``self`` otherwise."""
        found = self.problems()
        if found:
            raise VocabularyError(found)
        return self

    @property
    def is_valid(self) -> bool:
        return not self.problems()

    # ------------------------------------------------------------------
    # Immutable edits
    # ------------------------------------------------------------------

    def with_term(self, term: LinguisticTerm) -> "LinguisticTermVocabulary":
        """Return a copy where *term* replaces the term with the same code,
        or is appended when the code is new."""
        if term.code in self._lookup:
            return LinguisticTermVocabulary(
                term if t.code == term.code else t for t in self._terms
            )
        return LinguisticTermVocabulary(self._terms + (term,))

    def without_term(self, code: str) -> "LinguisticTermVocabulary":
        """Return a copy without the term(s) using *code*."""
        return LinguisticTermVocabulary(t for t in self._terms if t.code != code)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def to_list(self) -> List[Dict[str, Any]]:
        return [t.to_dict() for t in self._terms]

    @classmethod
    def from_list(cls, data: Iterable[Dict[str, Any]]) -> "LinguisticTermVocabulary":
        return cls(LinguisticTerm.from_dict(item) for item in data)


def _scale(rows: Sequence[Tuple[str, str, Tuple[float, float, float]]]
           ) -> Tuple[LinguisticTerm, ...]:
    return tuple(
        LinguisticTerm(code, label, TriangularFuzzyNumber(*tri))
        for code, label, tri in rows
    )


# Linguistic scale for criterion importance
CRITERIA_TERMS: Tuple[LinguisticTerm, ...] = _scale([
    ("VL", "Very low (VL)", (0.0, 0.0, 0.1)),
    ("L", "Low (L)", (0.0, 0.1, 0.3)),
    ("ML", "Medium low (ML)", (0.1, 0.3, 0.5)),
    ("M", "Medium (M)", (0.3, 0.5, 0.7)),
    ("MH", "Medium high (MH)", (0.5, 0.7, 0.9)),
    ("H", "High (H)", (0.7, 0.7, 1.0)),
    ("VH", "Very high (VH)", (0.9, 1.0, 1.0)),
])

# Linguistic scale for alternative performance
ALTERNATIVE_TERMS: Tuple[LinguisticTerm, ...] = _scale([
    ("VP", "Very poor (VP)", (0.0, 0.0, 0.1)),
    ("P", "Poor (P)", (0.0, 0.1, 0.3)),
    ("MP", "Medium poor (MP)", (0.1, 0.3, 0.5)),
    ("F", "Fair (F)", (0.3, 0.5, 0.7)),
    ("MG", "Medium good (MG)", (0.5, 0.7, 0.9)),
    ("G", "Good (G)", (0.7, 0.7, 1.0)),
    ("VG", "Very good (VG)", (0.9, 1.0, 1.0)),
])


def default_criteria_vocabulary() -> LinguisticTermVocabulary:
    return LinguisticTermVocabulary(CRITERIA_TERMS)


def default_alternative_vocabulary() -> LinguisticTermVocabulary:
    return LinguisticTermVocabulary(ALTERNATIVE_TERMS)


__all__ = [
    'VocabularyError',
    'LinguisticTerm',
    'LinguisticTermVocabulary',
    'CRITERIA_TERMS',
    'ALTERNATIVE_TERMS',
    'default_criteria_vocabulary',
    'default_alternative_vocabulary',
]
