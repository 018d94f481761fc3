"""
Lemma templates and side conditions.

Both lemmas use a 4×5 template and the same two excluded equalities
(0-indexed here; 1->2 = 3->2 and 1->2 = 5->2 in 1-indexed form).
"""

from typing import Dict, FrozenSet

from lemma_core.errors import InvalidLemmaError
from lemma_core.types import Edge, EqualityPair, Matrix, normalize_equality

LEMMA_PATTERNS: Dict[int, Matrix] = {
    1: (
        "01?1?",
        "10?0?",
        "?01?1",
        "?10?0",
    ),
    2: (
        "01?0?",
        "10?1?",
        "?01?1",
        "?10?0",
    ),
}

EXCLUDED_EQUALITIES: FrozenSet[EqualityPair] = frozenset({
    normalize_equality(Edge(0, 1), Edge(2, 1)),
    normalize_equality(Edge(0, 1), Edge(4, 1)),
})


def get_lemma_pattern(lemma: int) -> Matrix:
    """Template for a lemma id; raises InvalidLemmaError for unknown ids."""
    try:
        return LEMMA_PATTERNS[lemma]
    except (KeyError, TypeError):
        raise InvalidLemmaError(
            f"Lemma must be one of {sorted(LEMMA_PATTERNS)}, got {lemma!r}"
        ) from None
