"""
Exhaustive lemma proving: template → completions → colorful graphs → intersection.

Modules:
- lemmas.py: lemma templates and excluded equalities
- prover.py: prove_pattern / prove_lemma and output formatting
- receipts.py: JSON run receipts
- cli.py: stdin/stdout entry point
"""

from .lemmas import EXCLUDED_EQUALITIES, LEMMA_PATTERNS, get_lemma_pattern
from .prover import ProofResult, format_guaranteed, prove_lemma, prove_pattern

__all__ = [
    "EXCLUDED_EQUALITIES",
    "LEMMA_PATTERNS",
    "get_lemma_pattern",
    "ProofResult",
    "format_guaranteed",
    "prove_lemma",
    "prove_pattern",
]
