"""
Error hierarchy for the prover.

Every error here is a precondition or invariant violation. None of them is
recoverable: callers let them propagate and the CLI exits non-zero.
"""


class LemmaError(Exception):
    """Base class for prover errors."""


class MalformedPatternError(LemmaError, ValueError):
    """Template or matrix is empty, ragged, or uses symbols outside {0,1,?}."""


class InvalidLemmaError(LemmaError, ValueError):
    """Lemma selector is not one of the known lemma ids."""


class InvariantViolation(LemmaError, AssertionError):
    """Internal invariant broken (color pairing, normalization order, ...)."""
