"""
Exhaustive lemma prover.

API:
    prove_pattern(pattern, excluded, on_abiding=None) -> ProofResult
    prove_lemma(lemma, on_abiding=None) -> ProofResult
    format_guaranteed(result) -> list of output lines

For every completion of the template:
1. Build its colorful graph; skip it if a contradiction was found
2. Skip it if its equalities contain an excluded equality
3. Otherwise it is abiding: intersect its equalities into the running result

The guaranteed equalities are those present in every abiding completion.
No abiding completion means no guaranteed equality.
"""

import logging
from dataclasses import dataclass
from typing import AbstractSet, Callable, FrozenSet, List, Optional, Sequence, Tuple

from lemma_core.pattern import expand_pattern
from lemma_core.types import EqualityPair
from lemma_graph.components import build_components_graph

from .lemmas import EXCLUDED_EQUALITIES, get_lemma_pattern

logger = logging.getLogger(__name__)

OUTPUT_PREFIX = "Guaranteed edge in formula graph: "


@dataclass(frozen=True)
class ProofResult:
    """
    Outcome of an exhaustive run.

    - guaranteed: equalities common to all abiding completions, sorted
    - candidates: number of completions examined
    - contradictions: completions with no colorful graph
    - excluded: completions rejected by a side condition
    - abiding: completions that entered the intersection
    """
    guaranteed: Tuple[EqualityPair, ...]
    candidates: int
    contradictions: int
    excluded: int
    abiding: int


def prove_pattern(
    pattern: Sequence[str],
    excluded: AbstractSet[EqualityPair] = EXCLUDED_EQUALITIES,
    on_abiding: Optional[Callable[[int], None]] = None,
) -> ProofResult:
    """
    Intersect the equalities of all abiding completions of a template.

    Args:
        pattern: Template rows over {0,1,?}
        excluded: Normalized equalities that disqualify a completion
        on_abiding: Called with the 1-based running count of each abiding completion

    Returns:
        ProofResult with the guaranteed equalities and per-category counts
    """
    matrices = expand_pattern(pattern)

    common: Optional[FrozenSet[EqualityPair]] = None
    contradictions = 0
    rejected = 0
    abiding = 0

    for matrix in matrices:
        graph = build_components_graph(matrix)
        if graph.is_no_graph:
            contradictions += 1
            continue
        if not excluded.isdisjoint(graph.equalities):
            rejected += 1
            continue

        abiding += 1
        if on_abiding is not None:
            on_abiding(abiding)

        common = graph.equalities if common is None else common & graph.equalities

    guaranteed = tuple(sorted(common)) if common is not None else ()
    logger.debug(
        "Examined %d matrices: %d contradictory, %d excluded, %d abiding, %d guaranteed",
        len(matrices), contradictions, rejected, abiding, len(guaranteed),
    )

    return ProofResult(
        guaranteed=guaranteed,
        candidates=len(matrices),
        contradictions=contradictions,
        excluded=rejected,
        abiding=abiding,
    )


def prove_lemma(
    lemma: int, on_abiding: Optional[Callable[[int], None]] = None
) -> ProofResult:
    """Run prove_pattern on a lemma's template with the shared side conditions."""
    return prove_pattern(get_lemma_pattern(lemma), EXCLUDED_EQUALITIES, on_abiding)


def format_guaranteed(result: ProofResult) -> List[str]:
    """One 'Guaranteed edge in formula graph: a->b = c->d' line per equality (1-indexed)."""
    return [OUTPUT_PREFIX + eq.format_one_indexed() for eq in result.guaranteed]
