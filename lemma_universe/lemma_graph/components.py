"""
Edge-equality graph for a single binary matrix.

For a completed matrix with M columns, every ordered column pair (i, j) is a
directed edge slot. A row pair (a, b) and columns (i, j, k) force two edges
equal when row a reads (v, ~v, v) and row b reads (~v, v, ~v) on (i, j, k):
then i->j = k->j and, symmetrically, j->i = j->k.

Pipeline per matrix:
1. Slot table: bijection ordered pairs (i != j) -> [0, M*(M-1))
2. Scan all (i, j, k) and row pairs, joining forced slots in a DisjointSetForest
3. Contradiction: some edge shares a class with its reverse -> no graph
4. Colors: dense labels for non-trivial classes, then fold each class with its
   reverse class into one final color
5. Edge lists per final color

The equalities found in step 2 are kept even when step 3 rejects the matrix.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Sequence, Set, Tuple

import numpy as np

from lemma_core.errors import InvariantViolation
from lemma_core.pattern import validate_matrix
from lemma_core.types import ONE, ZERO, Edge, EqualityPair, Matrix, normalize_equality
from lemma_core.union_find import UNSET, DisjointSetForest

logger = logging.getLogger(__name__)

# Column count marker for a matrix that admits no colorful graph
NO_GRAPH = -1

# Provisional color already represented by its reverse class
CONSUMED = -2


# =============================================================================
# Types
# =============================================================================


@dataclass(frozen=True)
class ComponentsGraph:
    """
    Colorful graph of one matrix.

    - M: number of columns, or NO_GRAPH when a contradiction was found
    - equalities: every normalized equality discovered while scanning
    - edges_for_color: one tuple of edges per final color (empty when NO_GRAPH)
    - color_of_edge: (src, dst) and (dst, src) -> color, for every listed edge
    """
    M: int
    equalities: FrozenSet[EqualityPair]
    edges_for_color: Tuple[Tuple[Edge, ...], ...] = ()
    color_of_edge: Dict[Tuple[int, int], int] = field(
        default_factory=dict, compare=False, repr=False
    )

    @classmethod
    def from_colors(
        cls,
        M: int,
        equalities: Iterable[EqualityPair],
        edges_for_color: Sequence[Sequence[Edge]],
    ) -> "ComponentsGraph":
        color_of_edge: Dict[Tuple[int, int], int] = {}
        for color, edges in enumerate(edges_for_color):
            for e in edges:
                color_of_edge[(e.src, e.dst)] = color
                color_of_edge[(e.dst, e.src)] = color

        return cls(
            M=M,
            equalities=frozenset(equalities),
            edges_for_color=tuple(tuple(edges) for edges in edges_for_color),
            color_of_edge=color_of_edge,
        )

    @classmethod
    def no_graph(cls, equalities: Iterable[EqualityPair]) -> "ComponentsGraph":
        return cls(M=NO_GRAPH, equalities=frozenset(equalities))

    @property
    def is_no_graph(self) -> bool:
        return self.M == NO_GRAPH

    @property
    def num_colors(self) -> int:
        return len(self.edges_for_color)


# =============================================================================
# Slot table and forcing rule
# =============================================================================


def edge_slot_table(M: int) -> np.ndarray:
    """
    M×M table of slot ids; diagonal is -1.

    Walking i < j in row-major order, (i, j) takes the next slot and (j, i)
    the one right after it, so slots 2t and 2t+1 are reverses of each other.
    """
    edge = np.full((M, M), -1, dtype=np.int64)
    index = 0
    for i in range(M):
        for j in range(i + 1, M):
            edge[i, j] = index
            edge[j, i] = index + 1
            index += 2
    return edge


def _flip(bit: str) -> str:
    return ZERO if bit == ONE else ONE


def matches_forcing_pattern(
    matrix: Matrix, a: int, b: int, i: int, j: int, k: int
) -> bool:
    """True when row a reads (v, ~v, v) and row b reads (~v, v, ~v) on columns (i, j, k)."""
    v = matrix[a][i]
    w = _flip(v)
    return (
        matrix[a][j] == w
        and matrix[a][k] == v
        and matrix[b][i] == w
        and matrix[b][j] == v
        and matrix[b][k] == w
    )


# =============================================================================
# Builder
# =============================================================================


def _propagate(
    matrix: Matrix, edge: np.ndarray, forest: DisjointSetForest
) -> Set[EqualityPair]:
    """Apply the forcing rule over all column triples and row pairs."""
    N, M = len(matrix), len(matrix[0])
    equalities: Set[EqualityPair] = set()

    for i in range(M):
        for j in range(M):
            if j == i:
                continue
            for k in range(i + 1, M):
                if k == j:
                    continue
                for a in range(N):
                    for b in range(a + 1, N):
                        if not matches_forcing_pattern(matrix, a, b, i, j, k):
                            continue
                        forest.join(int(edge[i, j]), int(edge[k, j]))
                        forest.join(int(edge[j, i]), int(edge[j, k]))
                        equalities.add(normalize_equality(Edge(i, j), Edge(k, j)))

    return equalities


def _find_contradiction(
    M: int, edge: np.ndarray, forest: DisjointSetForest
) -> Tuple[int, int]:
    """First (i, j) with i < j whose two directions share a class, else (-1, -1)."""
    for i in range(M):
        for j in range(i + 1, M):
            if forest.same_set(int(edge[i, j]), int(edge[j, i])):
                return (i, j)
    return (-1, -1)


def _color_edges(
    M: int, edge: np.ndarray, forest: DisjointSetForest
) -> List[List[Edge]]:
    """
    Group non-singleton edges into final colors.

    Provisional colors are the forest's dense labels. Each class comes with a
    reverse class (every join is mirrored), so walking i < j the first sighting
    of a provisional color opens a final color and marks the reverse's
    provisional color as consumed. Edges of consumed colors are not listed.

    Raises:
        InvariantViolation: If provisional colors do not pair up
    """
    forest.normalize_nontrivial()

    color = np.full((M, M), UNSET, dtype=np.int64)
    max_color = -2
    for i in range(M):
        for j in range(M):
            if i != j and forest.size(int(edge[i, j])) > 1:
                color[i, j] = forest.label(int(edge[i, j]))
                max_color = max(max_color, int(color[i, j]))

    renormalized = np.full(max(0, max_color + 1), UNSET, dtype=np.int64)
    new_colors = 0
    for i in range(M):
        for j in range(i + 1, M):
            provisional = int(color[i, j])
            if provisional < 0 or renormalized[provisional] != UNSET:
                continue
            reverse = int(color[j, i])
            if reverse < 0:
                raise InvariantViolation(
                    f"Edge {i}->{j} is in a non-trivial class but {j}->{i} is a singleton"
                )
            renormalized[provisional] = new_colors
            renormalized[reverse] = CONSUMED
            new_colors += 1

    if new_colors - 1 != max_color // 2:
        raise InvariantViolation(
            f"Color pairing mismatch: {new_colors} final colors for "
            f"max provisional label {max_color}"
        )

    edges_for_color: List[List[Edge]] = [[] for _ in range(new_colors)]
    for i in range(M):
        for j in range(M):
            if i == j or color[i, j] < 0:
                continue
            final = int(renormalized[color[i, j]])
            if final >= 0:
                edges_for_color[final].append(Edge(i, j))

    return edges_for_color


def build_components_graph(matrix: Sequence[str]) -> ComponentsGraph:
    """
    Build the colorful graph of a completed binary matrix.

    Args:
        matrix: N >= 1 rows over {0,1}, all of length M

    Returns:
        ComponentsGraph; ComponentsGraph.no_graph(equalities) on contradiction

    Raises:
        MalformedPatternError: Empty, ragged or non-binary matrix
        InvariantViolation: Color pairing failed
    """
    matrix = validate_matrix(matrix, allow_wildcards=False)
    M = len(matrix[0])

    edge = edge_slot_table(M)
    forest = DisjointSetForest(M * (M - 1))

    equalities = _propagate(matrix, edge, forest)

    i, j = _find_contradiction(M, edge, forest)
    if i >= 0:
        logger.debug("Contradiction: %d->%d shares a class with %d->%d", i, j, j, i)
        return ComponentsGraph.no_graph(equalities)

    edges_for_color = _color_edges(M, edge, forest)
    return ComponentsGraph.from_colors(M, equalities, edges_for_color)
