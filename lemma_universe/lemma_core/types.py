"""
Core type definitions for the edge-equality prover.

Provides:
- Matrix: tuple of equal-length row strings over {0,1} (or {0,1,?} for templates)
- Edge: directed column pair (src -> dst), 0-indexed
- EqualityPair: normalized pair of edges sharing a pivot column
- normalize_equality: canonical form of an equality between two edges
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from .errors import InvariantViolation

# Matrix representation: Matrix[r][c] in {'0', '1'} ('?' allowed in templates)
Matrix = Tuple[str, ...]

# Cell alphabet
ZERO = "0"
ONE = "1"
WILDCARD = "?"


def as_matrix(rows: Sequence[str]) -> Matrix:
    """Freeze a row sequence into a Matrix (tuple of str)."""
    return tuple(str(row) for row in rows)


@dataclass(frozen=True, order=True)
class Edge:
    """Directed relation between two columns, ordered lex on (src, dst)."""
    src: int
    dst: int

    def __iter__(self):
        """Allow tuple unpacking: src, dst = edge"""
        return iter((self.src, self.dst))

    def reversed(self) -> "Edge":
        """Complementary edge (dst -> src)."""
        return Edge(self.dst, self.src)

    def one_indexed(self) -> str:
        return f"{self.src + 1}->{self.dst + 1}"


@dataclass(frozen=True, order=True)
class EqualityPair:
    """
    Equality between two directed edges that share a pivot column.

    Build instances through normalize_equality(); a normalized pair satisfies
    first.dst == second.dst and first.src < second.src.
    """
    first: Edge
    second: Edge

    @property
    def pivot(self) -> int:
        return self.first.dst

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """0-indexed (a, b, c, d) for a->b = c->d."""
        return (self.first.src, self.first.dst, self.second.src, self.second.dst)

    def format_one_indexed(self) -> str:
        """Render as '<a>-><b> = <c>-><d>' with 1-indexed columns."""
        return f"{self.first.one_indexed()} = {self.second.one_indexed()}"


def normalize_equality(first: Edge, second: Edge) -> EqualityPair:
    """
    Canonical form of the equality first = second.

    Steps:
    1. If both edges leave the same column, flip both (use the reverse view,
       so that they share the destination column instead)
    2. Check that the edges share the destination and differ in source
    3. Order by source column

    Raises:
        InvariantViolation: If the edges cannot be expressed around a common pivot

    Examples:
        >>> normalize_equality(Edge(4, 0), Edge(2, 0))
        EqualityPair(first=Edge(src=2, dst=0), second=Edge(src=4, dst=0))
        >>> normalize_equality(Edge(0, 2), Edge(0, 4))
        EqualityPair(first=Edge(src=2, dst=0), second=Edge(src=4, dst=0))
    """
    if first.src == second.src:
        first, second = first.reversed(), second.reversed()

    if first.dst != second.dst:
        raise InvariantViolation(
            f"Equality {first} = {second} does not share a pivot column"
        )
    if first.src == second.src:
        raise InvariantViolation(
            f"Equality {first} = {second} relates an edge to itself"
        )

    if first.src > second.src:
        first, second = second, first

    return EqualityPair(first, second)
