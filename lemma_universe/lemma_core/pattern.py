"""
Pattern expansion: template over {0,1,?} -> every binary completion.

Provides:
- validate_matrix: shape/alphabet checks shared by templates and completions
- wildcard_positions: '?' cells in row-major order
- expand_pattern: all 2^K completions, ordered by increasing bitmask
- extract_mask: recover the bitmask that produced a completion

Bit `index` of the mask fills wildcard `index` (row-major scan order):
set -> '1', clear -> '0'.
"""

import logging
from typing import List, Sequence, Tuple

from .errors import MalformedPatternError
from .types import ONE, WILDCARD, ZERO, Matrix, as_matrix

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]  # (row, col)

_TEMPLATE_ALPHABET = frozenset({ZERO, ONE, WILDCARD})
_BINARY_ALPHABET = frozenset({ZERO, ONE})


def validate_matrix(rows: Sequence[str], allow_wildcards: bool = True) -> Matrix:
    """
    Check that rows form a non-empty rectangular matrix over the alphabet.

    Args:
        rows: Row strings
        allow_wildcards: Accept '?' cells (templates) or only 0/1 (completions)

    Returns:
        The rows frozen as a Matrix

    Raises:
        MalformedPatternError: Empty input, ragged rows, or foreign symbols
    """
    matrix = as_matrix(rows)
    if len(matrix) == 0:
        raise MalformedPatternError("Matrix must have at least one row")

    width = len(matrix[0])
    alphabet = _TEMPLATE_ALPHABET if allow_wildcards else _BINARY_ALPHABET

    for r, row in enumerate(matrix):
        if len(row) != width:
            raise MalformedPatternError(
                f"Row {r} has length {len(row)}, expected {width}"
            )
        foreign = set(row) - alphabet
        if foreign:
            raise MalformedPatternError(
                f"Row {r} contains symbols {sorted(foreign)} outside {sorted(alphabet)}"
            )

    return matrix


def wildcard_positions(pattern: Sequence[str]) -> List[Cell]:
    """Return (row, col) of every '?' cell in row-major order."""
    matrix = validate_matrix(pattern)
    return [
        (r, c)
        for r, row in enumerate(matrix)
        for c, symbol in enumerate(row)
        if symbol == WILDCARD
    ]


def expand_pattern(pattern: Sequence[str]) -> List[Matrix]:
    """
    Enumerate every binary completion of a template.

    Args:
        pattern: N rows over {0,1,?}, N >= 1

    Returns:
        2^K matrices (K = number of '?'), the m-th built from bitmask m

    Raises:
        MalformedPatternError: If the template is empty or malformed
    """
    matrix = validate_matrix(pattern)
    positions = wildcard_positions(matrix)

    cells = [list(row) for row in matrix]
    completions: List[Matrix] = []

    for mask in range(1 << len(positions)):
        for index, (r, c) in enumerate(positions):
            cells[r][c] = ONE if mask & (1 << index) else ZERO
        completions.append(tuple("".join(row) for row in cells))

    logger.debug(
        "Expanded %dx%d template with %d wildcards into %d matrices",
        len(matrix), len(matrix[0]), len(positions), len(completions),
    )
    return completions


def extract_mask(matrix: Sequence[str], positions: Sequence[Cell]) -> int:
    """Read the wildcard bits of a completion back into its bitmask."""
    mask = 0
    for index, (r, c) in enumerate(positions):
        if matrix[r][c] == ONE:
            mask |= 1 << index
    return mask
