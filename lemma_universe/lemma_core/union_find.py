"""
Disjoint-set forest over a fixed integer universe [0, n).

Two parallel integer arrays:
- parent[x] >= 0: parent pointer; parent[x] < 0: x is a root of a set of size -parent[x]
- normalized[x]: dense label of x's class when that class has size > 1, else -1

Union by size, path compression on find. normalize_nontrivial() is a one-shot
pass that runs after all joins.
"""

from typing import Dict, List

import numpy as np

from .errors import InvariantViolation

UNSET = -1


class DisjointSetForest:
    """Union-find with size-based union and path compression."""

    def __init__(self, n: int):
        if n < 0:
            raise ValueError(f"Universe size must be non-negative, got {n}")
        self.parent = np.full(n, -1, dtype=np.int64)
        self.normalized = np.full(n, UNSET, dtype=np.int64)
        self._is_normalized = False

    def __len__(self) -> int:
        return int(self.parent.shape[0])

    def find(self, x: int) -> int:
        """Canonical representative of x, compressing the path walked."""
        root = x
        while self.parent[root] >= 0:
            root = int(self.parent[root])

        while x != root:
            nxt = int(self.parent[x])
            self.parent[x] = root
            x = nxt

        return root

    def join(self, a: int, b: int) -> bool:
        """
        Merge the sets of a and b; the larger tree's root stays root.

        Returns:
            True if a merge happened, False if a and b were already joined
        """
        if self._is_normalized:
            raise InvariantViolation("join() after normalize_nontrivial()")

        a, b = self.find(a), self.find(b)
        if a == b:
            return False

        # parent holds negative sizes, so the more negative root is larger
        if self.parent[a] > self.parent[b]:
            a, b = b, a
        self.parent[a] += self.parent[b]
        self.parent[b] = a
        return True

    def same_set(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)

    def size(self, x: int) -> int:
        return int(-self.parent[self.find(x)])

    def normalize_nontrivial(self) -> int:
        """
        Assign dense labels 0..L-1 to classes of size > 1.

        Labels follow first encounter by element index. Singletons keep -1.

        Returns:
            Number of labels assigned (L)

        Raises:
            InvariantViolation: If called twice
        """
        if self._is_normalized:
            raise InvariantViolation("normalize_nontrivial() may only run once")

        index = 0
        for x in range(len(self)):
            if self.size(x) > 1:
                root = self.find(x)
                if self.normalized[root] == UNSET:
                    self.normalized[root] = index
                    index += 1
                self.normalized[x] = self.normalized[root]

        self._is_normalized = True
        return index

    def label(self, x: int) -> int:
        """Dense label of x (-1 for singletons). Requires normalize_nontrivial()."""
        if not self._is_normalized:
            raise InvariantViolation("label() read before normalize_nontrivial()")
        return int(self.normalized[x])

    def classes(self) -> List[List[int]]:
        """Elements grouped by class, classes ordered by smallest member."""
        by_root: Dict[int, List[int]] = {}
        for x in range(len(self)):
            by_root.setdefault(self.find(x), []).append(x)
        return sorted(by_root.values(), key=lambda members: members[0])
