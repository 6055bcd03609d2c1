"""Weighted union-find with path compression over anchor indices."""

from __future__ import annotations

from typing import Dict, List

import numpy as np


class UnionFindError(RuntimeError):
    """Raised when the union-find is used outside its contract."""


class UnionFind:
    """Disjoint sets over the indices ``0 .. size - 1``.

    A negative entry marks a root whose set has ``-entry`` members; any
    other entry is the index of the parent.
    """

    def __init__(self, size: int):
        if size < 0:
            raise UnionFindError(f"Union-find size must be non-negative, got {size}")
        self._parent = np.full(size, -1, dtype=np.int64)

    def __len__(self) -> int:
        return len(self._parent)

    def _check(self, a: int) -> None:
        if not 0 <= a < len(self._parent):
            raise UnionFindError(f"Index {a} out of range for union-find of size {len(self)}")

    def find(self, a: int) -> int:
        """Return the root of the set containing *a*, compressing the path to it."""
        self._check(a)
        parent = self._parent
        root = a
        while parent[root] >= 0:
            root = int(parent[root])
        while a != root:
            nxt = int(parent[a])
            parent[a] = root
            a = nxt
        return root

    def union(self, a: int, b: int) -> int:
        """Merge the sets rooted at *a* and *b*; return the surviving root.

        Both arguments must be roots.  The smaller set is attached under the
        larger; on a tie *a* goes under *b*.
        """
        self._check(a)
        self._check(b)
        if a == b:
            return a
        parent = self._parent
        if parent[a] >= 0 or parent[b] >= 0:
            raise UnionFindError(f"union({a}, {b}) called on a non-root index")

        if parent[a] < parent[b]:
            parent[a] += parent[b]
            parent[b] = a
            return a
        parent[b] += parent[a]
        parent[a] = b
        return b

    def size_of(self, a: int) -> int:
        """Number of members in the set containing *a*."""
        return int(-self._parent[self.find(a)])

    def groups(self) -> Dict[int, List[int]]:
        """Map each root to its members in increasing index order."""
        out: Dict[int, List[int]] = {}
        for i in range(len(self._parent)):
            out.setdefault(self.find(i), []).append(i)
        return out
