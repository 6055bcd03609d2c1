"""Anchor records – exact matches between a reference and a query sequence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple


RawAnchor = Tuple[int, int, int]


@dataclass
class Anchor:
    """One exact match: ``length`` bases starting at *start_ref* / *start_query*.

    The filter-phase flags (``live``, ``tentative``) and the chain-phase
    fields (``in_chain`` and the DP scratch values) are kept apart so that
    nothing set by one phase leaks into the next.
    """

    start_ref: int
    start_query: int
    length: int
    cluster_id: int = -1

    # filter phase
    live: bool = False
    tentative: bool = False

    # chain phase
    in_chain: bool = False
    chain_score: int = 0
    predecessor: Optional[int] = None
    overlap_adjustment: int = 0

    def __post_init__(self) -> None:
        if self.start_ref < 0 or self.start_query < 0:
            raise ValueError(
                f"Anchor positions must be non-negative, got "
                f"({self.start_ref}, {self.start_query})"
            )
        if self.length <= 0:
            raise ValueError(f"Anchor length must be positive, got {self.length}")

    @property
    def diagonal(self) -> int:
        return self.start_query - self.start_ref

    @property
    def end_ref(self) -> int:
        return self.start_ref + self.length

    @property
    def end_query(self) -> int:
        return self.start_query + self.length

    @classmethod
    def from_tuple(cls, raw: RawAnchor) -> "Anchor":
        start_ref, start_query, length = raw
        return cls(int(start_ref), int(start_query), int(length))

    def as_tuple(self) -> RawAnchor:
        return (self.start_ref, self.start_query, self.length)

    def fresh_copy(self) -> "Anchor":
        """Copy coordinates and cluster membership, with all phase state cleared."""
        return Anchor(self.start_ref, self.start_query, self.length, self.cluster_id)


def by_query(anchor: Anchor) -> Tuple[int, int]:
    """Sort key: query position, then reference position."""
    return (anchor.start_query, anchor.start_ref)


def by_cluster(anchor: Anchor) -> Tuple[int, int, int]:
    """Sort key: cluster id, then query position, then reference position."""
    return (anchor.cluster_id, anchor.start_query, anchor.start_ref)


def make_anchors(raw: Iterable[RawAnchor]) -> List[Anchor]:
    """Build a fresh anchor list for one query from raw triples."""
    return [Anchor.from_tuple(r) for r in raw]
