"""Anchor chaining module – extracts best-scoring chains from a cluster via dynamic programming."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from gapchain.anchor import Anchor
from gapchain.params import ClusterParams


@dataclass
class ChainRecord:
    """One anchor of an emitted chain, trimmed so it does not overlap its predecessor.

    *overlap* is the number of leading bases trimmed, or ``None`` when
    nothing was trimmed.  The gaps are measured from the predecessor's end
    on each axis and are ``None`` for the first record of a chain.
    """

    start_ref: int
    start_query: int
    length: int
    overlap: Optional[int] = None
    ref_gap: Optional[int] = None
    query_gap: Optional[int] = None

    @property
    def end_ref(self) -> int:
        return self.start_ref + self.length

    @property
    def end_query(self) -> int:
        return self.start_query + self.length


@dataclass
class Chain:
    """A co-linear run of anchors selected from one cluster."""

    records: List[ChainRecord] = field(default_factory=list)
    anchors: List[Anchor] = field(default_factory=list)
    total_length: int = 0
    extent: int = 0
    score: int = 0
    cluster_id: int = -1

    def __len__(self) -> int:
        return len(self.records)


def score_anchors(anchors: Sequence[Anchor]) -> None:
    """Fill in the DP fields of *anchors*, which must be in query order.

    An anchor extends the best earlier chain after paying a penalty equal
    to the overlap with that chain's last anchor plus their diagonal
    difference.  The first predecessor reaching the best score wins.
    """
    for i, ai in enumerate(anchors):
        ai.chain_score = ai.length
        ai.predecessor = None
        ai.overlap_adjustment = 0
        ai.in_chain = False
        for j in range(i):
            aj = anchors[j]
            olap = max(0, aj.end_ref - ai.start_ref, aj.end_query - ai.start_query)
            penalty = olap + abs(ai.diagonal - aj.diagonal)
            candidate = aj.chain_score + ai.length - penalty
            if candidate > ai.chain_score:
                ai.chain_score = candidate
                ai.predecessor = j
                ai.overlap_adjustment = olap


def trace_best_chain(anchors: Sequence[Anchor]) -> List[int]:
    """Mark the highest-scoring chain ``in_chain`` and return its indices in order."""
    best = 0
    for i in range(1, len(anchors)):
        if anchors[i].chain_score > anchors[best].chain_score:
            best = i

    indices: List[int] = []
    cur: Optional[int] = best
    while cur is not None:
        anchors[cur].in_chain = True
        indices.append(cur)
        cur = anchors[cur].predecessor
    indices.reverse()
    return indices


def build_chain(members: Sequence[Anchor], use_extents: bool = False) -> Chain:
    """Turn chained anchors (in chain order) into trimmed output records."""
    total = sum(a.length for a in members)
    extent = max(a.end_ref for a in members) - min(a.start_ref for a in members)

    records: List[ChainRecord] = []
    prev: Optional[Anchor] = None
    for a in members:
        if prev is None:
            records.append(ChainRecord(a.start_ref, a.start_query, a.length))
        else:
            adj = a.overlap_adjustment
            start_ref = a.start_ref + adj
            start_query = a.start_query + adj
            records.append(ChainRecord(
                start_ref,
                start_query,
                a.length - adj,
                overlap=adj if adj else None,
                ref_gap=start_ref - prev.end_ref,
                query_gap=start_query - prev.end_query,
            ))
        prev = a

    return Chain(
        records=records,
        anchors=[a.fresh_copy() for a in members],
        total_length=total,
        extent=extent,
        score=extent if use_extents else total,
        cluster_id=members[0].cluster_id,
    )


def select_chains(cluster: Sequence[Anchor], params: ClusterParams) -> List[Chain]:
    """Repeatedly extract the best chain from *cluster* until no anchors remain.

    *cluster* must be sorted by query position, then reference position.
    Chains scoring below ``params.min_output_score`` are discarded; their
    anchors are still consumed.  Returns the kept chains in extraction order.
    """
    work = list(cluster)
    chains: List[Chain] = []

    while work:
        score_anchors(work)
        indices = trace_best_chain(work)
        chain = build_chain([work[i] for i in indices], use_extents=params.use_extents)
        if chain.score >= params.min_output_score:
            chains.append(chain)
        work = [a for a in work if not a.in_chain]

    return chains
