"""Cluster builder – group anchors that lie on nearby diagonals."""

from __future__ import annotations

from itertools import groupby
from typing import List, Sequence

from gapchain.anchor import Anchor, by_cluster
from gapchain.params import ClusterParams
from gapchain.unionfind import UnionFind


def are_proximate(first: Anchor, second: Anchor, params: ClusterParams) -> bool:
    """True when *second*, downstream of *first* in the query, may join its cluster.

    The query gap must not exceed ``max_separation`` and the diagonal
    difference must stay within the gap-dependent tolerance.
    """
    sep = second.start_query - first.end_query
    if sep > params.max_separation:
        return False
    return abs(second.diagonal - first.diagonal) <= params.diagonal_tolerance(sep)


def label_clusters(anchors: Sequence[Anchor], params: ClusterParams) -> List[Anchor]:
    """Set ``cluster_id`` on every anchor and return them ordered by cluster.

    *anchors* must be sorted by query position (as returned by
    :func:`gapchain.filter.filter_matches`).
    """
    n = len(anchors)
    uf = UnionFind(n)

    for i in range(n - 1):
        ai = anchors[i]
        for j in range(i + 1, n):
            aj = anchors[j]
            # sorted by query start, so no later anchor can be closer
            if aj.start_query - ai.end_query > params.max_separation:
                break
            if are_proximate(ai, aj, params):
                uf.union(uf.find(i), uf.find(j))

    for i, a in enumerate(anchors):
        a.cluster_id = uf.find(i)

    return sorted(anchors, key=by_cluster)


def build_clusters(anchors: Sequence[Anchor], params: ClusterParams) -> List[List[Anchor]]:
    """Partition filtered anchors into clusters, each sorted by query position."""
    ordered = label_clusters(anchors, params)
    return [list(members) for _, members in groupby(ordered, key=lambda a: a.cluster_id)]
