"""
gapchain: cluster exact matches between a query and a reference into
longer gapped alignments.

Anchors are filtered for repeats, grouped into clusters of nearby
diagonals with a union-find, and each cluster is then mined for its
best-scoring chains.
"""

__version__ = "0.1.0"

from gapchain.anchor import Anchor
from gapchain.params import ClusterParams
from gapchain.filter import filter_matches
from gapchain.cluster import build_clusters
from gapchain.chain import Chain, ChainRecord, select_chains
from gapchain.engine import MatchClusterer, QueryResult
from gapchain.io import read_match_batches, write_results

__all__ = [
    "Anchor",
    "ClusterParams",
    "filter_matches",
    "build_clusters",
    "Chain",
    "ChainRecord",
    "select_chains",
    "MatchClusterer",
    "QueryResult",
    "read_match_batches",
    "write_results",
]
