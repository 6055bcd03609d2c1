"""Clustering engine – filters, clusters and chains the anchors of each query."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from gapchain.anchor import RawAnchor, make_anchors
from gapchain.chain import Chain, select_chains
from gapchain.cluster import build_clusters
from gapchain.filter import filter_matches
from gapchain.params import ClusterParams

logger = logging.getLogger(__name__)

CONTINUATION_MARKER = "#"


@dataclass
class QueryResult:
    """Chains found for one query, plus counts from each stage."""

    label: str
    chains: List[Chain] = field(default_factory=list)
    n_anchors: int = 0
    n_filtered: int = 0
    n_clusters: int = 0

    def blocks(self) -> Iterator[Tuple[str, Optional[Chain]]]:
        """Yield ``(heading, chain)`` pairs in output order.

        The first chain is headed by the query label and later ones by the
        continuation marker.  A query without chains yields the label alone.
        """
        if not self.chains:
            yield self.label, None
            return
        heading = self.label
        for chain in self.chains:
            yield heading, chain
            heading = CONTINUATION_MARKER

    def summary(self) -> Dict:
        return {
            "label": self.label,
            "anchors": self.n_anchors,
            "filtered": self.n_filtered,
            "clusters": self.n_clusters,
            "chains": len(self.chains),
            "best_score": max((c.score for c in self.chains), default=0),
        }


class MatchClusterer:
    """Runs the filter, cluster and chain stages for one query at a time."""

    def __init__(self, params: Optional[ClusterParams] = None):
        self.params = params or ClusterParams()

    def process(self, label: str, raw_anchors: Iterable[RawAnchor]) -> QueryResult:
        """Cluster and chain the anchors of a single query.

        1. Filter repeats and merge same-diagonal overlaps
        2. Union nearby anchors into clusters
        3. Extract chains from each cluster in turn
        """
        anchors = make_anchors(raw_anchors)
        result = QueryResult(label=label, n_anchors=len(anchors))
        if not anchors:
            logger.debug("%s: no anchors", label)
            return result

        filtered = filter_matches(anchors)
        clusters = build_clusters(filtered, self.params)
        result.n_filtered = len(filtered)
        result.n_clusters = len(clusters)

        for cluster in clusters:
            result.chains.extend(select_chains(cluster, self.params))

        logger.debug(
            "%s: %d anchors, %d after filtering, %d clusters, %d chains",
            label, result.n_anchors, result.n_filtered, result.n_clusters, len(result.chains),
        )
        return result

    def process_all(
        self, batches: Iterable[Tuple[str, Iterable[RawAnchor]]]
    ) -> Iterator[QueryResult]:
        """Lazily process ``(label, anchors)`` batches one query at a time."""
        count = 0
        for label, raw in batches:
            count += 1
            yield self.process(label, raw)
        logger.info("Processed %d queries", count)
