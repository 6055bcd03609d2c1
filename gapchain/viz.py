"""Dot plot visualization of anchors and the chains selected from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from gapchain.anchor import RawAnchor
from gapchain.engine import QueryResult

try:
    import plotly.graph_objects as go
    HAS_PLOTLY = True
except ImportError:
    HAS_PLOTLY = False


Segment = Tuple[int, int, int]  # (start_ref, start_query, length)

CHAIN_COLORS = ["#1f77b4", "#d62728", "#2ca02c", "#9467bd", "#ff7f0e", "#17becf"]


@dataclass
class ChainDotPlot:
    """Container for dot plot data: background anchors plus one trace per chain."""

    label: str
    anchors: List[Segment] = field(default_factory=list)
    chains: List[List[Segment]] = field(default_factory=list)

    @staticmethod
    def _lines(segments: Iterable[Segment]) -> Tuple[List[Optional[int]], List[Optional[int]]]:
        xs: List[Optional[int]] = []
        ys: List[Optional[int]] = []
        for ref, query, length in segments:
            xs.extend([ref, ref + length, None])
            ys.extend([query, query + length, None])
        return xs, ys

    def to_figure(
        self,
        title: Optional[str] = None,
        color_anchors: str = "lightgray",
        line_width: int = 3,
        width: int = 800,
        height: int = 800,
    ) -> "go.Figure":
        """Create a Plotly figure: reference on x, query on y."""
        if not HAS_PLOTLY:
            raise ImportError("plotly is required for visualization")

        fig = go.Figure()

        if self.anchors:
            xs, ys = self._lines(self.anchors)
            fig.add_trace(go.Scattergl(
                x=xs, y=ys, mode="lines",
                line=dict(color=color_anchors, width=line_width),
                name="Anchors",
                hoverinfo="skip",
            ))

        for n, chain in enumerate(self.chains):
            xs, ys = self._lines(chain)
            fig.add_trace(go.Scattergl(
                x=xs, y=ys, mode="lines+markers",
                line=dict(color=CHAIN_COLORS[n % len(CHAIN_COLORS)], width=line_width),
                marker=dict(size=4),
                name=f"Chain {n + 1}",
                hovertemplate="Ref: %{x}<br>Query: %{y}<extra></extra>",
            ))

        fig.update_layout(
            title=title or f"Chains: {self.label}",
            xaxis_title="Reference position",
            yaxis_title="Query position",
            width=width, height=height,
        )
        return fig

    def to_html(self, filepath: str, **kwargs) -> None:
        """Save dot plot as interactive HTML file."""
        fig = self.to_figure(**kwargs)
        fig.write_html(filepath)


def create_chain_dotplot(raw_anchors: Iterable[RawAnchor], result: QueryResult) -> ChainDotPlot:
    """Dot plot of a query's raw anchors with its emitted chains drawn on top."""
    return ChainDotPlot(
        label=result.label,
        anchors=[tuple(a) for a in raw_anchors],  # type: ignore[misc]
        chains=[
            [(r.start_ref, r.start_query, r.length) for r in chain.records]
            for chain in result.chains
        ],
    )
