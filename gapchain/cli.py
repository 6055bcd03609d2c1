"""CLI entry point for gapchain."""

from __future__ import annotations

import argparse
import logging
import sys

from gapchain.engine import MatchClusterer
from gapchain.io import (
    check_labels,
    read_match_batches,
    write_json,
    write_results,
)
from gapchain.params import ClusterParams


def _add_input_options(p: argparse.ArgumentParser, input_required: bool = False) -> None:
    if input_required:
        p.add_argument("input", help="Match list file (plain or .gz)")
    else:
        p.add_argument("input", nargs="?", default="-",
                       help="Match list file (plain or .gz); stdin when omitted or '-'")
    p.add_argument("-C", "--check-labels", action="store_true",
                   help="Check that headers alternate with 'Reverse' headers")
    p.add_argument("-d", "--fixed-separation", type=int,
                   help="Fixed diagonal difference to join matches (default 5)")
    p.add_argument("-e", "--use-extents", action="store_true", default=None,
                   help="Score chains by their reference extent instead of summed length")
    p.add_argument("-f", "--separation-factor", type=float,
                   help="Fraction of separation allowed as diagonal difference (default 0.05)")
    p.add_argument("-l", "--min-score", type=int, dest="min_output_score",
                   help="Minimum score of a reported chain (default 200)")
    p.add_argument("-s", "--max-separation", type=int,
                   help="Maximum separation between matches in a cluster (default 1000)")
    p.add_argument("--config", help="JSON file with base parameter values")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gapchain",
        description="gapchain – cluster exact matches into gapped alignments",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log progress to stderr (-vv for debug)")
    sub = parser.add_subparsers(dest="command")

    # chain sub-command
    chain_p = sub.add_parser("chain", help="Cluster and chain matches, one block per query")
    _add_input_options(chain_p)
    chain_p.add_argument("--output", choices=["text", "json"], default="text")

    # stats sub-command
    stats_p = sub.add_parser("stats", help="Summarize anchors, clusters and chains per query")
    _add_input_options(stats_p)

    # dotplot sub-command
    dot_p = sub.add_parser("dotplot", help="Write an interactive dot plot of one query's chains")
    _add_input_options(dot_p, input_required=True)
    dot_p.add_argument("--query", required=True, help="Header of the query to plot (without '>')")
    dot_p.add_argument("--html", required=True, help="Output HTML file")

    return parser


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _params_from_args(args) -> ClusterParams:
    base = ClusterParams.from_json(args.config).to_dict() if args.config else {}
    for name in ("fixed_separation", "max_separation", "min_output_score",
                 "separation_factor", "use_extents"):
        value = getattr(args, name)
        if value is not None:
            base[name] = value
    return ClusterParams.from_dict(base)


def _batches(args):
    batches = read_match_batches(args.input)
    if args.check_labels:
        batches = check_labels(batches)
    return batches


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _setup_logging(args.verbose)

    try:
        params = _params_from_args(args)
        if args.command == "chain":
            _cmd_chain(args, params)
        elif args.command == "stats":
            _cmd_stats(args, params)
        elif args.command == "dotplot":
            _cmd_dotplot(args, params)
    except (OSError, ValueError) as e:
        # includes LabelCheckError
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _cmd_chain(args, params: ClusterParams) -> None:
    clusterer = MatchClusterer(params)
    results = clusterer.process_all(_batches(args))
    if args.output == "json":
        write_json(sys.stdout, results, params)
    else:
        write_results(sys.stdout, results)


def _cmd_stats(args, params: ClusterParams) -> None:
    clusterer = MatchClusterer(params)
    print("label\tanchors\tfiltered\tclusters\tchains\tbest_score")
    for result in clusterer.process_all(_batches(args)):
        s = result.summary()
        print(
            f"{s['label']}\t{s['anchors']}\t{s['filtered']}\t"
            f"{s['clusters']}\t{s['chains']}\t{s['best_score']}"
        )


def _cmd_dotplot(args, params: ClusterParams) -> None:
    from gapchain.viz import HAS_PLOTLY, create_chain_dotplot

    if not HAS_PLOTLY:
        print("Error: plotly is required for dot plots")
        print("Install visualization dependencies with: pip install gapchain[viz]")
        sys.exit(1)

    clusterer = MatchClusterer(params)
    for header, matches in _batches(args):
        if header[1:].strip() == args.query.strip():
            result = clusterer.process(header, matches)
            create_chain_dotplot(matches, result).to_html(args.html)
            print(f"Dot plot saved to: {args.html}")
            return

    raise ValueError(f"Query {args.query!r} not found in {args.input}")
