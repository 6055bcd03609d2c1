"""Match-list I/O – reading anchor batches and writing chain records (plain and gzipped)."""

from __future__ import annotations

import gzip
import json
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Dict, Generator, Iterable, Iterator, List, Optional, Tuple, Union

from gapchain.anchor import RawAnchor
from gapchain.chain import ChainRecord
from gapchain.engine import QueryResult
from gapchain.params import ClusterParams

logger = logging.getLogger(__name__)

Source = Union[str, Path, IO[str]]
Batch = Tuple[str, List[RawAnchor]]


class LabelCheckError(ValueError):
    """Raised when headers do not alternate between forward and ``Reverse``."""


@contextmanager
def _open_source(source: Source) -> Iterator[IO[str]]:
    if hasattr(source, "read"):
        yield source  # type: ignore[misc]
        return
    if str(source) == "-":
        yield sys.stdin
        return
    filepath = Path(source)  # type: ignore[arg-type]
    opener = gzip.open if filepath.suffix == ".gz" else open
    with opener(filepath, "rt") as fh:  # type: ignore[arg-type]
        yield fh


def _parse_match(line: str) -> Optional[RawAnchor]:
    """Leading three integer tokens, or None.

    Each token must be a whole integer, so ``1 2 3abc`` is skipped rather
    than read as ``(1, 2, 3)``.
    """
    parts = line.split()
    if len(parts) < 3:
        return None
    try:
        return int(parts[0]), int(parts[1]), int(parts[2])
    except ValueError:
        return None


def read_match_batches(source: Source) -> Generator[Batch, None, None]:
    """Yield ``(header, anchors)`` for each query in a match list.

    Each query starts with a ``>`` header line, kept verbatim as its label,
    followed by one ``start_ref start_query length`` line per match.  Text
    before the first header and lines that do not start with three integers
    are skipped.  *source* may be a path (``.gz`` supported), ``"-"`` for
    stdin, or an open text handle.
    """
    header: Optional[str] = None
    matches: List[RawAnchor] = []

    with _open_source(source) as fh:
        for lineno, line in enumerate(fh, 1):
            line = line.rstrip("\n").rstrip("\r")
            if line.startswith(">"):
                if header is not None:
                    yield header, matches
                header = line
                matches = []
            elif header is not None:
                match = _parse_match(line)
                if match is None:
                    if line.strip():
                        logger.debug("Skipping line %d: %r", lineno, line)
                else:
                    matches.append(match)
        if header is not None:
            yield header, matches


def check_labels(batches: Iterable[Batch]) -> Generator[Batch, None, None]:
    """Pass batches through, checking that every second header says ``Reverse``."""
    for count, (header, matches) in enumerate(batches, 1):
        if count % 2 == 0 and "Reverse" not in header:
            raise LabelCheckError(f"Header {count} is not a Reverse header: {header!r}")
        yield header, matches


def format_record(record: ChainRecord) -> str:
    """Fixed-width text line for one chain record."""
    line = f"{record.start_ref:8d} {record.start_query:8d} {record.length:6d} "
    if record.ref_gap is None:
        return line + "   none      -      -"
    adj = "none" if record.overlap is None else str(-record.overlap)
    return line + f"{adj:>7} {record.ref_gap:6d} {record.query_gap:6d}"


def format_result(result: QueryResult) -> List[str]:
    """Text lines for one query: headings followed by their chain records."""
    lines = []
    for heading, chain in result.blocks():
        lines.append(heading)
        if chain is not None:
            lines.extend(format_record(r) for r in chain.records)
    return lines


def write_results(fh: IO[str], results: Iterable[QueryResult]) -> int:
    """Write results in text form; return the number of queries written."""
    count = 0
    for result in results:
        for line in format_result(result):
            fh.write(line + "\n")
        count += 1
    return count


def result_to_dict(result: QueryResult) -> Dict:
    data = result.summary()
    data["chain_list"] = [
        {
            "cluster_id": chain.cluster_id,
            "score": chain.score,
            "total_length": chain.total_length,
            "extent": chain.extent,
            "records": [
                {
                    "start_ref": r.start_ref,
                    "start_query": r.start_query,
                    "length": r.length,
                    "overlap": r.overlap,
                    "ref_gap": r.ref_gap,
                    "query_gap": r.query_gap,
                }
                for r in chain.records
            ],
        }
        for chain in result.chains
    ]
    return data


def write_json(
    fh: IO[str],
    results: Iterable[QueryResult],
    params: Optional[ClusterParams] = None,
) -> int:
    """Write all results as one JSON document; return the number of queries."""
    queries = [result_to_dict(r) for r in results]
    data = {
        "params": (params or ClusterParams()).to_dict(),
        "queries": queries,
    }
    fh.write(json.dumps(data, indent=2) + "\n")
    return len(queries)
