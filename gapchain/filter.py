"""Match filtering – drop anchors nested in repeats and merge same-diagonal overlaps."""

from __future__ import annotations

from typing import Iterable, List

from gapchain.anchor import Anchor, by_query


def filter_matches(anchors: Iterable[Anchor]) -> List[Anchor]:
    """Return the anchors that survive repeat filtering, sorted by query position.

    Overlapping anchors on one diagonal are merged into the earlier one.
    Where two anchors share a reference start (or a query start) and
    overlap by at least half the shorter length, the shorter one is
    dropped; in a run of equal-length ties the earlier anchor is dropped
    once it has itself been marked tentative.  For example if the
    reference has 27 As and the query 20, the first and last matches are
    kept and the ones in between are removed.

    This is a single pass: a merge that lengthens an anchor after its
    shared-start neighbours were checked can leave a nested match in place,
    so filtering the output again may remove more.  The input anchors are
    not modified.
    """
    work = sorted((a.fresh_copy() for a in anchors), key=by_query)
    n = len(work)

    for a in work:
        a.live = True

    for i in range(n - 1):
        ai = work[i]
        if not ai.live:
            continue

        i_diag = ai.diagonal
        i_end = ai.end_query

        j = i + 1
        while j < n and work[j].start_query <= i_end:
            aj = work[j]
            j += 1
            if not aj.live:
                continue

            if aj.diagonal == i_diag:
                j_extent = aj.end_query - ai.start_query
                if j_extent > ai.length:
                    ai.length = j_extent
                    i_end = ai.end_query
                aj.live = False
                continue

            if ai.start_ref == aj.start_ref:
                olap = ai.end_query - aj.start_query
            elif ai.start_query == aj.start_query:
                olap = ai.end_ref - aj.start_ref
            else:
                continue

            if _resolve_nested(ai, aj, olap):
                break

    survivors = [a for a in work if a.live]
    for a in survivors:
        a.live = False
        a.tentative = False
    return survivors


def _resolve_nested(ai: Anchor, aj: Anchor, olap: int) -> bool:
    """Drop whichever of two nested anchors is redundant.

    Returns True when *ai* was dropped and the scan from it must stop.
    """
    if ai.length < aj.length:
        if olap >= ai.length // 2:
            ai.live = False
            return True
    elif aj.length < ai.length:
        if olap >= aj.length // 2:
            aj.live = False
    elif olap >= ai.length // 2:
        # Equal lengths: keep both until the earlier one loses a second tie.
        aj.tentative = True
        if ai.tentative:
            ai.live = False
            return True
    return False
