"""C-detour simplification — straightens three-wire zig-zags.

For a path a–b–c–d where b and c are non-terminal points with exactly
two wires each, and a and d share a row or a column, the three wires
are replaced by the straight wire a–d.  Either a or d may be a terminal
(a half-C at a pin); only b and c must be free pass-through points.

A merge is skipped when a–d already exists or would lie on top of some
other wire.  One call is a single sweep over the graph; the engine
decides how often to sweep.
"""

from __future__ import annotations

import logging

from wirekit.geometry import Location, Segment

from .models import BeautifyRun, DETOUR_INNER_DEGREE


log = logging.getLogger(__name__)


def _pass_through(run: BeautifyRun, loc: Location) -> bool:
    return not run.is_terminal(loc) and run.graph.degree(loc) == DETOUR_INNER_DEGREE


def _endpoint_key(a: Location, d: Location) -> tuple[Location, Location]:
    return (a, d) if a <= d else (d, a)


def find_detour(run: BeautifyRun, b: Location, c: Location) -> tuple[list[Segment], Segment] | None:
    """Return (parts, straight) if b–c is the middle of a collapsible C."""
    if not (_pass_through(run, b) and _pass_through(run, c)):
        return None
    a = next((n for n in run.graph.neighbors(b) if n != c), None)
    d = next((n for n in run.graph.neighbors(c) if n != b), None)
    if a is None or d is None or a == d:
        return None
    if a.x != d.x and a.y != d.y:
        return None

    parts = [Segment.create(a, b), Segment.create(b, c), Segment.create(c, d)]
    if not all(p in run.graph for p in parts):
        return None
    straight = Segment.create(a, d)
    if straight in run.graph:
        return None
    for other in run.graph:
        if other in parts:
            continue
        if straight.overlaps(other):
            return None
    return parts, straight


def simplify_c_detours(run: BeautifyRun) -> int:
    """Sweep once over the graph collapsing C-detours.

    Returns the number of detours collapsed.
    """
    if len(run.graph) == 0:
        return 0

    collapsed = 0
    done: set[tuple[Location, Location]] = set()
    for b in run.graph.locations():
        if not _pass_through(run, b):
            continue
        for c in sorted(run.graph.neighbors(b)):
            found = find_detour(run, b, c)
            if found is None:
                continue
            parts, straight = found
            key = _endpoint_key(*straight.ends)
            if key in done:
                continue
            done.add(key)

            run.merge(parts, straight)
            collapsed += 1
            log.debug("C-detour: %s + %s + %s -> %s", *parts, straight)
            break

    run.stats.detours_collapsed += collapsed
    return collapsed
