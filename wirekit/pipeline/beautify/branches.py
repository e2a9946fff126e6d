"""Dead-branch pruning — removes wiring that reaches no terminal.

Each pass works in two stages over a frozen view of the graph:

  1. Reachability: breadth-first search from every terminal marks the
     live locations.
  2. Branch tracing: from every branch point (non-terminal, degree at
     or above ``BRANCH_MIN_DEGREE``) each incident wire starts a walk
     that never re-enters the branch point.  The walk stops at a
     terminal (live), at another branch point (live only if that point
     is live) or at a dead end.  Walks that find nothing live condemn
     every wire they visited.

Floating wires whose two ends are both loose and dead are dropped as
well.  Removals are applied together at the end of the pass, and passes
repeat until one removes nothing.
"""

from __future__ import annotations

import logging
from collections import deque

from wirekit.geometry import Location, Segment

from .models import BeautifyRun, BRANCH_MIN_DEGREE, MAX_FIXPOINT_SLACK


log = logging.getLogger(__name__)


def live_locations(run: BeautifyRun) -> set[Location]:
    """Locations connected to some terminal (terminals included)."""
    live = set(run.terminals)
    queue = deque(run.terminals)
    while queue:
        u = queue.popleft()
        for v in run.graph.neighbors(u):
            if v not in live:
                live.add(v)
                queue.append(v)
    return live


def branch_points(run: BeautifyRun) -> set[Location]:
    return {
        loc for loc in run.graph.locations()
        if not run.is_terminal(loc) and run.graph.degree(loc) >= BRANCH_MIN_DEGREE
    }


def _trace_branch(
    run: BeautifyRun,
    origin: Location,
    start: Segment,
    branches: set[Location],
    live: set[Location],
) -> set[Segment] | None:
    """Walk away from *origin* along *start*.

    Returns the visited wires when the walk is dead, None when it is live.
    """
    first = start.other_end(origin)
    path_wires = {start}
    path_locs = {origin, first}
    reached: set[Location] = set()
    queue = deque([first])

    while queue:
        u = queue.popleft()
        if run.is_terminal(u):
            return None
        if u in branches:
            reached.add(u)
            if u in live:
                return None
            continue
        for w in run.graph.incident(u):
            if w in path_wires:
                continue
            v = w.other_end(u)
            if v == origin or v in path_locs:
                continue
            path_wires.add(w)
            path_locs.add(v)
            queue.append(v)

    if any(bp in live for bp in reached):
        return None
    return path_wires


def _prune_pass(run: BeautifyRun) -> int:
    live = live_locations(run)
    branches = branch_points(run)
    doomed: set[Segment] = set()
    processed: set[tuple[Location, Location]] = set()

    for origin in sorted(branches):
        for start in sorted(run.graph.incident(origin)):
            key = (origin, start.other_end(origin))
            if key in processed:
                continue
            processed.add(key)
            dead = _trace_branch(run, origin, start, branches, live)
            if dead:
                doomed.update(dead)

    for w in run.graph:
        if w in doomed:
            continue
        a, b = w.ends
        if run.is_terminal(a) or run.is_terminal(b):
            continue
        if (run.graph.degree(a) == 1 and run.graph.degree(b) == 1
                and a not in live and b not in live):
            doomed.add(w)

    for w in doomed:
        run.discard(w)
    return len(doomed)


def prune_dead_branches(run: BeautifyRun) -> int:
    """Prune dead branches until a pass removes nothing.

    Returns the number of wires removed.
    """
    removed = 0
    limit = len(run.graph) + MAX_FIXPOINT_SLACK
    for _ in range(limit + 1):
        count = _prune_pass(run)
        if count == 0:
            break
        removed += count
        log.debug("Dead branches: removed %d (%d wires left)", count, len(run.graph))
    else:
        raise RuntimeError(f"Dead-branch pruning did not settle after {limit} passes")

    run.stats.branches_removed += removed
    return removed
