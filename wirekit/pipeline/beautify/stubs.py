"""Pin-stub removal — drops dead-end wires hanging off a terminal.

A wire is a stub when exactly one end is a terminal and the other end
is a non-terminal with no other wire.  Removing one stub can expose the
next, so sweeps repeat until one removes nothing.
"""

from __future__ import annotations

import logging

from wirekit.geometry import Segment

from .models import BeautifyRun, MAX_FIXPOINT_SLACK


log = logging.getLogger(__name__)


def is_pin_stub(run: BeautifyRun, wire: Segment) -> bool:
    a, b = wire.ends
    a_pin = run.is_terminal(a)
    b_pin = run.is_terminal(b)
    if a_pin and not b_pin:
        return run.graph.degree(b) == 1
    if b_pin and not a_pin:
        return run.graph.degree(a) == 1
    return False


def remove_pin_stubs(run: BeautifyRun) -> int:
    """Remove pin stubs until none are left.  Returns the count removed."""
    removed = 0
    limit = len(run.graph) + MAX_FIXPOINT_SLACK
    for _ in range(limit + 1):
        stubs = [w for w in run.graph if is_pin_stub(run, w)]
        if not stubs:
            break
        for w in stubs:
            run.discard(w)
        removed += len(stubs)
        log.debug("Pin stubs: removed %d (%d wires left)", len(stubs), len(run.graph))
    else:
        raise RuntimeError(f"Pin-stub removal did not settle after {limit} sweeps")

    run.stats.stubs_removed += removed
    return removed
