"""Beautify engine — canonicalizes a circuit's wire network.

Algorithm overview:
  1. Collect terminal locations from every non-wire component.
  2. Seed the working graph with the selected wires (all wires when no
     selection is given); each wire starts out as its own provenance.
  3. Collapse C-detours (one sweep).
  4. Remove pin stubs to a fixpoint.
  5. Prune dead branches to a fixpoint.  Steps 4 and 5 repeat as a pair
     until a round removes nothing, since pruning can leave a new stub.
  6. Collapse C-detours again, sweeping until a sweep changes nothing.
  7. Build the replacement record: each surviving wire replaces the
     first of its originals, the rest are deleted.
  8. Commit the record through the mutator (single atomic replace).
  9. Run the local wire repair on the result.

Steps 1–7 are pure (``beautify_wires``); the transaction adds 8–9.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from wirekit.circuit.models import Circuit, Component
from wirekit.circuit.mutator import CircuitMutator, CircuitTransaction, READ_WRITE
from wirekit.circuit.repair import WireRepair
from wirekit.geometry import Segment

from .branches import prune_dead_branches
from .detours import simplify_c_detours
from .models import BeautifyConfig, BeautifyResult, BeautifyRun, MAX_FIXPOINT_SLACK
from .stubs import remove_pin_stubs


log = logging.getLogger(__name__)


# ── Main entry point ───────────────────────────────────────────────


def beautify_wires(
    circuit: Circuit,
    wires: Iterable[Segment] | None = None,
    *,
    config: BeautifyConfig | None = None,
) -> BeautifyResult:
    """Plan the beautification of *circuit* without changing it.

    Parameters
    ----------
    circuit : Circuit
        The network to read wires and terminals from.
    wires : Iterable[Segment] | None
        Wires to work on.  All circuit wires when *None* or empty.
    config : BeautifyConfig | None
        Pass switches.  Uses defaults when *None*.

    Returns
    -------
    BeautifyResult
        The replacement record, the surviving wires and pass statistics.
    """
    if config is None:
        config = BeautifyConfig()

    selected = set(wires or ())
    if not selected:
        selected = circuit.get_wires()
    run = BeautifyRun.seed(selected, circuit.terminal_locations())

    log.info("Beautify: starting — %s, %d wires selected, %d terminals",
             circuit.name, len(selected), len(run.terminals))

    if config.simplify_detours:
        simplify_c_detours(run)

    _until_stable(run, lambda: _remove_and_prune(run, config))

    if config.simplify_detours:
        _until_stable(run, lambda: simplify_c_detours(run))

    for survivor, origins in run.provenance.items():
        if not origins:
            continue
        run.record.put(origins[0], (survivor,))
        for orig in origins[1:]:
            run.record.remove(orig)

    stats = run.stats
    log.info("Beautify: done — %d wires left; %d stubs, %d dead-branch wires, "
             "%d detours", len(run.graph), stats.stubs_removed,
             stats.branches_removed, stats.detours_collapsed)

    return BeautifyResult(record=run.record, wires=run.graph.segments(), stats=stats)


def _remove_and_prune(run: BeautifyRun, config: BeautifyConfig) -> int:
    run.stats.prune_rounds += 1
    removed = 0
    if config.remove_pin_stubs:
        removed += remove_pin_stubs(run)
    if config.prune_dead_branches:
        removed += prune_dead_branches(run)
    return removed


def _until_stable(run: BeautifyRun, step: Callable[[], int]) -> None:
    """Repeat *step* until it reports no change.

    Every changing step shrinks the working graph, so the loop ends
    within the initial wire count.
    """
    limit = len(run.graph) + MAX_FIXPOINT_SLACK
    for _ in range(limit + 1):
        if step() == 0:
            return
    raise RuntimeError(f"Beautify step did not settle after {limit} rounds")


# ── Transaction ────────────────────────────────────────────────────


class BeautifyWiresTransaction(CircuitTransaction):
    """Beautify one circuit and commit the result atomically.

    *components* is accepted for parity with other wire-editing
    transactions but does not affect the result.
    """

    def __init__(
        self,
        circuit: Circuit,
        wires: Iterable[Segment] | None = None,
        components: Iterable[Component] | None = None,
        *,
        config: BeautifyConfig | None = None,
    ) -> None:
        self.circuit = circuit
        self.wires = set(wires or ())
        if not self.wires:
            self.wires = circuit.get_wires()
        self.components = list(components or ())
        self.config = config or BeautifyConfig()
        self.result: BeautifyResult | None = None

    def accessed_circuits(self) -> dict[Circuit, int]:
        return {self.circuit: READ_WRITE}

    def run(self, mutator: CircuitMutator) -> None:
        result = beautify_wires(self.circuit, self.wires, config=self.config)
        if not result.record.is_empty():
            mutator.replace(self.circuit, result.record)
            result.committed = True
        if self.config.repair_after_commit:
            WireRepair(self.circuit).run(mutator)
        self.result = result
