"""Beautify run state, result dataclasses and configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from wirekit.circuit.models import ReplacementRecord
from wirekit.geometry import Location, Segment
from wirekit.pipeline.config import BEAUTIFY_RULES

from .graph import WireGraph


# ── Per-run state ──────────────────────────────────────────────────


@dataclass
class BeautifyStats:
    """Counts of what each pass did during one run."""

    stubs_removed: int = 0
    branches_removed: int = 0
    detours_collapsed: int = 0
    prune_rounds: int = 0


@dataclass
class BeautifyRun:
    """Everything one beautify run reads and mutates.

    ``provenance`` maps each wire in the working graph to the original
    wires it was built from, in path order.  Originals that are dropped
    are recorded in ``record`` as deleted straight away; survivors are
    filled in by the engine at the end of the run.
    """

    terminals: frozenset[Location]
    graph: WireGraph
    provenance: dict[Segment, list[Segment]]
    record: ReplacementRecord = field(default_factory=ReplacementRecord)
    stats: BeautifyStats = field(default_factory=BeautifyStats)

    @classmethod
    def seed(cls, wires: set[Segment], terminals: set[Location]) -> BeautifyRun:
        return cls(
            terminals=frozenset(terminals),
            graph=WireGraph(wires),
            provenance={w: [w] for w in wires},
        )

    def is_terminal(self, loc: Location) -> bool:
        return loc in self.terminals

    def discard(self, wire: Segment) -> None:
        """Drop *wire* from the graph and mark all its originals deleted."""
        self.graph.remove(wire)
        for orig in self.provenance.pop(wire, ()):
            self.record.remove(orig)

    def merge(self, parts: list[Segment], merged: Segment) -> None:
        """Replace *parts* with *merged*, concatenating their provenance."""
        origins: list[Segment] = []
        for part in parts:
            self.graph.remove(part)
            origins.extend(self.provenance.pop(part, ()))
        self.graph.add(merged)
        self.provenance[merged] = origins


# ── Output dataclasses ─────────────────────────────────────────────


@dataclass
class BeautifyResult:
    """Outcome of a beautify run, before or after commit."""

    record: ReplacementRecord
    wires: set[Segment]                 # surviving working set
    stats: BeautifyStats = field(default_factory=BeautifyStats)
    committed: bool = False

    @property
    def changed(self) -> bool:
        return not self.record.is_identity()


# ── Beautify configuration ────────────────────────────────────────


@dataclass
class BeautifyConfig:
    """Switches for the individual passes.

    Structural constants (detour shape, branch threshold) come from
    ``BEAUTIFY_RULES`` and are not meant to be tuned per run.
    """

    simplify_detours: bool = True
    remove_pin_stubs: bool = True
    prune_dead_branches: bool = True
    repair_after_commit: bool = True


DETOUR_INNER_DEGREE = BEAUTIFY_RULES.detour_inner_degree
BRANCH_MIN_DEGREE = BEAUTIFY_RULES.branch_min_degree
MAX_FIXPOINT_SLACK = BEAUTIFY_RULES.max_fixpoint_slack
