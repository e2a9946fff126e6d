"""Local wire repair — restores per-point topology after a coarse rewrite.

Two fixes, applied in order:
  1. Collinear wires that overlap over a positive length are merged
     into their union.
  2. Any wire whose interior holds another wire's endpoint or a
     terminal is split there, so every junction is a wire endpoint.

All changes go to the circuit as one replacement record.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from wirekit.geometry import Location, Segment

from .models import Circuit, ReplacementRecord
from .mutator import CircuitMutator


log = logging.getLogger(__name__)


class WireRepair:
    def __init__(self, circuit: Circuit) -> None:
        self.circuit = circuit

    def run(self, mutator: CircuitMutator) -> ReplacementRecord:
        record = self.plan()
        if not record.is_empty():
            mutator.replace(self.circuit, record)
        log.info("WireRepair: %s — %d wires repaired", self.circuit.name, len(record))
        return record

    def plan(self) -> ReplacementRecord:
        """Compute the repair record without touching the circuit."""
        merged = self._merge_overlaps(self.circuit.get_wires())

        split_points: set[Location] = set(self.circuit.terminal_locations())
        for union in merged:
            split_points.update(union.ends)

        record = ReplacementRecord()
        for union, originals in merged.items():
            pieces = _split_at(union, split_points)
            if len(originals) == 1 and pieces == [originals[0]]:
                continue
            record.put(originals[0], pieces)
            for orig in originals[1:]:
                record.remove(orig)
        return record

    @staticmethod
    def _merge_overlaps(wires: set[Segment]) -> dict[Segment, list[Segment]]:
        """Group collinear overlapping wires; map each union to its members."""
        lines: dict[tuple[bool, int], list[Segment]] = defaultdict(list)
        for w in wires:
            key = (True, w.end0.y) if w.is_horizontal else (False, w.end0.x)
            lines[key].append(w)

        merged: dict[Segment, list[Segment]] = {}
        for line in lines.values():
            line.sort()
            group = [line[0]]
            start, stop = line[0].end0, line[0].end1
            for w in line[1:]:
                if w.end0 < stop:
                    group.append(w)
                    stop = max(stop, w.end1)
                    continue
                merged[Segment.create(start, stop)] = group
                group = [w]
                start, stop = w.end0, w.end1
            merged[Segment.create(start, stop)] = group
        return merged


def _split_at(wire: Segment, points: set[Location]) -> list[Segment]:
    """Split *wire* at every point of *points* strictly inside it."""
    cuts = sorted(p for p in points if wire.contains(p))
    if not cuts:
        return [wire]
    stops = [wire.end0, *cuts, wire.end1]
    return [Segment.create(a, b) for a, b in zip(stops, stops[1:])]
