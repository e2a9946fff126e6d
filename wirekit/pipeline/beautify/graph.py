"""Working wire graph — a segment set with its adjacency index.

The set and the index change together: ``add`` and ``remove`` are the
only mutation paths, and each one updates both endpoints' entries.
Callers never see the internal sets, only copies.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from wirekit.geometry import Location, Segment


_NO_WIRES: frozenset[Segment] = frozenset()


class WireGraph:
    """A mutable set of segments indexed by endpoint location."""

    def __init__(self, wires: Iterable[Segment] = ()) -> None:
        self._wires: set[Segment] = set()
        self._adjacency: dict[Location, set[Segment]] = {}
        for w in wires:
            self.add(w)

    # ── Mutation ───────────────────────────────────────────────────

    def add(self, wire: Segment) -> None:
        if wire in self._wires:
            return
        self._wires.add(wire)
        for loc in wire.ends:
            self._adjacency.setdefault(loc, set()).add(wire)

    def remove(self, wire: Segment) -> None:
        if wire not in self._wires:
            return
        self._wires.discard(wire)
        for loc in wire.ends:
            incident = self._adjacency.get(loc)
            if incident is None:
                continue
            incident.discard(wire)
            if not incident:
                del self._adjacency[loc]

    # ── Queries ────────────────────────────────────────────────────

    def degree(self, loc: Location) -> int:
        return len(self._adjacency.get(loc, _NO_WIRES))

    def incident(self, loc: Location) -> frozenset[Segment]:
        """Wires with an endpoint at *loc* (a snapshot)."""
        return frozenset(self._adjacency.get(loc, _NO_WIRES))

    def neighbors(self, loc: Location) -> set[Location]:
        return {w.other_end(loc) for w in self._adjacency.get(loc, _NO_WIRES)}

    def locations(self) -> list[Location]:
        """All locations with at least one wire, in grid order."""
        return sorted(self._adjacency)

    def segments(self) -> set[Segment]:
        return set(self._wires)

    def __contains__(self, wire: object) -> bool:
        return wire in self._wires

    def __iter__(self) -> Iterator[Segment]:
        return iter(sorted(self._wires))

    def __len__(self) -> int:
        return len(self._wires)

    def __repr__(self) -> str:
        return f"WireGraph({len(self._wires)} wires, {len(self._adjacency)} locations)"
