"""Circuit test fixtures — small hand-drawn wire networks.

The "messy" circuit exercises every beautify pass at once:

    P1 (0,0) ──┐ C-detour up to y=20 and back down at x=30
               └── (30,0) ── P2 (60,0) ── P3 (60,40) ── spur to (80,40)/(80,60)
    P4 (100,0) with a dangling stub to (100,10)
    a floating wire far away at (200,200)-(210,200)

After beautification only P1-(30,0), (30,0)-P2 and P2-P3 remain.
"""

from __future__ import annotations

from wirekit.circuit.models import Circuit
from wirekit.geometry import Location, Segment


def L(x: int, y: int) -> Location:
    return Location(x, y)


def W(x0: int, y0: int, x1: int, y1: int) -> Segment:
    return Segment.create(Location(x0, y0), Location(x1, y1))


def make_circuit(wires: list[Segment], *terminals: Location, name: str = "test") -> Circuit:
    """Build a circuit with one single-pin component per terminal."""
    circuit = Circuit(name=name, wires=set(wires))
    for i, loc in enumerate(terminals):
        circuit.add_component(f"pin_{i}", loc)
    return circuit


P1, P2, P3, P4 = L(0, 0), L(60, 0), L(60, 40), L(100, 0)

MESSY_WIRES = [
    # half-C detour P1 -> (30,0)
    W(0, 0, 0, 20), W(0, 20, 30, 20), W(30, 20, 30, 0),
    W(30, 0, 60, 0),
    W(60, 0, 60, 40),
    # dead spur off P3
    W(60, 40, 80, 40), W(80, 40, 80, 60),
    # pin stub at P4
    W(100, 0, 100, 10),
    # floating
    W(200, 200, 210, 200),
]

MESSY_EXPECTED = {W(0, 0, 30, 0), W(30, 0, 60, 0), W(60, 0, 60, 40)}


def make_messy_circuit() -> Circuit:
    return make_circuit(list(MESSY_WIRES), P1, P2, P3, P4, name="messy")


def terminal_groups(wires: set[Segment], terminals: set[Location]) -> set[frozenset[Location]]:
    """Partition *terminals* by wire connectivity (endpoint to endpoint)."""
    parent: dict[Location, Location] = {t: t for t in terminals}

    def find(loc: Location) -> Location:
        parent.setdefault(loc, loc)
        while parent[loc] != loc:
            parent[loc] = parent[parent[loc]]
            loc = parent[loc]
        return loc

    for w in wires:
        ra, rb = find(w.end0), find(w.end1)
        if ra != rb:
            parent[ra] = rb

    groups: dict[Location, set[Location]] = {}
    for t in terminals:
        groups.setdefault(find(t), set()).add(t)
    return {frozenset(g) for g in groups.values()}


# Three separate nets: a C-detour between A1 and A2 with a dead spur at A2,
# a T-shaped net B1/B2/B3, and a lone pin C1 with a stub.  A floating wire
# sits between them.
A1, A2 = L(0, 0), L(40, 0)
B1, B2, B3 = L(0, 100), L(40, 100), L(20, 130)
C1 = L(200, 0)

THREE_NET_WIRES = [
    W(0, 0, 0, 20), W(0, 20, 40, 20), W(40, 0, 40, 20),
    W(40, 0, 50, 0), W(50, 0, 50, 10),
    W(0, 100, 20, 100), W(20, 100, 40, 100), W(20, 100, 20, 130),
    W(200, 0, 200, 10),
    W(100, 100, 110, 100),
]

THREE_NET_EXPECTED = {
    W(0, 0, 40, 0),
    W(0, 100, 20, 100), W(20, 100, 40, 100), W(20, 100, 20, 130),
}


def make_three_net_circuit() -> Circuit:
    return make_circuit(list(THREE_NET_WIRES), A1, A2, B1, B2, B3, C1, name="three_net")
