"""Circuit model dataclasses — wires, components, replacement records."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from wirekit.geometry import Location, Segment


@dataclass
class Component:
    """A non-wire component attached to the grid at its ends (terminals)."""

    name: str
    ends: list[Location]


@dataclass(eq=False)
class Circuit:
    """A single wire network plus the components attached to it.

    Circuits compare by identity so they can key transaction maps.
    """

    name: str = "main"
    wires: set[Segment] = field(default_factory=set)
    non_wires: list[Component] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def add_wire(self, a: Location, b: Location) -> Segment:
        seg = Segment.create(a, b)
        self.wires.add(seg)
        return seg

    def add_component(self, name: str, *ends: Location) -> Component:
        comp = Component(name=name, ends=list(ends))
        self.non_wires.append(comp)
        return comp

    def get_wires(self) -> set[Segment]:
        """Return a snapshot of the current wire set."""
        return set(self.wires)

    def terminal_locations(self) -> set[Location]:
        """Every location where some non-wire component attaches."""
        return {loc for comp in self.non_wires for loc in comp.ends}


class ReplacementRecord:
    """Maps original wires to the wires that replace them.

    An empty replacement set means the wire is deleted; a singleton set
    holding the wire itself means it survives unchanged.  Later ``put``
    calls for the same key overwrite earlier ones.
    """

    def __init__(self) -> None:
        self._map: dict[Segment, frozenset[Segment]] = {}

    def put(self, original: Segment, replacements: Iterable[Segment]) -> None:
        self._map[original] = frozenset(replacements)

    def remove(self, original: Segment) -> None:
        self.put(original, ())

    def get(self, original: Segment) -> frozenset[Segment] | None:
        return self._map.get(original)

    def is_empty(self) -> bool:
        return not self._map

    def is_identity(self) -> bool:
        """True if applying the record would not change anything."""
        return all(repl == {orig} for orig, repl in self._map.items())

    def removals(self) -> set[Segment]:
        """Originals that do not survive as themselves."""
        return {orig for orig, repl in self._map.items() if orig not in repl}

    def additions(self) -> set[Segment]:
        """Replacement wires that are not already originals in the record."""
        added: set[Segment] = set()
        for orig, repl in self._map.items():
            added.update(w for w in repl if w != orig)
        return added - {orig for orig, repl in self._map.items() if orig in repl}

    def items(self) -> Iterator[tuple[Segment, frozenset[Segment]]]:
        return iter(self._map.items())

    def keys(self) -> set[Segment]:
        return set(self._map)

    def __contains__(self, original: object) -> bool:
        return original in self._map

    def __len__(self) -> int:
        return len(self._map)

    def __repr__(self) -> str:
        return f"ReplacementRecord({len(self._map)} entries, {len(self.removals())} removed)"
