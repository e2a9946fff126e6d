"""Atomic circuit mutation and coarse-grained circuit transactions.

A transaction declares which circuits it touches and how
(``READ`` or ``READ_WRITE``).  ``execute()`` takes every declared
circuit's lock without blocking; a conflicting transaction fails fast
with :class:`CircuitLockedError` before anything is changed, and the
caller decides whether to retry.
"""

from __future__ import annotations

import logging

from .models import Circuit, ReplacementRecord


log = logging.getLogger(__name__)


READ = 1
READ_WRITE = 2


class CircuitLockedError(Exception):
    """Raised when a transaction cannot acquire a circuit it declared."""

    def __init__(self, circuit: Circuit) -> None:
        self.circuit = circuit
        super().__init__(f"Circuit '{circuit.name}' is locked by another transaction")


class ReplacementError(Exception):
    """Raised when a replacement record does not match the circuit."""


class CircuitMutator:
    """Applies replacement records to circuits, all-or-nothing."""

    def __init__(self) -> None:
        self.applied: list[tuple[Circuit, ReplacementRecord]] = []

    def replace(self, circuit: Circuit, record: ReplacementRecord) -> None:
        """Apply *record* to *circuit* in one step.

        The record is checked against the current wire set first; on a
        mismatch nothing is applied and :class:`ReplacementError` is raised.
        """
        removals = record.removals()
        missing = [w for w in record.keys() if w not in circuit.wires]
        if missing:
            raise ReplacementError(
                f"{len(missing)} wire(s) to replace are not in circuit "
                f"'{circuit.name}', e.g. {missing[0]}")

        wires = set(circuit.wires)
        wires.difference_update(removals)
        wires.update(record.additions())
        circuit.wires = wires
        self.applied.append((circuit, record))
        log.debug("Mutator: %s — %d removed, %d added, %d wires now",
                  circuit.name, len(removals), len(record.additions()), len(wires))


class CircuitTransaction:
    """Base class for work that mutates circuits under their locks.

    Subclasses implement :meth:`accessed_circuits` and :meth:`run`.
    """

    def accessed_circuits(self) -> dict[Circuit, int]:
        raise NotImplementedError

    def run(self, mutator: CircuitMutator) -> None:
        raise NotImplementedError

    def execute(self, mutator: CircuitMutator | None = None) -> CircuitMutator:
        """Lock every accessed circuit, run, and release the locks."""
        if mutator is None:
            mutator = CircuitMutator()

        acquired: list[Circuit] = []
        try:
            for circuit in self.accessed_circuits():
                if not circuit.lock.acquire(blocking=False):
                    log.warning("Transaction %s: circuit '%s' is busy",
                                type(self).__name__, circuit.name)
                    raise CircuitLockedError(circuit)
                acquired.append(circuit)
            self.run(mutator)
        finally:
            for circuit in reversed(acquired):
                circuit.lock.release()
        return mutator
