"""Tests for the host circuit model: records, mutator, transactions, repair."""

from __future__ import annotations

import unittest

from wirekit.circuit import (
    READ_WRITE,
    CircuitLockedError, CircuitMutator, ReplacementError, ReplacementRecord,
    WireRepair,
)
from wirekit.pipeline.beautify import BeautifyConfig, BeautifyWiresTransaction
from tests.circuit_fixtures import (
    L, W, P1, P2, P3, P4, MESSY_WIRES, MESSY_EXPECTED,
    make_circuit, make_messy_circuit,
)


class TestReplacementRecord(unittest.TestCase):

    def test_empty(self):
        record = ReplacementRecord()
        self.assertTrue(record.is_empty())
        self.assertTrue(record.is_identity())

    def test_identity(self):
        record = ReplacementRecord()
        record.put(W(0, 0, 10, 0), [W(0, 0, 10, 0)])
        self.assertFalse(record.is_empty())
        self.assertTrue(record.is_identity())
        self.assertEqual(record.removals(), set())
        self.assertEqual(record.additions(), set())

    def test_removals_and_additions(self):
        record = ReplacementRecord()
        record.put(W(0, 0, 0, 10), [W(0, 0, 20, 0)])
        record.remove(W(0, 10, 20, 10))
        self.assertEqual(record.removals(), {W(0, 0, 0, 10), W(0, 10, 20, 10)})
        self.assertEqual(record.additions(), {W(0, 0, 20, 0)})

    def test_later_put_wins(self):
        record = ReplacementRecord()
        record.put(W(0, 0, 0, 10), [W(0, 0, 20, 0)])
        record.remove(W(0, 0, 0, 10))
        self.assertEqual(record.get(W(0, 0, 0, 10)), frozenset())
        self.assertEqual(len(record), 1)


class TestCircuitMutator(unittest.TestCase):

    def test_replace_applies_record(self):
        circuit = make_circuit([W(0, 0, 0, 10), W(0, 10, 20, 10)], L(0, 0))
        record = ReplacementRecord()
        record.put(W(0, 0, 0, 10), [W(0, 0, 20, 0)])
        record.remove(W(0, 10, 20, 10))
        mutator = CircuitMutator()
        mutator.replace(circuit, record)
        self.assertEqual(circuit.wires, {W(0, 0, 20, 0)})
        self.assertEqual(len(mutator.applied), 1)

    def test_mismatched_record_changes_nothing(self):
        circuit = make_circuit([W(0, 0, 0, 10)], L(0, 0))
        record = ReplacementRecord()
        record.remove(W(0, 0, 0, 10))
        record.remove(W(50, 0, 60, 0))
        with self.assertRaises(ReplacementError):
            CircuitMutator().replace(circuit, record)
        self.assertEqual(circuit.wires, {W(0, 0, 0, 10)})


class TestWireRepair(unittest.TestCase):

    def test_splits_at_t_junction(self):
        circuit = make_circuit([W(0, 0, 20, 0), W(10, 0, 10, 10)], L(0, 0))
        WireRepair(circuit).run(CircuitMutator())
        self.assertEqual(circuit.wires, {W(0, 0, 10, 0), W(10, 0, 20, 0), W(10, 0, 10, 10)})

    def test_splits_at_terminal(self):
        circuit = make_circuit([W(0, 0, 20, 0)], L(5, 0))
        WireRepair(circuit).run(CircuitMutator())
        self.assertEqual(circuit.wires, {W(0, 0, 5, 0), W(5, 0, 20, 0)})

    def test_merges_collinear_overlap(self):
        circuit = make_circuit([W(0, 0, 20, 0), W(10, 0, 30, 0)])
        record = WireRepair(circuit).run(CircuitMutator())
        self.assertEqual(circuit.wires, {W(0, 0, 30, 0)})
        self.assertEqual(record.get(W(0, 0, 20, 0)), {W(0, 0, 30, 0)})
        self.assertEqual(record.get(W(10, 0, 30, 0)), frozenset())

    def test_touching_collinear_wires_untouched(self):
        wires = {W(0, 0, 10, 0), W(10, 0, 20, 0)}
        circuit = make_circuit(list(wires))
        mutator = CircuitMutator()
        record = WireRepair(circuit).run(mutator)
        self.assertTrue(record.is_empty())
        self.assertEqual(mutator.applied, [])
        self.assertEqual(circuit.wires, wires)

    def test_crossing_without_junction_untouched(self):
        wires = {W(0, 5, 20, 5), W(10, 0, 10, 10)}
        circuit = make_circuit(list(wires))
        self.assertTrue(WireRepair(circuit).plan().is_empty())


class TestBeautifyWiresTransaction(unittest.TestCase):

    def test_declares_read_write_access(self):
        circuit = make_messy_circuit()
        txn = BeautifyWiresTransaction(circuit)
        self.assertEqual(txn.accessed_circuits(), {circuit: READ_WRITE})

    def test_execute_commits(self):
        circuit = make_messy_circuit()
        components = list(circuit.non_wires)
        txn = BeautifyWiresTransaction(circuit)
        mutator = txn.execute()
        self.assertEqual(circuit.wires, MESSY_EXPECTED)
        self.assertTrue(txn.result.committed)
        # beautify commit only; repair found nothing to do
        self.assertEqual(len(mutator.applied), 1)
        self.assertEqual(circuit.non_wires, components)
        self.assertEqual(circuit.terminal_locations(), {P1, P2, P3, P4})
        self.assertFalse(circuit.lock.locked())

    def test_repair_runs_after_commit(self):
        """A collapsed detour crossing a terminal is split there.

        The straight wire runs through the tap net's terminal, so after the
        split both nets share one junction.  The overlap rule only rejects
        collinear overlap, so this merge of nets is a known limitation.
        """
        parts = [W(0, 0, 0, 10), W(0, 10, 20, 10), W(20, 0, 20, 10)]
        tap = W(10, -10, 10, 0)
        circuit = make_circuit(parts + [tap], L(0, 0), L(20, 0), L(10, 0), L(10, -10))
        mutator = BeautifyWiresTransaction(circuit).execute()
        self.assertEqual(circuit.wires, {W(0, 0, 10, 0), W(10, 0, 20, 0), tap})
        self.assertEqual(len(mutator.applied), 2)

    def test_repair_can_be_disabled(self):
        parts = [W(0, 0, 0, 10), W(0, 10, 20, 10), W(20, 0, 20, 10)]
        tap = W(10, -10, 10, 0)
        circuit = make_circuit(parts + [tap], L(0, 0), L(20, 0), L(10, 0), L(10, -10))
        config = BeautifyConfig(repair_after_commit=False)
        BeautifyWiresTransaction(circuit, config=config).execute()
        self.assertEqual(circuit.wires, {W(0, 0, 20, 0), tap})

    def test_locked_circuit_is_not_touched(self):
        circuit = make_messy_circuit()
        circuit.lock.acquire()
        try:
            with self.assertRaises(CircuitLockedError):
                BeautifyWiresTransaction(circuit).execute()
            self.assertEqual(circuit.wires, set(MESSY_WIRES))
        finally:
            circuit.lock.release()

        BeautifyWiresTransaction(circuit).execute()
        self.assertEqual(circuit.wires, MESSY_EXPECTED)

    def test_second_run_is_a_no_op(self):
        circuit = make_messy_circuit()
        BeautifyWiresTransaction(circuit).execute()
        txn = BeautifyWiresTransaction(circuit)
        txn.execute()
        self.assertFalse(txn.result.changed)
        self.assertEqual(circuit.wires, MESSY_EXPECTED)

    def test_empty_iterator_selects_all_wires(self):
        circuit = make_messy_circuit()
        txn = BeautifyWiresTransaction(circuit, iter([]))
        self.assertEqual(txn.wires, set(MESSY_WIRES))
        txn.execute()
        self.assertEqual(circuit.wires, MESSY_EXPECTED)

    def test_selection_subset(self):
        circuit = make_messy_circuit()
        BeautifyWiresTransaction(circuit, [W(200, 200, 210, 200)]).execute()
        self.assertEqual(circuit.wires, set(MESSY_WIRES) - {W(200, 200, 210, 200)})


if __name__ == "__main__":
    unittest.main()
