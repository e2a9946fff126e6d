"""Circuit — the host network the rewrite passes operate on.

Submodules:
  models    Component, Circuit, ReplacementRecord.
  mutator   Atomic replacement (CircuitMutator) and locked transactions.
  repair    Local wire repair (T-junction splitting, overlap merging).
"""

from .models import Component, Circuit, ReplacementRecord
from .mutator import (
    READ, READ_WRITE,
    CircuitMutator, CircuitTransaction,
    CircuitLockedError, ReplacementError,
)
from .repair import WireRepair

__all__ = [
    # Models
    "Component", "Circuit", "ReplacementRecord",
    # Mutation
    "READ", "READ_WRITE",
    "CircuitMutator", "CircuitTransaction",
    "CircuitLockedError", "ReplacementError",
    # Repair
    "WireRepair",
]
