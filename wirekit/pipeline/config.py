"""Shared constants for the wire rewrite passes.

The beautify engine and its tests read these from one place so the
detour shape and the fixpoint guard stay consistent.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BeautifyRules:
    """Structural rules for wire canonicalization."""

    detour_inner_degree: int = 2
    """Required degree of the two inner detour points b and c."""

    branch_min_degree: int = 2
    """A non-terminal location with at least this many wires is a
    branch point for dead-branch pruning.  Degree-2 pass-through points
    count too; straightening them is left to the detour pass."""

    max_fixpoint_slack: int = 1
    """Extra rounds allowed beyond the initial wire count before a
    fixpoint loop is declared runaway."""


# Module-level singleton — importable everywhere.
BEAUTIFY_RULES = BeautifyRules()
