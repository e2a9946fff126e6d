"""Beautify — canonicalizes an orthogonal wire network.

Submodules:
  models    Per-run state, result dataclasses and configuration.
  graph     Working wire graph (segment set + adjacency index).
  stubs     Pin-stub removal.
  branches  Dead-branch pruning (reachability + branch tracing).
  detours   C-detour simplification.
  engine    Pass sequencing, replacement record, transaction.
"""

from .models import BeautifyConfig, BeautifyResult, BeautifyRun, BeautifyStats
from .graph import WireGraph
from .engine import beautify_wires, BeautifyWiresTransaction

__all__ = [
    # Models
    "BeautifyConfig", "BeautifyResult", "BeautifyRun", "BeautifyStats",
    # Graph
    "WireGraph",
    # Engine
    "beautify_wires", "BeautifyWiresTransaction",
]
