"""wirekit — canonicalization of orthogonal wire networks on a design grid.

Packages:
  geometry   Grid locations and axis-aligned wire segments.
  circuit    Host circuit model, atomic mutator, transactions, wire repair.
  pipeline   Rewrite passes (beautify: stubs, dead branches, C-detours).
"""
