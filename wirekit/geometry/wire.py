"""
Grid locations and axis-aligned wire segments.

All coordinates are integer grid units, origin top-left as on the
design canvas.  Segments are undirected: ``Segment.create(a, b)`` and
``Segment.create(b, a)`` are the same value.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from shapely.geometry import LineString, Point


class WireError(ValueError):
    """Raised when a segment would be degenerate or diagonal."""


@dataclass(frozen=True, order=True)
class Location:
    """An integer point on the design grid."""

    x: int
    y: int

    def translate(self, dx: int, dy: int) -> Location:
        return Location(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


@dataclass(frozen=True, order=True)
class Segment:
    """A horizontal or vertical wire between two distinct locations.

    ``end0`` is always the lexicographically smaller endpoint, so two
    segments compare equal exactly when they cover the same grid span.
    Build instances with :meth:`create`, which enforces the ordering.
    """

    end0: Location
    end1: Location

    def __post_init__(self) -> None:
        if self.end0 == self.end1:
            raise WireError(f"Degenerate wire at {self.end0}")
        if self.end0.x != self.end1.x and self.end0.y != self.end1.y:
            raise WireError(f"Wire {self.end0}-{self.end1} is not axis-aligned")
        if self.end1 < self.end0:
            raise WireError(f"Wire endpoints out of order: {self.end0}-{self.end1}")

    @classmethod
    def create(cls, a: Location, b: Location) -> Segment:
        """Build the segment a–b with canonical endpoint order."""
        if b < a:
            a, b = b, a
        return cls(a, b)

    # ── Endpoint queries ───────────────────────────────────────────

    @property
    def ends(self) -> tuple[Location, Location]:
        return (self.end0, self.end1)

    @property
    def is_horizontal(self) -> bool:
        return self.end0.y == self.end1.y

    @property
    def is_vertical(self) -> bool:
        return self.end0.x == self.end1.x

    @property
    def length(self) -> int:
        return abs(self.end1.x - self.end0.x) + abs(self.end1.y - self.end0.y)

    def other_end(self, loc: Location) -> Location:
        """Return the endpoint that is not *loc*."""
        if loc == self.end0:
            return self.end1
        if loc == self.end1:
            return self.end0
        raise WireError(f"{loc} is not an endpoint of {self}")

    def has_end(self, loc: Location) -> bool:
        return loc == self.end0 or loc == self.end1

    # ── Geometric predicates ───────────────────────────────────────

    @cached_property
    def line(self) -> LineString:
        """Shapely view of the segment (cached per instance)."""
        return LineString([(self.end0.x, self.end0.y), (self.end1.x, self.end1.y)])

    def contains(self, loc: Location, include_ends: bool = False) -> bool:
        """True if *loc* lies on the segment.

        Endpoints only count when *include_ends* is set.
        """
        if self.has_end(loc):
            return include_ends
        return self.line.intersects(Point(loc.x, loc.y))

    def overlaps(self, other: Segment, include_ends: bool = False) -> bool:
        """True if the two segments are collinear and share a stretch.

        A perpendicular crossing never overlaps.  Collinear segments that
        only touch at an endpoint overlap only when *include_ends* is set.
        """
        if self.is_horizontal != other.is_horizontal:
            return False
        if self.is_horizontal and self.end0.y != other.end0.y:
            return False
        if self.is_vertical and self.end0.x != other.end0.x:
            return False
        shared = self.line.intersection(other.line)
        if shared.is_empty:
            return False
        return include_ends or shared.length > 0

    def __str__(self) -> str:
        return f"Wire[{self.end0}-{self.end1}]"
