"""Grid geometry -- locations, offsets and the torus boundary policy.

The world wraps around on both axes, so every translation is taken
modulo the grid dimension.  Distances used for dead reckoning are plain
Manhattan distances.
"""

from __future__ import annotations

from typing import NamedTuple


class Dimension(NamedTuple):
    """Size of the grid in tiles."""

    width: int
    height: int


class Offset(NamedTuple):
    """A relative displacement on the grid."""

    dx: int
    dy: int


class Location(NamedTuple):
    """An absolute tile coordinate."""

    x: int
    y: int

    def translate(self, offset: Offset, dimension: Dimension) -> Location:
        """Return this location moved by ``offset``, wrapping at the edges."""
        return Location(
            (self.x + offset.dx) % dimension.width,
            (self.y + offset.dy) % dimension.height,
        )

    def translate_towards(self, dest: Location, dimension: Dimension) -> Location:
        """Return this location moved one step toward ``dest``.

        Each axis changes by at most one unit, in the direction of the
        shortest wrapped path.
        """
        step = Offset(
            _sign(_wrapped_delta(self.x, dest.x, dimension.width)),
            _sign(_wrapped_delta(self.y, dest.y, dimension.height)),
        )
        return self.translate(step, dimension)

    def manhattan(self, other: Location) -> int:
        """Return the Manhattan distance to ``other`` (no wrapping)."""
        return abs(self.x - other.x) + abs(self.y - other.y)


def border(magnitude: int) -> list[Offset]:
    """Return all offsets at Chebyshev distance exactly ``magnitude``.

    Offsets are listed row by row (top to bottom, left to right).  A
    magnitude of zero yields the single zero offset.

    Args:
        magnitude: Ring radius (>= 0).
    """
    if magnitude <= 0:
        return [Offset(0, 0)]
    return [
        Offset(dx, dy)
        for dy in range(-magnitude, magnitude + 1)
        for dx in range(-magnitude, magnitude + 1)
        if max(abs(dx), abs(dy)) == magnitude
    ]


def _wrapped_delta(origin: int, dest: int, size: int) -> int:
    delta = (dest - origin) % size
    if delta > size // 2:
        delta -= size
    return delta


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)
