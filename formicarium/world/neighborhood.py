"""Neighborhood -- what an ant can see and touch during one generation.

The centre tile is live: the ant standing on it may change the entities
there (reinforce or wipe a marker, store food, take a morsel).  The ring
of tiles at the sensing radius is the frozen snapshot of the previous
generation and can only be read.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from formicarium.world.geometry import Offset

if TYPE_CHECKING:
    from formicarium.pheromones.markers import Scent
    from formicarium.world.kinds import Kind
    from formicarium.world.tile import Tile, TileView


class RingTile(NamedTuple):
    """A tile of the ring together with its offset from the centre."""

    offset: Offset
    view: TileView


@dataclass
class Neighborhood:
    """The local surroundings handed to an ant for one generation.

    Attributes:
        center: The live tile the ant stands on.
        ring: Snapshot views of the tiles at the sensing radius.
    """

    center: Tile
    ring: list[RingTile]

    def contains_kind(self, kind: Kind) -> bool:
        """Return True if ``kind`` is on the centre tile or anywhere in the ring."""
        if self.center.count(kind) > 0:
            return True
        return any(tile.view.has(kind) for tile in self.ring)

    def first_view_with(self, kind: Kind) -> TileView | None:
        """Return the first ring view holding an entity of ``kind``."""
        return next((t.view for t in self.ring if t.view.has(kind)), None)

    def ring_strengths(self, scent: Scent) -> Iterator[tuple[TileView, int]]:
        """Yield ``(view, strength)`` for ring tiles holding a ``scent`` marker."""
        for tile in self.ring:
            strength = tile.view.strength(scent)
            if strength is not None:
                yield tile.view, strength
