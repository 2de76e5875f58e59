"""Tile -- a single square of the world grid and its frozen snapshot.

A ``Tile`` owns the live entities standing on it.  A ``TileView`` is the
read-only picture of a tile taken at the start of a generation; ants see
the tiles around them only through views, so nothing written during a
generation leaks into a neighbour's perception before the step
boundary.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Union

from formicarium.simulation.errors import InvariantError
from formicarium.world.geometry import Location
from formicarium.world.kinds import Kind

if TYPE_CHECKING:
    from formicarium.colony.ant import Ant
    from formicarium.colony.nest import Nest
    from formicarium.pheromones.markers import Scent, TrailMarker
    from formicarium.world.morsel import Morsel

    Entity = Union[Ant, Nest, Morsel, TrailMarker]


@dataclass
class Tile:
    """A single tile of the grid.

    Attributes:
        x: Column position.
        y: Row position.
        entities: Entities currently standing on this tile.
    """

    x: int
    y: int
    entities: list[Entity] = field(default_factory=list)

    @property
    def location(self) -> Location:
        """Return the tile coordinate."""
        return Location(self.x, self.y)

    def first(self, kind: Kind) -> Entity | None:
        """Return the first entity of ``kind`` on this tile, if any."""
        return next((e for e in self.entities if e.kind is kind), None)

    def count(self, kind: Kind) -> int:
        """Return how many entities of ``kind`` stand on this tile."""
        return sum(1 for e in self.entities if e.kind is kind)

    def marker(self, scent: Scent) -> TrailMarker | None:
        """Return the marker of ``scent`` on this tile, if any.

        Raises:
            InvariantError: If more than one marker of ``scent`` is present.
        """
        found = [
            e for e in self.entities if e.kind is Kind.MARKER and e.scent is scent
        ]
        if len(found) > 1:
            msg = f"{len(found)} {scent.name} markers on tile {self.location}"
            raise InvariantError(msg)
        return found[0] if found else None

    def has_marker(self) -> bool:
        """Return True if any marker, of any scent, is on this tile."""
        return any(e.kind is Kind.MARKER for e in self.entities)

    def freeze(self) -> TileView:
        """Take a read-only snapshot of this tile."""
        strengths: dict[Scent, int] = {}
        for entity in self.entities:
            if entity.kind is not Kind.MARKER:
                continue
            if entity.scent in strengths:
                msg = f"duplicate {entity.scent.name} marker on tile {self.location}"
                raise InvariantError(msg)
            strengths[entity.scent] = entity.strength
        return TileView(
            location=self.location,
            kinds=frozenset(e.kind for e in self.entities),
            markers=MappingProxyType(strengths),
        )


@dataclass(frozen=True)
class TileView:
    """Immutable picture of a tile at the start of a generation.

    Attributes:
        location: Tile coordinate.
        kinds: Entity kinds present on the tile.
        markers: Strength of each marker scent present on the tile.
    """

    location: Location
    kinds: frozenset[Kind] = frozenset()
    markers: Mapping[Scent, int] = field(
        default_factory=lambda: MappingProxyType({}),
    )

    def has(self, kind: Kind) -> bool:
        """Return True if an entity of ``kind`` was on the tile."""
        return kind in self.kinds

    def strength(self, scent: Scent) -> int | None:
        """Return the strength of the ``scent`` marker, or None if absent."""
        return self.markers.get(scent)
