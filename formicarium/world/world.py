"""World grid -- the spatial container for the simulation.

The World owns tiles arranged in a 2D torus and provides the substrate
services the ants rely on: id allocation, entity insertion, per-tile
snapshots, neighbourhood construction and removal of expired entities.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator

    from formicarium.world.tile import Entity

from formicarium.pheromones.markers import TrailMarker
from formicarium.simulation.errors import InvariantError
from formicarium.world.geometry import Dimension, Location, border
from formicarium.world.kinds import Kind
from formicarium.world.lifespan import Lifespan
from formicarium.world.morsel import Morsel
from formicarium.world.neighborhood import Neighborhood, RingTile
from formicarium.world.tile import Tile, TileView

Snapshot = dict[Location, TileView]


@dataclass
class World:
    """A 2D wrapping grid that contains all spatial simulation state.

    Attributes:
        width: Number of columns in the grid.
        height: Number of rows in the grid.
        tiles: 2D list of Tile objects indexed as ``tiles[y][x]``.
    """

    width: int
    height: int
    tiles: list[list[Tile]] = field(init=False, repr=False)
    _ids: Iterator[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Initialise the grid with empty tiles."""
        self.tiles = [
            [Tile(x=x, y=y) for x in range(self.width)] for y in range(self.height)
        ]
        self._ids = itertools.count()

    @property
    def dimension(self) -> Dimension:
        """Return the grid size."""
        return Dimension(self.width, self.height)

    def tile_at(self, location: Location) -> Tile:
        """Return the tile at ``location``.

        Raises:
            IndexError: If the location is out of bounds.
        """
        x, y = location
        if not (0 <= x < self.width and 0 <= y < self.height):
            msg = f"({x}, {y}) out of bounds for {self.width}x{self.height}"
            raise IndexError(msg)
        return self.tiles[y][x]

    def allocate_id(self) -> int:
        """Return a fresh entity id, unique for the lifetime of the world."""
        return next(self._ids)

    def insert(self, entity: Entity) -> Entity:
        """Place an entity on the tile at its location.

        An id is allocated when the entity has none yet.

        Raises:
            InvariantError: If the entity is a marker and the tile already
                holds a marker of the same scent.
        """
        tile = self.tile_at(entity.location)
        if entity.kind is Kind.MARKER and tile.marker(entity.scent) is not None:
            msg = f"tile {tile.location} already holds a {entity.scent.name} marker"
            raise InvariantError(msg)
        if entity.entity_id is None:
            entity.entity_id = self.allocate_id()
        tile.entities.append(entity)
        return entity

    def relocate(self, entity: Entity, origin: Location) -> None:
        """Move an entity from the tile at ``origin`` to its current location."""
        if origin == entity.location:
            return
        source = self.tile_at(origin)
        source.entities = [e for e in source.entities if e is not entity]
        self.tile_at(entity.location).entities.append(entity)

    def entities(self) -> Iterator[Entity]:
        """Iterate over every entity, tile by tile."""
        for row in self.tiles:
            for tile in row:
                yield from tile.entities

    def markers(self) -> list[TrailMarker]:
        """Return every trail marker in the world."""
        return [e for e in self.entities() if e.kind is Kind.MARKER]

    def morsels(self) -> list[Morsel]:
        """Return every morsel in the world."""
        return [e for e in self.entities() if e.kind is Kind.MORSEL]

    def snapshot(self) -> Snapshot:
        """Freeze every occupied tile.

        Returns:
            Mapping from location to view.  Empty tiles are omitted.
        """
        return {
            tile.location: tile.freeze()
            for row in self.tiles
            for tile in row
            if tile.entities
        }

    def neighborhood(
        self,
        location: Location,
        snapshot: Snapshot,
        scope: int = 1,
    ) -> Neighborhood:
        """Build the neighbourhood of ``location``.

        Args:
            location: The centre tile.
            snapshot: Views taken at the start of the generation.
            scope: Sensing radius in tiles.

        Returns:
            The live centre tile plus the ring of snapshot views at
            distance ``scope``.
        """
        ring = []
        for offset in border(scope):
            where = location.translate(offset, self.dimension)
            view = snapshot.get(where) or TileView(location=where)
            ring.append(RingTile(offset=offset, view=view))
        return Neighborhood(center=self.tile_at(location), ring=ring)

    def remove_expired(self) -> int:
        """Remove markers and morsels whose lifespan has run out.

        Returns:
            Number of entities removed.
        """
        removed = 0
        for row in self.tiles:
            for tile in row:
                kept = [e for e in tile.entities if not _expired(e)]
                removed += len(tile.entities) - len(kept)
                tile.entities = kept
        return removed

    def populate(self, rng: Generator, *, count: int, storage: int) -> list[Morsel]:
        """Scatter morsels uniformly at random across the grid.

        Args:
            rng: Seeded random generator.
            count: Number of morsels to place.
            storage: Initial supply of each morsel.

        Returns:
            The morsels placed.
        """
        placed = []
        for _ in range(count):
            location = Location(
                int(rng.integers(0, self.width)),
                int(rng.integers(0, self.height)),
            )
            morsel = Morsel(location=location, lifespan=Lifespan(storage))
            placed.append(self.insert(morsel))
        return placed


def _expired(entity: Entity) -> bool:
    match entity:
        case TrailMarker(lifespan=span) | Morsel(lifespan=span):
            return not span.is_alive()
    return False
