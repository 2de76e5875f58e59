"""Morsel -- a static food source with a finite supply."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from formicarium.world.geometry import Location
from formicarium.world.kinds import Kind
from formicarium.world.lifespan import Lifespan


@dataclass
class Morsel:
    """A food source.

    The remaining supply is stored in ``lifespan``: each pickup removes
    one unit, and an exhausted morsel no longer satisfies pickups.

    Attributes:
        location: Tile the morsel sits on.
        lifespan: Remaining supply.
        entity_id: Unique id, allocated by the world on insertion.
    """

    location: Location
    lifespan: Lifespan
    entity_id: int | None = None

    kind: ClassVar[Kind] = Kind.MORSEL

    @property
    def supply(self) -> int:
        """Food units left in this morsel."""
        return self.lifespan.length
