"""Trail markers -- decaying scent deposits pinned to a single tile.

A marker's strength *is* its remaining lifespan: it loses one unit per
generation and disappears when it reaches zero.  At most one marker of
each scent may sit on a tile at any committed generation boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar

from formicarium.world.geometry import Location
from formicarium.world.kinds import Kind
from formicarium.world.lifespan import Lifespan


class Scent(Enum):
    """What a trail marker leads to."""

    COLONY = auto()  # left by foragers, leads back home
    FOOD = auto()  # left by carriers, leads to a morsel


@dataclass
class Concentration:
    """How much scent an ant can still release per deposit.

    Attributes:
        value: Remaining budget (never negative).
    """

    value: int

    def decrease_by(self, amount: int) -> Concentration:
        """Lower the budget by ``amount``, saturating at zero.

        Returns:
            This concentration, for chaining.
        """
        self.value = max(0, self.value - amount)
        return self


@dataclass
class TrailMarker:
    """A scent deposit on one tile.

    Attributes:
        scent: Which scent this marker carries.
        location: Tile the marker is pinned to.
        lifespan: Remaining strength in generations.
        entity_id: Unique id, allocated by the world on insertion.
    """

    scent: Scent
    location: Location
    lifespan: Lifespan
    entity_id: int | None = None

    kind: ClassVar[Kind] = Kind.MARKER

    @classmethod
    def deposit(
        cls,
        scent: Scent,
        location: Location,
        concentration: int,
    ) -> TrailMarker:
        """Create a fresh marker whose strength equals ``concentration``."""
        return cls(scent=scent, location=location, lifespan=Lifespan(concentration))

    @property
    def strength(self) -> int:
        """Current scent strength (remaining lifespan)."""
        return self.lifespan.length
