"""Nest -- the colony home and its food storage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from formicarium.world.geometry import Location
from formicarium.world.kinds import Kind

_MAX_STORAGE = 2**64 - 1


@dataclass
class Nest:
    """A static nest that accumulates delivered food.

    Attributes:
        location: Tile the nest sits on.
        entity_id: Unique id, allocated by the world on insertion.
    """

    location: Location
    entity_id: int | None = None
    _storage: int = field(default=0, repr=False)

    kind: ClassVar[Kind] = Kind.NEST

    def store(self) -> None:
        """Add a single unit of food (saturating)."""
        self._storage = min(_MAX_STORAGE, self._storage + 1)

    @property
    def storage(self) -> int:
        """Total food delivered so far."""
        return self._storage
