"""LocationAwareness -- a bounded memory of recently visited tiles."""

from __future__ import annotations

from dataclasses import dataclass, field

from formicarium.world.geometry import Location


@dataclass
class LocationAwareness:
    """Fixed-size ring buffer of locations.

    Once ``capacity`` locations are recorded, each insert overwrites the
    oldest one.  A capacity of zero remembers nothing.

    Attributes:
        capacity: Maximum number of locations held.
    """

    capacity: int
    _slots: list[Location | None] = field(init=False, repr=False)
    _next: int = field(init=False, default=0, repr=False)

    def __post_init__(self) -> None:
        self.capacity = max(0, self.capacity)
        self._slots = [None] * self.capacity

    def insert(self, location: Location) -> None:
        """Record ``location`` in place of the oldest slot."""
        if self.capacity == 0:
            return
        self._slots[self._next] = location
        self._next = (self._next + 1) % self.capacity

    def contains(self, location: Location) -> bool:
        """Return True if ``location`` is currently remembered."""
        return location in self._slots

    def clear(self) -> None:
        """Forget every location."""
        self._slots = [None] * self.capacity
        self._next = 0

    def __contains__(self, location: object) -> bool:
        return location in self._slots
