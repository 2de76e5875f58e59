"""Lifespan -- a remaining-lifetime counter shared by several entities.

Trail markers encode their scent strength in it and food morsels their
remaining supply, so both are read and written through the same
accessor.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Lifespan:
    """Remaining lifetime in generations (never negative).

    Attributes:
        length: Units left before the owning entity expires.
    """

    length: int

    def __post_init__(self) -> None:
        self.length = max(0, int(self.length))

    def is_alive(self) -> bool:
        """Return True while at least one unit is left."""
        return self.length > 0

    def shorten(self) -> None:
        """Remove a single unit, stopping at zero."""
        self.length = max(0, self.length - 1)

    def lengthen_by(self, amount: int) -> None:
        """Add ``amount`` units (negative amounts are ignored)."""
        self.length += max(0, int(amount))

    def clear(self) -> None:
        """Drop the remaining lifetime to zero."""
        self.length = 0
