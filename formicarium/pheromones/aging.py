"""Aging logic for trail markers.

Markers are the only entities that change on their own: each generation
every marker loses one unit of strength.  Removal of exhausted markers
is left to the world (``World.remove_expired``) so it happens once, at
the generation boundary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from formicarium.pheromones.markers import TrailMarker
    from formicarium.world.world import World


def evaporate(marker: TrailMarker) -> None:
    """Reduce a marker's strength by a single unit (stops at zero)."""
    marker.lifespan.shorten()


def update_markers(world: World) -> int:
    """Run one generation of aging on every marker in the world.

    Args:
        world: The world whose markers should age.

    Returns:
        Number of markers that were aged.
    """
    aged = 0
    for marker in world.markers():
        evaporate(marker)
        aged += 1
    return aged
