"""Colony -- aggregate state for the ant colony.

A Colony owns its nest, its population of Ant agents and the traits they
share.  Ants are kept in id order, which is the stable order in which
the engine lets them react.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from formicarium.world.world import World

from formicarium.colony.ant import Activity, Ant
from formicarium.colony.nest import Nest
from formicarium.colony.traits import Traits


@dataclass
class Colony:
    """Top-level state for the ant colony.

    Attributes:
        nest: The colony home (already placed in the world).
        traits: Behavioural parameters shared by every ant.
        ants: Ant population, in ascending id order.
    """

    nest: Nest
    traits: Traits = field(default_factory=Traits)
    ants: list[Ant] = field(default_factory=list)

    @property
    def storage(self) -> int:
        """Food delivered to the nest so far."""
        return self.nest.storage

    def spawn_ant(self, world: World) -> Ant:
        """Create a new ant on the nest tile and place it in the world.

        Args:
            world: The world that allocates the id and hosts the ant.

        Returns:
            The newly created Ant (also appended to ``self.ants``).
        """
        ant = Ant.from_traits(
            entity_id=world.allocate_id(),
            nest_location=self.nest.location,
            traits=self.traits,
            dimension=world.dimension,
        )
        world.insert(ant)
        self.ants.append(ant)
        return ant

    def activity_counts(self) -> dict[Activity, int]:
        """Return how many ants are engaged in each activity."""
        counts = Counter(ant.activity for ant in self.ants)
        return {activity: counts.get(activity, 0) for activity in Activity}
