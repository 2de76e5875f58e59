"""SimulationEngine -- the main generation loop.

Owns all top-level simulation state and advances it one generation at a
time.  Every ant sees the same start-of-generation snapshot of the
tiles around it; all new markers are staged and only enter the world at
the generation boundary:

1. Snapshot every occupied tile
2. Ants react in id order (live centre tile, frozen ring)
3. Resolve deposit claims (one depositor per tile and scent)
4. Age markers
5. Remove exhausted markers and morsels
6. Insert offspring markers, re-index moved ants
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from formicarium.colony.colony import Colony
from formicarium.colony.consensus import DepositClaim, depositor_ids, leader_ids
from formicarium.colony.nest import Nest
from formicarium.pheromones.aging import update_markers
from formicarium.simulation.config import SimulationConfig
from formicarium.simulation.errors import InvariantError
from formicarium.world.morsel import Morsel
from formicarium.world.world import World

logger = logging.getLogger(__name__)


@dataclass
class SimulationEngine:
    """Drives the simulation forward generation by generation.

    Attributes:
        config: Loaded simulation configuration.
        world: The spatial grid.
        colony: The nest and its ants.
        morsels: Food sources scattered at start (including exhausted ones).
        rng: Master seeded random generator.
        generation: Number of completed generations.
    """

    config: SimulationConfig
    world: World = field(init=False)
    colony: Colony = field(init=False)
    morsels: list[Morsel] = field(init=False, default_factory=list)
    rng: Generator = field(init=False)
    generation: int = 0

    def __post_init__(self) -> None:
        """Build world, nest, ants and morsels from config."""
        self.rng = np.random.default_rng(self.config.seed)
        self.world = World(
            width=self.config.world_width,
            height=self.config.world_height,
        )
        nest = Nest(location=self.config.nest_location)
        self.world.insert(nest)
        self.colony = Colony(nest=nest, traits=self.config.traits())
        for _ in range(self.config.ant_count):
            self.colony.spawn_ant(self.world)
        self.morsels = self.world.populate(
            self.rng,
            count=self.config.morsel_count,
            storage=self.config.morsel_storage,
        )
        logger.info(
            "Simulation ready: %dx%d grid, %d ants, %d morsels of %d",
            self.config.world_width,
            self.config.world_height,
            self.config.ant_count,
            self.config.morsel_count,
            self.config.morsel_storage,
        )

    @property
    def storage(self) -> int:
        """Food delivered to the nest so far."""
        return self.colony.storage

    @property
    def total_storage(self) -> int:
        """Food initially scattered in the world."""
        return self.config.total_storage

    def is_simulation_over(self) -> bool:
        """Return True once all the food has been moved to the nest.

        Raises:
            InvariantError: If the nest holds more than was ever available.
        """
        if self.storage > self.total_storage:
            msg = f"nest storage {self.storage} exceeds total {self.total_storage}"
            raise InvariantError(msg)
        return self.storage == self.total_storage

    def step(self) -> None:
        """Advance the simulation by one generation."""
        snapshot = self.world.snapshot()

        # 1. Every ant reacts on the same snapshot
        claims: list[DepositClaim] = []
        origins = []
        for ant in self.colony.ants:
            origins.append(ant.location)
            neighborhood = self.world.neighborhood(
                ant.location,
                snapshot,
                ant.traits.scope,
            )
            outcome = ant.react(neighborhood, self.rng)
            if outcome.claim is not None:
                claims.append(outcome.claim)

        # 2. One writer per tile and scent
        depositors = depositor_ids(claims)
        leaders = leader_ids(claims)
        for ant in self.colony.ants:
            ant.settle(
                deposit=ant.entity_id in depositors,
                leader=ant.entity_id in leaders,
            )

        # 3. Markers age, spent entities leave
        update_markers(self.world)
        self.world.remove_expired()

        # 4. Commit offspring and movement
        for ant, origin in zip(self.colony.ants, origins, strict=True):
            for marker in ant.offspring():
                self.world.insert(marker)
            self.world.relocate(ant, origin)

        self.generation += 1
        logger.debug(
            "Generation %d: storage %d/%d",
            self.generation,
            self.storage,
            self.total_storage,
        )

    def run(self, ticks: int) -> None:
        """Run the simulation for a fixed number of generations.

        Args:
            ticks: Number of generations to advance.
        """
        for _ in range(ticks):
            self.step()

    def run_until_over(self, max_generations: int) -> bool:
        """Run until all food is in the nest or the cap is reached.

        Args:
            max_generations: Upper bound on the generation counter.

        Returns:
            True if the simulation completed within the cap.
        """
        while not self.is_simulation_over():
            if self.generation >= max_generations:
                logger.warning(
                    "Stopped after %d generations with %d/%d food collected",
                    self.generation,
                    self.storage,
                    self.total_storage,
                )
                return False
            self.step()
        logger.info("Simulation over after %d generations", self.generation)
        return True
