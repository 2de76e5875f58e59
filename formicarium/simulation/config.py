"""Config -- load simulation parameters from YAML files.

All tunable constants (grid size, ant and morsel counts, scent budget,
visibility of each kind of entity) live in YAML and are parsed into a
typed dataclass here.  ``from_yaml`` is strict; ``load`` falls back to
the documented defaults with a warning when the file cannot be used.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from formicarium.colony.traits import Traits
from formicarium.pheromones.markers import Scent
from formicarium.world.geometry import Dimension, Location
from formicarium.world.kinds import Kind

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay.
        world_width: Number of grid columns.
        world_height: Number of grid rows.
        tile_side: Pixel size of a tile when rendered.
        fps: Target simulation ticks per second when rendered.
        background: Background RGB colour.
        grid_visible: Draw grid lines.
        nest_visible: Draw the nest.
        ants_visible: Draw the ants.
        morsels_visible: Draw the morsels.
        colony_pheromone_visible: Draw colony-scent markers.
        food_pheromone_visible: Draw food-scent markers.
        ant_count: Number of ants born on the nest at start.
        memory_span: Tiles each ant remembers.
        max_concentration: Scent budget restored at every target.
        concentration_decrease: Scent budget lost per tick.
        reinforcement_ratio: Extra strength fraction when a forager
            reinforces a colony-scent marker.
        morsel_count: Number of morsels scattered at start.
        morsel_storage: Initial supply of each morsel.
        nest_x: Nest column.
        nest_y: Nest row.
    """

    seed: int = 0
    world_width: int = 30
    world_height: int = 30
    tile_side: int = 25
    fps: int = 24
    background: tuple[int, int, int] = (25, 75, 75)

    # Presentation
    grid_visible: bool = False
    nest_visible: bool = True
    ants_visible: bool = True
    morsels_visible: bool = True
    colony_pheromone_visible: bool = False
    food_pheromone_visible: bool = False

    # Ants
    ant_count: int = 10
    memory_span: int = 30
    max_concentration: int = 200
    concentration_decrease: int = 2
    reinforcement_ratio: float = 0.1

    # Food
    morsel_count: int = 20
    morsel_storage: int = 30

    # Nest
    nest_x: int = 25
    nest_y: int = 25

    def __post_init__(self) -> None:
        """Validate ranges.

        Raises:
            ValueError: If a value is out of range.
        """
        self.background = tuple(self.background)
        if self.world_width <= 0 or self.world_height <= 0:
            msg = f"world must be non-empty, got {self.world_width}x{self.world_height}"
            raise ValueError(msg)
        if not (0 <= self.nest_x < self.world_width):
            msg = f"nest_x={self.nest_x} outside 0..{self.world_width - 1}"
            raise ValueError(msg)
        if not (0 <= self.nest_y < self.world_height):
            msg = f"nest_y={self.nest_y} outside 0..{self.world_height - 1}"
            raise ValueError(msg)
        for name in (
            "ant_count",
            "memory_span",
            "max_concentration",
            "concentration_decrease",
            "morsel_count",
            "morsel_storage",
        ):
            if getattr(self, name) < 0:
                msg = f"{name} must be >= 0, got {getattr(self, name)}"
                raise ValueError(msg)
        if self.reinforcement_ratio < 0:
            msg = f"reinforcement_ratio must be >= 0, got {self.reinforcement_ratio}"
            raise ValueError(msg)

    @property
    def dimension(self) -> Dimension:
        """Grid size."""
        return Dimension(self.world_width, self.world_height)

    @property
    def nest_location(self) -> Location:
        """Nest tile."""
        return Location(self.nest_x, self.nest_y)

    @property
    def total_storage(self) -> int:
        """Total food initially scattered in the world."""
        return self.morsel_count * self.morsel_storage

    def traits(self) -> Traits:
        """Return the ant parameters as colony traits."""
        return Traits(
            memory_span=self.memory_span,
            max_concentration=self.max_concentration,
            concentration_decrease=self.concentration_decrease,
            reinforcement_ratio=self.reinforcement_ratio,
        )

    def is_visible(self, kind: Kind, scent: Scent | None = None) -> bool:
        """Return True if entities of ``kind`` (and ``scent``) are drawn."""
        match kind:
            case Kind.NEST:
                return self.nest_visible
            case Kind.ANT:
                return self.ants_visible
            case Kind.MORSEL:
                return self.morsels_visible
            case Kind.MARKER if scent is Scent.COLONY:
                return self.colony_pheromone_visible
            case Kind.MARKER if scent is Scent.FOOD:
                return self.food_pheromone_visible
        return False

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Keys that are not configuration options are ignored with a
        warning; missing keys keep their defaults.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            TypeError: If the document is not a mapping.
            ValueError: If a value is out of range.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            msg = f"{path}: expected a mapping, got {type(data).__name__}"
            raise TypeError(msg)

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))

        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def load(cls, path: str | Path) -> SimulationConfig:
        """Load configuration, falling back to defaults on failure.

        Args:
            path: Path to the YAML config file.

        Returns:
            The parsed configuration, or the defaults if the file is
            missing or invalid.
        """
        logger.info("Parsing simulation configuration from %s", path)
        try:
            return cls.from_yaml(path)
        except (OSError, yaml.YAMLError, TypeError, ValueError) as exc:
            logger.warning("Using default configuration: %s", exc)
            return cls()
