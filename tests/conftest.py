"""Shared fixtures for the formicarium test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from formicarium.colony.ant import Ant
from formicarium.colony.traits import Traits
from formicarium.simulation.config import SimulationConfig
from formicarium.world.geometry import Location
from formicarium.world.world import World


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def small_world() -> World:
    """A small 8x8 world for fast tests."""
    return World(width=8, height=8)


@pytest.fixture
def traits() -> Traits:
    """Default ant traits (memory 30, budget 200, decrease 2, ratio 0.1)."""
    return Traits()


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()


@pytest.fixture
def make_ant(small_world: World, traits: Traits):
    """Factory placing a foraging ant at ``location`` with its nest at (0, 0)."""

    def _make(location: Location, nest: Location = Location(0, 0)) -> Ant:
        ant = Ant.from_traits(
            entity_id=small_world.allocate_id(),
            nest_location=nest,
            traits=traits,
            dimension=small_world.dimension,
        )
        ant.location = location
        small_world.insert(ant)
        return ant

    return _make
