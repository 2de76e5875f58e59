"""Tests for formicarium.colony.consensus - one writer per tile and scent."""

import pytest

from formicarium.colony.ant import Role
from formicarium.colony.consensus import (
    DepositClaim,
    depositor_ids,
    leader_ids,
    resolve_leaders,
)
from formicarium.pheromones.markers import Scent
from formicarium.simulation.config import SimulationConfig
from formicarium.simulation.engine import SimulationEngine
from formicarium.world.geometry import Location
from formicarium.world.kinds import Kind

HERE = Location(3, 3)


def _claim(ant_id: int, location: Location = HERE, scent: Scent = Scent.COLONY):
    return DepositClaim(ant_id=ant_id, location=location, scent=scent, strength=10)


class TestResolveLeaders:
    """Tests for claim resolution."""

    def test_lowest_id_wins(self) -> None:
        winners = resolve_leaders([_claim(7), _claim(3), _claim(5)])
        assert winners[(HERE, Scent.COLONY)].ant_id == 3

    def test_order_independent(self) -> None:
        claims = [_claim(7), _claim(3), _claim(5)]
        assert leader_ids(claims) == leader_ids(reversed(claims)) == {3}

    def test_different_scents_do_not_compete(self) -> None:
        claims = [_claim(4, scent=Scent.COLONY), _claim(9, scent=Scent.FOOD)]
        assert depositor_ids(claims) == {4, 9}

    def test_different_tiles_do_not_compete(self) -> None:
        claims = [_claim(4), _claim(9, location=Location(0, 0))]
        assert depositor_ids(claims) == {4, 9}

    def test_lone_claim_deposits_without_leading(self) -> None:
        assert depositor_ids([_claim(4)]) == {4}
        assert leader_ids([_claim(4)]) == set()

    def test_only_contested_tiles_have_leaders(self) -> None:
        claims = [_claim(6), _claim(2), _claim(9, location=Location(0, 0))]
        assert depositor_ids(claims) == {2, 9}
        assert leader_ids(claims) == {2}

    def test_no_claims(self) -> None:
        assert resolve_leaders([]) == {}
        assert leader_ids([]) == set()
        assert depositor_ids([]) == set()


class TestSharedTile:
    """Several ants standing on one tile lay a single marker."""

    @pytest.mark.parametrize("ant_count", [2, 5])
    def test_one_marker_per_tile(self, ant_count: int) -> None:
        config = SimulationConfig(
            world_width=10,
            world_height=10,
            nest_x=5,
            nest_y=5,
            ant_count=ant_count,
            morsel_count=0,
        )
        engine = SimulationEngine(config=config)
        engine.step()

        nest_tile = engine.world.tile_at(config.nest_location)
        assert nest_tile.count(Kind.MARKER) == 1
        assert nest_tile.marker(Scent.COLONY).strength == (
            config.max_concentration - config.concentration_decrease
        )

        leaders = [ant for ant in engine.colony.ants if ant.role is Role.LEADER]
        assert len(leaders) == 1
        assert leaders[0].entity_id == min(a.entity_id for a in engine.colony.ants)

    def test_lone_ant_deposits_as_follower(self) -> None:
        config = SimulationConfig(
            world_width=10,
            world_height=10,
            nest_x=5,
            nest_y=5,
            ant_count=1,
            morsel_count=0,
        )
        engine = SimulationEngine(config=config)
        engine.step()

        nest_tile = engine.world.tile_at(config.nest_location)
        assert nest_tile.marker(Scent.COLONY) is not None
        assert engine.colony.ants[0].role is Role.FOLLOWER

    def test_existing_marker_is_reinforced_not_duplicated(self) -> None:
        config = SimulationConfig(
            world_width=10,
            world_height=10,
            nest_x=5,
            nest_y=5,
            ant_count=3,
            morsel_count=0,
        )
        engine = SimulationEngine(config=config)
        engine.step()
        # send every ant back to the nest tile
        for ant in engine.colony.ants:
            origin = ant.location
            ant.location = config.nest_location
            engine.world.relocate(ant, origin)
        engine.step()

        nest_tile = engine.world.tile_at(config.nest_location)
        assert nest_tile.count(Kind.MARKER) == 1
        assert all(ant.role is Role.FOLLOWER for ant in engine.colony.ants)
