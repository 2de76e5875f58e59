"""Tests for formicarium.colony - Ant decision cycle, Nest, Colony."""

import numpy as np
import pytest
from numpy.random import Generator

from formicarium.colony.ant import Activity, Ant, Role
from formicarium.colony.colony import Colony
from formicarium.colony.nest import Nest
from formicarium.colony.traits import Traits
from formicarium.pheromones.markers import Concentration, Scent, TrailMarker
from formicarium.simulation.errors import InvariantError
from formicarium.world.geometry import Location, border
from formicarium.world.lifespan import Lifespan
from formicarium.world.morsel import Morsel
from formicarium.world.world import World

CENTRE = Location(4, 4)


def _react(world: World, ant: Ant, rng: Generator):
    neighborhood = world.neighborhood(ant.location, world.snapshot())
    return ant.react(neighborhood, rng)


def _step_size(before: Location, after: Location, size: int = 8) -> int:
    dx = min((after.x - before.x) % size, (before.x - after.x) % size)
    dy = min((after.y - before.y) % size, (before.y - after.y) % size)
    return max(dx, dy)


class TestActivity:
    """Tests for the activity/target duality."""

    def test_foraging_targets_food(self) -> None:
        assert Activity.FORAGING.scent is Scent.COLONY
        assert Activity.FORAGING.target_scent is Scent.FOOD

    def test_carrying_targets_nest(self) -> None:
        assert Activity.CARRYING.scent is Scent.FOOD
        assert Activity.CARRYING.target_scent is Scent.COLONY

    def test_switched(self) -> None:
        assert Activity.FORAGING.switched() is Activity.CARRYING
        assert Activity.CARRYING.switched() is Activity.FORAGING


class TestNest:
    """Tests for nest storage."""

    def test_store_increments(self) -> None:
        nest = Nest(location=Location(0, 0))
        nest.store()
        nest.store()
        assert nest.storage == 2


class TestTargetAssessment:
    """Tests for pickups and deliveries."""

    def test_forager_picks_up_food(self, small_world, make_ant, rng, traits) -> None:
        ant = make_ant(CENTRE)
        morsel = small_world.insert(Morsel(location=CENTRE, lifespan=Lifespan(3)))
        outcome = _react(small_world, ant, rng)
        assert outcome.picked_up
        assert ant.activity is Activity.CARRYING
        assert morsel.supply == 2
        assert not ant.memory.contains(CENTRE)
        assert ant.concentration.value == (
            traits.max_concentration - traits.concentration_decrease
        )

    def test_exhausted_morsel_not_picked(self, small_world, make_ant, rng) -> None:
        ant = make_ant(CENTRE)
        morsel = small_world.insert(Morsel(location=CENTRE, lifespan=Lifespan(0)))
        outcome = _react(small_world, ant, rng)
        assert not outcome.picked_up
        assert ant.activity is Activity.FORAGING
        assert morsel.supply == 0

    def test_shared_morsel_feeds_one_ant(self, small_world, make_ant, rng) -> None:
        morsel = small_world.insert(Morsel(location=CENTRE, lifespan=Lifespan(1)))
        first = make_ant(CENTRE)
        second = make_ant(CENTRE)
        snapshot = small_world.snapshot()
        outcomes = [
            ant.react(small_world.neighborhood(CENTRE, snapshot), rng)
            for ant in (first, second)
        ]
        assert morsel.supply == 0
        assert [o.picked_up for o in outcomes] == [True, False]
        assert first.activity is Activity.CARRYING
        assert second.activity is Activity.FORAGING

    def test_target_refills_budget_without_pickup(
        self, small_world, make_ant, rng, traits
    ) -> None:
        ant = make_ant(CENTRE)
        ant.concentration = Concentration(5)
        small_world.insert(Morsel(location=CENTRE, lifespan=Lifespan(0)))
        _react(small_world, ant, rng)
        assert ant.concentration.value == (
            traits.max_concentration - traits.concentration_decrease
        )

    def test_carrier_delivers_to_nest(self, small_world, make_ant, rng) -> None:
        nest = small_world.insert(Nest(location=CENTRE))
        ant = make_ant(CENTRE, nest=CENTRE)
        ant.activity = Activity.CARRYING
        outcome = _react(small_world, ant, rng)
        assert outcome.delivered
        assert nest.storage == 1
        assert ant.activity is Activity.FORAGING

    def test_forager_at_nest_stores_nothing(self, small_world, make_ant, rng) -> None:
        nest = small_world.insert(Nest(location=CENTRE))
        ant = make_ant(CENTRE, nest=CENTRE)
        outcome = _react(small_world, ant, rng)
        assert not outcome.delivered
        assert nest.storage == 0
        assert ant.activity is Activity.FORAGING


class TestTrailReinforcement:
    """Tests for strengthening markers and claiming deposits."""

    def test_forager_reinforces_colony_trail_with_bonus(
        self, small_world, make_ant, rng
    ) -> None:
        marker = small_world.insert(TrailMarker.deposit(Scent.COLONY, CENTRE, 50))
        ant = make_ant(CENTRE)
        outcome = _react(small_world, ant, rng)
        # 198 remaining budget + 10% of the existing 50
        assert marker.strength == 50 + 198 + 5
        assert outcome.claim is None

    def test_carrier_reinforces_food_trail_without_bonus(
        self, small_world, make_ant, rng
    ) -> None:
        marker = small_world.insert(TrailMarker.deposit(Scent.FOOD, CENTRE, 50))
        ant = make_ant(CENTRE)
        ant.activity = Activity.CARRYING
        _react(small_world, ant, rng)
        assert marker.strength == 50 + 198

    def test_claims_deposit_on_bare_tile(self, small_world, make_ant, rng) -> None:
        ant = make_ant(CENTRE)
        outcome = _react(small_world, ant, rng)
        assert outcome.claim is not None
        assert outcome.claim.scent is Scent.COLONY
        assert outcome.claim.location == CENTRE
        assert outcome.claim.strength == 198

    def test_no_claim_with_empty_budget(self, small_world, make_ant, rng) -> None:
        ant = make_ant(CENTRE)
        ant.concentration = Concentration(1)
        outcome = _react(small_world, ant, rng)
        assert ant.concentration.value == 0
        assert outcome.claim is None


class TestTrailSuppression:
    """Tests for wiping misleading local maxima."""

    def test_local_maximum_is_cleared(self, small_world, make_ant, rng) -> None:
        centre = small_world.insert(TrailMarker.deposit(Scent.FOOD, CENTRE, 10))
        small_world.insert(TrailMarker.deposit(Scent.FOOD, Location(5, 4), 4))
        ant = make_ant(CENTRE)
        _react(small_world, ant, rng)
        assert centre.strength == 0

    def test_equal_strength_is_kept(self, small_world, make_ant, rng) -> None:
        centre = small_world.insert(TrailMarker.deposit(Scent.FOOD, CENTRE, 4))
        small_world.insert(TrailMarker.deposit(Scent.FOOD, Location(5, 4), 4))
        ant = make_ant(CENTRE)
        _react(small_world, ant, rng)
        assert centre.strength == 4

    def test_kept_when_target_in_sight(self, small_world, make_ant, rng) -> None:
        centre = small_world.insert(TrailMarker.deposit(Scent.FOOD, CENTRE, 10))
        small_world.insert(Morsel(location=Location(5, 5), lifespan=Lifespan(3)))
        ant = make_ant(CENTRE)
        _react(small_world, ant, rng)
        assert centre.strength == 10

    def test_isolated_marker_is_cleared(self, small_world, make_ant, rng) -> None:
        centre = small_world.insert(TrailMarker.deposit(Scent.COLONY, CENTRE, 3))
        ant = make_ant(CENTRE)
        ant.activity = Activity.CARRYING
        _react(small_world, ant, rng)
        assert centre.strength == 0


class TestMovement:
    """Tests for the four movement rules."""

    def test_steps_onto_visible_target(self, small_world, make_ant, rng) -> None:
        small_world.insert(Morsel(location=Location(5, 5), lifespan=Lifespan(3)))
        ant = make_ant(CENTRE)
        _react(small_world, ant, rng)
        assert ant.location == Location(5, 5)

    def test_follows_strongest_unremembered_trail(
        self, small_world, make_ant, rng
    ) -> None:
        small_world.insert(TrailMarker.deposit(Scent.FOOD, Location(5, 4), 7))
        small_world.insert(TrailMarker.deposit(Scent.FOOD, Location(3, 4), 9))
        ant = make_ant(CENTRE)
        ant.memory.insert(Location(3, 4))
        _react(small_world, ant, rng)
        assert ant.location == Location(5, 4)

    def test_follows_strongest_trail(self, small_world, make_ant, rng) -> None:
        small_world.insert(TrailMarker.deposit(Scent.FOOD, Location(5, 4), 7))
        small_world.insert(TrailMarker.deposit(Scent.FOOD, Location(3, 4), 9))
        ant = make_ant(CENTRE)
        _react(small_world, ant, rng)
        assert ant.location == Location(3, 4)

    def test_equal_trails_go_to_last_in_ring_order(
        self, small_world, make_ant, rng
    ) -> None:
        small_world.insert(TrailMarker.deposit(Scent.FOOD, Location(3, 3), 7))
        small_world.insert(TrailMarker.deposit(Scent.FOOD, Location(5, 5), 7))
        ant = make_ant(CENTRE)
        _react(small_world, ant, rng)
        assert ant.location == Location(5, 5)

    def test_ignores_scent_of_own_activity(self, small_world, make_ant, rng) -> None:
        # A forager looks for food scent, not the colony scent it leaves
        small_world.insert(TrailMarker.deposit(Scent.COLONY, Location(5, 4), 90))
        small_world.insert(TrailMarker.deposit(Scent.FOOD, Location(3, 4), 1))
        ant = make_ant(CENTRE)
        _react(small_world, ant, rng)
        assert ant.location == Location(3, 4)

    def test_random_move_avoids_memory(self, small_world, make_ant, rng) -> None:
        ant = make_ant(CENTRE)
        free = Location(5, 5)
        for offset in border(1):
            neighbour = CENTRE.translate(offset, small_world.dimension)
            if neighbour != free:
                ant.memory.insert(neighbour)
        _react(small_world, ant, rng)
        assert ant.location == free

    def test_random_move_when_all_remembered(self, small_world, make_ant, rng) -> None:
        ant = make_ant(CENTRE)
        for offset in border(1):
            ant.memory.insert(CENTRE.translate(offset, small_world.dimension))
        _react(small_world, ant, rng)
        assert _step_size(CENTRE, ant.location) <= 1

    def test_carrier_dead_reckons_home(self, small_world, make_ant, rng) -> None:
        ant = make_ant(Location(1, 0), nest=Location(0, 0))
        ant.activity = Activity.CARRYING
        _react(small_world, ant, rng)
        # one tile away the aim has no error left
        assert ant.location == Location(0, 0)

    def test_lost_forager_heads_home(self, small_world, make_ant, rng) -> None:
        ant = make_ant(Location(0, 1), nest=Location(0, 0))
        ant.concentration = Concentration(0)
        _react(small_world, ant, rng)
        assert ant.location == Location(0, 0)

    @pytest.mark.parametrize("seed", range(10))
    def test_single_step_per_tick(self, small_world, make_ant, seed) -> None:
        ant = make_ant(CENTRE, nest=Location(0, 0))
        ant.activity = Activity.CARRYING
        _react(small_world, ant, np.random.default_rng(seed))
        assert _step_size(CENTRE, ant.location) <= 1


class TestReactContract:
    """Tests for the per-tick contract and offspring invariant."""

    def test_missing_neighbourhood_is_fatal(self, make_ant, rng) -> None:
        ant = make_ant(CENTRE)
        with pytest.raises(InvariantError):
            ant.react(None, rng)

    def test_role_reset_every_tick(self, small_world, make_ant, rng) -> None:
        ant = make_ant(CENTRE)
        ant.role = Role.LEADER
        _react(small_world, ant, rng)
        assert ant.role is Role.FOLLOWER

    def test_leader_releases_one_marker(self, small_world, make_ant, rng) -> None:
        ant = make_ant(CENTRE)
        _react(small_world, ant, rng)
        ant.settle(deposit=True, leader=True)
        assert ant.role is Role.LEADER
        released = ant.offspring()
        assert len(released) == 1
        assert released[0].scent is Scent.COLONY
        assert released[0].location == CENTRE
        assert released[0].strength == 198
        assert ant.offspring() == []

    def test_follower_releases_nothing(self, small_world, make_ant, rng) -> None:
        ant = make_ant(CENTRE)
        _react(small_world, ant, rng)
        ant.settle(deposit=False)
        assert ant.offspring() == []

    def test_lone_depositor_stays_follower(self, small_world, make_ant, rng) -> None:
        ant = make_ant(CENTRE)
        _react(small_world, ant, rng)
        ant.settle(deposit=True)
        assert ant.role is Role.FOLLOWER
        assert len(ant.offspring()) == 1

    def test_two_markers_in_one_tick_is_fatal(
        self, small_world, make_ant, rng
    ) -> None:
        ant = make_ant(CENTRE)
        outcome = _react(small_world, ant, rng)
        ant.settle(deposit=True)
        ant._claim = outcome.claim
        ant.settle(deposit=True)
        with pytest.raises(InvariantError):
            ant.offspring()


class TestColony:
    """Tests for the Colony aggregate."""

    def test_spawn_ant_on_nest(self, small_world: World) -> None:
        nest = small_world.insert(Nest(location=Location(2, 3)))
        colony = Colony(nest=nest, traits=Traits(memory_span=4))
        ant = colony.spawn_ant(small_world)
        assert ant in colony.ants
        assert ant.location == Location(2, 3)
        assert ant.memory.capacity == 4
        assert ant in small_world.tile_at(Location(2, 3)).entities

    def test_activity_counts(self, small_world: World) -> None:
        nest = small_world.insert(Nest(location=Location(2, 3)))
        colony = Colony(nest=nest)
        for _ in range(3):
            colony.spawn_ant(small_world)
        colony.ants[0].activity = Activity.CARRYING
        assert colony.activity_counts() == {
            Activity.FORAGING: 2,
            Activity.CARRYING: 1,
        }
