"""Ant -- individual agent with local decision-making.

Each generation an ant runs the same four-stage cycle on its
neighbourhood:

1. **Target assessment**: standing on the nest while carrying stores the
   food; standing on the current goal (a morsel with supply left while
   foraging, the nest while carrying) switches activity and wipes the
   memory.  Standing on either target refills the scent budget.
2. **Trail reinforcement**: the marker matching the current activity is
   strengthened if already on the tile, otherwise a deposit is claimed.
   Foragers strengthen homeward trails by an extra fraction of their
   existing strength, so successful return paths get stronger.
3. **Trail suppression**: away from the goal, a goal-scent marker that
   is stronger than anything around it is a dead end and gets wiped.
4. **Movement**: step toward a visible goal, else along the strongest
   unremembered goal-scent trail, else home by noisy dead reckoning
   (when carrying or lost), else randomly toward unremembered tiles.

Only the centre tile is ever written; the ring is a read-only snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, ClassVar

from formicarium.colony.consensus import DepositClaim
from formicarium.colony.memory import LocationAwareness
from formicarium.colony.nest import Nest
from formicarium.pheromones.markers import Concentration, Scent, TrailMarker
from formicarium.simulation.errors import InvariantError
from formicarium.world.geometry import Dimension, Location, Offset, border
from formicarium.world.kinds import Kind
from formicarium.world.morsel import Morsel

if TYPE_CHECKING:
    from numpy.random import Generator

    from formicarium.colony.traits import Traits
    from formicarium.world.neighborhood import Neighborhood
    from formicarium.world.tile import TileView

_TARGET_SCENT: dict[Kind, Scent] = {
    Kind.NEST: Scent.COLONY,
    Kind.MORSEL: Scent.FOOD,
}


class Activity(Enum):
    """What the ant is currently after."""

    FORAGING = auto()
    CARRYING = auto()

    @property
    def scent(self) -> Scent:
        """Scent the ant leaves behind while doing this activity."""
        match self:
            case Activity.FORAGING:
                return Scent.COLONY
            case Activity.CARRYING:
                return Scent.FOOD

    @property
    def target_kind(self) -> Kind:
        """Kind of entity this activity is heading for."""
        match self:
            case Activity.FORAGING:
                return Kind.MORSEL
            case Activity.CARRYING:
                return Kind.NEST

    @property
    def target_scent(self) -> Scent:
        """Scent that leads to this activity's target."""
        return _TARGET_SCENT[self.target_kind]

    def switched(self) -> Activity:
        """Return the opposite activity."""
        if self is Activity.FORAGING:
            return Activity.CARRYING
        return Activity.FORAGING


class Role(Enum):
    """Per-generation role when several ants compete to lay a marker."""

    LEADER = auto()
    FOLLOWER = auto()


@dataclass
class ReactOutcome:
    """What happened during one ant reaction.

    Attributes:
        claim: Deposit request to be resolved by the leadership pass.
        delivered: Food was stored in the nest.
        picked_up: Food was taken from a morsel.
    """

    claim: DepositClaim | None = None
    delivered: bool = False
    picked_up: bool = False


@dataclass
class Ant:
    """A single ant agent.

    Attributes:
        entity_id: Unique, stable id (also the leadership tie-breaker).
        location: Current tile.
        nest_location: Tile of the home nest.
        traits: Colony-wide behavioural parameters.
        dimension: Grid size, for wrapping movement.
        activity: Persistent goal mode.
        role: Leader or Follower for the current generation only.
        concentration: Remaining scent budget.
        memory: Recently visited tiles.
    """

    entity_id: int
    location: Location
    nest_location: Location
    traits: Traits
    dimension: Dimension
    activity: Activity = Activity.FORAGING
    role: Role = Role.FOLLOWER
    concentration: Concentration = field(init=False)
    memory: LocationAwareness = field(init=False)
    _claim: DepositClaim | None = field(init=False, default=None, repr=False)
    _offspring: list[TrailMarker] = field(
        init=False,
        default_factory=list,
        repr=False,
    )

    kind: ClassVar[Kind] = Kind.ANT

    def __post_init__(self) -> None:
        self.concentration = Concentration(self.traits.max_concentration)
        self.memory = LocationAwareness(self.traits.memory_span)

    @classmethod
    def from_traits(
        cls,
        entity_id: int,
        nest_location: Location,
        traits: Traits,
        dimension: Dimension,
    ) -> Ant:
        """Create a foraging ant standing on its nest.

        Args:
            entity_id: Id allocated by the world.
            nest_location: Where the ant is born and returns food to.
            traits: Colony-wide behavioural parameters.
            dimension: Grid size.
        """
        return cls(
            entity_id=entity_id,
            location=nest_location,
            nest_location=nest_location,
            traits=traits,
            dimension=dimension,
        )

    def react(
        self,
        neighborhood: Neighborhood | None,
        rng: Generator,
    ) -> ReactOutcome:
        """Perform one generation of local decision-making and movement.

        Args:
            neighborhood: The ant's centre tile and sensing ring.
            rng: Seeded random generator.

        Returns:
            What happened, including any deposit claim that still has to
            go through ``settle``.

        Raises:
            InvariantError: If no neighbourhood is supplied.
        """
        if neighborhood is None:
            msg = f"ant {self.entity_id} reacted without a neighbourhood"
            raise InvariantError(msg)

        self.role = Role.FOLLOWER
        self._claim = None
        self.memory.insert(self.location)

        outcome = ReactOutcome()
        self._assess_location_for_targets(neighborhood, outcome)
        outcome.claim = self._enhance_trail(neighborhood)
        self._suppress_trail(neighborhood)
        self._move_towards(self.activity.target_kind, neighborhood, rng)
        return outcome

    def settle(self, *, deposit: bool, leader: bool = False) -> None:
        """Apply the claim resolution for this generation.

        Args:
            deposit: The pending claim won its tile and becomes an
                offspring marker; otherwise it is dropped.
            leader: The claim won against other ants on the same tile.
                An ant that claimed alone stays a Follower.
        """
        self.role = Role.LEADER if leader else Role.FOLLOWER
        if deposit and self._claim is not None:
            self._offspring.append(
                TrailMarker.deposit(
                    self._claim.scent,
                    self._claim.location,
                    self._claim.strength,
                ),
            )
        self._claim = None

    def offspring(self) -> list[TrailMarker]:
        """Drain the markers released this generation (zero or one).

        Raises:
            InvariantError: If more than one marker was released.
        """
        released, self._offspring = self._offspring, []
        if len(released) > 1:
            msg = f"ant {self.entity_id} released {len(released)} markers in one tick"
            raise InvariantError(msg)
        return released

    # -- Private behaviour methods --

    def _assess_location_for_targets(
        self,
        neighborhood: Neighborhood,
        outcome: ReactOutcome,
    ) -> None:
        """Deliver or pick up food when standing on a target.

        Several ants may share a morsel, so a pickup is only honoured
        while the morsel still has supply.
        """
        for target in (Kind.NEST, Kind.MORSEL):
            entity = neighborhood.center.first(target)
            if entity is None:
                continue

            match entity:
                case Nest() if self.activity is Activity.CARRYING:
                    entity.store()
                    outcome.delivered = True
                    self._switch_activity()
                case Morsel(lifespan=supply) if self.activity is Activity.FORAGING:
                    if supply.is_alive():
                        supply.shorten()
                        outcome.picked_up = True
                        self._switch_activity()

            self.concentration = Concentration(self.traits.max_concentration)

    def _switch_activity(self) -> None:
        self.activity = self.activity.switched()
        self.memory.clear()

    def _enhance_trail(self, neighborhood: Neighborhood) -> DepositClaim | None:
        """Strengthen the activity marker here, or claim a new deposit."""
        self.concentration.decrease_by(self.traits.concentration_decrease)

        scent = self.activity.scent
        marker = neighborhood.center.marker(scent)
        if marker is not None:
            increase = self.concentration.value
            if scent is Scent.COLONY:
                increase += int(marker.strength * self.traits.reinforcement_ratio)
            marker.lifespan.lengthen_by(increase)
            return None

        if self.concentration.value > 0:
            self._claim = DepositClaim(
                ant_id=self.entity_id,
                location=self.location,
                scent=scent,
                strength=self.concentration.value,
            )
        return self._claim

    def _suppress_trail(self, neighborhood: Neighborhood) -> None:
        """Wipe a goal-scent marker that looks like a misleading local maximum."""
        if neighborhood.contains_kind(self.activity.target_kind):
            return

        scent = self.activity.target_scent
        marker = neighborhood.center.marker(scent)
        if marker is None:
            return

        nearby = max(
            (strength for _, strength in neighborhood.ring_strengths(scent)),
            default=0,
        )
        if marker.strength > nearby:
            marker.lifespan.clear()

    def _move_towards(
        self,
        kind: Kind,
        neighborhood: Neighborhood,
        rng: Generator,
    ) -> None:
        """Take one step toward the nearest evidence of ``kind``."""
        dest = neighborhood.first_view_with(kind)
        if dest is None:
            dest = self._best_trail_view(_TARGET_SCENT[kind], neighborhood)

        if dest is not None:
            self.location = self.location.translate_towards(
                dest.location,
                self.dimension,
            )
        elif self.activity is Activity.CARRYING or self._is_lost(neighborhood):
            self._move_towards_nest(rng)
        else:
            self._move_randomly(neighborhood, rng)

    def _best_trail_view(
        self,
        scent: Scent,
        neighborhood: Neighborhood,
    ) -> TileView | None:
        """Return the unremembered ring tile with the strongest ``scent``.

        Ties go to the last tile in ring order; None if no candidate.
        """
        best = None
        best_strength = -1
        for view, strength in neighborhood.ring_strengths(scent):
            if view.location in self.memory:
                continue
            if strength >= best_strength:
                best, best_strength = view, strength
        return best

    def _is_lost(self, neighborhood: Neighborhood) -> bool:
        """No scent left to release and no marker of any kind underfoot."""
        return self.concentration.value == 0 and not neighborhood.center.has_marker()

    def _move_towards_nest(self, rng: Generator) -> None:
        """Head home with an error that shrinks as the nest gets closer.

        Aim at a random point on a ring around the nest whose radius is
        drawn from ``[0, distance)``, then step toward that point.
        """
        distance = self.location.manhattan(self.nest_location)
        if distance == 0:
            return
        offsets = border(int(rng.integers(0, distance)))
        aim = offsets[int(rng.integers(len(offsets)))]
        dest = self.nest_location.translate(aim, self.dimension)
        self.location = self.location.translate_towards(dest, self.dimension)

    def _move_randomly(self, neighborhood: Neighborhood, rng: Generator) -> None:
        """Step to a random unremembered ring tile, or anywhere if none."""
        ring = neighborhood.ring
        for index in rng.permutation(len(ring)):
            tile = ring[int(index)]
            if tile.view.location not in self.memory:
                offset = tile.offset
                break
        else:
            offset = Offset(int(rng.integers(-1, 2)), int(rng.integers(-1, 2)))
        self.location = self.location.translate(offset, self.dimension)
