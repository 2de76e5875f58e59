"""Consensus -- decide which ant may lay a new marker on a shared tile.

Ants that stand on a tile lacking the marker they want to leave submit a
``DepositClaim`` during their reaction.  Once every ant has reacted, the
claims are grouped by tile and scent and the ant with the lowest id in
each group wins the deposit.  Only a group with more than one claim has
a real contest, so only its winner is called the Leader; an ant that
claimed a tile alone deposits but stays a Follower.  The outcome does
not depend on the order in which ants reacted, and at most one new
marker per scent can appear on a tile.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from formicarium.pheromones.markers import Scent
    from formicarium.world.geometry import Location


@dataclass(frozen=True)
class DepositClaim:
    """An ant's request to lay a new marker this generation.

    Attributes:
        ant_id: Id of the claiming ant.
        location: Tile the marker would be laid on.
        scent: Scent of the marker.
        strength: Initial strength of the marker.
    """

    ant_id: int
    location: Location
    scent: Scent
    strength: int


def resolve_leaders(
    claims: Iterable[DepositClaim],
) -> dict[tuple[Location, Scent], DepositClaim]:
    """Pick one winning claim per (tile, scent).

    Args:
        claims: Every claim submitted during the generation.

    Returns:
        The winning claim for each (location, scent) pair; the lowest
        ant id wins.
    """
    winners: dict[tuple[Location, Scent], DepositClaim] = {}
    for claim in claims:
        key = (claim.location, claim.scent)
        current = winners.get(key)
        if current is None or claim.ant_id < current.ant_id:
            winners[key] = claim
    return winners


def depositor_ids(claims: Iterable[DepositClaim]) -> set[int]:
    """Return the ids of the ants whose claim won its tile."""
    return {claim.ant_id for claim in resolve_leaders(claims).values()}


def leader_ids(claims: Iterable[DepositClaim]) -> set[int]:
    """Return the ids of the ants that won a tile other ants also claimed."""
    claims = list(claims)
    contenders = Counter((claim.location, claim.scent) for claim in claims)
    return {
        winner.ant_id
        for key, winner in resolve_leaders(claims).items()
        if contenders[key] > 1
    }
