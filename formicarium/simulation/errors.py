"""Errors raised by the simulation core.

Only broken invariants are errors.  Expected absences (no target in
sight, no trail nearby, nobody else on the tile) are modelled as
``None`` or empty results and never raise.
"""

from __future__ import annotations


class InvariantError(RuntimeError):
    """A core invariant was violated.

    Signals an integration or logic error (a missing neighbourhood, two
    markers of one scent on a tile, more than one offspring per tick).
    It is not meant to be caught and recovered from.
    """
