"""Kind -- the closed set of entity kinds living on the grid."""

from __future__ import annotations

from enum import Enum, auto


class Kind(Enum):
    """Entity kinds.  Each kind has its own dataclass with its own payload."""

    NEST = auto()
    MORSEL = auto()
    MARKER = auto()
    ANT = auto()
