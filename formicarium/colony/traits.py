"""Traits -- behavioural parameters shared by every ant of a colony.

Traits are read-only for the whole run: the memory span, how much scent
an ant can release, how quickly that budget runs out and how strongly
the homeward trail reinforces itself.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Traits:
    """Colony-wide ant parameters.

    Attributes:
        memory_span: Number of recently visited tiles an ant remembers.
        max_concentration: Scent budget restored whenever an ant reaches
            the nest or a morsel.
        concentration_decrease: Budget lost each generation.
        reinforcement_ratio: Fraction of an existing colony-scent
            marker's strength added on top of a forager's deposit.
        scope: Sensing radius in tiles.
    """

    memory_span: int = 30
    max_concentration: int = 200
    concentration_decrease: int = 2
    reinforcement_ratio: float = 0.1
    scope: int = 1
