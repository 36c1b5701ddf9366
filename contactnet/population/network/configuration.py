"""Configuration-model random graphs built by stub matching.

Each agent asks for a degree. Agent ``i`` contributes ``degree[i]`` stubs
(half-edges) to a pool; pairs of stubs are drawn at random and joined into
edges until fewer than two remain.

The realized graph is simple, so realized degrees can fall short of the
requested ones:
    - an odd stub total leaves one stub unmatched
    - self-loops and repeated edges are dropped by ``connect()``
    - removing a matched pair overwrites the two drawn slots in sequence from
      the end of the active pool, so when a draw lands on one of the last two
      slots an unmatched stub can be overwritten and lost
None of these are errors.
"""

import logging
from collections.abc import Callable, Sequence
from numbers import Integral
from typing import TYPE_CHECKING

from ...core.errors import DegreeSequenceError
from ...core.rng import UniformSource, shared_uniform_source
from .network import Network

if TYPE_CHECKING:
    from ..registry import Population

logger = logging.getLogger(__name__)

DegreeGenerator = Callable[[int], Sequence[int]]


def _check_degrees(degrees: Sequence, n: int) -> list[int]:
    """Validate a generated degree sequence and return it as plain ints."""
    if len(degrees) != n:
        raise DegreeSequenceError(
            f"Degree generator returned {len(degrees)} degrees for {n} agents"
        )

    checked: list[int] = []
    for i, d in enumerate(degrees):
        if isinstance(d, bool) or not (
            isinstance(d, Integral) or (isinstance(d, float) and d.is_integer())
        ):
            raise DegreeSequenceError(f"Degree of agent {i + 1} is not an integer: {d!r}")
        d = int(d)
        if d < 0:
            raise DegreeSequenceError(f"Degree of agent {i + 1} is negative: {d}")
        checked.append(d)
    return checked


class ConfigurationModel(Network):
    """A network realizing a degree sequence by random stub matching.

    Args:
        population: Population whose agents become the nodes.
        degree_generator: Called with the population size at finalize time;
            returns one non-negative integer degree per agent.
        uniform: Source of floats in [0, 1) for stub draws. Defaults to the
            process-wide shared source.

    Growing the network after finalize is not supported.
    """

    def __init__(
        self,
        population: "Population",
        degree_generator: DegreeGenerator,
        uniform: UniformSource | None = None,
    ):
        super().__init__(population)
        self._degree_generator = degree_generator
        self._uniform = uniform if uniform is not None else shared_uniform_source()
        self._requested_degrees: tuple[int, ...] | None = None

    @property
    def requested_degrees(self) -> tuple[int, ...] | None:
        """Degrees asked for by the generator, or None before finalize."""
        return self._requested_degrees

    def build(self) -> None:
        n = len(self._neighbors)
        degrees = _check_degrees(self._degree_generator(n), n)

        stubs = [i for i, d in enumerate(degrees) for _ in range(d)]
        remaining = len(stubs)
        logger.debug("Matching %d stubs across %d agents", remaining, n)

        uniform = self._uniform
        while remaining >= 2:
            from_pos = int(uniform.random() * remaining)
            to_pos = int(uniform.random() * remaining)
            self.connect(stubs[from_pos], stubs[to_pos])
            # Sequential overwrite: the second assignment sees the first.
            stubs[from_pos] = stubs[remaining - 1]
            stubs[to_pos] = stubs[remaining - 2]
            remaining -= 2

        if remaining:
            logger.debug("Discarded 1 unmatched stub (odd stub total)")

        self._requested_degrees = tuple(degrees)
