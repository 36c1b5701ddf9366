"""Uniform random source shared by network construction.

Stub matching only needs a source of floats in [0, 1). Anything with a
``random()`` method qualifies, so a seeded ``random.Random`` can be passed
wherever reproducible graphs are needed. Components that are not given a
source fall back to one process-wide instance.
"""

import random
from typing import Protocol


class UniformSource(Protocol):
    """Anything producing floats uniformly distributed in [0, 1)."""

    def random(self) -> float: ...


_shared_source = random.Random()


def shared_uniform_source() -> UniformSource:
    """Return the process-wide uniform source.

    Draws from it are not synchronized; concurrent network builds that rely
    on it must be serialized by the caller.
    """
    return _shared_source
