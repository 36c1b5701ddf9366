"""Core types shared across contactnet: errors, random sources, models."""

from .errors import (
    ContactNetError,
    NetworkGrowthError,
    AgentIndexError,
    DegreeSequenceError,
)
from .rng import UniformSource, shared_uniform_source

__all__ = [
    "ContactNetError",
    "NetworkGrowthError",
    "AgentIndexError",
    "DegreeSequenceError",
    "UniformSource",
    "shared_uniform_source",
]
