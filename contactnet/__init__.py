"""contactnet: contact networks for agent-based epidemic simulation.

A Population owns agents; Contact structures attached to it answer which
agents meet which. ConfigurationModel builds a random network from a degree
distribution by stub matching.
"""

__version__ = "0.1.0"

from .core.errors import (
    ContactNetError,
    NetworkGrowthError,
    AgentIndexError,
    DegreeSequenceError,
)
from .population import (
    Agent,
    Population,
    Contact,
    Network,
    ConfigurationModel,
    DegreeSampler,
)

__all__ = [
    "__version__",
    "Agent",
    "Population",
    "Contact",
    "Network",
    "ConfigurationModel",
    "DegreeSampler",
    "ContactNetError",
    "NetworkGrowthError",
    "AgentIndexError",
    "DegreeSequenceError",
]
