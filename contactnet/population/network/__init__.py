"""Contact structures for a population.

Usage:
    from contactnet.population import Population
    from contactnet.population.network import ConfigurationModel

    population = Population(1000)
    network = ConfigurationModel(population, lambda n: [4] * n)
    population.add(network)
    network.finalize()

    neighbors = network.contact(0.0, population.agent(0))

Key Concepts:
    - Contact: anything that answers "who does this agent meet at time t"
    - Network: a Contact backed by an adjacency table built once and cached
    - Configuration model: random graph realizing a degree sequence by
      matching stubs (half-edges) at random
"""

from .contact import Contact
from .network import Network
from .configuration import ConfigurationModel, DegreeGenerator
from .metrics import (
    NetworkMetrics,
    compute_network_metrics,
    compute_snapshot_metrics,
    validate_network,
    validate_snapshot,
)

__all__ = [
    # Contact structures
    "Contact",
    "Network",
    "ConfigurationModel",
    "DegreeGenerator",
    # Metrics
    "NetworkMetrics",
    "compute_network_metrics",
    "compute_snapshot_metrics",
    "validate_network",
    "validate_snapshot",
]
