"""Structural validation and summary metrics for contact networks.

Validation checks the invariants every finalized network must satisfy:
    - one adjacency entry per agent in the population
    - symmetry (if a lists b, b lists a)
    - no self-loops
    - no duplicate edges

Metrics summarize the realized graph and, for configuration models, how far
realized degrees fall short of the requested ones.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field

import networkx as nx

from ...core.models import NetworkSnapshot
from .network import Network

logger = logging.getLogger(__name__)


@dataclass
class NetworkMetrics:
    """Summary statistics for a realized contact network.

    Attributes:
        node_count: Number of agents in the adjacency table
        edge_count: Number of undirected edges
        avg_degree: Mean realized degree
        min_degree: Smallest realized degree (0 for an empty network)
        max_degree: Largest realized degree
        isolated_count: Agents with no contacts
        clustering_coefficient: Average local clustering
        component_count: Number of connected components
        largest_component_ratio: Share of agents in the largest component
        requested_avg_degree: Mean requested degree, if known
        stub_deficit: Requested stubs that did not become edge ends, if known
        degree_distribution: Realized degree -> number of agents
    """

    node_count: int
    edge_count: int
    avg_degree: float
    min_degree: int
    max_degree: int
    isolated_count: int
    clustering_coefficient: float
    component_count: int
    largest_component_ratio: float
    requested_avg_degree: float | None = None
    stub_deficit: int | None = None
    degree_distribution: dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "node_count": self.node_count,
            "edge_count": self.edge_count,
            "avg_degree": self.avg_degree,
            "min_degree": self.min_degree,
            "max_degree": self.max_degree,
            "isolated_count": self.isolated_count,
            "clustering_coefficient": self.clustering_coefficient,
            "component_count": self.component_count,
            "largest_component_ratio": self.largest_component_ratio,
            "requested_avg_degree": self.requested_avg_degree,
            "stub_deficit": self.stub_deficit,
            "degree_distribution": dict(sorted(self.degree_distribution.items())),
        }


def _metrics_from_graph(
    G: nx.Graph,
    requested_degrees: list[int] | tuple[int, ...] | None,
) -> NetworkMetrics:
    n = G.number_of_nodes()
    degrees = [d for _, d in G.degree()]

    if n > 0:
        components = list(nx.connected_components(G))
        largest = max(len(c) for c in components)
        clustering = nx.average_clustering(G)
    else:
        components = []
        largest = 0
        clustering = 0.0

    requested_avg = None
    deficit = None
    if requested_degrees is not None:
        requested_total = sum(requested_degrees)
        requested_avg = requested_total / n if n else 0.0
        deficit = requested_total - sum(degrees)

    return NetworkMetrics(
        node_count=n,
        edge_count=G.number_of_edges(),
        avg_degree=sum(degrees) / n if n else 0.0,
        min_degree=min(degrees) if degrees else 0,
        max_degree=max(degrees) if degrees else 0,
        isolated_count=sum(1 for d in degrees if d == 0),
        clustering_coefficient=clustering,
        component_count=len(components),
        largest_component_ratio=largest / n if n else 0.0,
        requested_avg_degree=requested_avg,
        stub_deficit=deficit,
        degree_distribution=dict(Counter(degrees)),
    )


def compute_network_metrics(network: Network) -> NetworkMetrics:
    """Compute summary metrics for a network's current adjacency table."""
    return _metrics_from_graph(
        network.to_networkx(), getattr(network, "requested_degrees", None)
    )


def compute_snapshot_metrics(snapshot: NetworkSnapshot) -> NetworkMetrics:
    """Compute summary metrics for an exported network."""
    G = nx.Graph()
    G.add_nodes_from(range(1, snapshot.node_count + 1))
    G.add_edges_from((e.source, e.target) for e in snapshot.edges)
    return _metrics_from_graph(G, snapshot.requested_degrees)


def _check_adjacency(adjacency: list[list[int]], expected_nodes: int) -> list[str]:
    """Check invariants over 0-based index adjacency lists."""
    problems: list[str] = []

    if len(adjacency) != expected_nodes:
        problems.append(
            f"adjacency table has {len(adjacency)} entries for {expected_nodes} agents"
        )

    neighbor_sets = [set(entry) for entry in adjacency]
    for i, entry in enumerate(adjacency):
        if i in neighbor_sets[i]:
            problems.append(f"agent {i + 1} lists itself as a neighbor")
        if len(neighbor_sets[i]) != len(entry):
            problems.append(f"agent {i + 1} has duplicate neighbors")
        for j in neighbor_sets[i]:
            if not 0 <= j < len(adjacency):
                problems.append(f"agent {i + 1} lists unknown agent {j + 1}")
            elif i not in neighbor_sets[j]:
                problems.append(
                    f"edge {i + 1} -> {j + 1} has no matching {j + 1} -> {i + 1}"
                )

    return problems


def validate_network(
    network: Network,
    verbose: bool = False,
) -> tuple[bool, list[str]]:
    """Check a network's structural invariants.

    Args:
        network: A finalized network
        verbose: Log a validation report

    Returns:
        Tuple of (is_valid, list of problems)
    """
    adjacency = [
        [neighbor.id - 1 for neighbor in network.neighbors_of(i)]
        for i in range(network.node_count)
    ]
    problems = _check_adjacency(adjacency, network.population.size())
    if not network.finalized:
        problems.insert(0, "network has not been finalized")

    if verbose:
        _log_report(type(network).__name__, problems)

    return not problems, problems


def validate_snapshot(
    snapshot: NetworkSnapshot,
    verbose: bool = False,
) -> tuple[bool, list[str]]:
    """Check an exported network's structural invariants."""
    problems: list[str] = []
    for edge in snapshot.edges:
        if edge.source > snapshot.node_count or edge.target > snapshot.node_count:
            problems.append(
                f"edge {edge.source} - {edge.target} references unknown agent"
            )
    if problems:
        if verbose:
            _log_report("snapshot", problems)
        return False, problems

    seen: set[tuple[int, int]] = set()
    for edge in snapshot.edges:
        key = (min(edge.source, edge.target), max(edge.source, edge.target))
        if edge.source == edge.target:
            problems.append(f"agent {edge.source} lists itself as a neighbor")
        elif key in seen:
            problems.append(f"edge {key[0]} - {key[1]} appears more than once")
        seen.add(key)

    if verbose:
        _log_report("snapshot", problems)

    return not problems, problems


def _log_report(label: str, problems: list[str]) -> None:
    logger.info("Network Validation Report: %s", label)
    if not problems:
        logger.info("  all invariants hold")
    for problem in problems:
        logger.info("  - %s", problem)
