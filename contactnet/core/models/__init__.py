"""Pydantic models for contactnet, organized by domain.

- degree.py: Degree distributions and their YAML I/O
- network.py: Exported network snapshots
"""

from .degree import (
    FixedDegree,
    UniformDegree,
    PoissonDegree,
    NormalDegree,
    LognormalDegree,
    CategoricalDegree,
    DegreeDistribution,
    DEGREE_DISTRIBUTION_TYPES,
    parse_degree_distribution,
    load_degree_distribution,
    save_degree_distribution,
)
from .network import Edge, SnapshotMeta, NetworkSnapshot

__all__ = [
    # Degree distributions
    "FixedDegree",
    "UniformDegree",
    "PoissonDegree",
    "NormalDegree",
    "LognormalDegree",
    "CategoricalDegree",
    "DegreeDistribution",
    "DEGREE_DISTRIBUTION_TYPES",
    "parse_degree_distribution",
    "load_degree_distribution",
    "save_degree_distribution",
    # Network snapshots
    "Edge",
    "SnapshotMeta",
    "NetworkSnapshot",
]
