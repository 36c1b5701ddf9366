"""Serializable snapshot of a finalized contact network.

Agents are identified by their 1-based population index in every exported
field, matching ``Agent.id``.
"""

from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class Edge(BaseModel):
    """An undirected edge between two agents (1-based ids, source < target)."""

    source: int = Field(ge=1)
    target: int = Field(ge=1)


class SnapshotMeta(BaseModel):
    """Provenance for an exported network."""

    network_type: str
    created_at: datetime = Field(default_factory=datetime.now)
    seed: int | None = None
    degree_distribution: dict[str, Any] | None = None


class NetworkSnapshot(BaseModel):
    """Edges of a finalized network, plus the degrees that were requested."""

    meta: SnapshotMeta
    node_count: int = Field(ge=0)
    edges: list[Edge] = Field(default_factory=list)
    requested_degrees: list[int] | None = None

    @classmethod
    def from_network(
        cls,
        network,
        *,
        seed: int | None = None,
        degree_distribution: dict[str, Any] | None = None,
    ) -> "NetworkSnapshot":
        """Capture the adjacency of a finalized network.

        Raises:
            ValueError: If the network has not been finalized yet.
        """
        if not network.finalized:
            raise ValueError("Cannot snapshot a network before it is finalized")

        requested = getattr(network, "requested_degrees", None)
        return cls(
            meta=SnapshotMeta(
                network_type=type(network).__name__,
                seed=seed,
                degree_distribution=degree_distribution,
            ),
            node_count=network.node_count,
            edges=[Edge(source=i + 1, target=j + 1) for i, j in network.edges()],
            requested_degrees=list(requested) if requested is not None else None,
        )

    def adjacency(self) -> list[list[int]]:
        """Rebuild 0-based adjacency lists from the edge list.

        Raises:
            ValueError: If an edge references an agent beyond ``node_count``.
        """
        adjacency: list[list[int]] = [[] for _ in range(self.node_count)]
        for edge in self.edges:
            if edge.source > self.node_count or edge.target > self.node_count:
                raise ValueError(
                    f"Edge {edge.source} - {edge.target} references an agent "
                    f"outside a network of {self.node_count} agents"
                )
            i, j = edge.source - 1, edge.target - 1
            adjacency[i].append(j)
            adjacency[j].append(i)
        return adjacency

    def save_json(self, path: Path | str) -> None:
        """Write the snapshot as JSON."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")

    @classmethod
    def load_json(cls, path: Path | str) -> "NetworkSnapshot":
        """Read a snapshot written by ``save_json``."""
        path = Path(path)
        return cls.model_validate_json(path.read_text(encoding="utf-8"))
