"""Networks: contact structures backed by an explicit, cached adjacency table.

A network is built once. ``finalize()`` sizes the table from the population,
asks the subclass to ``build()`` the edges, then freezes the result. From
then on ``contact()`` is a constant-time lookup.

Subclasses implement ``build()`` and may implement ``grow()`` to accept
agents added after finalization. The default ``grow()`` refuses.
"""

import logging
import time as _time
from abc import abstractmethod
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

import networkx as nx

from ...core.errors import NetworkGrowthError
from .contact import Contact

if TYPE_CHECKING:
    from ..agent import Agent
    from ..registry import Population

logger = logging.getLogger(__name__)

_EMPTY: tuple = ()


class Network(Contact):
    """A Contact whose neighbors come from a precomputed adjacency table.

    The table maps each agent's 0-based index to its neighbors. It is
    symmetric, has no self-loops and no duplicate edges. Entries are lists
    while ``build()`` runs and tuples once the network is finalized.
    """

    def __init__(self, population: "Population"):
        super().__init__(population)
        self._finalized = False
        self._neighbors: list = []
        self._dropped_self_loops = 0
        self._dropped_duplicates = 0

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def node_count(self) -> int:
        """Number of entries in the adjacency table."""
        return len(self._neighbors)

    @property
    def dropped_self_loops(self) -> int:
        return self._dropped_self_loops

    @property
    def dropped_duplicates(self) -> int:
        return self._dropped_duplicates

    def finalize(self) -> None:
        """Build and cache the adjacency table. Idempotent.

        If ``build()`` raises, the table and counters are restored and the
        network stays unfinalized.
        """
        if self._finalized:
            return

        n = self._population.size()
        previous = self._neighbors
        self._neighbors = [[] for _ in range(n)]
        self._dropped_self_loops = 0
        self._dropped_duplicates = 0

        start = _time.perf_counter()
        try:
            self.build()
        except Exception:
            self._neighbors = previous
            self._dropped_self_loops = 0
            self._dropped_duplicates = 0
            raise

        self._neighbors = [tuple(entry) for entry in self._neighbors]
        self._finalized = True

        logger.info(
            "Finalized %s: %d nodes, %d edges in %.3fs",
            type(self).__name__,
            n,
            self.edge_count,
            _time.perf_counter() - start,
        )
        if self._dropped_self_loops or self._dropped_duplicates:
            logger.debug(
                "Suppressed %d self-loops and %d duplicate edges",
                self._dropped_self_loops,
                self._dropped_duplicates,
            )

    @abstractmethod
    def build(self) -> None:
        """Populate ``self._neighbors`` using ``connect()``.

        Called once by ``finalize()`` with one empty entry per agent.
        """

    def grow(self, agent: "Agent") -> None:
        """Incorporate an agent added after finalization.

        Raises:
            NetworkGrowthError: Always, unless a subclass supports growth.
        """
        raise NetworkGrowthError(
            f"{type(self).__name__} does not support adding agents after finalize"
        )

    def add(self, agent: "Agent") -> None:
        if self._finalized:
            self.grow(agent)

    def contact(self, time: float, agent: "Agent") -> Sequence["Agent"]:
        """Return the cached neighbors of ``agent``.

        Does not finalize. Before ``finalize()`` the table is empty (or
        partially built) and the result reflects that.
        """
        return self.neighbors_of(agent.id - 1)

    def neighbors_of(self, index: int) -> Sequence["Agent"]:
        """Neighbors of the agent at 0-based ``index``."""
        if 0 <= index < len(self._neighbors):
            return self._neighbors[index]
        return _EMPTY

    def degree(self, agent: "Agent") -> int:
        """Realized degree of ``agent``."""
        return len(self.neighbors_of(agent.id - 1))

    def connect(self, from_index: int, to_index: int) -> None:
        """Add an undirected edge between two 0-based agent indices.

        Self-loops are ignored. So is an edge that already exists, which is
        detected by scanning the neighbors of ``from_index``.
        """
        if from_index == to_index:
            self._dropped_self_loops += 1
            return

        target = self._population.agent(to_index)
        entry = self._neighbors[from_index]
        for neighbor in entry:
            if neighbor is target:
                self._dropped_duplicates += 1
                return

        entry.append(target)
        self._neighbors[to_index].append(self._population.agent(from_index))

    def edges(self) -> Iterator[tuple[int, int]]:
        """Yield each edge once as a 0-based ``(i, j)`` pair with ``i < j``."""
        for i, entry in enumerate(self._neighbors):
            for neighbor in entry:
                j = neighbor.id - 1
                if i < j:
                    yield i, j

    @property
    def edge_count(self) -> int:
        return sum(len(entry) for entry in self._neighbors) // 2

    def to_networkx(self) -> nx.Graph:
        """Export the adjacency table as an undirected networkx graph.

        Nodes are 1-based agent ids.
        """
        G = nx.Graph()
        G.add_nodes_from(range(1, len(self._neighbors) + 1))
        G.add_edges_from((i + 1, j + 1) for i, j in self.edges())
        return G

    def __repr__(self) -> str:
        state = "finalized" if self._finalized else "unfinalized"
        return f"{type(self).__name__}({state}, nodes={self.node_count})"
