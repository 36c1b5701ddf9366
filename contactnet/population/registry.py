"""Population registry: owns the agents and the contact structures over them.

A population has two jobs:
  1. manage its agents (dense, 1-based, stable indices; size only grows)
  2. hold the Contact objects that define who meets whom

A population may carry several contacts at once, for example one for random
mixing, one for close contacts represented by a network, and another for a
social network. Each is queried independently by the simulation driver.
"""

import logging
from collections.abc import Callable, Iterator
from typing import Any

from ..core.errors import AgentIndexError
from .agent import Agent
from .network.contact import Contact
from .network.network import Network

logger = logging.getLogger(__name__)


class Population:
    """An ordered collection of agents plus the contacts attached to it.

    Args:
        n: Number of agents to create up front, each with an empty state.
            More agents can be added later with ``add``.
    """

    def __init__(self, n: int = 0):
        if n < 0:
            raise ValueError(f"Initial population size must be >= 0, got {n}")
        self._agents: list[Agent] = []
        self._contacts: list[Contact] = []
        for _ in range(n):
            self.add_agent(Agent())

    def add(self, item: Agent | Contact) -> "Population":
        """Add an agent or a contact, depending on what is passed."""
        if isinstance(item, Agent):
            self.add_agent(item)
        elif isinstance(item, Contact):
            self.add_contact(item)
        else:
            raise TypeError(
                f"Can only add Agent or Contact to a population, got {type(item).__name__}"
            )
        return self

    def add_agent(self, agent: Agent) -> Agent:
        """Append an agent, assigning it the next index.

        Every attached contact is told about the new agent, finalized
        networks first. If one of them refuses (a finalized network that
        cannot grow), the agent is taken back out and the error propagates.
        Contacts notified before the refusal are not told about the rollback,
        so only the finalized networks ahead of the refusing one can have
        seen the agent.

        Raises:
            ValueError: If the agent already belongs to a population.
            NetworkGrowthError: If an attached finalized network cannot grow.
        """
        if agent.registered:
            raise ValueError(f"{agent!r} already belongs to a population")

        self._agents.append(agent)
        agent._id = len(self._agents)

        try:
            for contact in self._notification_order():
                contact.add(agent)
        except Exception:
            self._agents.pop()
            agent._id = 0
            raise

        return agent

    def _notification_order(self) -> list[Contact]:
        # Finalized networks are the contacts that can refuse a new agent
        growing = [c for c in self._contacts if isinstance(c, Network) and c.finalized]
        rest = [c for c in self._contacts if not any(c is g for g in growing)]
        return growing + rest

    def add_contact(self, contact: Contact) -> Contact:
        """Attach a contact structure; re-adding the same object is a no-op.

        Raises:
            ValueError: If the contact was created for a different population.
        """
        if contact.population is not self:
            raise ValueError("Contact belongs to a different population")
        if any(c is contact for c in self._contacts):
            return contact
        self._contacts.append(contact)
        logger.debug(
            "Attached %s to population of %d agents",
            type(contact).__name__,
            len(self._agents),
        )
        return contact

    def size(self) -> int:
        """Number of agents in the population."""
        return len(self._agents)

    def agent(self, i: int) -> Agent:
        """Return the agent at 0-based index ``i``.

        Raises:
            AgentIndexError: If ``i`` is negative or not below ``size()``.
        """
        if i < 0 or i >= len(self._agents):
            raise AgentIndexError(i, len(self._agents))
        return self._agents[i]

    def initialize(self, init: Callable[[int], Any]) -> None:
        """Set every agent's state from an initializer.

        ``init`` receives the agent's 1-based index and returns its initial
        state. It is called exactly once per agent, in index order.
        """
        for agent in self._agents:
            agent.state = init(agent.id)

    @property
    def agents(self) -> tuple[Agent, ...]:
        return tuple(self._agents)

    @property
    def contacts(self) -> tuple[Contact, ...]:
        return tuple(self._contacts)

    def __len__(self) -> int:
        return len(self._agents)

    def __iter__(self) -> Iterator[Agent]:
        return iter(self._agents)

    def __repr__(self) -> str:
        return f"Population(size={len(self._agents)}, contacts={len(self._contacts)})"
