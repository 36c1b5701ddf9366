"""The contact capability: who an agent can meet at a given time."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..agent import Agent
    from ..registry import Population


class Contact(ABC):
    """Produces an agent's potential transmission partners.

    A contact is bound to one population, which it uses to resolve agent
    indices. Implementations may ignore ``time`` (static structures) or use
    it (time-varying contact patterns).
    """

    def __init__(self, population: "Population"):
        self._population = population

    @property
    def population(self) -> "Population":
        return self._population

    @abstractmethod
    def contact(self, time: float, agent: "Agent") -> Sequence["Agent"]:
        """Return the agents ``agent`` is in contact with at ``time``.

        Must be safe to call before any agents exist, in which case it
        returns an empty sequence.
        """

    def add(self, agent: "Agent") -> None:
        """Called by the population after ``agent`` has been appended."""
        pass
