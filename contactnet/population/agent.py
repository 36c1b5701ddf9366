"""A single member of a population."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(eq=False)
class Agent:
    """A population member with a stable index and a mutable state.

    Agents compare by identity: the same object may be referenced from the
    population and from any number of network adjacency lists.

    Attributes:
        state: Opaque payload owned by the simulation driver. Networks never
            read or write it.
    """

    state: Any = None
    _id: int = field(default=0, init=False, repr=False)

    @property
    def id(self) -> int:
        """1-based index in the owning population, 0 if not yet added."""
        return self._id

    @property
    def registered(self) -> bool:
        return self._id > 0

    def __repr__(self) -> str:
        return f"Agent(id={self._id}, state={self.state!r})"
