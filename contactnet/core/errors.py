"""Exception types raised by contactnet.

Library code raises these and lets them propagate; the CLI maps them to
exit codes.
"""


class ContactNetError(Exception):
    """Base class for all contactnet errors."""

    pass


class NetworkGrowthError(ContactNetError, NotImplementedError):
    """Raised when an agent is added to a finalized network that cannot grow."""

    pass


class AgentIndexError(ContactNetError, IndexError):
    """Raised when an agent index is outside the population."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(
            f"Agent index {index} out of range for population of size {size}"
        )


class DegreeSequenceError(ContactNetError, ValueError):
    """Raised when a degree generator returns an unusable degree sequence."""

    pass
