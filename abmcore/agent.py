"""Agent related classes.

Core Objects: Agent, IdAllocator

An agent carries an identity, a local clock, a liveness flag and a location.
The flag and the location are owned by the space the agent lives in: they are
read-only properties here and only change through ``Space.add``, ``Space.move``
and ``Space.kill``.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from abmcore.abm_logging import create_module_logger
from abmcore.errors import IdentitySpaceExhausted

if TYPE_CHECKING:
    from abmcore.position import Position

__all__ = ["Agent", "IdAllocator", "default_allocator"]

_logger = create_module_logger()


class IdAllocator:
    """Monotonic source of agent ids.

    Attributes:
        maximum (int): ids are drawn from ``[start, maximum)``

    """

    def __init__(self, start: int = 0, maximum: int = sys.maxsize) -> None:
        """Create an allocator.

        Args:
            start: the first id handed out
            maximum: the ceiling of the id space; reaching it is fatal
        """
        if start < 0:
            raise ValueError("start must be a non-negative integer")
        if maximum < start:
            raise ValueError("maximum must not be smaller than start")
        self.maximum = maximum
        self._next = start

    def next(self) -> int:
        """Return the next id.

        Raises:
            IdentitySpaceExhausted: if the counter has reached ``maximum``
        """
        if self._next >= self.maximum:
            raise IdentitySpaceExhausted(self.maximum)
        agent_id = self._next
        self._next += 1
        return agent_id

    def peek(self) -> int:
        """Return the id the next call to ``next`` would hand out."""
        return self._next

    def reset(self, start: int = 0) -> None:
        """Restart the counter, e.g. between test runs."""
        if start < 0:
            raise ValueError("start must be a non-negative integer")
        self._next = start


default_allocator = IdAllocator()


class Agent:
    """Base class for an agent.

    Attributes:
        id (int): unique identifier, fixed at construction
        time (int): number of times ``tick`` has run

    Notes:
        Subclass and override ``tick`` to give agents behavior; always return
        ``super().tick()`` or advance ``time`` yourself.

    """

    def __init__(self, *args, ids: IdAllocator | None = None, **kwargs) -> None:
        """Create a new agent.

        Args:
            args: passed on to super
            ids: the allocator to draw the id from, the shared default when omitted
            kwargs: passed on to super

        Raises:
            IdentitySpaceExhausted: if the allocator has no ids left
        """
        super().__init__(*args, **kwargs)
        self._id: int = (ids if ids is not None else default_allocator).next()
        self._live: bool = True
        self._location: Position | None = None
        self.time: int = 0

    @property
    def id(self) -> int:
        """The unique identifier of the agent."""
        return self._id

    @property
    def live(self) -> bool:
        """Whether the agent is alive; only ``Space.kill`` clears it."""
        return self._live

    @property
    def location(self) -> Position | None:
        """The position of the agent, None until a space places it."""
        return self._location

    def tick(self) -> int:
        """Advance the local clock by one step and return the new time."""
        self.time += 1
        return self.time

    def __repr__(self):  # noqa: D105
        return f"{self.__class__.__name__}(id={self._id})"


def _place(agent: Agent, location: Position | None) -> None:
    """Assign the location of an agent. Reserved for spaces."""
    agent._location = location


def _mark_dead(agent: Agent) -> None:
    """Clear the liveness flag of an agent. Reserved for spaces."""
    agent._live = False
    _logger.debug(f"marked {agent!r} as dead")
