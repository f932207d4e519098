"""Base class for spatial topologies.

Space provides the functionality shared by every topology:
- Binding to the world whose agent registry it maintains
- Adding, removing, moving and killing agents
- Normalising neighbor query subjects

Concrete topologies implement ``random_position`` and ``neighbors`` and may
refine movement through the ``default_location``, ``coerce_position``,
``_relocate`` and ``_forget`` hooks. The four registry operations are final.
"""

from __future__ import annotations

import abc
import warnings
from collections.abc import Mapping
from dataclasses import dataclass
from random import Random
from types import MappingProxyType
from typing import TYPE_CHECKING, final

from abmcore.abm_logging import create_module_logger
from abmcore.agent import Agent, _mark_dead, _place
from abmcore.errors import (
    DuplicateAgentId,
    InvalidPositionType,
    InvalidSubjectType,
    SpaceNotBound,
    UnknownAgent,
)
from abmcore.position import Position

if TYPE_CHECKING:
    from abmcore.world import World

__all__ = ["AgentRef", "PositionValue", "Space", "Subject", "as_subject"]

_logger = create_module_logger()


@dataclass(frozen=True, slots=True)
class AgentRef:
    """A neighbor query centered on an agent, which is left out of the result."""

    agent: Agent


@dataclass(frozen=True, slots=True)
class PositionValue:
    """A neighbor query centered on a bare position."""

    position: Position


Subject = AgentRef | PositionValue


def as_subject(subject) -> Subject:
    """Wrap an agent or a position as a neighbor query subject.

    Raises:
        InvalidSubjectType: if ``subject`` is neither an agent nor a position
    """
    match subject:
        case AgentRef() | PositionValue():
            return subject
        case Agent():
            return AgentRef(subject)
        case Position():
            return PositionValue(subject)
        case _:
            raise InvalidSubjectType(subject, "expected an Agent or a Position")


_FINAL_OPERATIONS = ("add", "remove", "move", "kill")


class Space(abc.ABC):
    """Base class for all spaces.

    Attributes:
        world (World): the world this space is bound to, None until bound
        random (Random): the random number generator

    Notes:
        When no random number generator is passed, the space uses the one of
        the world it is bound to. Asking for randomness before binding issues a
        ``UserWarning`` and creates an unseeded generator.

    """

    def __init_subclass__(cls, **kwargs):  # noqa: D105
        super().__init_subclass__(**kwargs)
        overridden = [name for name in _FINAL_OPERATIONS if name in cls.__dict__]
        if overridden:
            raise TypeError(
                f"{cls.__name__} cannot override final Space operations: {', '.join(overridden)}"
            )

    def __init__(self, random: Random | None = None) -> None:
        """Instantiate a Space.

        Args:
            random: random number generator, defaults to the world's
        """
        super().__init__()
        self._world: World | None = None
        self._random = random

    @property
    def world(self) -> World | None:
        """The world this space is bound to."""
        return self._world

    @property
    def is_bound(self) -> bool:  # noqa: D102
        return self._world is not None

    @property
    def random(self) -> Random:
        """The random number generator used by this space."""
        if self._random is None:
            if self._world is not None:
                return self._world.random
            warnings.warn(
                "Random number generator not specified, this can make models non-reproducible. Please pass a random number generator explicitly",
                UserWarning,
                stacklevel=2,
            )
            self._random = Random()
        return self._random

    @random.setter
    def random(self, random: Random) -> None:
        self._random = random

    @property
    def agents(self) -> Mapping[int, Agent]:
        """Read-only view of the world registry, empty when unbound."""
        if self._world is None:
            return MappingProxyType({})
        return self._world.agents

    @abc.abstractmethod
    def random_position(self) -> Position | None:
        """Return a uniformly drawn valid position, None if the topology is empty."""

    @abc.abstractmethod
    def neighbors(self, subject, radius: float | None = None) -> set[Agent]:
        """Return the live agents within ``radius`` of ``subject``.

        Args:
            subject: an Agent (excluded from the result), a Position, or a Subject
            radius: the search radius, a topology specific default when None

        Raises:
            InvalidSubjectType: if the subject is not usable in this topology
        """

    def default_location(self, agent: Agent) -> Position | None:
        """Location used when ``add`` or ``move`` are called without one."""
        return self.random_position()

    def coerce_position(self, location) -> Position:
        """Validate a caller supplied location and return it as a Position."""
        if not isinstance(location, Position):
            raise InvalidPositionType(location)
        return location

    def _relocate(
        self, agent: Agent, old: Position | None, new: Position | None
    ) -> None:
        """Topology bookkeeping before ``agent`` is assigned its new location."""

    def _forget(self, agent: Agent) -> None:
        """Topology cleanup after ``agent`` left the registry."""

    def _bind(self, world: World) -> None:
        self._world = world

    def _registry(self, operation: str) -> dict[int, Agent]:
        if self._world is None:
            raise SpaceNotBound(operation)
        return self._world._agents

    def _resolve(self, agent: Agent, location) -> Position | None:
        if location is None:
            location = self.default_location(agent)
        if location is not None:
            location = self.coerce_position(location)
        return location

    def _settle(self, agent: Agent, location: Position | None) -> None:
        self._relocate(agent, agent.location, location)
        _place(agent, location)

    @final
    def add(self, agent: Agent, location=None) -> None:
        """Register ``agent`` with the world and place it.

        The location is validated before the registry changes, so a failed
        add leaves neither the registry nor the agent modified.

        Args:
            agent: the agent to add
            location: where to place it, the topology default when None

        Raises:
            SpaceNotBound: if the space has no world
            DuplicateAgentId: if another agent is registered under the same id
        """
        registry = self._registry("add")
        registered = registry.get(agent.id)
        if registered is not None and registered is not agent:
            raise DuplicateAgentId(agent.id)
        location = self._resolve(agent, location)
        registry[agent.id] = agent
        _logger.debug(f"registered {agent!r}")
        self._settle(agent, location)

    @final
    def remove(self, agent: Agent) -> None:
        """Remove ``agent`` from the world registry; liveness is left untouched.

        Raises:
            SpaceNotBound: if the space has no world
            UnknownAgent: if the agent is not registered
        """
        registry = self._registry("remove")
        if agent.id not in registry:
            raise UnknownAgent(agent.id)
        del registry[agent.id]
        self._forget(agent)
        _logger.debug(f"removed {agent!r}")

    @final
    def move(self, agent: Agent, location=None) -> None:
        """Move ``agent`` to ``location``.

        Args:
            agent: the agent to move
            location: the target, the topology default when None

        Raises:
            SpaceNotBound: if the space has no world
        """
        self._registry("move")
        self._settle(agent, self._resolve(agent, location))

    @final
    def kill(self, agent: Agent) -> None:
        """Mark ``agent`` as dead while keeping it in the registry.

        Raises:
            SpaceNotBound: if the space has no world
            UnknownAgent: if the agent is not registered
        """
        registry = self._registry("kill")
        if agent.id not in registry:
            raise UnknownAgent(agent.id)
        _mark_dead(agent)
