"""The world class for abmcore.

Core Objects: World

A world owns the agent registry, the global clock and the random number
generators, and is bound to exactly one space. The space is the only component
that changes the registry.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Mapping
from types import MappingProxyType

import numpy as np

from abmcore.abm_logging import create_module_logger, method_logger
from abmcore.agent import Agent, IdAllocator, default_allocator
from abmcore.errors import SeedError, SpaceAlreadyBound
from abmcore.scenario import RNGLike, Scenario, SeedLike
from abmcore.space.space import Space

__all__ = ["World"]

_logger = create_module_logger()


class World:
    """Container for a simulation run.

    Attributes:
        space: the bound space
        time: the global clock, incremented once per ``tick``
        steps: the number of times ``tick`` has been called
        running: a boolean indicating if ``run_model`` should continue
        random: a seeded python.random number generator
        rng: a seeded numpy.random.Generator
        scenario: the scenario holding the run parameters
        ids: the allocator used by ``create_agent``

    Notes:
        ``World.agents`` is a read-only view. Agents enter and leave it through
        ``space.add`` and ``space.remove``.

    """

    @method_logger(__name__)
    def __init__(
        self,
        space: Space,
        *,
        rng: RNGLike | SeedLike | None = None,
        scenario: Scenario | None = None,
        ids: IdAllocator | None = None,
    ) -> None:
        """Create a new world and bind ``space`` to it.

        Args:
            space: the space the agents live in
            rng: Pseudorandom number generator state. When `rng` is None, a new `numpy.random.Generator` is created
                  using entropy from the operating system. Types other than `numpy.random.Generator` are passed to
                  `numpy.random.default_rng` to instantiate a `Generator`.
            scenario: the run parameters; its ``rng`` entry seeds the world
            ids: the id allocator for ``create_agent``, the shared default when None

        Raises:
            SeedError: if both rng and scenario.rng are given and differ
            SpaceAlreadyBound: if ``space`` belongs to another world
        """
        if space.world is not None and space.world is not self:
            raise SpaceAlreadyBound()

        if scenario is not None:
            if rng is not None and (scenario.rng != rng):
                raise SeedError("rng and scenario.rng must be the same")
            rng = scenario.rng

        self.rng: np.random.Generator = np.random.default_rng(rng)
        try:
            self.random = random.Random(rng)
        except TypeError:
            seed = int(self.rng.integers(np.iinfo(np.int32).max))
            self.random = random.Random(seed)

        if scenario is None:
            scenario = Scenario(rng=rng)
        self.scenario = scenario
        scenario.world = self

        self.running: bool = True
        self.time: int = 0
        self.steps: int = 0
        self.ids = ids if ids is not None else default_allocator
        self._agents: dict[int, Agent] = {}
        self._agents_view = MappingProxyType(self._agents)

        self.space = space
        space._bind(self)

    @property
    def agents(self) -> Mapping[int, Agent]:
        """Read-only mapping from agent id to agent."""
        return self._agents_view

    @property
    def live_agents(self) -> list[Agent]:
        """The registered agents that are still alive."""
        return [agent for agent in self._agents.values() if agent.live]

    def create_agent(self, agent_class: type[Agent] = Agent, *args, **kwargs) -> Agent:
        """Instantiate an agent with an id from this world's allocator.

        The agent is not added to the space; call ``space.add`` for that.
        """
        return agent_class(*args, ids=self.ids, **kwargs)

    def tick(self) -> int:
        """Advance every registered agent by one step, then the global clock.

        Dead agents are ticked as well; check ``self.live`` in ``Agent.tick``
        overrides to skip work for them.

        Returns:
            the new global time
        """
        for agent in list(self._agents.values()):
            agent.tick()
        self.steps += 1
        self.time += 1
        _logger.debug(f"tick {self.time} done for {len(self._agents)} agents")
        return self.time

    def run_for(self, duration: int) -> None:
        """Run the world for ``duration`` ticks."""
        if duration < 0:
            raise ValueError("duration must be non-negative")
        for _ in range(duration):
            self.tick()

    def run_while(self, condition: Callable[[World], bool]) -> None:
        """Tick while ``running`` is set and ``condition(world)`` holds."""
        while self.running and condition(self):
            self.tick()

    def run_model(self) -> None:
        """Tick until ``running`` is cleared, e.g. from within an agent."""
        while self.running:
            self.tick()

    def __repr__(self) -> str:  # noqa: D105
        return f"{self.__class__.__name__}(time={self.time}, agents={len(self._agents)}, space={self.space.__class__.__name__})"
