"""Tests for the Space contract shared by all topologies."""

import random

import pytest

from abmcore import Agent, AgentRef, Grid, IdAllocator, Position, PositionValue, World
from abmcore.errors import (
    DuplicateAgentId,
    InvalidPositionType,
    InvalidSubjectType,
    SpaceNotBound,
    UnknownAgent,
)
from abmcore.space import Space, as_subject


class LineSpace(Space):
    """A one dimensional space of key positions, used to exercise the contract."""

    def __init__(self, size, random=None):  # noqa: D107
        super().__init__(random=random)
        self.size = size
        self.moves = []
        self.forgotten = []

    def random_position(self):  # noqa: D102
        return Position.key("cell", self.random.randrange(self.size))

    def neighbors(self, subject, radius=None):  # noqa: D102
        match as_subject(subject):
            case AgentRef(agent):
                center, exclude = agent.location, agent.id
            case PositionValue(position):
                center, exclude = position, None
        radius = self.size if radius is None else radius
        return {
            a
            for a in self.agents.values()
            if a.live and a.id != exclude and abs(a.location.value[1] - center.value[1]) <= radius
        }

    def _relocate(self, agent, old, new):
        self.moves.append((agent.id, old, new))

    def _forget(self, agent):
        self.forgotten.append(agent.id)


@pytest.fixture
def world():
    return World(LineSpace(10), rng=42, ids=IdAllocator())


def test_space_is_abstract():
    """Space cannot be instantiated without the required methods."""
    with pytest.raises(TypeError):
        Space()

    class Incomplete(Space):
        def random_position(self):
            return None

    with pytest.raises(TypeError):
        Incomplete()


@pytest.mark.parametrize("operation", ["add", "remove", "move", "kill"])
def test_final_operations_cannot_be_overridden(operation):
    """Subclasses redefining a registry operation are rejected."""
    with pytest.raises(TypeError, match=operation):
        type(
            "Overriding",
            (LineSpace,),
            {operation: lambda self, *args: None},
        )


def test_as_subject():
    """Agents and positions map onto the two subject variants."""
    agent = Agent(ids=IdAllocator())
    position = Position(3)

    assert as_subject(agent) == AgentRef(agent)
    assert as_subject(position) == PositionValue(position)
    ref = AgentRef(agent)
    assert as_subject(ref) is ref

    for invalid in (3, "a", None, (1, 2)):
        with pytest.raises(InvalidSubjectType):
            as_subject(invalid)


@pytest.mark.parametrize("operation", ["add", "remove", "move", "kill"])
def test_unbound_space(operation):
    """Registry operations need a world."""
    space = LineSpace(10, random=random.Random(1))
    agent = Agent(ids=IdAllocator())
    with pytest.raises(SpaceNotBound):
        getattr(space, operation)(agent)
    assert agent.location is None
    assert agent.live


def test_unbound_space_has_no_agents():
    """An unbound space reports an empty registry."""
    assert len(LineSpace(3, random=random.Random(1)).agents) == 0


def test_unbound_random_warns():
    """Using randomness without a generator or world warns."""
    space = LineSpace(3)
    with pytest.warns(UserWarning):
        space.random_position()


def test_add(world):
    """Adding registers the agent and places it."""
    agent = world.create_agent()
    world.space.add(agent, Position.key("cell", 4))

    assert world.agents[agent.id] is agent
    assert agent.location == Position.key("cell", 4)
    assert world.space.moves == [(agent.id, None, Position.key("cell", 4))]


def test_add_random_location(world):
    """Without a location the topology default is used."""
    agent = world.create_agent()
    world.space.add(agent)
    assert agent.location.value[0] == "cell"
    assert 0 <= agent.location.value[1] < 10


def test_move(world):
    """Moving updates the location and runs the relocation hook once."""
    agent = world.create_agent()
    world.space.add(agent, Position.key("cell", 1))
    world.space.move(agent, Position.key("cell", 2))

    assert agent.location == Position.key("cell", 2)
    assert world.space.moves[-1] == (
        agent.id,
        Position.key("cell", 1),
        Position.key("cell", 2),
    )
    assert len(world.space.moves) == 2


def test_move_rejects_non_positions(world):
    """The base space only accepts Position locations."""
    agent = world.create_agent()
    world.space.add(agent, Position.key("cell", 1))
    with pytest.raises(InvalidPositionType):
        world.space.move(agent, ("cell", 2))
    assert agent.location == Position.key("cell", 1)


def test_remove(world):
    """Removing excises the agent but keeps it alive."""
    agent = world.create_agent()
    world.space.add(agent)
    world.space.remove(agent)

    assert agent.id not in world.agents
    assert agent.live
    assert world.space.forgotten == [agent.id]

    with pytest.raises(UnknownAgent):
        world.space.remove(agent)


def test_kill(world):
    """Killing keeps the agent registered but not live."""
    agent = world.create_agent()
    world.space.add(agent)
    world.space.kill(agent)

    assert world.agents[agent.id] is agent
    assert not agent.live
    assert world.space.forgotten == []

    with pytest.raises(UnknownAgent):
        world.space.kill(world.create_agent())


def test_dead_agents_are_not_neighbors(world):
    """Neighbor queries only return live agents."""
    first, second = world.create_agent(), world.create_agent()
    world.space.add(first, Position.key("cell", 0))
    world.space.add(second, Position.key("cell", 1))
    assert world.space.neighbors(first, 1) == {second}

    world.space.kill(second)
    assert world.space.neighbors(first, 1) == set()


def test_space_uses_own_random():
    """An explicit generator wins over the world one."""
    rng = random.Random(3)
    space = Grid(10, 10, random=rng)
    World(space, rng=1)
    assert space.random is rng


def test_add_duplicate_id(world):
    """Agents from different allocators cannot share a registry slot."""
    mine = world.create_agent()
    other = Agent(ids=IdAllocator())
    assert other.id == mine.id

    world.space.add(mine, Position.key("cell", 1))
    with pytest.raises(DuplicateAgentId) as excinfo:
        world.space.add(other, Position.key("cell", 2))

    assert excinfo.value.agent_id == mine.id
    assert world.agents[mine.id] is mine
    assert other.location is None
    assert len(world.space.moves) == 1


def test_add_same_agent_again(world):
    """Adding a registered agent again just moves it."""
    agent = world.create_agent()
    world.space.add(agent, Position.key("cell", 1))
    world.space.add(agent, Position.key("cell", 2))

    assert world.agents[agent.id] is agent
    assert agent.location == Position.key("cell", 2)
    assert len(world.agents) == 1
