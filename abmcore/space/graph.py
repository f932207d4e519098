"""Graph space built from an adjacency list.

Every agent is a node of the graph, keyed by its id. Moving an agent to the
location of another node connects the two with an undirected edge; moving it
to its own id turns it into a singleton. Neighborhoods are the agents
reachable within a number of hops.

The adjacency list is kept as a plain dict so edits stay cheap while agents
move around; use ``to_networkx`` to analyse a snapshot with NetworkX.
"""

from __future__ import annotations

import math
from collections import deque
from random import Random

import networkx as nx

from abmcore.agent import Agent
from abmcore.errors import InvalidPositionType, InvalidSubjectType
from abmcore.position import Position
from abmcore.space.space import AgentRef, PositionValue, Space, as_subject

__all__ = ["Graph"]


class Graph(Space):
    """A networked space.

    Attributes:
        adjacency (dict[int, list[int]]): node id to the ordered ids of its direct connections

    """

    def __init__(self, random: Random | None = None) -> None:
        """Create an empty graph.

        Args:
            random: a random number generator
        """
        super().__init__(random=random)
        self.adjacency: dict[int, list[int]] = {}

    @property
    def nodes(self) -> list[int]:
        """The ids of all nodes with an adjacency entry."""
        return list(self.adjacency)

    def connections(self, node) -> list[int]:
        """Return a copy of the direct connections of a node or agent."""
        node_id = node.id if isinstance(node, Agent) else node
        return list(self.adjacency.get(node_id, ()))

    def random_position(self) -> Position | None:
        """Return a uniformly drawn existing node id, None if the graph is empty."""
        if not self.adjacency:
            return None
        return Position.scalar(self.random.choice(self.nodes))

    def default_location(self, agent: Agent) -> Position:
        """Agents placed without a location become singleton nodes."""
        return Position.scalar(agent.id)

    def coerce_position(self, location) -> Position:
        """Return ``location`` as a scalar node position.

        Args:
            location: a scalar Position, a node id, or an agent whose node to join

        Raises:
            InvalidPositionType: for any other location
        """
        if isinstance(location, Agent):
            location = location.id
        position = location if isinstance(location, Position) else Position(location)
        if not position.is_scalar:
            raise InvalidPositionType(position.value, "scalar")
        return position

    def _relocate(
        self, agent: Agent, old: Position | None, new: Position | None
    ) -> None:
        self._disconnect(agent.id)
        target = agent.id if new is None else new.value
        if target == agent.id:
            self.adjacency[agent.id] = []
        else:
            self.adjacency[agent.id] = [target]
            self.adjacency.setdefault(target, []).append(agent.id)

    def _forget(self, agent: Agent) -> None:
        self._disconnect(agent.id)
        self.adjacency.pop(agent.id, None)

    def _disconnect(self, node_id: int) -> None:
        for connected in self.adjacency.values():
            while node_id in connected:
                connected.remove(node_id)

    def neighbors(self, subject, radius: float | None = None) -> set[Agent]:
        """Return the live agents reachable from ``subject`` within ``radius`` hops.

        Args:
            subject: an Agent (excluded from the result) or a scalar node Position
            radius: the maximum number of hops, unbounded when None

        Raises:
            InvalidSubjectType: if the subject does not resolve to a node id
        """
        if radius is None:
            radius = math.inf

        match as_subject(subject):
            case AgentRef(agent):
                start, exclude = agent.id, agent.id
            case PositionValue(position):
                if not position.is_scalar:
                    raise InvalidSubjectType(
                        subject, "graph queries need a scalar node id"
                    )
                start, exclude = position.value, None

        reachable = self._reachable(start, radius)
        return {
            candidate
            for candidate in self.agents.values()
            if candidate.live and candidate.id != exclude and candidate.id in reachable
        }

    def _reachable(self, start, radius: float) -> set:
        """Ids listed by the adjacency of nodes visited within ``radius`` hops."""
        found = set()
        visited = {start}
        frontier = deque([(start, 0)])
        while frontier:
            node, depth = frontier.popleft()
            if depth >= radius:
                continue
            for connected in self.adjacency.get(node, ()):
                found.add(connected)
                if connected not in visited:
                    visited.add(connected)
                    frontier.append((connected, depth + 1))
        return found

    def to_networkx(self) -> nx.Graph:
        """Return a NetworkX graph of the current topology.

        Nodes carry the registered agent under the ``agent`` attribute when one
        exists for that id.
        """
        G = nx.Graph()  # noqa: N806
        registry = self.agents
        for node_id, connected in self.adjacency.items():
            G.add_node(node_id, agent=registry.get(node_id))
            G.add_edges_from((node_id, other) for other in connected)
        return G
