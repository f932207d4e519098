"""Bounded two dimensional grid space.

Agents occupy vector positions ``(x, y)`` with ``0 <= x < width`` and
``0 <= y < height``. Several agents may share a position. Neighborhoods are
Euclidean discs, found with a linear scan over the registered agents.
"""

from __future__ import annotations

from random import Random

import numpy as np

from abmcore.agent import Agent
from abmcore.errors import (
    GridDimensionError,
    InvalidPositionType,
    InvalidSubjectType,
    OutOfBoundsError,
)
from abmcore.position import Position
from abmcore.space.space import AgentRef, PositionValue, Space, as_subject

__all__ = ["Grid"]


class Grid(Space):
    """A bounded, continuous 2D area.

    Attributes:
        width (int): extent along x
        height (int): extent along y

    """

    def __init__(self, width: int, height: int, random: Random | None = None) -> None:
        """Create a grid.

        Args:
            width: the width of the grid, a positive integer
            height: the height of the grid, a positive integer
            random: a random number generator

        Raises:
            GridDimensionError: if width or height is not a positive integer
        """
        super().__init__(random=random)
        for name, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, int | np.integer):
                raise GridDimensionError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise GridDimensionError(f"{name} must be positive, got {value}")
        self.width = int(width)
        self.height = int(height)

    @property
    def dimensions(self) -> tuple[int, int]:  # noqa: D102
        return self.width, self.height

    def random_position(self) -> Position:
        """Return a position with an independent uniform integer draw per axis."""
        return Position.vector(
            self.random.randrange(self.width), self.random.randrange(self.height)
        )

    def contains(self, position: Position) -> bool:
        """Whether a vector position lies inside the grid."""
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def coerce_position(self, location) -> Position:
        """Return ``location`` as a vector position inside the grid.

        Raises:
            InvalidPositionType: if the location is not a 2D vector
            OutOfBoundsError: if the location is outside the grid
        """
        if isinstance(location, Position):
            position = location
        else:
            try:
                x, y = location
            except (TypeError, ValueError):
                raise InvalidPositionType(location, "vector") from None
            position = Position.vector(x, y)
        if not position.is_vector:
            raise InvalidPositionType(position.value, "vector")
        if not self.contains(position):
            raise OutOfBoundsError((position.x, position.y), self.dimensions)
        return position

    def neighbors(self, subject, radius: float | None = None) -> set[Agent]:
        """Return the live agents within Euclidean distance ``radius`` of ``subject``.

        Args:
            subject: an Agent (excluded from the result), a vector Position, or
                an ``(x, y)`` pair of numbers
            radius: the inclusive search radius, ``max(width, height)`` when None

        Raises:
            InvalidSubjectType: if the subject is not an agent or a vector position
        """
        if radius is None:
            radius = max(self.width, self.height)

        match as_subject(self._vector_subject(subject)):
            case AgentRef(agent):
                center, exclude = agent.location, agent.id
            case PositionValue(position):
                center, exclude = position, None

        if center is None or not center.is_vector:
            raise InvalidSubjectType(subject, "grid queries need a vector position")

        return {
            candidate
            for candidate in self.agents.values()
            if candidate.live
            and candidate.id != exclude
            and candidate.location is not None
            and center.distance(candidate.location) <= radius
        }

    @staticmethod
    def _vector_subject(subject):
        if isinstance(subject, Agent | Position | AgentRef | PositionValue):
            return subject
        try:
            x, y = subject
            return Position.vector(x, y)
        except (TypeError, ValueError, InvalidPositionType):
            raise InvalidSubjectType(
                subject, "expected an Agent, a Position or an (x, y) pair"
            ) from None

    def distance(self, a, b) -> float:
        """Euclidean distance between two agents or vector positions.

        Raises:
            InvalidSubjectType: if an agent is unplaced or a position is not a vector
        """
        first, second = (self._center(x) for x in (a, b))
        return first.distance(second)

    def _center(self, subject) -> Position:
        match as_subject(self._vector_subject(subject)):
            case AgentRef(agent):
                center = agent.location
            case PositionValue(position):
                center = position
        if center is None or not center.is_vector:
            raise InvalidSubjectType(subject, "grid distances need a vector position")
        return center
