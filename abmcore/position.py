"""Immutable position values shared by all spaces.

A ``Position`` wraps one of three payloads:

- a numeric scalar, used by the graph space as a node key,
- a composite key (a string or a tuple of hashable parts), reserved for
  custom topologies,
- a 2D vector backed by a read-only numpy array, used by the grid.

The payload is validated once, when the position is built.
"""

from __future__ import annotations

import enum
import numbers

import numpy as np

from abmcore.errors import InvalidPositionType

__all__ = ["Position", "PositionKind"]


class PositionKind(enum.Enum):
    """The payload kinds a Position can hold."""

    SCALAR = "scalar"
    KEY = "key"
    VECTOR = "vector"


def _is_scalar(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool | np.bool_)


def _as_vector(value) -> np.ndarray | None:
    if isinstance(value, str | bytes):
        return None
    try:
        array = np.asarray(value, dtype=float)
    except (TypeError, ValueError):
        return None
    if array.shape != (2,) or not np.all(np.isfinite(array)):
        return None
    array = array.copy()
    array.flags.writeable = False
    return array


class Position:
    """An immutable, validated position.

    Attributes:
        kind (PositionKind): which payload kind this position holds
        value: the payload; a number, a key, or a read-only numpy array of shape (2,)

    Notes:
        Tuples are composite keys. To build a grid coordinate from a tuple use
        ``Position.vector(x, y)``, or pass a numpy array or list of two numbers.

    """

    __slots__ = ("_kind", "_value")

    def __init__(self, value) -> None:
        """Build a position, inferring the kind from the payload.

        Args:
            value: a real number, a string, a tuple of hashables, or two numeric components

        Raises:
            InvalidPositionType: if the payload matches none of the kinds
        """
        if isinstance(value, Position):
            kind, payload = value.kind, value.value
        elif _is_scalar(value):
            kind, payload = PositionKind.SCALAR, value
        elif isinstance(value, str):
            kind, payload = PositionKind.KEY, value
        elif isinstance(value, tuple):
            try:
                hash(value)
            except TypeError:
                raise InvalidPositionType(value) from None
            kind, payload = PositionKind.KEY, value
        else:
            payload = _as_vector(value)
            if payload is None:
                raise InvalidPositionType(value)
            kind = PositionKind.VECTOR

        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_value", payload)

    @classmethod
    def scalar(cls, value) -> Position:
        """Build a scalar position, e.g. a graph node id."""
        if not _is_scalar(value):
            raise InvalidPositionType(value, "scalar")
        return cls(value)

    @classmethod
    def key(cls, *parts) -> Position:
        """Build a composite key position from one or more hashable parts."""
        if not parts:
            raise InvalidPositionType(parts, "key")
        return cls(parts[0] if len(parts) == 1 and isinstance(parts[0], str) else parts)

    @classmethod
    def vector(cls, x, y) -> Position:
        """Build a 2D vector position."""
        payload = _as_vector((x, y))
        if payload is None:
            raise InvalidPositionType((x, y), "vector")
        return cls(payload)

    @property
    def kind(self) -> PositionKind:  # noqa: D102
        return self._kind

    @property
    def value(self):  # noqa: D102
        return self._value

    @property
    def is_vector(self) -> bool:  # noqa: D102
        return self._kind is PositionKind.VECTOR

    @property
    def is_scalar(self) -> bool:  # noqa: D102
        return self._kind is PositionKind.SCALAR

    @property
    def x(self) -> float:
        """The first component of a vector position."""
        self._require_vector()
        return float(self._value[0])

    @property
    def y(self) -> float:
        """The second component of a vector position."""
        self._require_vector()
        return float(self._value[1])

    def distance(self, other: Position) -> float:
        """Euclidean distance between two vector positions."""
        self._require_vector()
        other._require_vector()
        return float(np.linalg.norm(self._value - other._value))

    def _require_vector(self):
        if self._kind is not PositionKind.VECTOR:
            raise InvalidPositionType(self._value, "vector")

    def __setattr__(self, key, value):  # noqa: D105
        raise AttributeError("Position is immutable")

    def __eq__(self, other):  # noqa: D105
        if not isinstance(other, Position):
            return NotImplemented
        if self._kind is not other._kind:
            return False
        if self._kind is PositionKind.VECTOR:
            return bool(np.array_equal(self._value, other._value))
        return bool(self._value == other._value)

    def __hash__(self):  # noqa: D105
        if self._kind is PositionKind.VECTOR:
            return hash((self._kind, tuple(self._value.tolist())))
        return hash((self._kind, self._value))

    def __repr__(self):  # noqa: D105
        if self._kind is PositionKind.VECTOR:
            return f"Position.vector({self.x:g}, {self.y:g})"
        return f"Position({self._value!r})"
