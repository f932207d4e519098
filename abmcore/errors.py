"""Exception hierarchy for abmcore.

Every error raised by the library derives from ``AbmError`` so callers can
catch the whole family at once, or a single condition such as
``IdentitySpaceExhausted`` to end a run.
"""

import abmcore


class AbmError(Exception):
    """Base class for all abmcore-specific exceptions.

    It automatically prefixes the abmcore version to help with debugging reports.
    """

    def __init__(self, message: str):
        self.abmcore_version = getattr(abmcore, "__version__", "unknown")
        # Store the original message cleanly for programmatic access
        self.original_message = message
        full_message = f"[abmcore {self.abmcore_version}] {message}"
        super().__init__(full_message)


# World Errors
class ModelError(AbmError):
    """Generic errors related to world initialization or execution."""


class SeedError(ModelError):
    """Raised when there is a conflict in random number generation settings.

    Example: Providing an ``rng`` that differs from the one in the scenario.
    """


# Agent Errors
class AgentError(AbmError):
    """Generic errors related to agent identity or lifecycle."""


class IdentitySpaceExhausted(AgentError):  # noqa: N818
    """Raised when the id allocator has reached its maximum."""

    def __init__(self, maximum: int):
        self.maximum = maximum
        super().__init__(f"No agent ids left, the allocator reached {maximum}.")


class UnknownAgent(AgentError):  # noqa: N818
    """Raised when an agent id is not in the world registry."""

    def __init__(self, agent_id):
        self.agent_id = agent_id
        super().__init__(f"Agent {agent_id} is not registered with the world.")


class DuplicateAgentId(AgentError):  # noqa: N818
    """Raised when a different agent is already registered under the same id."""

    def __init__(self, agent_id):
        self.agent_id = agent_id
        super().__init__(
            f"Another agent is already registered with id {agent_id}; draw ids from one allocator."
        )


# Position Errors
class PositionError(AbmError):
    """Generic errors related to position values."""


class InvalidPositionType(PositionError):  # noqa: N818
    """Raised when a Position is built from an unsupported payload."""

    def __init__(self, value, expected: str | None = None):
        self.value = value
        if expected:
            message = f"Cannot use {value!r} as a {expected} position."
        else:
            message = (
                f"Unsupported position payload of type {type(value).__name__}: {value!r}"
            )
        super().__init__(message)


# Space Errors
class SpaceError(AbmError):
    """Generic errors related to spaces and movement."""


class SpaceNotBound(SpaceError):  # noqa: N818
    """Raised when a registry operation runs on a space without a world."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot {operation}: the space is not bound to a world.")


class SpaceAlreadyBound(SpaceError):  # noqa: N818
    """Raised when a space that already belongs to a world is given to another."""

    def __init__(self):
        super().__init__("The space is already bound to another world.")


class InvalidSubjectType(SpaceError):  # noqa: N818
    """Raised when a neighbor query gets something other than an agent or a position."""

    def __init__(self, subject, reason: str | None = None):
        self.subject = subject
        message = f"Invalid neighbor query subject {subject!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class GridDimensionError(SpaceError):
    """Raised when grid dimensions are invalid.

    Examples: Negative width/height or non-integer dimensions.
    """


class OutOfBoundsError(SpaceError):
    """Raised when an agent attempts to move to a coordinate outside the grid."""

    def __init__(self, pos, dimensions):
        self.pos = pos
        self.dimensions = dimensions
        message = f"Position {pos} is out of bounds for grid dimensions {dimensions}."
        super().__init__(message)
