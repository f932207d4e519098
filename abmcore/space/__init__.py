"""Spatial topologies for abmcore.

Provides the Space contract and its two built-in realizations:
- Grid: a bounded 2D area with Euclidean neighborhoods
- Graph: an adjacency list with hop-bounded neighborhoods

New topologies subclass Space and implement ``random_position`` and
``neighbors``; movement bookkeeping goes into the ``_relocate`` hook.
"""

from abmcore.space.graph import Graph
from abmcore.space.grid import Grid
from abmcore.space.space import AgentRef, PositionValue, Space, Subject, as_subject

__all__ = [
    "AgentRef",
    "Graph",
    "Grid",
    "PositionValue",
    "Space",
    "Subject",
    "as_subject",
]
