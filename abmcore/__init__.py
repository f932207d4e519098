"""abmcore: base classes for agent-based modeling in Python.

Core Objects: World, Agent, Position, and the Grid and Graph spaces.
"""

import datetime

from abmcore.agent import Agent, IdAllocator
from abmcore.position import Position, PositionKind
from abmcore.scenario import Scenario
from abmcore.space import AgentRef, Graph, Grid, PositionValue, Space
from abmcore.world import World

__all__ = [
    "Agent",
    "AgentRef",
    "Graph",
    "Grid",
    "IdAllocator",
    "Position",
    "PositionKind",
    "PositionValue",
    "Scenario",
    "Space",
    "World",
]

__title__ = "abmcore"
__version__ = "0.1.0"
__license__ = "Apache 2.0"
_this_year = datetime.datetime.now(tz=datetime.UTC).date().year
__copyright__ = f"Copyright {_this_year} abmcore developers"
