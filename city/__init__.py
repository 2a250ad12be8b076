"""
City host model - the world snapshot a day/night survival agent plays on.

This package describes what the judge tells the agent each round (board,
citizens, barricades, calendar, constants) and how the agent answers
(``ActionSink``). It deliberately contains no game rules.

Quick Start:
    from city import Scenario, RecordingSink
    from city.core import CitizenType, WeaponType
    from city.entities import Citizen

    scenario = Scenario(layout=["...", ".$.", "..."], round=0)
    scenario.add_citizen(Citizen(1, 0, CitizenType.BUILDER, (0, 0), 60))
    world = scenario.to_world()
"""

__version__ = "1.0.0"

from .core import (
    GridPos,
    Dir,
    DIRECTIONS,
    CellType,
    BonusType,
    WeaponType,
    CitizenType,
    ActionType,
    Phase,
    Action,
)
from .entities import Cell, Citizen
from .rules import GameRules
from .world import WorldState
from .sink import ActionSink, RecordingSink
from .scenario import Scenario

__all__ = [
    "GridPos",
    "Dir",
    "DIRECTIONS",
    "CellType",
    "BonusType",
    "WeaponType",
    "CitizenType",
    "ActionType",
    "Phase",
    "Action",
    "Cell",
    "Citizen",
    "GameRules",
    "WorldState",
    "ActionSink",
    "RecordingSink",
    "Scenario",
]
