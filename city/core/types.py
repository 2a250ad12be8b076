"""
Core value types shared by the host model and the agents.

Everything here is a plain enum or alias: the host hands the agent its world
snapshot in these terms and the agent answers with actions built from them.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple

# (row, col) on the board. Row 0 is the top row.
GridPos = Tuple[int, int]


class Dir(Enum):
    """
    Orthogonal directions.

    Iteration order (UP, DOWN, LEFT, RIGHT) is part of the contract: every
    tie between directions is broken by it.
    """

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> GridPos:
        """(drow, dcol) offset for one step in this direction."""
        return _DELTAS[self]

    def step(self, pos: GridPos) -> GridPos:
        """Position reached from ``pos`` after one step (may be off-board)."""
        dr, dc = _DELTAS[self]
        return (pos[0] + dr, pos[1] + dc)


_DELTAS = {
    Dir.UP: (-1, 0),
    Dir.DOWN: (1, 0),
    Dir.LEFT: (0, -1),
    Dir.RIGHT: (0, 1),
}

DIRECTIONS: Tuple[Dir, ...] = (Dir.UP, Dir.DOWN, Dir.LEFT, Dir.RIGHT)


class CellType(Enum):
    STREET = "street"
    BUILDING = "building"


class BonusType(Enum):
    NONE = "none"
    FOOD = "food"
    MONEY = "money"


class WeaponType(Enum):
    """Weapon carried by a citizen or lying on a street cell."""

    NONE = "none"
    HAMMER = "hammer"
    GUN = "gun"
    BAZOOKA = "bazooka"


class CitizenType(Enum):
    BUILDER = "builder"
    WARRIOR = "warrior"


class ActionType(Enum):
    MOVE = "move"
    BUILD = "build"


class Phase(Enum):
    DAY = "day"
    NIGHT = "night"
