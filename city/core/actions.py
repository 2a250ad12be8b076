"""
Action definitions submitted by agents to the host.

An action is always a (type, direction) pair: citizens either move one cell
or build/upgrade a barricade on an adjacent cell.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict

from .types import ActionType, Dir


@dataclass(frozen=True)
class Action:
    """
    A single command for one citizen.

    Attributes:
        type: MOVE or BUILD
        dir: Direction of the move or of the cell being built on
    """

    type: ActionType
    dir: Dir

    @classmethod
    def move(cls, direction: Dir) -> Action:
        """Create a move action."""
        return cls(ActionType.MOVE, direction)

    @classmethod
    def build(cls, direction: Dir) -> Action:
        """Create a build action."""
        return cls(ActionType.BUILD, direction)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.name, "params": {"dir": self.dir.name}}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Action:
        return cls(ActionType[data["type"]], Dir[data["params"]["dir"]])

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def __str__(self) -> str:
        return f"{self.type.name}({self.dir.name})"
