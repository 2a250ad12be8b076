"""Core types and actions for the city host model."""

from .types import (
    GridPos,
    Dir,
    DIRECTIONS,
    CellType,
    BonusType,
    WeaponType,
    CitizenType,
    ActionType,
    Phase,
)
from .actions import Action

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
]
