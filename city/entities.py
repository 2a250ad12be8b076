from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .core.types import BonusType, CellType, CitizenType, GridPos, WeaponType


@dataclass
class Citizen:
    """
    A unit on the board, owned by one player.

    Builders never carry a weapon; warriors carry at least a hammer.
    """

    id: int
    player: int
    type: CitizenType
    pos: GridPos
    life: int
    weapon: WeaponType = WeaponType.NONE

    def __post_init__(self):
        if self.life <= 0:
            raise ValueError(f"Citizen #{self.id} must be alive, got life={self.life}")
        if self.type == CitizenType.BUILDER and self.weapon != WeaponType.NONE:
            raise ValueError(f"Builder #{self.id} cannot carry {self.weapon.value}")

    @property
    def is_warrior(self) -> bool:
        return self.type == CitizenType.WARRIOR

    def label(self) -> str:
        """Human-readable label, e.g. ``warrior#4(P1)``."""
        return f"{self.type.value}#{self.id}(P{self.player})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "player": self.player,
            "type": self.type.value,
            "pos": list(self.pos),
            "life": self.life,
            "weapon": self.weapon.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Citizen:
        return cls(
            id=data["id"],
            player=data["player"],
            type=CitizenType(data["type"]),
            pos=tuple(data["pos"]),
            life=data["life"],
            weapon=WeaponType(data.get("weapon", WeaponType.NONE.value)),
        )

    def __str__(self) -> str:
        return f"{self.label()} at {self.pos} life={self.life} weapon={self.weapon.value}"


@dataclass
class Cell:
    """
    Host view of a single board cell.

    Attributes:
        type: STREET or BUILDING (buildings are impassable)
        bonus: Bonus lying on the cell
        weapon: Weapon lying on the cell (NONE if there is none)
        id: Id of the citizen standing here, None if empty
        resistance: Barricade hit points, None if there is no barricade
        b_owner: Owner of the barricade, None if there is no barricade
    """

    type: CellType = CellType.STREET
    bonus: BonusType = BonusType.NONE
    weapon: WeaponType = WeaponType.NONE
    id: Optional[int] = None
    resistance: Optional[int] = None
    b_owner: Optional[int] = None

    @property
    def has_barricade(self) -> bool:
        return self.resistance is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "bonus": self.bonus.value,
            "weapon": self.weapon.value,
            "id": self.id,
            "resistance": self.resistance,
            "b_owner": self.b_owner,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Cell:
        return cls(
            type=CellType(data.get("type", CellType.STREET.value)),
            bonus=BonusType(data.get("bonus", BonusType.NONE.value)),
            weapon=WeaponType(data.get("weapon", WeaponType.NONE.value)),
            id=data.get("id"),
            resistance=data.get("resistance"),
            b_owner=data.get("b_owner"),
        )
