"""
Cell contents as seen by the greedy agent.

Each board cell is reduced to one ``CellContent``: a kind plus, for weapons
and enemies, a strength tier. Contents are totally ordered from most to least
valuable for the agent:

    BAZOOKA > GUN > HAMMER > (BUILDER tier) > FOOD > MONEY > EMPTY
      > FRIENDLY > WALL > ENEMY(builder) > ENEMY(hammer) > ENEMY(gun) > ENEMY(bazooka)

``rank`` exposes that order as an int (weapons = +tier, enemies = -tier), so
"is this enemy weaker than my weapon" is ``-content.rank < my_tier``.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

from city.core.types import CitizenType, WeaponType
from city.entities import Citizen


class Tier(IntEnum):
    """Fighting strength. A builder fights with the BUILDER tier."""

    BUILDER = 3
    HAMMER = 4
    GUN = 5
    BAZOOKA = 6

    @classmethod
    def of_weapon(cls, weapon: WeaponType) -> Tier:
        return _WEAPON_TIERS[weapon]

    @classmethod
    def of_citizen(cls, citizen: Citizen) -> Tier:
        if citizen.type == CitizenType.BUILDER:
            return cls.BUILDER
        return _WEAPON_TIERS[citizen.weapon]


_WEAPON_TIERS = {
    WeaponType.NONE: Tier.BUILDER,
    WeaponType.HAMMER: Tier.HAMMER,
    WeaponType.GUN: Tier.GUN,
    WeaponType.BAZOOKA: Tier.BAZOOKA,
}


class ContentKind(Enum):
    WEAPON = "weapon"
    FOOD = "food"
    MONEY = "money"
    EMPTY = "empty"
    FRIENDLY = "friendly"
    WALL = "wall"
    ENEMY = "enemy"


_FIXED_RANKS = {
    ContentKind.FOOD: 2,
    ContentKind.MONEY: 1,
    ContentKind.EMPTY: 0,
    ContentKind.FRIENDLY: -1,
    ContentKind.WALL: -2,
}


@functools.total_ordering
@dataclass(frozen=True)
class CellContent:
    """
    Tagged cell content.

    Attributes:
        kind: What occupies the cell
        tier: Weapon tier for WEAPON, fighting tier for ENEMY, None otherwise
    """

    kind: ContentKind
    tier: Optional[Tier] = None

    def __post_init__(self):
        needs_tier = self.kind in (ContentKind.WEAPON, ContentKind.ENEMY)
        if needs_tier != (self.tier is not None):
            raise ValueError(f"{self.kind.value} content {'requires' if needs_tier else 'takes no'} tier")

    @classmethod
    def weapon(cls, tier: Tier) -> CellContent:
        return cls(ContentKind.WEAPON, Tier(tier))

    @classmethod
    def enemy(cls, tier: Tier) -> CellContent:
        return cls(ContentKind.ENEMY, Tier(tier))

    @property
    def rank(self) -> int:
        if self.kind == ContentKind.WEAPON:
            return int(self.tier)
        if self.kind == ContentKind.ENEMY:
            return -int(self.tier)
        return _FIXED_RANKS[self.kind]

    @property
    def is_enemy(self) -> bool:
        return self.kind == ContentKind.ENEMY

    @property
    def is_enemy_warrior(self) -> bool:
        return self.kind == ContentKind.ENEMY and self.tier > Tier.BUILDER

    @property
    def is_weapon(self) -> bool:
        return self.kind == ContentKind.WEAPON

    @property
    def is_wall(self) -> bool:
        return self.kind == ContentKind.WALL

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CellContent):
            return NotImplemented
        return self.rank < other.rank

    def __str__(self) -> str:
        if self.tier is None:
            return self.kind.value
        return f"{self.kind.value}:{self.tier.name.lower()}"


EMPTY = CellContent(ContentKind.EMPTY)
FOOD = CellContent(ContentKind.FOOD)
MONEY = CellContent(ContentKind.MONEY)
FRIENDLY = CellContent(ContentKind.FRIENDLY)
WALL = CellContent(ContentKind.WALL)
