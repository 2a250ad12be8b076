"""
Game constants supplied by the host.

The host owns these values; the agent only reads them. They travel with every
world snapshot so an agent never has to guess the match configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from .core.types import WeaponType


class GameRules(BaseModel):
    """Fixed per-match constants."""

    life_lost_in_attack: int = Field(default=40, gt=0, description="Life removed by one successful hit.")
    builder_ini_life: int = Field(default=60, gt=0)
    warrior_ini_life: int = Field(default=100, gt=0)

    builder_strength_demolish: int = Field(default=10, gt=0)
    hammer_strength_demolish: int = Field(default=20, gt=0)
    gun_strength_demolish: int = Field(default=40, gt=0)
    bazooka_strength_demolish: int = Field(default=80, gt=0)

    barricade_max_resistance: int = Field(default=320, gt=0)
    max_num_barricades: int = Field(default=3, ge=0)

    num_rounds: int = Field(default=200, gt=0)
    rounds_per_day: int = Field(default=25, gt=0)
    rounds_per_night: int = Field(default=25, gt=0)

    @model_validator(mode="after")
    def _check_demolish_order(self) -> "GameRules":
        if self.bazooka_strength_demolish < self.builder_strength_demolish:
            raise ValueError("bazooka_strength_demolish cannot be weaker than builder_strength_demolish")
        return self

    def strength_demolish(self, weapon: WeaponType) -> int:
        """Damage a citizen carrying ``weapon`` deals to a barricade per round."""
        if weapon == WeaponType.HAMMER:
            return self.hammer_strength_demolish
        if weapon == WeaponType.GUN:
            return self.gun_strength_demolish
        if weapon == WeaponType.BAZOOKA:
            return self.bazooka_strength_demolish
        return self.builder_strength_demolish

    @property
    def day_night_cycle(self) -> int:
        return self.rounds_per_day + self.rounds_per_night
