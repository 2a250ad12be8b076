"""
Tuning constants of the greedy agent.

Profits are unit-less scores: a target is worth its profit constant minus the
turns needed to reach it. Priorities only order the submission of actions to
the host. The defaults are the tuned values; override them through a JSON
file (see ``load_engine_settings``) or ``AgentSpec.init_params["settings"]``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from infra.config import load_model_config

SETTINGS_ENV_VAR = "GREEDY_AGENT_SETTINGS"


class EngineSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    # Profits
    money_profit: int = 12
    health_profit: int = 17
    about_to_die_bonus: int = Field(default=5, description="Extra food profit when one hit from death.")
    attack_profit: int = 19
    warrior_extra_profit: int = Field(default=3, description="Extra attack profit against warriors.")
    weapon_profit: int = 25
    steal_weapon_profit: int = 12
    bazooka_extra_profit: int = Field(default=3, description="Added once when stealing, twice when grabbing.")

    # Barricades
    barricade_threshold: int = 2
    barricade_interrupt_threshold: int = 5
    percent_build: int = Field(default=70, ge=0, le=100, description="Upgrade barricades up to this % of max.")

    # Path costs
    cost_walk_into_friendly: int = Field(default=3, ge=0)
    friendly_weapon_penalty: int = Field(default=4, ge=0)

    # Dispatch priorities
    not_important_priority: int = -1
    build_priority: int = 0
    run_priority: int = 15
    run_death_priority: int = 20
    very_high_priority: int = 500

    @model_validator(mode="after")
    def _check_thresholds(self) -> "EngineSettings":
        if self.barricade_interrupt_threshold < self.barricade_threshold:
            raise ValueError("barricade_interrupt_threshold must be >= barricade_threshold")
        if self.run_death_priority < self.run_priority:
            raise ValueError("run_death_priority must be >= run_priority")
        return self


def load_engine_settings(
    path: str | Path | None = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> EngineSettings:
    """Load settings from ``path`` (or $GREEDY_AGENT_SETTINGS) plus overrides."""
    return load_model_config(EngineSettings, path=path, env_var=SETTINGS_ENV_VAR, overrides=overrides)
