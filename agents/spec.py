from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class AgentSpec:
    """
    Declarative description of an agent to instantiate.

    Attributes:
        type: Registered agent type name (e.g. "greedy")
        player: Player id the agent controls
        name: Optional display name
        init_params: Extra constructor keyword arguments
    """

    type: str
    player: int = 0
    name: Optional[str] = None
    init_params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type,
            "player": self.player,
            "init_params": dict(self.init_params),
        }
        if self.name is not None:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AgentSpec:
        if "type" not in data:
            raise ValueError("AgentSpec requires a 'type'")
        player = data.get("player", 0)
        if not isinstance(player, int) or isinstance(player, bool):
            raise ValueError(f"AgentSpec player must be an int, got {player!r}")
        return cls(
            type=str(data["type"]),
            player=player,
            name=data.get("name"),
            init_params=dict(data.get("init_params") or {}),
        )
