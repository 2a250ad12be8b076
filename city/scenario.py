"""
Scenario system for describing board situations.

A scenario is a compact, human-editable description of one round: an ASCII
layout, the citizens standing on it, the barricades, the round index and the
match constants. It is what tests, examples and the HTTP adapter use to
produce ``WorldState`` snapshots without a running judge.

Layout legend:
    '#' building      '.' street
    'f' food          '$' money
    'h' hammer        'g' gun        'z' bazooka
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from infra.logger import get_logger
from infra.paths import PROJECT_ROOT, SCENARIO_STORAGE_DIR
from .core.types import BonusType, CellType, GridPos, WeaponType
from .entities import Cell, Citizen
from .rules import GameRules
from .world import WorldState

logger = get_logger(__name__)

_LEGEND: Dict[str, Dict[str, Any]] = {
    "#": {"type": CellType.BUILDING},
    ".": {},
    "f": {"bonus": BonusType.FOOD},
    "$": {"bonus": BonusType.MONEY},
    "h": {"weapon": WeaponType.HAMMER},
    "g": {"weapon": WeaponType.GUN},
    "z": {"weapon": WeaponType.BAZOOKA},
}


class Scenario:
    """
    A self-contained description of one round of a match.

    Example:
        scenario = Scenario(
            layout=[
                "....",
                ".#$.",
                "....",
            ],
            me=0,
            round=30,
        )
        scenario.add_citizen(Citizen(1, 0, CitizenType.WARRIOR, (0, 0), 100, WeaponType.HAMMER))
        world = scenario.to_world()
    """

    def __init__(
        self,
        layout: List[str],
        me: int = 0,
        round: int = 0,
        rules: Optional[GameRules] = None,
        citizens: Optional[List[Citizen]] = None,
        barricades: Optional[List[Dict[str, Any]]] = None,
    ):
        """
        Args:
            layout: One string per row, see module legend
            me: Player id of the agent
            round: Round index of the snapshot
            rules: Match constants (defaults to GameRules())
            citizens: Citizens on the board
            barricades: Dicts with ``pos``, ``resistance`` and ``owner``
        """
        if not layout or any(len(row) != len(layout[0]) for row in layout):
            raise ValueError("Scenario layout must be a non-empty rectangle")
        unknown = {ch for row in layout for ch in row} - set(_LEGEND)
        if unknown:
            raise ValueError(f"Unknown layout symbols: {sorted(unknown)}")

        self.layout = list(layout)
        self.me = me
        self.round = round
        self.rules = rules or GameRules()
        self.citizens: List[Citizen] = list(citizens or [])
        self.barricades: List[Dict[str, Any]] = [dict(b) for b in barricades or []]

    @property
    def rows(self) -> int:
        return len(self.layout)

    @property
    def cols(self) -> int:
        return len(self.layout[0])

    def add_citizen(self, citizen: Citizen) -> Scenario:
        self.citizens.append(citizen)
        return self

    def add_barricade(self, pos: GridPos, resistance: int, owner: int) -> Scenario:
        self.barricades.append({"pos": tuple(pos), "resistance": resistance, "owner": owner})
        return self

    def to_world(self) -> WorldState:
        """Materialize the scenario as a host snapshot."""
        cells = [[Cell(**_LEGEND[ch]) for ch in row] for row in self.layout]
        for barricade in self.barricades:
            i, j = barricade["pos"]
            cells[i][j].resistance = barricade["resistance"]
            cells[i][j].b_owner = barricade["owner"]
        return WorldState(
            rows=self.rows,
            cols=self.cols,
            me=self.me,
            round=self.round,
            rules=self.rules.model_copy(),
            cells=cells,
            citizens=[Citizen.from_dict(c.to_dict()) for c in self.citizens],
        )

    def clone(self) -> Scenario:
        return Scenario.from_json_dict(self.to_json_dict())

    # ------------------------------------------------------------------#
    # Serialization
    # ------------------------------------------------------------------#
    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "layout": self.layout,
            "me": self.me,
            "round": self.round,
            "rules": self.rules.model_dump(),
            "citizens": [c.to_dict() for c in self.citizens],
            "barricades": [
                {"pos": list(b["pos"]), "resistance": b["resistance"], "owner": b["owner"]}
                for b in self.barricades
            ],
        }

    @classmethod
    def from_json_dict(cls, data: Dict[str, Any]) -> Scenario:
        return cls(
            layout=data["layout"],
            me=data.get("me", 0),
            round=data.get("round", 0),
            rules=GameRules.model_validate(data.get("rules", {})),
            citizens=[Citizen.from_dict(c) for c in data.get("citizens", [])],
            barricades=[
                {"pos": tuple(b["pos"]), "resistance": b["resistance"], "owner": b["owner"]}
                for b in data.get("barricades", [])
            ],
        )

    def save_json(self, filepath: str | Path | None = None, indent: int = 2) -> Path:
        """
        Save scenario to JSON file.

        Args:
            filepath: Path to save to. If None, saves under storage/scenarios with a timestamped name.
            indent: JSON indentation (default: 2)

        Returns:
            The path written to
        """
        if filepath is None:
            base_dir = SCENARIO_STORAGE_DIR
            base_dir.mkdir(parents=True, exist_ok=True)
            timestamp = time.strftime("%Y%m%d_%H%M%S")
            filepath = base_dir / f"scenario_{timestamp}.json"
        else:
            filepath = Path(filepath)
            if not filepath.is_absolute():
                filepath = PROJECT_ROOT / filepath
            filepath.parent.mkdir(parents=True, exist_ok=True)

        logger.info("Saving scenario JSON to %s", filepath)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self.to_json_dict(), f, indent=indent, ensure_ascii=False)
        return filepath

    @classmethod
    def load_json(cls, filepath: str | Path) -> Scenario:
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_json_dict(data)

    def __str__(self) -> str:
        return f"Scenario({self.rows}x{self.cols}, round={self.round}, citizens={len(self.citizens)})"
