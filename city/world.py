"""
WorldState - the per-round snapshot the host hands to an agent.

The snapshot is a passive container: it answers queries about geometry,
cells, citizens and the day/night calendar, but it never applies game rules.
The judge owning the real match produces a fresh snapshot every round.

Usage:
    world = WorldState.from_dict(payload)
    if world.is_day():
        for cid in world.builders(world.me):
            cit = world.citizen(cid)
"""

from __future__ import annotations

import copy
import json
from typing import Any, Dict, Iterable, List, Optional

from .core.types import CellType, CitizenType, GridPos, Phase
from .entities import Cell, Citizen
from .rules import GameRules


class WorldState:
    """
    Read-only (by convention) view of one round of a match.

    Attributes:
        rows: Number of board rows
        cols: Number of board columns
        me: Player id the agent plays as
        round: Current round index (0-based)
        rules: Match constants
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        me: int = 0,
        round: int = 0,
        rules: Optional[GameRules] = None,
        cells: Optional[List[List[Cell]]] = None,
        citizens: Optional[Iterable[Citizen]] = None,
    ):
        """
        Build a snapshot and validate its geometry.

        Raises:
            ValueError: If the geometry is not a positive rows x cols grid,
                a citizen stands off-board, or cell occupancy disagrees with
                the citizen list.
        """
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Board geometry must be positive, got {rows}x{cols}")
        if round < 0:
            raise ValueError(f"Round cannot be negative: {round}")

        self.rows = rows
        self.cols = cols
        self.me = me
        self.round = round
        self.rules = rules or GameRules()

        if cells is None:
            cells = [[Cell() for _ in range(cols)] for _ in range(rows)]
        if len(cells) != rows or any(len(row) != cols for row in cells):
            raise ValueError(f"Cell matrix does not match declared geometry {rows}x{cols}")
        self._cells = cells

        self._citizens: Dict[int, Citizen] = {}
        for citizen in citizens or []:
            self.add_citizen(citizen)

    # ------------------------------------------------------------------#
    # Geometry and cells
    # ------------------------------------------------------------------#
    def pos_ok(self, pos: GridPos) -> bool:
        return 0 <= pos[0] < self.rows and 0 <= pos[1] < self.cols

    def cell(self, pos: GridPos) -> Cell:
        if not self.pos_ok(pos):
            raise IndexError(f"Position {pos} outside {self.rows}x{self.cols} board")
        return self._cells[pos[0]][pos[1]]

    def add_citizen(self, citizen: Citizen) -> None:
        """
        Place a citizen and mark its cell as occupied.

        A citizen may share its cell with a bonus or a weapon: the judge
        sends builders standing on weapons they cannot pick up.
        """
        if not self.pos_ok(citizen.pos):
            raise ValueError(f"{citizen.label()} placed off-board at {citizen.pos}")
        if citizen.id in self._citizens:
            raise ValueError(f"Duplicate citizen id {citizen.id}")
        cell = self.cell(citizen.pos)
        if cell.type == CellType.BUILDING:
            raise ValueError(f"{citizen.label()} placed inside a building at {citizen.pos}")
        if cell.id is not None and cell.id != citizen.id:
            raise ValueError(f"Cell {citizen.pos} already holds citizen #{cell.id}")
        cell.id = citizen.id
        self._citizens[citizen.id] = citizen

    # ------------------------------------------------------------------#
    # Citizens
    # ------------------------------------------------------------------#
    def citizen(self, citizen_id: int) -> Citizen:
        return self._citizens[citizen_id]

    def citizens(self) -> List[Citizen]:
        return [self._citizens[cid] for cid in sorted(self._citizens)]

    def builders(self, player: int) -> List[int]:
        """Ids of the player's builders, in host listing order (ascending id)."""
        return [c.id for c in self.citizens() if c.player == player and c.type == CitizenType.BUILDER]

    def warriors(self, player: int) -> List[int]:
        """Ids of the player's warriors, in host listing order (ascending id)."""
        return [c.id for c in self.citizens() if c.player == player and c.type == CitizenType.WARRIOR]

    def barricades(self, player: int) -> List[GridPos]:
        """Positions of the barricades owned by ``player``."""
        return [
            (i, j)
            for i in range(self.rows)
            for j in range(self.cols)
            if self._cells[i][j].has_barricade and self._cells[i][j].b_owner == player
        ]

    # ------------------------------------------------------------------#
    # Calendar
    # ------------------------------------------------------------------#
    def is_round_day(self, r: int) -> bool:
        return r % self.rules.day_night_cycle < self.rules.rounds_per_day

    def is_round_night(self, r: int) -> bool:
        return not self.is_round_day(r)

    def is_day(self) -> bool:
        return self.is_round_day(self.round)

    def is_night(self) -> bool:
        return not self.is_day()

    @property
    def phase(self) -> Phase:
        return Phase.DAY if self.is_day() else Phase.NIGHT

    # ------------------------------------------------------------------#
    # Serialization
    # ------------------------------------------------------------------#
    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": self.rows,
            "cols": self.cols,
            "me": self.me,
            "round": self.round,
            "rules": self.rules.model_dump(),
            "cells": [[cell.to_dict() for cell in row] for row in self._cells],
            "citizens": [c.to_dict() for c in self.citizens()],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> WorldState:
        """
        Rebuild a snapshot from ``to_dict()`` output.

        Cell occupancy is derived from the citizen list, so the ``id`` field
        of serialized cells is informational only.
        """
        rows, cols = data["rows"], data["cols"]
        raw_cells = data.get("cells")
        cells = None
        if raw_cells is not None:
            cells = []
            for raw_row in raw_cells:
                row = []
                for raw in raw_row:
                    cell = Cell.from_dict(raw)
                    cell.id = None
                    row.append(cell)
                cells.append(row)
        return cls(
            rows=rows,
            cols=cols,
            me=data.get("me", 0),
            round=data.get("round", 0),
            rules=GameRules.model_validate(data.get("rules", {})),
            cells=cells,
            citizens=[Citizen.from_dict(c) for c in data.get("citizens", [])],
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> WorldState:
        return cls.from_dict(json.loads(json_str))

    def clone(self) -> WorldState:
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        return (f"WorldState({self.rows}x{self.cols}, round={self.round}, "
                f"me={self.me}, citizens={len(self._citizens)})")
