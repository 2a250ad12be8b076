"""
Board snapshot: the compact per-round view every decision reads from.

Three aligned grids are rebuilt from the host snapshot at the start of each
round:

- content: one ``CellContent`` per cell
- danger: 0 = nothing known, > 0 = life of the enemy standing there,
  < 0 = -tier of the strongest enemy next to the cell (danger zone)
- barricade: +hp for our barricades, -hp for enemy ones, 0 for none

The grids are allocated on the first round and overwritten in place after
that, so the board geometry must never change during a match.
"""

from __future__ import annotations

from typing import List, Optional

from city.core.types import DIRECTIONS, BonusType, CellType, GridPos, WeaponType
from city.world import WorldState
from .contention import BonusInfo, BonusKind, BonusTable
from .content import EMPTY, FOOD, FRIENDLY, MONEY, WALL, CellContent, Tier


class BoardSnapshot:
    """Aligned content/danger/barricade grids for one board geometry."""

    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        self.content: List[List[CellContent]] = [[EMPTY] * cols for _ in range(rows)]
        self.danger: List[List[int]] = [[0] * cols for _ in range(rows)]
        self.barricade: List[List[int]] = [[0] * cols for _ in range(rows)]

    def pos_ok(self, pos: GridPos) -> bool:
        return 0 <= pos[0] < self.rows and 0 <= pos[1] < self.cols

    def content_at(self, pos: GridPos) -> CellContent:
        return self.content[pos[0]][pos[1]]

    def danger_at(self, pos: GridPos) -> int:
        return self.danger[pos[0]][pos[1]]

    def barricade_at(self, pos: GridPos) -> int:
        return self.barricade[pos[0]][pos[1]]

    def grids(self) -> tuple:
        """Immutable copy of the three grids, for comparisons and logging."""
        return (
            tuple(tuple(c.rank for c in row) for row in self.content),
            tuple(tuple(row) for row in self.danger),
            tuple(tuple(row) for row in self.barricade),
        )

    def render(self) -> str:
        """Debug rendering of the content grid, one rank per cell."""
        return "\n".join(" ".join(f"{c.rank:>2}" for c in row) for row in self.content)


class BoardSnapshotBuilder:
    """Builds (and owns) the round's ``BoardSnapshot``."""

    def __init__(self):
        self.snapshot: Optional[BoardSnapshot] = None

    def initialize(self, world: WorldState) -> BoardSnapshot:
        """
        Allocate the grids from the first round's geometry.

        Raises:
            ValueError: If the geometry is not a positive rows x cols board
        """
        rows, cols = world.rows, world.cols
        if not isinstance(rows, int) or not isinstance(cols, int) or rows <= 0 or cols <= 0:
            raise ValueError(f"Invalid board geometry: {rows!r}x{cols!r}")
        self.snapshot = BoardSnapshot(rows, cols)
        return self.snapshot

    def build(self, world: WorldState, table: BonusTable) -> BoardSnapshot:
        """
        Rebuild all grids from ``world`` and register resource cells.

        ``table`` is cleared and gets one fresh ``BonusInfo`` per money or
        weapon cell; contention data is filled in later.

        Bonuses and weapons take precedence over occupants, so a citizen
        standing on one is not seen (an enemy there spreads no danger).

        Raises:
            ValueError: If the geometry differs from the one captured on the
                first round
        """
        board = self.snapshot
        if board is None:
            board = self.initialize(world)
        elif (board.rows, board.cols) != (world.rows, world.cols):
            raise ValueError(
                f"Board geometry changed mid-match: {board.rows}x{board.cols} -> {world.rows}x{world.cols}"
            )

        table.clear()
        for row in board.danger:
            row[:] = [0] * board.cols

        me = world.me
        for i in range(board.rows):
            for j in range(board.cols):
                cell = world.cell((i, j))
                if cell.type == CellType.BUILDING:
                    content = WALL
                elif cell.bonus == BonusType.FOOD:
                    content = FOOD
                elif cell.bonus == BonusType.MONEY:
                    content = MONEY
                    table[(i, j)] = BonusInfo(BonusKind.MONEY)
                elif cell.weapon != WeaponType.NONE:
                    content = CellContent.weapon(Tier.of_weapon(cell.weapon))
                    table[(i, j)] = BonusInfo(BonusKind.WEAPON)
                elif cell.id is not None:
                    citizen = world.citizen(cell.id)
                    if citizen.player == me:
                        content = FRIENDLY
                    else:
                        tier = Tier.of_citizen(citizen)
                        content = CellContent.enemy(tier)
                        board.danger[i][j] = citizen.life
                        self._spread_danger(board, (i, j), tier)
                else:
                    content = EMPTY
                board.content[i][j] = content

                if cell.resistance is None:
                    board.barricade[i][j] = 0
                elif cell.b_owner == me:
                    board.barricade[i][j] = cell.resistance
                else:
                    board.barricade[i][j] = -cell.resistance

        return board

    @staticmethod
    def _spread_danger(board: BoardSnapshot, pos: GridPos, tier: Tier) -> None:
        """Mark the four neighbours of an enemy as its danger zone."""
        marker = -int(tier)
        for d in DIRECTIONS:
            n = d.step(pos)
            if not board.pos_ok(n):
                continue
            current = board.danger[n[0]][n[1]]
            # Enemy life or a stronger enemy's zone wins.
            if current > 0 or current <= marker:
                continue
            board.danger[n[0]][n[1]] = marker
