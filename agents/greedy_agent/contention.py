"""
Bonus contention: who is going to win the race to each resource cell.

For every money or weapon cell on the board, a uniform-cost search from the
cell finds the closest citizen that would want it (friend or foe). The
greedy agent then avoids racing units that will get there first, and steals
weapons that an enemy is about to grab.

Two generations of answers are kept in ``BonusTables``: the table of the
current round and the table of the previous round, selected by round parity.
Only the current one is rewritten each round.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Tuple

from city.core.types import DIRECTIONS, CitizenType, GridPos
from city.world import WorldState
from infra.logger import get_logger
from .content import ContentKind, Tier

if TYPE_CHECKING:
    from .board import BoardSnapshot

logger = get_logger(__name__)

BonusTable = Dict[GridPos, "BonusInfo"]


class BonusKind(Enum):
    MONEY = "money"
    WEAPON = "weapon"


@dataclass
class BonusInfo:
    """
    Closest interested citizen of one resource cell.

    Money: closest citizen of any kind. Weapons: closest warrior whose weapon
    is strictly weaker than the one on the cell. The defaults stay in place
    when nobody qualifies.
    """

    kind: BonusKind
    closest_dist: int = 0
    closest_is_friendly: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {
            "kind": self.kind.value,
            "closest_dist": self.closest_dist,
            "closest_is_friendly": self.closest_is_friendly,
        }


@dataclass(frozen=True)
class Reservation:
    """A provisional friendly claim on a weapon cell, at ``distance`` turns."""

    pos: GridPos
    distance: int


class BonusTables:
    """
    Ping-pong pair of bonus tables.

    Round ``r`` writes table ``r % 2`` and reads the other one as "last
    round". Tables are allocated once and cleared in place.
    """

    def __init__(self):
        self._tables: Tuple[BonusTable, BonusTable] = ({}, {})

    def select(self, round_index: int) -> Tuple[BonusTable, BonusTable]:
        """Return ``(current, previous)`` for ``round_index``."""
        parity = round_index % 2
        return self._tables[parity], self._tables[1 - parity]

    def __getitem__(self, index: int) -> BonusTable:
        return self._tables[index]


def apply_reservation(table: BonusTable, reservation: Reservation) -> None:
    """Record that one of our units is now the closest party for a weapon."""
    info = table[reservation.pos]
    info.closest_is_friendly = True
    info.closest_dist = reservation.distance


class ContentionTracker:
    """Fills the current bonus table with closest-interested-citizen data."""

    def resolve(self, board: BoardSnapshot, world: WorldState, table: BonusTable) -> None:
        """Run ``compute_closest`` for every registered resource cell."""
        for pos, info in table.items():
            self.compute_closest(board, world, pos, info)

    def compute_closest(
        self,
        board: BoardSnapshot,
        world: WorldState,
        origin: GridPos,
        info: BonusInfo,
    ) -> None:
        """
        Uniform-cost search from ``origin`` to the first interested citizen.

        Every citizen is assumed to carry a bazooka when crossing enemy
        barricades. Occupants that are not interested do not stop the search.

        Args:
            board: Snapshot of the current round
            world: Host snapshot (for citizen attributes)
            origin: Resource cell
            info: Entry updated in place on success
        """
        demolish = world.rules.bazooka_strength_demolish
        bonus_tier = board.content_at(origin).tier

        dist: List[List[int]] = [[-1] * board.cols for _ in range(board.rows)]
        visited = [[False] * board.cols for _ in range(board.rows)]
        counter = itertools.count()
        frontier = [(0, next(counter), origin)]
        dist[origin[0]][origin[1]] = 0

        while frontier:
            distance, _, u = heapq.heappop(frontier)
            if visited[u[0]][u[1]]:
                continue
            visited[u[0]][u[1]] = True

            interested = self._is_interested(board, world, u, info.kind, bonus_tier)
            if interested is not None:
                info.closest_dist = distance
                info.closest_is_friendly = interested
                return

            for d in DIRECTIONS:
                n = d.step(u)
                if not board.pos_ok(n) or board.content_at(n).is_wall:
                    continue
                new_distance = distance + 1
                barricade = board.barricade_at(n)
                if barricade < 0:
                    new_distance += -barricade // demolish
                old = dist[n[0]][n[1]]
                if old < 0 or new_distance < old:
                    dist[n[0]][n[1]] = new_distance
                    heapq.heappush(frontier, (new_distance, next(counter), n))

        logger.debug("No interested citizen for %s at %s", info.kind.value, origin)

    @staticmethod
    def _is_interested(
        board: BoardSnapshot,
        world: WorldState,
        pos: GridPos,
        kind: BonusKind,
        bonus_tier: Tier | None,
    ) -> bool | None:
        """
        Return True/False (friendly or not) if the occupant of ``pos`` wants
        the bonus, None if nobody there does.
        """
        content = board.content_at(pos)
        if content.kind not in (ContentKind.FRIENDLY, ContentKind.ENEMY):
            return None
        friendly = content.kind == ContentKind.FRIENDLY
        if kind == BonusKind.MONEY:
            return friendly

        if friendly:
            citizen = world.citizen(world.cell(pos).id)
            if citizen.type == CitizenType.WARRIOR and Tier.of_citizen(citizen) < bonus_tier:
                return True
            return None
        if content.is_enemy_warrior and content.tier < bonus_tier:
            return False
        return None
