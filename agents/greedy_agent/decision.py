"""
DecisionEngine - per-citizen choice of the single best action of the round.

For each citizen the engine runs Dijkstra's algorithm over the board, where
edge weights are the number of turns needed to enter a cell (walking,
breaking enemy barricades, killing the enemy standing there, waiting for a
teammate to move). Every reachable point of interest is scored as roughly
``PROFIT_OF_OBJECT - distance`` and the citizen takes the first step towards
the best one.

Shortcuts and guards around the search:
- obviously good moves (killing a weak enemy, picking up a better weapon)
  are taken immediately without searching;
- first steps that end next to a dangerous enemy are avoided when possible;
- builders by day prefer working on barricades over low-profit targets;
- a citizen in danger that cannot run in one step stays put rather than
  wasting the turn.

When the search yields nothing, the role/phase fallback runs: builders build
by day, everyone runs for cover by night.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from typing import List, Optional

from city.core.types import DIRECTIONS, ActionType, Dir, GridPos, WeaponType
from city.entities import Citizen
from city.world import WorldState
from infra.logger import get_logger
from .board import BoardSnapshot
from .contention import BonusTable, Reservation
from .content import EMPTY, FOOD, FRIENDLY, MONEY, Tier
from .scheduler import Instruction
from .settings import EngineSettings

logger = get_logger(__name__)

_TIER_WEAPONS = {
    Tier.BUILDER: WeaponType.NONE,
    Tier.HAMMER: WeaponType.HAMMER,
    Tier.GUN: WeaponType.GUN,
    Tier.BAZOOKA: WeaponType.BAZOOKA,
}


@dataclass(frozen=True)
class Decision:
    """
    Outcome of deciding for one citizen.

    Attributes:
        unit_id: Citizen the decision is for
        instruction: Chosen instruction, None for "no action"
        reservation: Weapon claim to record once the decision is final
        reason: Short tag explaining the outcome (for logs/metadata)
    """

    unit_id: int
    instruction: Optional[Instruction] = None
    reservation: Optional[Reservation] = None
    reason: str = ""

    @property
    def acted(self) -> bool:
        return self.instruction is not None


class DecisionEngine:
    """
    Round-scoped decision maker.

    One engine is created per round from that round's board and bonus tables.
    The only state it mutates is the barricade counter.
    """

    def __init__(
        self,
        world: WorldState,
        board: BoardSnapshot,
        current: BonusTable,
        previous: BonusTable,
        settings: EngineSettings,
        barricades_built: int = 0,
    ):
        self.world = world
        self.board = board
        self.current = current
        self.previous = previous
        self.settings = settings
        self.rules = world.rules
        self.barricades_built = barricades_built

    # ------------------------------------------------------------------#
    # Entry point
    # ------------------------------------------------------------------#
    def decide(self, unit_id: int) -> Decision:
        """Choose the action of one of our citizens for this round."""
        citizen = self.world.citizen(unit_id)
        decision = self.approach_target(citizen)
        if not decision.acted:
            if self.world.is_day():
                if not citizen.is_warrior:
                    decision = self.build_barricade(citizen, decision.reason)
            else:
                decision = self.escape(citizen, decision.reason)

        logger.debug(
            "%s -> %s (%s)",
            citizen.label(),
            decision.instruction.to_dict() if decision.instruction else None,
            decision.reason,
        )
        return decision

    # ------------------------------------------------------------------#
    # Predicates
    # ------------------------------------------------------------------#
    def damage_window_closed(self) -> bool:
        """True while no attack can land: it is day and next round is day too."""
        return self.world.is_day() and self.world.is_round_day(self.world.round + 1)

    def is_danger(self, pos: GridPos, tier: Tier) -> bool:
        """Whether standing on ``pos`` may cost life to a citizen of ``tier``."""
        if self.damage_window_closed():
            return False
        return -self.board.danger_at(pos) > tier

    def beats(self, citizen: Citizen, pos: GridPos) -> bool:
        """Whether ``citizen`` is stronger than the enemy on ``pos``."""
        enemy = self.board.content_at(pos)
        tier = Tier.of_citizen(citizen)
        if tier == enemy.tier:
            return citizen.life > self.board.danger_at(pos)
        return tier > enemy.tier

    def outclassed(self, citizen: Citizen, pos: GridPos) -> bool:
        """Whether ``pos`` holds an enemy strictly stronger than ``citizen``."""
        enemy = self.board.content_at(pos)
        if not enemy.is_enemy:
            return False
        tier = Tier.of_citizen(citizen)
        if tier == enemy.tier:
            return self.board.danger_at(pos) > citizen.life
        return enemy.tier > tier

    def has_buildable_barricade(self, pos: GridPos) -> bool:
        """Own, unoccupied barricade that is still below the upgrade cap."""
        board = self.board
        if not board.pos_ok(pos):
            return False
        resistance = board.barricade_at(pos)
        cap = self.rules.barricade_max_resistance * self.settings.percent_build // 100
        return resistance > 0 and board.content_at(pos) != FRIENDLY and resistance < cap

    def is_escape_route(self, pos: GridPos, tier: Tier) -> bool:
        board = self.board
        return board.pos_ok(pos) and not board.content_at(pos).is_wall and -board.danger_at(pos) <= tier

    def run_priority(self, citizen: Citizen) -> int:
        if self.rules.life_lost_in_attack >= citizen.life:
            return self.settings.run_death_priority
        return self.settings.run_priority

    def _no_brainer(self, citizen: Citizen, pos: GridPos, tier: Tier) -> Optional[Tier]:
        """
        Return the tier the citizen would have after an obviously good move
        onto ``pos``, or None if the move is not obviously good.
        """
        board = self.board
        content = board.content_at(pos)
        if (
            content.is_enemy
            and self.beats(citizen, pos)
            and not self.damage_window_closed()
            and board.danger_at(pos) <= self.rules.life_lost_in_attack
            and board.barricade_at(pos) == 0
        ):
            return tier
        if citizen.is_warrior and content.is_weapon and content.tier > tier:
            return content.tier
        return None

    def _can_enter(self, citizen: Citizen, pos: GridPos, tier: Tier) -> bool:
        content = self.board.content_at(pos)
        return not content.is_wall and not self.is_danger(pos, tier) and not self.outclassed(citizen, pos)

    def _is_safe(self, pos: GridPos, tier: Tier) -> bool:
        """A cell is safe if none of its neighbours is dangerous."""
        for d in DIRECTIONS:
            n = d.step(pos)
            if self.board.pos_ok(n) and self.is_danger(n, tier):
                return False
        return True

    def movement_penalty(self, pos: GridPos, tier: Tier) -> int:
        """Extra turns, beyond the step itself, needed to enter ``pos``."""
        board = self.board
        extra = 0
        barricade = board.barricade_at(pos)
        if barricade < 0:
            extra += -barricade // self.rules.strength_demolish(_TIER_WEAPONS[tier])
        content = board.content_at(pos)
        if content.is_enemy:
            # Attacks land from the adjacent cell, so one turn less.
            extra += board.danger_at(pos) // self.rules.life_lost_in_attack - 1
        elif content == FRIENDLY:
            extra += self.settings.cost_walk_into_friendly
        return extra

    # ------------------------------------------------------------------#
    # Search
    # ------------------------------------------------------------------#
    def approach_target(self, citizen: Citizen) -> Decision:
        """
        Search the board for the most profitable target and step towards it.

        Returns a Decision with a MOVE instruction, or a no-action Decision
        whose reason says why nothing was chosen.
        """
        world, board, s = self.world, self.board, self.settings
        origin = citizen.pos
        tier = Tier.of_citizen(citizen)
        is_warrior = citizen.is_warrior
        ini_life = self.rules.warrior_ini_life if is_warrior else self.rules.builder_ini_life
        need_heal = citizen.life < ini_life

        dist: List[List[Optional[int]]] = [[None] * board.cols for _ in range(board.rows)]
        visited = [[False] * board.cols for _ in range(board.rows)]
        dist[origin[0]][origin[1]] = 0
        visited[origin[0]][origin[1]] = True
        counter = itertools.count()
        frontier: list = []

        def push(pos: GridPos, cost: int, first: Dir) -> None:
            dist[pos[0]][pos[1]] = cost
            heapq.heappush(frontier, (cost, next(counter), pos, first))

        unsafe = []
        for d in DIRECTIONS:
            p = d.step(origin)
            if not board.pos_ok(p):
                continue
            assumed = self._no_brainer(citizen, p, tier)
            if assumed is not None:
                if assumed < -board.danger_at(p):
                    return Decision(citizen.id, reason="opportunity_declined")
                return Decision(
                    citizen.id,
                    Instruction(s.very_high_priority, ActionType.MOVE, citizen.id, d),
                    reason="opportunity",
                )
            if not self._can_enter(citizen, p, tier):
                continue
            if self._is_safe(p, tier):
                push(p, 1 + self.movement_penalty(p, tier), d)
            else:
                unsafe.append((p, d))
        if not frontier:
            for p, d in unsafe:
                push(p, 1 + self.movement_penalty(p, tier), d)

        best_profit: Optional[int] = None
        best_dir: Optional[Dir] = None
        reservation: Optional[Reservation] = None

        while frontier:
            _, _, u, first = heapq.heappop(frontier)
            if visited[u[0]][u[1]]:
                continue
            visited[u[0]][u[1]] = True
            distance = dist[u[0]][u[1]]
            content = board.content_at(u)

            profit: Optional[int] = None
            claim: Optional[Reservation] = None
            if (
                is_warrior
                and content.is_enemy
                and self.beats(citizen, u)
                and world.is_round_night(world.round + distance)
            ):
                # Assume the enemy survives until we get there.
                profit = s.attack_profit - distance
                if content.is_enemy_warrior:
                    profit += s.warrior_extra_profit
                if best_profit is None or profit > best_profit:
                    best_profit, best_dir, reservation = profit, first, None
                continue

            if content == MONEY:
                profit = s.money_profit - distance
                info = self.current[u]
                last = self.previous.get(u)
                # Someone else is closer and still approaching: let them have it.
                if (
                    profit > 0
                    and info.closest_dist < distance
                    and last is not None
                    and info.closest_dist < last.closest_dist
                ):
                    profit = 0
            elif need_heal and content == FOOD:
                profit = s.health_profit - distance
                if self.rules.life_lost_in_attack >= citizen.life:
                    profit += s.about_to_die_bonus
            elif content.is_weapon and self.current[u].closest_dist >= distance:
                info = self.current[u]
                if is_warrior and content.tier > tier:
                    profit = s.weapon_profit - distance
                    if content.tier == Tier.BAZOOKA:
                        profit += 2 * s.bazooka_extra_profit
                elif info.closest_is_friendly:
                    # A teammate is going for it: don't step on it.
                    dist[u[0]][u[1]] += s.friendly_weapon_penalty
                else:
                    profit = s.steal_weapon_profit - distance
                    if content.tier == Tier.BAZOOKA:
                        profit += s.bazooka_extra_profit
                    claim = Reservation(u, distance)

            if profit is not None and (best_profit is None or profit > best_profit):
                best_profit, best_dir, reservation = profit, first, claim

            base = dist[u[0]][u[1]]
            for d in DIRECTIONS:
                n = d.step(u)
                if not board.pos_ok(n) or board.content_at(n).is_wall or self.outclassed(citizen, n):
                    continue
                cost = base + 1 + self.movement_penalty(n, tier)
                old = dist[n[0]][n[1]]
                if old is None or cost < old:
                    push(n, cost, first)

        return self._resolve(citizen, tier, best_profit, best_dir, reservation, dist)

    def _resolve(
        self,
        citizen: Citizen,
        tier: Tier,
        best_profit: Optional[int],
        best_dir: Optional[Dir],
        reservation: Optional[Reservation],
        dist: List[List[Optional[int]]],
    ) -> Decision:
        """Turn the best search result into a Decision (or a refusal)."""
        world, board, s = self.world, self.board, self.settings
        origin = citizen.pos

        if best_profit is None:
            return Decision(citizen.id, reason="no_target")

        threshold: Optional[int] = None
        if world.is_day() and not citizen.is_warrior and board.barricade_at(origin) == 0:
            if self.barricades_built < self.rules.max_num_barricades:
                threshold = s.barricade_threshold
            if any(self.has_buildable_barricade(d.step(origin)) for d in DIRECTIONS):
                threshold = s.barricade_interrupt_threshold
        if threshold is not None and best_profit <= threshold:
            return Decision(citizen.id, reason="below_build_threshold")

        first = best_dir.step(origin)
        in_danger = self.is_danger(origin, tier)
        if in_danger and dist[first[0]][first[1]] > 1:
            return Decision(citizen.id, reason="trapped")

        if in_danger:
            priority = self.run_priority(citizen)
        elif board.danger_at(first) == 0:
            # Nobody can interfere with this move.
            priority = s.not_important_priority
        else:
            priority = best_profit

        return Decision(
            citizen.id,
            Instruction(priority, ActionType.MOVE, citizen.id, best_dir),
            reservation=reservation,
            reason="target",
        )

    # ------------------------------------------------------------------#
    # Fallbacks
    # ------------------------------------------------------------------#
    def build_barricade(self, citizen: Citizen, reason: str = "") -> Decision:
        """
        Daytime builder fallback: upgrade an adjacent own barricade, or start
        a new one on an empty neighbour (preferably one no enemy can reach).
        """
        board, s = self.board, self.settings
        pos = citizen.pos

        for d in DIRECTIONS:
            if self.has_buildable_barricade(d.step(pos)):
                return Decision(
                    citizen.id,
                    Instruction(s.build_priority, ActionType.BUILD, citizen.id, d),
                    reason="improve_barricade",
                )

        if self.barricades_built >= self.rules.max_num_barricades:
            return Decision(citizen.id, reason=reason or "barricade_cap")

        for require_calm in (True, False):
            for d in DIRECTIONS:
                p = d.step(pos)
                if not board.pos_ok(p) or board.content_at(p) != EMPTY or board.barricade_at(p) != 0:
                    continue
                if require_calm and board.danger_at(p) != 0:
                    continue
                self.barricades_built += 1
                return Decision(
                    citizen.id,
                    Instruction(s.build_priority, ActionType.BUILD, citizen.id, d),
                    reason="new_barricade",
                )
        return Decision(citizen.id, reason=reason or "nowhere_to_build")

    def escape(self, citizen: Citizen, reason: str = "") -> Decision:
        """
        Night fallback: if the current cell is threatened, hide in an own
        barricade or run to the most favourable safe neighbour.
        """
        board = self.board
        pos = citizen.pos
        tier = Tier.of_citizen(citizen)

        if -board.danger_at(pos) <= tier:
            return Decision(citizen.id, reason=reason)

        priority = self.run_priority(citizen)
        for d in DIRECTIONS:
            p = d.step(pos)
            if board.pos_ok(p) and board.barricade_at(p) > 0:
                return Decision(citizen.id, Instruction(priority, ActionType.MOVE, citizen.id, d), reason="take_cover")

        # Builders only run to cells that are at least empty.
        best_rank = float("-inf") if citizen.is_warrior else FRIENDLY.rank
        best_dir: Optional[Dir] = None
        for d in DIRECTIONS:
            p = d.step(pos)
            if self.is_escape_route(p, tier) and board.content_at(p).rank > best_rank:
                best_rank = board.content_at(p).rank
                best_dir = d
        if best_dir is None:
            return Decision(citizen.id, reason="cornered")
        return Decision(citizen.id, Instruction(priority, ActionType.MOVE, citizen.id, best_dir), reason="flee")
