"""
Greedy agent: each citizen independently walks towards its most profitable
reachable target.

Round pipeline:
    host snapshot -> BoardSnapshot -> bonus contention -> one decision per
    citizen (builders first, then warriors) -> InstructionScheduler -> sink

The only state kept between rounds is the pair of bonus tables (so a unit
can tell whether a rival is still approaching a coin) and the allocated
grids, which are reused in place.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from city.core.actions import Action
from city.sink import ActionSink, RecordingSink
from city.world import WorldState
from infra.logger import get_logger
from ..base_agent import BaseAgent
from ..registry import register_agent
from .board import BoardSnapshotBuilder
from .contention import BonusTables, ContentionTracker, apply_reservation
from .decision import Decision, DecisionEngine
from .scheduler import InstructionScheduler
from .settings import EngineSettings, load_engine_settings

logger = get_logger(__name__)


@register_agent("greedy")
class GreedyAgent(BaseAgent):
    """
    Agent that picks, for every citizen, the first step towards the target
    with the best profit-minus-distance score.
    """

    def __init__(
        self,
        player: int,
        name: str | None = None,
        settings: Optional[Dict[str, Any]] = None,
        settings_path: Optional[str] = None,
        **_: Any,
    ):
        """
        Initialize the greedy agent.

        Args:
            player: Player id to control
            name: Optional agent name (default: "GreedyAgent")
            settings: EngineSettings field overrides
            settings_path: JSON file with EngineSettings values
        """
        super().__init__(player, name)
        self.settings: EngineSettings = load_engine_settings(settings_path, overrides=settings)
        self.board_builder = BoardSnapshotBuilder()
        self.tables = BonusTables()
        self.tracker = ContentionTracker()
        self.scheduler = InstructionScheduler()
        self._initialized = False

    def get_actions(
        self,
        state: Dict[str, Any],
        step_info: Optional[Dict[str, Any]] = None,
        sink: Optional[ActionSink] = None,
        **kwargs: Any,
    ) -> tuple[Dict[int, Action], Dict[str, Any]]:
        """
        Decide and submit the actions of one round.

        Args:
            state: ``{"world": WorldState}``
            step_info: Unused
            sink: Where to submit actions (default: a fresh RecordingSink)

        Returns:
            Tuple of (actions in dispatch order, metadata)

        Raises:
            ValueError: If the board geometry is invalid or changes mid-match
        """
        world: WorldState = state["world"]
        if world.me != self.player:
            logger.warning("Snapshot is for player %s but agent controls %s", world.me, self.player)
        sink = sink if sink is not None else RecordingSink()
        # Nothing survives from a round that failed part way.
        self.scheduler.clear()

        if not self._initialized:
            self.board_builder.initialize(world)
            self._initialized = True

        current, previous = self.tables.select(world.round)
        board = self.board_builder.build(world, current)
        self.tracker.resolve(board, world, current)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Round %s board:\n%s", world.round, board.render())

        engine = DecisionEngine(
            world,
            board,
            current,
            previous,
            self.settings,
            barricades_built=len(world.barricades(world.me)),
        )

        decisions: List[Decision] = []
        for unit_id in world.builders(world.me) + world.warriors(world.me):
            decision = engine.decide(unit_id)
            if decision.reservation is not None:
                apply_reservation(current, decision.reservation)
            if decision.instruction is not None:
                self.scheduler.add(decision.instruction)
            decisions.append(decision)

        dispatched = self.scheduler.drain(sink)
        actions: Dict[int, Action] = {ins.unit_id: ins.to_action() for ins in dispatched}

        logger.info(
            "Round %s (%s): %d/%d citizens acting, %d barricades",
            world.round,
            world.phase.value,
            len(actions),
            len(decisions),
            engine.barricades_built,
        )

        metadata = {
            "policy": "greedy",
            "round": world.round,
            "phase": world.phase.value,
            "dispatch_order": [ins.to_dict() for ins in dispatched],
            "reasons": {d.unit_id: d.reason for d in decisions},
            "barricades": engine.barricades_built,
        }
        return actions, metadata
