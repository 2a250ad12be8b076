from __future__ import annotations

from typing import Any, Dict, Optional

from agents import AgentSpec, BaseAgent, PreparedAgent, create_agent_from_spec
from city.sink import ActionSink
from city.world import WorldState
from infra.logger import get_logger

from game_frame import Frame

logger = get_logger(__name__)


class RoundRunner:
    """
    Round-by-round driver between a host and one agent.

    The host owns the match: it hands over a snapshot, gets a frame back,
    applies the actions itself and sends the next snapshot.
    """

    def __init__(self, agent: AgentSpec | BaseAgent):
        if isinstance(agent, AgentSpec):
            self._prepared: Optional[PreparedAgent] = create_agent_from_spec(agent)
            self._agent = self._prepared.agent
        else:
            self._prepared = None
            self._agent = agent
        self._last_round: Optional[int] = None
        self._rounds_played = 0

    # ------------------------------------------------------------------#
    # Properties
    # ------------------------------------------------------------------#
    @property
    def agent(self) -> BaseAgent:
        return self._agent

    @property
    def last_round(self) -> Optional[int]:
        return self._last_round

    @property
    def rounds_played(self) -> int:
        return self._rounds_played

    # ------------------------------------------------------------------#
    # Core API
    # ------------------------------------------------------------------#
    def play(
        self,
        world: WorldState | Dict[str, Any],
        sink: Optional[ActionSink] = None,
    ) -> Frame:
        """
        Let the agent decide one round and return the resulting frame.

        Args:
            world: Host snapshot (or its dict form)
            sink: Optional sink the agent submits to

        Raises:
            RuntimeError: If the round is earlier than the last one played
            ValueError: If the snapshot is invalid
        """
        if not isinstance(world, WorldState):
            world = WorldState.from_dict(world)
        if self._last_round is not None and world.round < self._last_round:
            raise RuntimeError(f"Round {world.round} is earlier than last played round {self._last_round}")

        kwargs: Dict[str, Any] = {}
        if sink is not None:
            kwargs["sink"] = sink
        actions, metadata = self._agent.get_actions({"world": world}, **kwargs)

        self._last_round = world.round
        self._rounds_played += 1
        logger.debug("Played round %s with %d actions", world.round, len(actions))
        return Frame(round=world.round, phase=world.phase, actions=actions, action_metadata=metadata)
