"""
Base agent interface for the city survival game.

All agents must implement this interface to be driven by the round runner.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from city.core.actions import Action


class BaseAgent(ABC):
    """
    Abstract base class for all agents.

    Agents read the host snapshot of the round and produce one action per
    controlled citizen (or none).

    Subclasses must implement:
    - get_actions(): Produce actions for the controlled citizens

    Attributes:
        player: Player id this agent controls
        name: Agent name for logging/identification
    """

    def __init__(self, player: int, name: Optional[str] = None):
        """
        Initialize the agent.

        Args:
            player: Player id this agent controls
            name: Optional name for the agent (defaults to class name)
        """
        self.player = player
        self.name = name or self.__class__.__name__

    @abstractmethod
    def get_actions(
        self,
        state: Dict[str, Any],
        step_info: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ) -> tuple[Dict[int, Action], Dict[str, Any]]:
        """
        Get actions for the controlled citizens.

        Called once per round. State structure:
            {
                "world": WorldState,  # host snapshot, read-only
            }

        Args:
            state: Current round state from the host
            step_info: Optional host feedback about the previous round
            **kwargs: Agent-specific extras (e.g. an ``ActionSink``)

        Returns:
            Tuple of:
                - Dict mapping citizen id to Action, in submission order
                - Metadata dict (reasons/logs/etc.)

        Notes:
            - Citizens without an entry stay idle this round
            - The host is the judge: invalid actions are simply not applied
        """

    def __str__(self) -> str:
        return f"{self.name} (player {self.player})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(player={self.player}, name='{self.name}')"
