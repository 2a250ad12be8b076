from __future__ import annotations

from dataclasses import dataclass

from infra.logger import get_logger
from .base_agent import BaseAgent
from .registry import resolve_agent_class
from .spec import AgentSpec

logger = get_logger(__name__)


@dataclass
class PreparedAgent:
    """An instantiated agent together with the spec it was built from."""

    agent: BaseAgent
    spec: AgentSpec


def create_agent_from_spec(spec: AgentSpec) -> PreparedAgent:
    """
    Instantiate the agent described by ``spec``.

    Raises:
        ValueError: If the type is unknown or the init params are rejected
    """
    agent_cls = resolve_agent_class(spec.type)
    try:
        agent = agent_cls(spec.player, name=spec.name, **spec.init_params)
    except TypeError as exc:
        raise ValueError(f"Invalid init_params for agent '{spec.type}': {exc}") from exc
    logger.info("Created agent %s for player %s", agent.name, spec.player)
    return PreparedAgent(agent=agent, spec=spec)
