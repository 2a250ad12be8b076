"""
Agent interface and implementations for the city survival game.

This module provides:
- BaseAgent: Abstract interface for all agents
- AgentSpec / create_agent_from_spec: Declarative agent construction
- GreedyAgent: Per-round profit-driven decision engine
"""

from .base_agent import BaseAgent
from .factory import PreparedAgent, create_agent_from_spec

from .registry import register_agent, registered_agents, resolve_agent_class
from .spec import AgentSpec
from .greedy_agent import GreedyAgent

__all__ = [
    "BaseAgent",
    "AgentSpec",
    "PreparedAgent",
    "create_agent_from_spec",
    "register_agent",
    "registered_agents",
    "resolve_agent_class",
    "GreedyAgent",
]
