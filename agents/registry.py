"""
Name registry for agent classes.

Agents register themselves with ``@register_agent("name")`` so specs can
refer to them by a short type name.
"""

from __future__ import annotations

from typing import Callable, Dict, Type, TYPE_CHECKING

if TYPE_CHECKING:
    from .base_agent import BaseAgent

_REGISTRY: Dict[str, Type["BaseAgent"]] = {}


def register_agent(name: str) -> Callable[[Type["BaseAgent"]], Type["BaseAgent"]]:
    """
    Class decorator registering an agent under ``name``.

    Raises:
        ValueError: If another class is already registered under ``name``
    """
    key = name.lower()

    def decorator(cls: Type["BaseAgent"]) -> Type["BaseAgent"]:
        existing = _REGISTRY.get(key)
        if existing is not None and existing is not cls:
            raise ValueError(f"Agent type '{name}' already registered by {existing.__name__}")
        _REGISTRY[key] = cls
        return cls

    return decorator


def resolve_agent_class(name: str) -> Type["BaseAgent"]:
    """
    Look up a registered agent class.

    Raises:
        ValueError: If no agent is registered under ``name``
    """
    try:
        return _REGISTRY[name.lower()]
    except KeyError:
        known = ", ".join(sorted(_REGISTRY)) or "none"
        raise ValueError(f"Unknown agent type '{name}' (known: {known})") from None


def registered_agents() -> list[str]:
    return sorted(_REGISTRY)
