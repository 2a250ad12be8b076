from .greedy_agent import GreedyAgent
from .settings import EngineSettings, load_engine_settings

__all__ = ["GreedyAgent", "EngineSettings", "load_engine_settings"]
