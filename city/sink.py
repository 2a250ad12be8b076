"""
Action-submission interface towards the host.

The host exposes two write operations per citizen and round: move and build.
Agents talk to it through an ``ActionSink`` so the same decision code can
feed a live judge, an HTTP response, or a test recorder.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Tuple

from .core.actions import Action
from .core.types import Dir


class ActionSink(ABC):
    """Host write interface."""

    @abstractmethod
    def submit_move(self, unit_id: int, direction: Dir) -> None:
        pass

    @abstractmethod
    def submit_build(self, unit_id: int, direction: Dir) -> None:
        pass


class RecordingSink(ActionSink):
    """Sink that keeps every submission, in submission order."""

    def __init__(self):
        self.submissions: List[Tuple[int, Action]] = []

    def submit_move(self, unit_id: int, direction: Dir) -> None:
        self.submissions.append((unit_id, Action.move(direction)))

    def submit_build(self, unit_id: int, direction: Dir) -> None:
        self.submissions.append((unit_id, Action.build(direction)))

    @property
    def unit_ids(self) -> List[int]:
        return [unit_id for unit_id, _ in self.submissions]

    def clear(self) -> None:
        self.submissions.clear()
