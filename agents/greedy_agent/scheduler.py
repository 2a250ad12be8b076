"""
Instruction scheduler: the order in which actions reach the host.

The host executes commands in the order they are submitted, so two of our
units racing for the same cell are settled by who is sent first. Every
instruction chosen during the round is collected here and flushed once, at
the end, highest priority first (ties: lowest unit id first).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from city.core.actions import Action
from city.core.types import ActionType, Dir
from city.sink import ActionSink


@dataclass(frozen=True)
class Instruction:
    priority: int
    kind: ActionType
    unit_id: int
    dir: Dir

    @property
    def sort_key(self) -> tuple:
        return (-self.priority, self.unit_id)

    def to_action(self) -> Action:
        return Action(self.kind, self.dir)

    def to_dict(self) -> Dict[str, object]:
        return {
            "priority": self.priority,
            "kind": self.kind.name,
            "unit_id": self.unit_id,
            "dir": self.dir.name,
        }


class InstructionScheduler:
    """Round-scoped collection of instructions."""

    def __init__(self):
        self._pending: Dict[int, Instruction] = {}

    def add(self, instruction: Instruction) -> None:
        """
        Queue an instruction.

        Raises:
            ValueError: If the unit already has an instruction this round
        """
        if instruction.unit_id in self._pending:
            raise ValueError(f"Unit #{instruction.unit_id} already has an instruction this round")
        self._pending[instruction.unit_id] = instruction

    def __len__(self) -> int:
        return len(self._pending)

    def ordered(self) -> List[Instruction]:
        """Pending instructions in dispatch order (does not consume them)."""
        return sorted(self._pending.values(), key=lambda ins: ins.sort_key)

    def clear(self) -> None:
        self._pending.clear()

    def drain(self, sink: ActionSink) -> List[Instruction]:
        """
        Submit every pending instruction to ``sink`` in order, then empty.

        The scheduler is emptied even if the sink raises part way through.
        """
        dispatched = self.ordered()
        try:
            for ins in dispatched:
                if ins.kind == ActionType.BUILD:
                    sink.submit_build(ins.unit_id, ins.dir)
                else:
                    sink.submit_move(ins.unit_id, ins.dir)
        finally:
            self._pending.clear()
        return dispatched
