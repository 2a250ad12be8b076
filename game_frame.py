from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from city.core.actions import Action
from city.core.types import Phase


@dataclass
class Frame:
    """
    Snapshot of a single played round, with helpers to serialize for transport.
    """

    round: int
    phase: Phase
    actions: Optional[Mapping[int, Action]] = None
    action_metadata: Optional[Mapping[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the frame into a JSON-friendly dictionary.
        """
        frame: Dict[str, Any] = {
            "round": self.round,
            "phase": self.phase.value,
            "actions": self._serialize_actions(self.actions or {}),
        }
        if self.action_metadata is not None:
            frame["action_metadata"] = _jsonable(self.action_metadata)
        return frame

    @staticmethod
    def _serialize_actions(actions: Mapping[int, Action]) -> List[Dict[str, Any]]:
        """Serialize the action map to a list, keeping submission order."""
        serialized: List[Dict[str, Any]] = []
        for unit_id, action in actions.items():
            serialized.append(
                {
                    "unit_id": unit_id,
                    "type": action.type.name,
                    "params": action.to_dict().get("params", {}),
                    "label": str(action),
                }
            )
        return serialized


def _jsonable(value: Any) -> Any:
    # JSON object keys must be strings (reasons are keyed by unit id).
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value
