"""Structured record of the decisions taken during one scan."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Decision:
    """One annotated decision, e.g. ``Decision("layout", "column", {...})``."""
    stage: str
    action: str
    detail: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"stage": self.stage, "action": self.action, "detail": dict(self.detail)}


class DecisionLog:
    """Append-only list of decisions. Create one per scan."""

    def __init__(self):
        self.decisions: List[Decision] = []

    def record(self, stage: str, action: str, **detail: Any) -> None:
        self.decisions.append(Decision(stage=stage, action=action, detail=detail))

    def of(self, action: str, stage: Optional[str] = None) -> List[Decision]:
        """Decisions with the given action (and stage, when given)."""
        return [
            d for d in self.decisions
            if d.action == action and (stage is None or d.stage == stage)
        ]

    def __len__(self) -> int:
        return len(self.decisions)

    def __iter__(self):
        return iter(self.decisions)


def record(trace: Optional[DecisionLog], stage: str, action: str, **detail: Any) -> None:
    """Record into ``trace`` if one was supplied."""
    if trace is not None:
        trace.record(stage, action, **detail)
