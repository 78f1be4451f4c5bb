"""
Statistics about the relationship between a state and an action.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, replace
from typing import Any, Dict


@dataclass
class ActionStats:
    """
    Statistics for an action that has been applied to some state.

    Attributes:
        call_count: Number of learning updates applied to this pair
        q_raw: Unblended Bellman estimate
        q_weighted: Estimate blended toward the state's mean, used for decisions
    """
    call_count: int = 0
    q_raw: float = 0.0
    q_weighted: float = 0.0

    def calls(self) -> int:
        """Number of times this action has been learned from."""
        return self.call_count

    def set_calls(self, n: int) -> None:
        self.call_count = n

    def q_value_raw(self) -> float:
        """Raw Q-value for this action."""
        return self.q_raw

    def set_q_value_raw(self, q: float) -> None:
        self.q_raw = q

    def q_value_weighted(self) -> float:
        """Weighted Q-value for this action."""
        return self.q_weighted

    def set_q_value_weighted(self, q: float) -> None:
        self.q_weighted = q

    def clone(self) -> "ActionStats":
        """Create an independent copy."""
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ActionStats":
        return cls(
            call_count=int(data.get("call_count", 0)),
            q_raw=float(data.get("q_raw", 0.0)),
            q_weighted=float(data.get("q_weighted", 0.0)),
        )
