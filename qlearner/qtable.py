"""
Action-value table: state id -> action id -> statistics.

The table is passive storage. It never fails: a missing entry is reported
as ``None`` or an empty bucket. Entries are only ever added, never evicted.
"""
from __future__ import annotations

import copy
from typing import Any, Callable, Dict, List, Optional

from .interfaces import ActionStatter
from .stats import ActionStats


class QTable:
    """
    Two-level mapping of owned string ids to per-action statistics.

    Ids are supplied by the caller's states and actions and are trusted to be
    unique; two actions sharing an id share statistics.

    Configuration:
        stats_factory: Zero-argument callable creating an all-zero stats record
    """

    def __init__(self, stats_factory: Callable[[], ActionStatter] = ActionStats):
        self.stats_factory = stats_factory
        self.data: Dict[str, Dict[str, ActionStatter]] = {}

    def get_stats(self, state_id: str, action_id: str) -> Optional[ActionStatter]:
        """
        Get a copy of the statistics for a (state, action) pair.

        Does not register the state. Returns None if no entry exists.
        """
        actions = self.data.get(state_id)
        if actions is None or action_id not in actions:
            return None
        return copy.copy(actions[action_id])

    def update_stats(self, state_id: str, action_id: str, stats: ActionStatter) -> None:
        """Insert or overwrite the statistics for a (state, action) pair."""
        self.bucket_for(state_id)[action_id] = copy.copy(stats)

    def bucket_for(self, state_id: str) -> Dict[str, ActionStatter]:
        """
        Get the live action map for a state.

        A state seen for the first time is registered with an empty map.
        """
        return self.data.setdefault(state_id, {})

    def new_stats(self) -> ActionStatter:
        """Create an all-zero stats record."""
        return self.stats_factory()

    def state_ids(self) -> List[str]:
        """Ids of every state registered so far."""
        return list(self.data.keys())

    def snapshot(self) -> Dict[str, Dict[str, ActionStatter]]:
        """Deep copy of the whole table."""
        return {
            state_id: {
                action_id: copy.copy(stats) for action_id, stats in actions.items()
            }
            for state_id, actions in self.data.items()
        }

    def to_dict(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        """Serialize to plain data (for logging and debugging)."""
        return {
            state_id: {
                action_id: {
                    "calls": stats.calls(),
                    "q_raw": stats.q_value_raw(),
                    "q_weighted": stats.q_value_weighted(),
                }
                for action_id, stats in actions.items()
            }
            for state_id, actions in self.data.items()
        }

    def __len__(self) -> int:
        return len(self.data)

    def __contains__(self, state_id: object) -> bool:
        return state_id in self.data
