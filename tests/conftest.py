"""
Shared fixtures: hand-rolled mock states and actions.
"""
from typing import Callable, List, Optional

import pytest

from qlearner import ActionNotFound


class MockAction:
    """Action with a fixed id."""

    def __init__(self, action_id: str):
        self._id = action_id

    def id(self) -> str:
        return self._id

    def __repr__(self) -> str:
        return f"MockAction({self._id!r})"


class MockState:
    """State with configurable actions that records the calls it receives."""

    def __init__(
        self,
        state_id: str,
        actions: Optional[List[MockAction]] = None,
        compatible: Optional[Callable[[MockAction], bool]] = None,
        apply_result=None,
        apply_error: Optional[Exception] = None,
    ):
        self._id = state_id
        self.actions = list(actions or [])
        self._compatible = compatible or (lambda action: action in self.actions)
        self.apply_result = apply_result
        self.apply_error = apply_error
        self.applied: List[MockAction] = []
        self.get_action_calls = 0

    def id(self) -> str:
        return self._id

    def possible_actions(self) -> List[MockAction]:
        return list(self.actions)

    def action_is_compatible(self, action: MockAction) -> bool:
        return self._compatible(action)

    def get_action(self, action_id: str) -> MockAction:
        self.get_action_calls += 1
        for action in self.actions:
            if action.id() == action_id:
                return action
        raise ActionNotFound(self._id, action_id)

    def apply(self, action: MockAction):
        self.applied.append(action)
        if self.apply_error is not None:
            raise self.apply_error
        return self.apply_result


@pytest.fixture
def make_action():
    """Factory for mock actions."""
    return MockAction


@pytest.fixture
def make_state():
    """Factory for mock states; action ids may be given as strings."""
    def _make(state_id: str, action_ids=(), **kwargs) -> MockState:
        actions = [a if isinstance(a, MockAction) else MockAction(a) for a in action_ids]
        return MockState(state_id, actions, **kwargs)
    return _make
