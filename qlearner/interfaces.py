"""
Capability contracts between the learner and the caller's domain.

States and actions are supplied by the caller. The learner only needs the
handful of methods described here, so any object with matching methods
works; no base class is required.
"""
from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Sequence, TypeVar

A = TypeVar("A", bound="Actioner")

# Receives the number of tied candidates, returns an index in [0, n).
TieBreaker = Callable[[int], int]


class Actioner(Protocol):
    """An action that can be applied to a state."""

    def id(self) -> str:
        """
        Stable identifier for this action.

        Must be unique and consistent for the lifetime of the agent;
        colliding ids share statistics.
        """
        ...


class Stater(Protocol[A]):
    """The current disposition of the caller's model."""

    def id(self) -> str:
        """Stable identifier for this state."""
        ...

    def possible_actions(self) -> Sequence[A]:
        """Actions that may be taken from this state, in any order."""
        ...

    def action_is_compatible(self, action: A) -> bool:
        """Whether ``action`` may be applied to this state."""
        ...

    def get_action(self, action_id: str) -> A:
        """
        Resolve an action id back to an action.

        Implementations should raise ``ActionNotFound`` for unknown ids.
        """
        ...

    def apply(self, action: A) -> Any:
        """Execute ``action``. The result is returned to the caller untouched."""
        ...


class ActionStatter(Protocol):
    """Statistics kept per (state, action) pair."""

    def calls(self) -> int: ...

    def set_calls(self, n: int) -> None: ...

    def q_value_raw(self) -> float: ...

    def set_q_value_raw(self, q: float) -> None: ...

    def q_value_weighted(self) -> float: ...

    def set_q_value_weighted(self, q: float) -> None: ...


class Agenter(Protocol[A]):
    """
    Something that recommends actions, applies them, and learns from
    the resulting transitions.
    """

    def recommend_action(self, state: Stater[A]) -> A:
        """Recommend an action for ``state`` using what has been learned."""
        ...

    def transition(self, state: Stater[A], action: A) -> Any:
        """Apply ``action`` to ``state``, rejecting incompatible actions."""
        ...

    def learn(
        self,
        previous_state: Optional[Stater[A]],
        action_taken: A,
        current_state: Stater[A],
        reward: float,
    ) -> None:
        """Update the model from an observed transition and its reward."""
        ...
