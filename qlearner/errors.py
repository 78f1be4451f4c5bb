"""
Error types raised by the learner.

Everything a caller is expected to recover from derives from LearnerError.
"""
from __future__ import annotations


class LearnerError(Exception):
    """Base class for recoverable learner errors."""

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg


class IncompatibleAction(LearnerError):
    """Raised when a state rejects an action passed to transition()."""

    def __init__(self, state_id: str, action_id: str):
        super().__init__(
            f"Action '{action_id}' is not compatible with state '{state_id}'"
        )
        self.state_id = state_id
        self.action_id = action_id


class NoPossibleActions(LearnerError):
    """Raised when a state exposes no actions to recommend from."""

    def __init__(self, state_id: str):
        super().__init__(f"State '{state_id}' has no possible actions")
        self.state_id = state_id


class ActionNotFound(LearnerError):
    """
    Raised by state implementations when get_action() cannot resolve an id.

    The agent never raises this itself; it propagates whatever the state
    raises, and this is the type states are expected to use.
    """

    def __init__(self, state_id: str, action_id: str):
        super().__init__(f"Action '{action_id}' not found in state '{state_id}'")
        self.state_id = state_id
        self.action_id = action_id


class TieBreakerError(RuntimeError):
    """A tie-breaker returned an index outside of [0, candidates)."""

    def __init__(self, index: int, candidates: int):
        super().__init__(
            f"Tie-breaker returned index {index} for {candidates} candidates"
        )
        self.index = index
        self.candidates = candidates
