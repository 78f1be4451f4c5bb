"""
Tie-breakers choose among equally valued best actions.

A tie-breaker receives the number of tied candidates ``n`` (always at
least 2 when called by an agent) and returns an index in ``[0, n)``.
Candidates are sorted by action id before the tie-breaker runs, so a
deterministic tie-breaker makes the whole agent deterministic.
"""
from __future__ import annotations

import random
from typing import Optional

from .interfaces import TieBreaker


def random_tie_breaker(n: int) -> int:
    """Uniform choice over [0, n) using the module-level PRNG."""
    return random.randrange(n)


def seeded_tie_breaker(seed: Optional[int] = None) -> TieBreaker:
    """
    Create a uniform tie-breaker with its own PRNG.

    Args:
        seed: Random seed for deterministic behavior (None = random)
    """
    rng = random.Random(seed)

    def _break(n: int) -> int:
        return rng.randrange(n)

    return _break


def fixed_tie_breaker(index: int) -> TieBreaker:
    """
    Create a tie-breaker that always picks the same position.

    The index is clamped to the last candidate when fewer are tied.
    """
    index = max(0, index)

    def _break(n: int) -> int:
        return min(index, n - 1)

    return _break
