"""
Numeric helpers shared by the value table and the agents.

All functions are pure and total: none of them raise for any finite input.
"""
from __future__ import annotations


def bellman(
    old_value: float,
    learning_rate: float,
    reward: float,
    discount_factor: float,
    optimal_future_value: float,
) -> float:
    """
    Apply one Bellman update to a Q-value.

    Computes ``old + learning_rate * (reward + discount * future - old)``.
    See https://en.wikipedia.org/wiki/Bellman_equation

    Args:
        old_value: Current estimate for the (state, action) pair
        learning_rate: Weight of the new observation (0.0 to 1.0)
        reward: Observed reward for the transition
        discount_factor: Weight of the estimated future value (0.0 to 1.0)
        optimal_future_value: Best value reachable from the new state

    Returns:
        The revised estimate
    """
    target = reward + discount_factor * optimal_future_value
    return old_value + learning_rate * (target - old_value)


def bayesian_average(c: float, n: float, m: float, v: float) -> float:
    """
    Bayesian weighted average of an estimate ``m`` and an observation ``v``.

    Args:
        c: Prior confidence in ``m``; roughly the number of observations
           needed before ``v`` is trusted as much as ``m``
        n: Number of times ``v`` has been observed
        m: Estimated value (typically a mean)
        v: Observed value

    With ``n < c`` the result favours ``m``, with ``n > c`` it favours ``v``.
    Returns 0.0 when ``c + n`` is zero.

    See https://en.wikipedia.org/wiki/Bayesian_average
    """
    return safe_divide(c * m + n * v, c + n)


def safe_divide(dividend: float, divisor: float) -> float:
    """Divide, returning 0.0 instead of raising when the divisor is 0."""
    if divisor == 0:
        return 0.0
    return dividend / divisor
