"""
Agents recommend actions, apply them, and learn from the outcome.
"""

from .bayesian import AgentContext, BayesianAgent

__all__ = [
    "AgentContext",
    "BayesianAgent",
]
