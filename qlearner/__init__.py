"""
qlearner - tabular Q-learning with Bayesian-weighted action values.

The caller supplies states and actions (see ``qlearner.interfaces``); the
agent keeps an action-value table keyed by their ids, recommends actions,
and learns from observed rewards.

Key pieces:
- BayesianAgent: recommend / transition / learn
- QTable: state id -> action id -> ActionStats
- numeric: Bellman update, Bayesian average, safe division
"""

from .agents import AgentContext, BayesianAgent
from .config import AgentConfig, AgentPresets, DEFAULT_AGENT_CONFIG, DEFAULT_TIE_EPSILON
from .errors import (
    ActionNotFound,
    IncompatibleAction,
    LearnerError,
    NoPossibleActions,
    TieBreakerError,
)
from .interfaces import Actioner, ActionStatter, Agenter, Stater, TieBreaker
from .numeric import bayesian_average, bellman, safe_divide
from .qtable import QTable
from .stats import ActionStats
from .tie_breaking import fixed_tie_breaker, random_tie_breaker, seeded_tie_breaker

__version__ = "0.1.0"

__all__ = [
    # Agent
    "BayesianAgent",
    "AgentContext",

    # Storage
    "QTable",
    "ActionStats",

    # Contracts
    "Actioner",
    "Stater",
    "ActionStatter",
    "Agenter",
    "TieBreaker",

    # Errors
    "LearnerError",
    "IncompatibleAction",
    "NoPossibleActions",
    "ActionNotFound",
    "TieBreakerError",

    # Configuration
    "AgentConfig",
    "AgentPresets",
    "DEFAULT_AGENT_CONFIG",
    "DEFAULT_TIE_EPSILON",

    # Numeric kernel
    "bellman",
    "bayesian_average",
    "safe_divide",

    # Tie-breaking
    "random_tie_breaker",
    "seeded_tie_breaker",
    "fixed_tie_breaker",
]
