"""
Q-learning agent with Bayesian-weighted action values.

Every (state, action) pair keeps a raw Bellman estimate and a weighted
estimate. The weighted estimate blends the raw value with the mean raw
value of the state's other actions, so rarely tried actions are judged by
their siblings until they have been observed ``priming_threshold`` times.
Decisions and future-value estimates use the weighted value.

Typical control loop:
    >>> action = agent.recommend_action(state)
    >>> agent.transition(state, action)
    >>> agent.learn(state, action, new_state, reward)
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence

from ..config import AgentConfig, DEFAULT_TIE_EPSILON
from ..errors import IncompatibleAction, NoPossibleActions, TieBreakerError
from ..interfaces import Actioner, ActionStatter, Stater, TieBreaker
from ..numeric import bayesian_average, bellman, safe_divide
from ..qtable import QTable
from ..stats import ActionStats
from ..tie_breaking import random_tie_breaker, seeded_tie_breaker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AgentContext:
    """
    Read-only snapshot of an agent for inspection, logging or persistence.

    Attributes:
        learning_rate: Agent learning rate
        discount_factor: Agent discount factor
        priming_threshold: Agent priming threshold
        table: Deep copy of the action-value table
    """
    learning_rate: float
    discount_factor: float
    priming_threshold: int
    table: Dict[str, Dict[str, ActionStatter]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to plain data."""
        return {
            "learning_rate": self.learning_rate,
            "discount_factor": self.discount_factor,
            "priming_threshold": self.priming_threshold,
            "table": {
                state_id: {
                    action_id: {
                        "calls": stats.calls(),
                        "q_raw": stats.q_value_raw(),
                        "q_weighted": stats.q_value_weighted(),
                    }
                    for action_id, stats in actions.items()
                }
                for state_id, actions in self.table.items()
            },
        }


class BayesianAgent:
    """
    Tabular Q-learning agent.

    Not thread-safe: the table is mutated in place, so callers sharing an
    agent between threads must serialize access themselves.

    Attributes:
        tie_breaker: Picks an index among tied best actions; swap it for a
            deterministic function in tests
    """

    def __init__(
        self,
        priming_threshold: int,
        learning_rate: float,
        discount_factor: float,
        tie_breaker: Optional[TieBreaker] = None,
        stats_factory: Callable[[], ActionStatter] = ActionStats,
        future_value_floor: float = 0.0,
        tie_epsilon: float = DEFAULT_TIE_EPSILON,
    ):
        """
        Initialize the agent.

        Args:
            priming_threshold: Prior confidence in the state mean
            learning_rate: Weight of new observations (0.0 to 1.0)
            discount_factor: Weight of future value (0.0 to 1.0)
            tie_breaker: Index chooser for tied actions (default: uniform random)
            stats_factory: Creates all-zero stats records for the table
            future_value_floor: Lower bound for the best future value in learn()
            tie_epsilon: Tolerance under which weighted values count as tied
        """
        self._config = AgentConfig(
            learning_rate=learning_rate,
            discount_factor=discount_factor,
            priming_threshold=priming_threshold,
            future_value_floor=future_value_floor,
            tie_epsilon=tie_epsilon,
        )
        self.tie_breaker: TieBreaker = tie_breaker or random_tie_breaker
        self.qmap = QTable(stats_factory=stats_factory)

    @classmethod
    def from_config(
        cls,
        config: AgentConfig,
        tie_breaker: Optional[TieBreaker] = None,
        stats_factory: Callable[[], ActionStatter] = ActionStats,
    ) -> "BayesianAgent":
        """
        Create an agent from a configuration.

        When no tie-breaker is given and the config has a ``prng_seed``,
        a seeded tie-breaker is used.
        """
        if tie_breaker is None and config.prng_seed is not None:
            tie_breaker = seeded_tie_breaker(config.prng_seed)

        agent = cls(
            priming_threshold=config.priming_threshold,
            learning_rate=config.learning_rate,
            discount_factor=config.discount_factor,
            tie_breaker=tie_breaker,
            stats_factory=stats_factory,
            future_value_floor=config.future_value_floor,
            tie_epsilon=config.tie_epsilon,
        )
        agent._config = AgentConfig.from_dict(config.to_dict())
        return agent

    @property
    def config(self) -> AgentConfig:
        """A copy of the agent's configuration."""
        return AgentConfig.from_dict(self._config.to_dict())

    @property
    def learning_rate(self) -> float:
        return self._config.learning_rate

    @property
    def discount_factor(self) -> float:
        return self._config.discount_factor

    @property
    def priming_threshold(self) -> int:
        return self._config.priming_threshold

    @property
    def future_value_floor(self) -> float:
        return self._config.future_value_floor

    @property
    def tie_epsilon(self) -> float:
        return self._config.tie_epsilon

    def recommend_action(self, state: Stater) -> Actioner:
        """
        Recommend the best known action for a state.

        Ties within ``tie_epsilon`` are sorted by action id and resolved by
        the tie-breaker.

        Raises:
            NoPossibleActions: The state has no actions
        """
        state_id = state.id()
        actions = list(state.possible_actions())
        if not actions:
            raise NoPossibleActions(state_id)

        self._refresh_weights(state_id, actions)

        values: Dict[str, float] = {
            action.id(): self._weighted_value(state_id, action.id())
            for action in actions
        }
        best_value = max(values.values())
        candidates = sorted(
            action_id
            for action_id, value in values.items()
            if math.isclose(value, best_value, rel_tol=0.0, abs_tol=self.tie_epsilon)
        )
        if len(candidates) == 1:
            chosen = candidates[0]
        else:
            index = self.tie_breaker(len(candidates))
            if not 0 <= index < len(candidates):
                raise TieBreakerError(index, len(candidates))
            chosen = candidates[index]

        logger.debug(
            f"Recommending {chosen} for state {state_id} "
            f"(value={best_value}, tied={len(candidates)})",
            extra={
                "subsystem": "agent",
                "event_type": "recommend",
                "state_id": state_id,
                "action_id": chosen,
            },
        )
        return state.get_action(chosen)

    def transition(self, state: Stater, action: Actioner) -> Any:
        """
        Apply an action to a state.

        Returns whatever ``state.apply`` returns; its errors propagate.

        Raises:
            IncompatibleAction: The state rejects the action; apply() is not called
        """
        if not state.action_is_compatible(action):
            raise IncompatibleAction(state.id(), action.id())

        logger.debug(
            f"Applying {action.id()} to state {state.id()}",
            extra={
                "subsystem": "agent",
                "event_type": "transition",
                "state_id": state.id(),
                "action_id": action.id(),
            },
        )
        return state.apply(action)

    def learn(
        self,
        previous_state: Optional[Stater],
        action_taken: Actioner,
        current_state: Stater,
        reward: float,
    ) -> None:
        """
        Update the estimate for (previous_state, action_taken).

        A ``None`` previous state (nothing happened before) leaves the
        table untouched.
        """
        if previous_state is None:
            return

        prev_id = previous_state.id()
        action_id = action_taken.id()

        stats = self.qmap.get_stats(prev_id, action_id)
        if stats is None:
            stats = self.qmap.new_stats()

        current_id = current_state.id()
        current_actions = list(current_state.possible_actions())
        self._refresh_weights(current_id, current_actions)

        best_future = self.future_value_floor
        for action in current_actions:
            value = self._weighted_value(current_id, action.id())
            if value > best_future:
                best_future = value

        new_raw = bellman(
            stats.q_value_weighted(),
            self.learning_rate,
            reward,
            self.discount_factor,
            best_future,
        )
        stats.set_calls(stats.calls() + 1)
        stats.set_q_value_raw(new_raw)
        self.qmap.update_stats(prev_id, action_id, stats)

        self._refresh_weights(prev_id, list(previous_state.possible_actions()))

        logger.debug(
            f"Learned {prev_id}/{action_id}: reward={reward} "
            f"future={best_future} raw={new_raw} calls={stats.calls()}",
            extra={
                "subsystem": "agent",
                "event_type": "learn",
                "state_id": prev_id,
                "action_id": action_id,
            },
        )

    def refresh_weights(self, state: Stater) -> None:
        """
        Recompute the weighted values of every action of a state.

        Unseen actions get zero-valued entries. Idempotent: repeated calls
        without learning in between produce identical values.
        """
        self._refresh_weights(state.id(), list(state.possible_actions()))

    def get_agent_context(self) -> AgentContext:
        """Snapshot of the configuration and the full table."""
        return AgentContext(
            learning_rate=self.learning_rate,
            discount_factor=self.discount_factor,
            priming_threshold=self.priming_threshold,
            table=self.qmap.snapshot(),
        )

    def _weighted_value(self, state_id: str, action_id: str) -> float:
        stats = self.qmap.get_stats(state_id, action_id)
        if stats is None:
            return 0.0
        return stats.q_value_weighted()

    def _refresh_weights(self, state_id: str, actions: Sequence[Actioner]) -> None:
        # The mean covers only actions that already had stats on entry.
        raw_sum = 0.0
        visited = 0
        for action in actions:
            action_id = action.id()
            stats = self.qmap.get_stats(state_id, action_id)
            if stats is None:
                self.qmap.update_stats(state_id, action_id, self.qmap.new_stats())
            else:
                raw_sum += stats.q_value_raw()
                visited += 1

        mean = safe_divide(raw_sum, visited)

        bucket = self.qmap.bucket_for(state_id) if actions else {}
        for action in actions:
            stats = bucket.get(action.id())
            if stats is None:
                continue
            stats.set_q_value_weighted(
                bayesian_average(
                    self.priming_threshold,
                    stats.calls(),
                    mean,
                    stats.q_value_raw(),
                )
            )
