"""
Agent configuration and presets.

Parameters are clamped to safe ranges on construction. Configurations can
be loaded from JSON or YAML files so tuning does not require code changes.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

# Weighted values closer than this are treated as tied.
DEFAULT_TIE_EPSILON = 1e-9


@dataclass
class AgentConfig:
    """
    Configuration for a BayesianAgent.

    Attributes:
        learning_rate: Weight of new observations vs. the old estimate (0.0 to 1.0)
        discount_factor: Weight of estimated future value vs. immediate reward (0.0 to 1.0)
        priming_threshold: Observations needed before an action's own raw value
            outweighs the state's mean; a whole count, fractional values are
            truncated (2.5 -> 2)
        future_value_floor: Lower bound for the best future value used in learn()
        tie_epsilon: Tolerance under which weighted values count as tied
        prng_seed: Seed for the default tie-breaker (None = random)
    """
    learning_rate: float = 0.1
    discount_factor: float = 0.9
    priming_threshold: int = 10

    future_value_floor: float = 0.0
    tie_epsilon: float = DEFAULT_TIE_EPSILON

    prng_seed: Optional[int] = None

    def __post_init__(self):
        """Validate and clamp all parameters to safe ranges."""
        self.learning_rate = max(0.0, min(1.0, float(self.learning_rate)))
        self.discount_factor = max(0.0, min(1.0, float(self.discount_factor)))
        self.priming_threshold = max(0, int(self.priming_threshold))
        self.future_value_floor = float(self.future_value_floor)
        self.tie_epsilon = max(0.0, float(self.tie_epsilon))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AgentConfig":
        """Deserialize from dictionary, ignoring unknown keys."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    def save(self, path: str) -> None:
        """Save config to a JSON file."""
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> Optional["AgentConfig"]:
        """
        Load config from a JSON or YAML file.

        Returns None if the file is missing or cannot be parsed.
        """
        if not os.path.exists(path):
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()

            if path.endswith((".yaml", ".yml")):
                data = yaml.safe_load(content)
            else:
                data = json.loads(content)

            if not isinstance(data, dict):
                logger.warning(f"Config in {path} is not a mapping")
                return None

            return cls.from_dict(data)

        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load agent config from {path}: {e}")
            return None


# Default configuration instance
DEFAULT_AGENT_CONFIG = AgentConfig()


class AgentPresets:
    """Pre-configured agent settings."""

    @staticmethod
    def default() -> AgentConfig:
        """Balanced learning (recommended)."""
        return AgentConfig()

    @staticmethod
    def cautious() -> AgentConfig:
        """Slow learning that trusts the state mean for longer."""
        return AgentConfig(
            learning_rate=0.05,
            discount_factor=0.9,
            priming_threshold=25,
        )

    @staticmethod
    def greedy() -> AgentConfig:
        """Fast learning that trusts observations early."""
        return AgentConfig(
            learning_rate=0.5,
            discount_factor=0.8,
            priming_threshold=2,
        )

    @staticmethod
    def deterministic_test(seed: int = 42) -> AgentConfig:
        """Deterministic configuration for testing."""
        return AgentConfig(prng_seed=seed)
