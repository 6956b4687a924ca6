from __future__ import annotations
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional, Tuple

import yaml

from sokoban_game.maze import STATE_BITS


@dataclass(frozen=True)
class TrainConfig:
    """Hyperparameters of one Q-learning step."""
    epsilon: float = 0.05
    alpha: float = 0.5
    gamma: float = 1.0
    retrace_penalty: float = 1.0
    push_reward: float = 0.5
    goal_reward: float = 50.0
    failure_penalty: float = 1000.0
    success_reward: float = 1000.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.epsilon <= 1.0:
            raise ValueError(f"epsilon must be in [0, 1], got {self.epsilon}")
        if not 0.0 < self.alpha <= 1.0:
            raise ValueError(f"alpha must be in (0, 1], got {self.alpha}")
        if not 0.0 <= self.gamma <= 1.0:
            raise ValueError(f"gamma must be in [0, 1], got {self.gamma}")

    def bootstrap_floor(self, box_count: int) -> float:
        """Lowest bootstrap value; a dead state never looks better than this."""
        return -(self.retrace_penalty + self.failure_penalty + self.goal_reward * box_count)


@dataclass(frozen=True)
class RunConfig:
    """Settings of the interactive training loop."""
    sleep_ms: int = 100
    quiet: int = 0
    steps: int = 0  # 0 = until interrupted
    seed: Optional[int] = None
    state_bits: int = STATE_BITS
    print_q_success: bool = False
    print_q_failure: bool = False
    print_q_exit: bool = False
    emoji: bool = False

    def __post_init__(self) -> None:
        for name in ("sleep_ms", "quiet", "steps"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.state_bits <= 0:
            raise ValueError(f"state_bits must be > 0, got {self.state_bits}")


def _section(cls, raw: Optional[Dict[str, Any]], name: str):
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ValueError(f"config section '{name}' must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"unknown keys in '{name}': {', '.join(unknown)}")
    return cls(**raw)


def load_config(path: Optional[str]) -> Tuple[TrainConfig, RunConfig]:
    """Reads the `train` and `run` sections of a YAML file; no path gives the defaults."""
    if path is None:
        return TrainConfig(), RunConfig()
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    return _section(TrainConfig, cfg.get("train"), "train"), _section(RunConfig, cfg.get("run"), "run")


def override(cfg, **values):
    """Copy of a config with the given fields replaced, ignoring None values."""
    return replace(cfg, **{k: v for k, v in values.items() if v is not None})
