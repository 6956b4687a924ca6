from __future__ import annotations
import random
from dataclasses import dataclass

import numpy as np

from sokoban_game.cells import NO_DIRECTION, DIRECTIONS
from sokoban_game.game import Game
from .config import TrainConfig
from .policy import find_action
from .qtable import QTable


@dataclass
class TrainResult:
    """Outcome of one trainer call: the state left, the action taken and its Q-row before/after."""
    state: int
    action: int
    before: np.ndarray
    after: np.ndarray
    reward: float = 0.0
    restarted: bool = False


def noop_result(game: Game, q: QTable, restarted: bool = False) -> TrainResult:
    row = q.row(game.state)
    return TrainResult(state=game.state, action=NO_DIRECTION, before=row, after=row.copy(), restarted=restarted)


def train_step(rng: random.Random, game: Game, q: QTable, cfg: TrainConfig) -> TrainResult:
    """One Q-learning step; a finished game is restarted instead."""
    if game.succeeded or game.failed:
        result = noop_result(game, q, restarted=True)
        game.restart()
        return result

    last_state = game.state
    last_finished = game.finished
    before = q.row(last_state)
    action = find_action(rng, cfg.epsilon, game, q)
    pushed = game.move(action)

    reward = cfg.goal_reward * (game.finished - last_finished)
    if game.state in game.history:
        reward -= cfg.retrace_penalty
    if pushed:
        reward += cfg.push_reward
    if game.succeeded:
        reward += cfg.success_reward
    if game.failed:
        reward -= cfg.failure_penalty

    max_q = cfg.bootstrap_floor(game.box_count)
    for d in DIRECTIONS:
        if game.directions & d:
            max_q = max(max_q, q.get(game.state, d))

    value = (1.0 - cfg.alpha) * q.get(last_state, action) + cfg.alpha * (reward + cfg.gamma * max_q)
    q.set(last_state, action, value)
    return TrainResult(state=last_state, action=action, before=before, after=q.row(last_state), reward=reward)
