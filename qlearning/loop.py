from __future__ import annotations
import random
import threading
from typing import Iterator, Optional

from tqdm import tqdm

from sokoban_game.game import Game
from .config import TrainConfig
from .qtable import QTable
from .trainer import TrainResult, train_step


def train_steps(
    rng: random.Random,
    game: Game,
    q: QTable,
    cfg: TrainConfig,
    steps: int,
    cancel: Optional[threading.Event] = None,
    progress: bool = False,
) -> Optional[TrainResult]:
    """Runs up to `steps` trainer steps, stopping early once `cancel` is set.

    Returns the last result, or None if no step ran.
    """
    last: Optional[TrainResult] = None
    it = range(steps)
    if progress:
        it = tqdm(it, desc="Training", unit="step", leave=False)
    for _ in it:
        if cancel is not None and cancel.is_set():
            break
        last = train_step(rng, game, q, cfg)
    return last


def iter_training(
    rng: random.Random,
    game: Game,
    q: QTable,
    cfg: TrainConfig,
    cancel: Optional[threading.Event] = None,
    limit: int = 0,
) -> Iterator[TrainResult]:
    """Yields one result per trainer step until cancelled or `limit` steps ran (0 = no limit)."""
    done = 0
    while cancel is None or not cancel.is_set():
        if limit and done >= limit:
            return
        yield train_step(rng, game, q, cfg)
        done += 1
