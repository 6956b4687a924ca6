from __future__ import annotations
import random
from typing import List, Sequence

from sokoban_game.cells import NO_DIRECTION, bit, iter_bits
from sokoban_game.game import Game
from .qtable import QTable


def choose_direction(rng: random.Random, epsilon: float, directions: int, row: Sequence[float]) -> int:
    """Epsilon-greedy pick among the legal directions of a mask.

    row is the Q-row of the current state. A single legal direction is
    returned without touching rng. If every legal direction has the same
    value, or the draw falls below epsilon, the pick is uniform. Otherwise
    the greatest value wins, the first one in bit order on a partial tie.
    """
    if not directions:
        return NO_DIRECTION
    legal: List[int] = [bit(i) for i in iter_bits(directions)]
    if len(legal) == 1:
        return legal[0]

    values = [row[i] for i in iter_bits(directions)]
    all_same = all(v == values[0] for v in values)
    choice = legal[0]
    best = values[0]
    for d, v in zip(legal[1:], values[1:]):
        if v > best:
            best = v
            choice = d

    draw = rng.random()
    if all_same or draw < epsilon:
        return legal[rng.randrange(len(legal))]
    return choice


def find_action(rng: random.Random, epsilon: float, game: Game, q: QTable) -> int:
    return choose_direction(rng, epsilon, game.directions, q.row(game.state))
