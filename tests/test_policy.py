import random

import pytest

from sokoban_game.cells import NO_DIRECTION, UP, LEFT, RIGHT, DOWN
from sokoban_game.game import Game
from qlearning.policy import choose_direction, find_action
from qlearning.qtable import QTable


class FixedRng:
    """Returns preset draws and records how it was used."""
    def __init__(self, draw=0.5, index=0):
        self.draw = draw
        self.index = index
        self.calls = []

    def random(self):
        self.calls.append("random")
        return self.draw

    def randrange(self, n):
        self.calls.append(("randrange", n))
        return self.index


class NoRng:
    def random(self):
        raise AssertionError("random draw not expected")

    def randrange(self, n):
        raise AssertionError("random draw not expected")


def test_no_legal_direction():
    assert choose_direction(NoRng(), 0.5, NO_DIRECTION, [0, 0, 0, 0]) == NO_DIRECTION


def test_single_direction_skips_randomness():
    assert choose_direction(NoRng(), 1.0, DOWN, [5, 5, 5, -1]) == DOWN


def test_full_tie_is_random():
    rng = FixedRng(draw=0.99, index=2)
    assert choose_direction(rng, 0.0, UP | RIGHT | DOWN, [1, 7, 1, 1]) == DOWN
    assert rng.calls == ["random", ("randrange", 3)]


def test_partial_tie_takes_first_in_bit_order():
    rng = FixedRng(draw=0.99)
    assert choose_direction(rng, 0.0, UP | LEFT | RIGHT, [5, 5, 1, 0]) == UP
    assert choose_direction(rng, 0.0, UP | LEFT | RIGHT, [1, 5, 5, 0]) == LEFT
    assert choose_direction(rng, 0.0, LEFT | DOWN, [9, -2, 9, -1]) == DOWN
    assert ("randrange", 3) not in rng.calls


def test_greedy_ignores_illegal_values():
    rng = FixedRng(draw=0.99)
    assert choose_direction(rng, 0.5, LEFT | RIGHT, [100, 1, 2, 100]) == RIGHT


@pytest.mark.parametrize("draw, expected", [(0.04, LEFT), (0.05, RIGHT)])
def test_epsilon_explores_below_threshold(draw, expected):
    rng = FixedRng(draw=draw, index=0)
    assert choose_direction(rng, 0.05, LEFT | RIGHT, [0, 0, 3, 0]) == expected


def test_find_action_reads_game_state():
    g = Game("""
#####
#*..#
#.&.#
#..$#
#####
""")
    assert g.directions == RIGHT | DOWN
    q = QTable()
    q.set(g.state, DOWN, 1.0)
    assert find_action(random.Random(0), 0.0, g, q) == DOWN
