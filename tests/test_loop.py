import random
import threading

from sokoban_game.game import Game
from qlearning.config import TrainConfig
from qlearning.loop import train_steps, iter_training
from qlearning.qtable import QTable

CORRIDOR = """
######
#*.&$#
######
"""


def test_train_steps_runs_all_steps():
    g = Game(CORRIDOR)
    q = QTable()
    last = train_steps(random.Random(0), g, q, TrainConfig(), 25)
    assert last is not None
    assert len(q) > 0


def test_train_steps_zero():
    g = Game(CORRIDOR)
    assert train_steps(random.Random(0), g, QTable(), TrainConfig(), 0) is None


def test_cancel_stops_between_steps():
    g = Game(CORRIDOR)
    q = QTable()
    cancel = threading.Event()
    cancel.set()
    assert train_steps(random.Random(0), g, q, TrainConfig(), 100, cancel=cancel) is None
    assert g.elapsed == 0
    assert list(iter_training(random.Random(0), g, q, TrainConfig(), cancel=cancel)) == []


def test_iter_training_limit_and_cancel():
    g = Game(CORRIDOR)
    q = QTable()
    assert len(list(iter_training(random.Random(0), g, q, TrainConfig(), limit=7))) == 7

    cancel = threading.Event()
    seen = 0
    for _ in iter_training(random.Random(0), g, q, TrainConfig(), cancel=cancel):
        seen += 1
        if seen == 3:
            cancel.set()
    assert seen == 3
