import pytest

from sokoban_game.cells import NO_DIRECTION, UP, LEFT, RIGHT, DOWN, BOX, PLAYER
from sokoban_game.game import Game
from sokoban_game.maze import parse_maze_str

ROW = """
#####
#*&$#
#####
"""

OPEN = """
#######
#.....#
#*&&..#
#...$$#
#######
"""

ROOM = """
#####
#*..#
#.&.#
#..$#
#####
"""


def snapshot(g: Game):
    return (g.player, frozenset(g.boxes), g.state, g.elapsed, frozenset(g.history),
            g.directions, g.finished, g.succeeded, g.failed)


def test_initial_state():
    g = Game(ROW)
    assert g.player == (1, 1)
    assert g.boxes == {(1, 2)}
    assert g.directions == RIGHT
    assert g.finished == 0
    assert not g.succeeded and not g.failed
    assert g.elapsed == 0 and not g.history
    assert g.cells[1][1] & PLAYER
    assert g.cells[1][2] & BOX


def test_push_onto_goal_succeeds():
    g = Game(ROW)
    before = g.state
    assert g.move(RIGHT) is True
    assert g.player == (1, 2)
    assert g.boxes == {(1, 3)}
    assert g.finished == 1
    assert g.succeeded and not g.failed
    assert g.elapsed == 1
    assert g.history == {before}


def test_game_accepts_layout():
    lay = parse_maze_str(ROW)
    g = Game(lay)
    assert g.layout is lay
    assert g.directions == RIGHT


def test_double_push_is_illegal():
    g = Game(OPEN)
    assert g.directions == UP | DOWN
    before = snapshot(g)
    assert g.move(RIGHT) is False
    assert snapshot(g) == before


def test_illegal_moves_change_nothing():
    g = Game(ROW)
    before = snapshot(g)
    for d in (NO_DIRECTION, UP, LEFT, DOWN, UP | RIGHT, RIGHT | DOWN, 16):
        assert g.move(d) is False
        assert snapshot(g) == before


def test_step_without_push():
    g = Game(ROOM)
    assert g.move(RIGHT) is False
    assert g.player == (1, 2)
    assert g.boxes == {(2, 2)}
    assert g.elapsed == 1


def test_push_moves_only_one_box_cell():
    g = Game(ROOM)
    g.move(DOWN)  # (2, 1)
    cells_before = [row[:] for row in g.cells]
    assert g.move(RIGHT) is True
    changed = {
        (r, c)
        for r in range(g.height)
        for c in range(g.width)
        if g.cells[r][c] != cells_before[r][c]
    }
    # player leaves (2,1), enters (2,2); box leaves (2,2), enters (2,3)
    assert changed == {(2, 1), (2, 2), (2, 3)}
    assert not g.cells[2][2] & BOX
    assert g.cells[2][3] & BOX
    assert g.boxes == {(2, 3)}


def test_box_count_is_conserved():
    g = Game(ROOM)
    for d in (DOWN, RIGHT, UP, RIGHT, DOWN, LEFT, LEFT, UP, UP):
        g.move(d)
        assert len(g.boxes) == 1
        assert not (g.succeeded and g.failed)


def test_restart_is_idempotent():
    g = Game(ROOM)
    initial = snapshot(g)
    g.move(DOWN)
    g.move(RIGHT)
    g.restart()
    once = snapshot(g)
    g.restart()
    assert snapshot(g) == once == initial
    assert g.player == g.layout.player
    assert g.boxes == set(g.layout.boxes)


def test_restart_after_success():
    g = Game(ROW)
    g.move(RIGHT)
    assert g.succeeded
    g.restart()
    assert not g.succeeded
    assert g.elapsed == 0 and not g.history
    assert g.boxes == {(1, 2)}


def test_encoding_is_history_independent():
    a = Game(ROOM)
    for d in (RIGHT, RIGHT, DOWN):
        a.move(d)
    b = Game(ROOM)
    for d in (RIGHT, RIGHT, LEFT, RIGHT, DOWN):
        b.move(d)
    assert a.player == b.player == (2, 3)
    assert a.state == b.state

    c = Game(ROOM)
    c.move(RIGHT)
    c.move(LEFT)
    assert c.state == Game(ROOM).state


def test_maze_string_round_trip():
    g = Game(ROW)
    assert g.maze_string() == "#####\n#*&$#\n#####"
    g.move(RIGHT)
    assert g.maze_string() == "#####\n#.*@#\n#####"


def test_layout_keeps_its_state_bits():
    layout = parse_maze_str(ROW, state_bits=8)
    assert Game(layout).layout.state_bits == 8
    assert Game(layout, state_bits=8).layout.state_bits == 8
    with pytest.raises(ValueError):
        Game(layout, state_bits=64)
    assert Game(ROW, state_bits=8).layout.state_bits == 8
    assert Game(ROW).layout.state_bits == 64
