from __future__ import annotations
from collections import deque
from typing import Set, Tuple, TYPE_CHECKING

from .cells import Pos, DIRECTIONS, MOVEMENT

if TYPE_CHECKING:
    from .game import Game

# axis flag for box_stuck: True checks left/right neighbours, False up/down
HORIZONTAL = True
VERTICAL = False

# --- individual rules -------------------------------------------------------

def box_stuck(game: Game, r: int, c: int, horizontal: bool, path: Set[Tuple[Pos, bool]]) -> bool:
    """Box at (r, c) cannot move along the given axis.

    Stuck if a neighbour on that axis is a wall, or holds a box that is stuck
    on the other axis. Coming back to a (position, axis) pair already on the
    current path means the boxes hold each other, which is stuck as well.
    """
    key = ((r, c), horizontal)
    if key in path:
        return True
    path.add(key)
    if horizontal:
        a, b = (r, c - 1), (r, c + 1)
    else:
        a, b = (r - 1, c), (r + 1, c)
    stuck = (
        not game.is_floor(*a) or not game.is_floor(*b)
        or (game.has_box(*a) and box_stuck(game, a[0], a[1], not horizontal, path))
        or (game.has_box(*b) and box_stuck(game, b[0], b[1], not horizontal, path))
    )
    path.discard(key)
    return stuck


def wall_run_dead(game: Game, r: int, c: int, toward: Pos) -> bool:
    """Box at (r, c) lies against a wall at offset `toward`; can the run along that wall take it?

    Walks the floor run parallel to the wall on both sides of the box. An
    opening in the wall anywhere on the run means the box may still leave it.
    Otherwise the run is dead when it holds more boxes than goals.
    """
    dr, dc = toward
    sr, sc = (0, 1) if dr else (1, 0)
    boxes = int(game.has_box(r, c))
    goals = int(game.is_goal(r, c))
    for sign in (-1, 1):
        nr, nc = r + sign * sr, c + sign * sc
        while game.is_floor(nr, nc):
            if game.is_floor(nr + dr, nc + dc):
                return False
            boxes += game.has_box(nr, nc)
            goals += game.is_goal(nr, nc)
            nr += sign * sr
            nc += sign * sc
    return boxes > goals


def can_push_any(game: Game) -> bool:
    """Player can reach, without pushing, some cell from which a push is legal (BFS)."""
    start = game.player
    visited = {start}
    q = deque([start])

    while q:
        r, c = q.popleft()
        for d in DIRECTIONS:
            if game.check_direction(d, r, c, can_push=False):
                dr, dc = MOVEMENT[d]
                nb = (r + dr, c + dc)
                if nb not in visited:
                    visited.add(nb)
                    q.append(nb)
            elif game.check_direction(d, r, c, can_push=True):
                return True
    return False


def _frozen_box(game: Game, r: int, c: int) -> bool:
    vertical = box_stuck(game, r, c, VERTICAL, set())
    horizontal = box_stuck(game, r, c, HORIZONTAL, set())
    if vertical and horizontal:
        return True
    if vertical:
        for toward in ((-1, 0), (1, 0)):
            if not game.is_floor(r + toward[0], c + toward[1]) and wall_run_dead(game, r, c, toward):
                return True
    if horizontal:
        for toward in ((0, -1), (0, 1)):
            if not game.is_floor(r + toward[0], c + toward[1]) and wall_run_dead(game, r, c, toward):
                return True
    return False

# --- combined API ------------------------------------------------------------

def is_dead_position(game: Game) -> bool:
    """True if the puzzle can no longer be solved from the current position."""
    if game.finished == game.box_count:
        return False
    if not game.directions:
        return True
    for r, c in sorted(game.boxes):
        if game.is_goal(r, c):
            continue
        if _frozen_box(game, r, c):
            return True
    return not can_push_any(game)
