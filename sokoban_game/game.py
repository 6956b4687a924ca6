from __future__ import annotations
from typing import List, Optional, Set, Union

from .cells import (
    Pos, WALL, FLOOR, GOAL, BOX, PLAYER,
    NO_DIRECTION, DIRECTIONS, MOVEMENT,
)
from .deadlocks import is_dead_position
from .encoding import encode_state
from .maze import MazeLayout, STATE_BITS, parse_maze_str
from .render import render_ascii


class Game:
    """
    Mutable Sokoban simulation on top of an immutable MazeLayout.

    After every move or restart the derived fields are recomputed:
    cells (flag grid), finished, directions, succeeded, failed and state
    (the encoded key). history holds the keys occupied before each accepted
    move since the last restart.

    state_bits sets the key capacity when parsing a maze string. A MazeLayout
    carries its own capacity; passing a different state_bits with one raises
    ValueError.
    """

    def __init__(self, maze: Union[str, MazeLayout], state_bits: Optional[int] = None) -> None:
        if isinstance(maze, MazeLayout):
            if state_bits is not None and state_bits != maze.state_bits:
                raise ValueError(
                    f"layout was parsed with state_bits={maze.state_bits}, got state_bits={state_bits}"
                )
            self.layout = maze
        else:
            self.layout = parse_maze_str(maze, STATE_BITS if state_bits is None else state_bits)
        self.player: Pos = self.layout.player
        self.boxes: Set[Pos] = set(self.layout.boxes)
        self.history: Set[int] = set()
        self.elapsed = 0
        self.cells: List[List[int]] = []
        self.finished = 0
        self.directions = NO_DIRECTION
        self.succeeded = False
        self.failed = False
        self.state = 0
        self.restart()


    # ---- layout shortcuts
    @property
    def height(self) -> int:
        return self.layout.height


    @property
    def width(self) -> int:
        return self.layout.width


    @property
    def box_count(self) -> int:
        return self.layout.box_count


    def is_floor(self, r: int, c: int) -> bool:
        return self.layout.is_floor(r, c)


    def has_box(self, r: int, c: int) -> bool:
        return self.is_floor(r, c) and bool(self.cells[r][c] & BOX)


    def is_goal(self, r: int, c: int) -> bool:
        return (r, c) in self.layout.goals


    def check_direction(self, direction: int, r: int, c: int, can_push: bool = True) -> bool:
        """Can whoever stands on (r, c) step in `direction` (pushing at most one box)?"""
        dr, dc = MOVEMENT[direction]
        nr, nc = r + dr, c + dc
        if not self.is_floor(nr, nc):
            return False
        if self.has_box(nr, nc):
            if not can_push:
                return False
            return self.check_direction(direction, nr, nc, can_push=False)
        return True


    # ---- simulation
    def _update(self) -> None:
        lay = self.layout
        cells = [[FLOOR if idx >= 0 else WALL for idx in row] for row in lay.floor_index]
        for r, c in lay.goals:
            cells[r][c] |= GOAL
        for r, c in self.boxes:
            cells[r][c] |= BOX
        cells[self.player[0]][self.player[1]] |= PLAYER
        self.cells = cells

        self.finished = sum(1 for b in self.boxes if b in lay.goals)
        self.state = encode_state(lay.floor_index, lay.floor_bits, self.player, self.boxes)
        self.directions = NO_DIRECTION
        for d in DIRECTIONS:
            if self.check_direction(d, self.player[0], self.player[1]):
                self.directions |= d
        self.succeeded = self.finished == self.box_count
        self.failed = is_dead_position(self)


    def restart(self) -> None:
        self.elapsed = 0
        self.history.clear()
        self.player = self.layout.player
        self.boxes = set(self.layout.boxes)
        self._update()


    def move(self, direction: int) -> bool:
        """Applies one legal move. Returns True if a box was pushed.

        Illegal or non-single directions are ignored and return False.
        """
        if direction == NO_DIRECTION or not (self.directions & direction):
            return False
        movement = MOVEMENT.get(direction)
        if movement is None:
            return False
        dr, dc = movement
        self.elapsed += 1
        self.history.add(self.state)
        self.player = (self.player[0] + dr, self.player[1] + dc)
        pushed = False
        if self.player in self.boxes:
            self.boxes.remove(self.player)
            self.boxes.add((self.player[0] + dr, self.player[1] + dc))
            pushed = True
        self._update()
        return pushed


    def maze_string(self) -> str:
        return render_ascii(self)
