from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Tuple

from .cells import Pos, FLOOR, GOAL, BOX, PLAYER
from .encoding import floor_bits

TOK_FLOOR = "."
TOK_PLAYER = "*"
TOK_GOAL = "$"
TOK_PLAYER_ON_GOAL = "+"
TOK_BOX = "&"
TOK_BOX_ON_GOAL = "@"

# Anything not listed here (including '#' and ' ') is a wall.
TOKENS: Dict[str, int] = {
    TOK_FLOOR: FLOOR,
    TOK_PLAYER: FLOOR | PLAYER,
    TOK_GOAL: FLOOR | GOAL,
    TOK_PLAYER_ON_GOAL: FLOOR | GOAL | PLAYER,
    TOK_BOX: FLOOR | BOX,
    TOK_BOX_ON_GOAL: FLOOR | GOAL | BOX,
}

MAX_SIZE = 125
STATE_BITS = 64


class MazeError(ValueError):
    """The maze text cannot be turned into a playable game."""


@dataclass(frozen=True, slots=True)
class MazeLayout:
    """
    Immutable board of a parsed maze.

    floor_index[r][c] is the row-major ordinal of a floor cell, -1 for walls.
    boxes holds the initial box positions sorted by (row, col).
    """

    height: int
    width: int
    floor_index: Tuple[Tuple[int, ...], ...]
    floor_count: int
    floor_bits: int
    state_bits: int
    goals: FrozenSet[Pos]
    boxes: Tuple[Pos, ...]
    player: Pos


    def is_floor(self, r: int, c: int) -> bool:
        if r < 0 or r >= self.height:
            return False
        if c < 0 or c >= self.width:
            return False
        return self.floor_index[r][c] >= 0


    @property
    def box_count(self) -> int:
        return len(self.boxes)


def _trim_blank_lines(lines: List[str]) -> List[str]:
    start = 0
    end = len(lines)
    while start < end and lines[start].strip() == "":
        start += 1
    while end > start and lines[end - 1].strip() == "":
        end -= 1
    return lines[start:end]


def parse_maze_str(maze: str, state_bits: int = STATE_BITS) -> MazeLayout:
    """Parses a maze into a MazeLayout.

    Supported characters:
      '.': floor
      '*': player
      '$': goal
      '+': player on goal
      '&': box
      '@': box on goal
    Any other character is a wall.
    Raises MazeError when the maze is unusable.
    """
    lines = _trim_blank_lines(maze.replace("\r", "").split("\n"))

    floor: List[Pos] = []
    goals = set()
    boxes = set()
    player: Optional[Pos] = None
    width = 0

    for r, line in enumerate(lines):
        if r >= MAX_SIZE:
            raise MazeError("Maze Too Large")
        for c, ch in enumerate(line):
            if c >= MAX_SIZE:
                raise MazeError("Maze Too Large")
            width = max(width, c + 1)
            flags = TOKENS.get(ch)
            if flags is None:
                continue
            floor.append((r, c))
            if flags & PLAYER:
                if player is not None:
                    raise MazeError("Too Many Players")
                player = (r, c)
            if flags & GOAL:
                goals.add((r, c))
            if flags & BOX:
                boxes.add((r, c))

    if player is None:
        raise MazeError("No Player")
    if not boxes:
        raise MazeError("No Box")
    if len(boxes) > len(goals):
        raise MazeError("Too Few Goals")

    bits = floor_bits(len(floor))
    needed = bits * (len(boxes) + 1)
    if needed > state_bits:
        raise MazeError(f"Maze Too Large: state needs {needed} bits, only {state_bits} available")

    height = len(lines)
    index = [[-1] * width for _ in range(height)]
    for i, (r, c) in enumerate(floor):
        index[r][c] = i

    return MazeLayout(
        height=height,
        width=width,
        floor_index=tuple(tuple(row) for row in index),
        floor_count=len(floor),
        floor_bits=bits,
        state_bits=state_bits,
        goals=frozenset(goals),
        boxes=tuple(sorted(boxes)),
        player=player,
    )


def parse_maze_file(path: str, state_bits: int = STATE_BITS) -> MazeLayout:
    with open(path, "r", encoding="utf-8") as f:
        return parse_maze_str(f.read(), state_bits)
