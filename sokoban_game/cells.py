from typing import Dict, Iterable, Tuple

__all__ = [
    "Pos",
    "WALL", "FLOOR", "GOAL", "BOX", "PLAYER",
    "NO_DIRECTION", "UP", "LEFT", "RIGHT", "DOWN",
    "DIRECTIONS", "DIRECTION_NAMES", "MOVEMENT",
    "bit",
    "iter_bits",
    "direction_slot",
]

Pos = Tuple[int, int]

# Cell flags
WALL = 0b0000
FLOOR = 0b0001
GOAL = 0b0010
BOX = 0b0100
PLAYER = 0b1000

# Direction bits, low bit first is the enumeration order
NO_DIRECTION = 0b0000
UP = 0b0001
LEFT = 0b0010
RIGHT = 0b0100
DOWN = 0b1000

DIRECTIONS: Tuple[int, ...] = (UP, LEFT, RIGHT, DOWN)

DIRECTION_NAMES: Dict[int, str] = {
    NO_DIRECTION: "None",
    UP: "Up",
    LEFT: "Left",
    RIGHT: "Right",
    DOWN: "Down",
}

MOVEMENT: Dict[int, Pos] = {
    UP: (-1, 0),
    LEFT: (0, -1),
    RIGHT: (0, 1),
    DOWN: (1, 0),
}


def bit(idx: int) -> int:
    return 1 << idx


def iter_bits(mask: int) -> Iterable[int]:
    """Iterates over the indices of set bits, lowest first."""
    idx = 0
    m = mask
    while m:
        if m & 1:
            yield idx
        m >>= 1
        idx += 1


def direction_slot(direction: int) -> int:
    """Q-row slot of a single direction (Up 0, Left 1, Right 2, Down 3), -1 otherwise."""
    if direction not in MOVEMENT:
        return -1
    return direction.bit_length() - 1
