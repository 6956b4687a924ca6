from __future__ import annotations
from typing import Dict, TYPE_CHECKING

from .cells import WALL, FLOOR, GOAL, BOX, PLAYER

if TYPE_CHECKING:
    from .game import Game

SYMBOLS: Dict[int, str] = {
    WALL: "#",
    FLOOR: ".",
    FLOOR | GOAL: "$",
    FLOOR | BOX: "&",
    FLOOR | GOAL | BOX: "@",
    FLOOR | PLAYER: "*",
    FLOOR | GOAL | PLAYER: "+",
}

EMOJI: Dict[str, str] = {
    "*": "\U0001f643",
    "+": "\U0001f643",
    "&": "\U0001f4e6",
    "@": "\U0001f4e6",
    "$": "⭕",
    ".": "⬛",
    "#": "⬜",
}


def render_ascii(game: Game) -> str:
    """Board in the maze input symbols, one line per row."""
    return "\n".join("".join(SYMBOLS[flags] for flags in row) for row in game.cells)


def render_emoji(maze: str) -> str:
    """Replaces the maze symbols of an ASCII board with emoji; other characters pass through."""
    return "".join(EMOJI.get(ch, ch) for ch in maze)


def state_to_hex(state: int, bits: int) -> str:
    """Lowercase hex of an encoded state, zero padded to whole nibbles of `bits`."""
    nibbles = max(1, (bits + 3) // 4)
    return format(state, f"0{nibbles}x")
