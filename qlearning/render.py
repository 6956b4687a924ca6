from __future__ import annotations
from typing import List, Sequence

from sokoban_game.cells import DIRECTION_NAMES, DIRECTIONS
from sokoban_game.render import state_to_hex
from .qtable import QTable
from .trainer import TrainResult

COLUMNS = [DIRECTION_NAMES[d] for d in DIRECTIONS]


def _state_width(state_bits: int) -> int:
    # "0x" + one char per nibble
    return 2 + (state_bits + 3) // 4


def format_q_header(state_bits: int, column_width: int = 12) -> str:
    return "State".rjust(_state_width(state_bits)) + "".join(name.rjust(column_width) for name in COLUMNS)


def format_q_row(state: int, row: Sequence[float], state_bits: int, precision: int = 4, column_width: int = 12) -> str:
    label = ("0x" + state_to_hex(state, state_bits)).rjust(_state_width(state_bits))
    return label + "".join(f"{float(v):{column_width}.{precision}f}" for v in row)


def format_q_table(q: QTable, state_bits: int, precision: int = 4, column_width: int = 12) -> str:
    lines: List[str] = [format_q_header(state_bits, column_width)]
    for state, row in q.items():
        lines.append(format_q_row(state, row, state_bits, precision, column_width))
    return "\n".join(lines)


def format_train_result(result: TrainResult, state_bits: int, precision: int = 4, column_width: int = 12) -> str:
    if result.restarted:
        head = "Restarted"
    else:
        head = f"Action: {DIRECTION_NAMES.get(result.action, '?')}  Reward: {result.reward:.{precision}f}"
    return "\n".join([
        head,
        format_q_header(state_bits, column_width),
        format_q_row(result.state, result.before, state_bits, precision, column_width),
        format_q_row(result.state, result.after, state_bits, precision, column_width),
    ])
