from __future__ import annotations
from typing import Dict, Iterator, Sequence, Tuple

import numpy as np

from sokoban_game.cells import direction_slot

N_ACTIONS = 4


class QTable:
    """Sparse Q-table: encoded state -> row of 4 action values (Up, Left, Right, Down).

    Unseen states read as zeros; a row is only stored on the first write.
    """
    def __init__(self) -> None:
        self._rows: Dict[int, np.ndarray] = {}

    def get(self, state: int, action: int) -> float:
        slot = direction_slot(action)
        row = self._rows.get(state)
        if row is None or slot < 0:
            return 0.0
        return float(row[slot])

    def row(self, state: int) -> np.ndarray:
        row = self._rows.get(state)
        if row is None:
            return np.zeros(N_ACTIONS, dtype=np.float64)
        return row.copy()

    def set(self, state: int, action: int, value: float) -> None:
        slot = direction_slot(action)
        if slot < 0:
            return
        row = self._rows.get(state)
        if row is None:
            row = np.zeros(N_ACTIONS, dtype=np.float64)
            self._rows[state] = row
        row[slot] = value

    def set_row(self, state: int, values: Sequence[float]) -> None:
        row = np.asarray(values, dtype=np.float64).reshape(N_ACTIONS).copy()
        self._rows[state] = row

    def __len__(self) -> int:
        return len(self._rows)

    def items(self) -> Iterator[Tuple[int, np.ndarray]]:
        for state, row in self._rows.items():
            yield state, row.copy()
