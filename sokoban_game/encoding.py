from typing import Iterable, Sequence

from .cells import Pos


def floor_bits(floor_count: int) -> int:
    """Bits needed for one floor index field (0 when there is a single floor cell)."""
    return max(floor_count - 1, 0).bit_length()


def encode_state(floor_index: Sequence[Sequence[int]], bits: int, player: Pos, boxes: Iterable[Pos]) -> int:
    """Packs the player and the boxes into one integer key.

    The player's floor index is the lowest field, boxes follow in sorted
    position order, each field `bits` wide. Identical player/box placements
    give identical keys whatever the order of `boxes`.
    """
    key = floor_index[player[0]][player[1]]
    for offset, (r, c) in enumerate(sorted(boxes), start=1):
        key |= floor_index[r][c] << (bits * offset)
    return key
