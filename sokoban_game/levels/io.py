from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple
import os

from ..maze import MazeError, STATE_BITS, parse_maze_str
from .resolve import split_on_blank_lines


@dataclass
class LevelRef:
    path: str
    index: int  # index of the maze inside the file

    @property
    def level_id(self) -> str:
        return f"{self.path}#{self.index}"


def iterate_level_strings(root_dir: str, rel_dirs: List[str]) -> Iterator[Tuple[LevelRef, str]]:
    """Iterate over all .txt in the given subfolders and return (level reference, maze string)."""
    for rel in rel_dirs:
        abs_dir = os.path.join(root_dir, rel)
        if not os.path.isdir(abs_dir):
            continue
        for fname in sorted(os.listdir(abs_dir)):
            if not fname.endswith(".txt"):
                continue
            fpath = os.path.join(abs_dir, fname)
            with open(fpath, "r", encoding="utf-8") as f:
                content = f.read()
            for i, block in enumerate(split_on_blank_lines(content)):
                yield LevelRef(path=fpath, index=i), block


def check_level(maze: str, state_bits: int = STATE_BITS) -> Optional[str]:
    """None if the maze parses, otherwise the reason it does not."""
    try:
        parse_maze_str(maze, state_bits)
    except MazeError as err:
        return str(err)
    return None
