from __future__ import annotations

import random
from typing import Iterable, Iterator, Sequence

from match3.board import MatchBoard
from match3.components.grid import Grid


def _split(layout: Sequence[str]) -> list[list[str]]:
    # "A D D" and "ADD" both describe the row ['A', 'D', 'D'].
    return [row.split() if " " in row else list(row) for row in layout]


def grid_from(*layout: str) -> Grid:
    """Build a bare grid from one string per row."""
    return Grid.from_rows(_split(layout))


def board_from(*layout: str, refill: Iterable[str] = ()) -> MatchBoard:
    """Build a board with a fixed layout and a scripted refill queue."""
    return MatchBoard.from_rows(_split(layout), iter(refill))


def random_pieces(seed: int, kinds: str = "ABCDEFG") -> Iterator[str]:
    rng = random.Random(seed)
    while True:
        yield rng.choice(kinds)
