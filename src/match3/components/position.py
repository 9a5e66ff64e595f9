from __future__ import annotations

from typing import Any, NamedTuple


class Position(NamedTuple):
    """Zero-based (row, col) coordinate of a board slot."""

    row: int
    col: int

    def offset(self, delta: Position) -> Position:
        return Position(self.row + delta.row, self.col + delta.col)


def as_position(value: Any) -> Position:
    """Coerce a ``Position`` or ``(row, col)`` pair, failing fast on anything else."""

    if isinstance(value, Position):
        row, col = value
    else:
        try:
            row, col = value
        except (TypeError, ValueError) as exc:
            raise TypeError(f"Expected a (row, col) pair, got {value!r}") from exc
    for coord in (row, col):
        if isinstance(coord, bool) or not isinstance(coord, int):
            raise TypeError(f"Position coordinates must be ints, got {value!r}")
    return Position(row, col)
