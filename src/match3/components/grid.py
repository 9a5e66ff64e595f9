from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Sequence

from match3.components.position import Position, as_position
from match3.errors import BoardShapeError


class _Empty:
    """Marker for a slot that holds no piece."""

    _instance: _Empty | None = None

    def __new__(cls) -> _Empty:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY"

    def __bool__(self) -> bool:
        return False


EMPTY = _Empty()


@dataclass(slots=True)
class Grid:
    """Rectangular array of piece slots stored on the board entity.

    cells[row][col] holds either a piece value or EMPTY. Row 0 is the top of the
    board; gravity pulls pieces toward row ``height - 1``. The outer and inner
    lists keep their lengths for the lifetime of the grid.
    """
    cells: List[List[Any]]
    width: int
    height: int

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Any]]) -> Grid:
        cells = [list(row) for row in rows]
        if not cells:
            raise BoardShapeError("Board needs at least one row")
        width = len(cells[0])
        if width == 0:
            raise BoardShapeError("Board rows must not be empty")
        for index, row in enumerate(cells):
            if len(row) != width:
                raise BoardShapeError(
                    f"Row {index} has {len(row)} slots, expected {width}"
                )
        return cls(cells=cells, width=width, height=len(cells))

    def is_outside(self, p: Position) -> bool:
        row, col = as_position(p)
        return col < 0 or col >= self.width or row < 0 or row >= self.height

    def piece(self, p: Position) -> Any:
        if self.is_outside(p):
            return EMPTY
        return self.cells[p[0]][p[1]]

    def is_empty(self, p: Position) -> bool:
        return self.piece(p) is EMPTY

    def set_piece(self, p: Position, value: Any) -> None:
        if self.is_outside(p):
            return
        self.cells[p[0]][p[1]] = value

    def swap(self, a: Position, b: Position) -> None:
        first = self.piece(a)
        second = self.piece(b)
        self.set_piece(a, second)
        self.set_piece(b, first)

    def positions(self) -> Iterator[Position]:
        for row in range(self.height):
            for col in range(self.width):
                yield Position(row, col)

    def row_positions(self, row: int) -> List[Position]:
        return [Position(row, col) for col in range(self.width)]

    def column_positions(self, col: int) -> List[Position]:
        return [Position(row, col) for row in range(self.height)]

    def empty_positions(self) -> List[Position]:
        return [pos for pos in self.positions() if self.cells[pos.row][pos.col] is EMPTY]

    def snapshot(self) -> List[List[Any]]:
        return [list(row) for row in self.cells]
