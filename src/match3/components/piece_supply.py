from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from match3.errors import ExhaustedSupply


@dataclass(slots=True)
class PieceSupply:
    """External piece source attached to the board entity.

    Wraps any iterable of piece values; construction and refill both draw from it.
    """
    source: Iterable[Any]
    drawn: int = 0
    _iterator: Iterator[Any] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._iterator = iter(self.source)

    def draw(self) -> Any:
        try:
            value = next(self._iterator)
        except StopIteration as exc:
            raise ExhaustedSupply(f"Piece generator exhausted after {self.drawn} piece(s)") from exc
        self.drawn += 1
        return value
