from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Tuple, Union

from match3.components.position import Position


@dataclass(frozen=True, slots=True)
class Match:
    """A maximal line of three or more equal pieces in one row or column."""
    piece: Any
    positions: Tuple[Position, ...]

    def __len__(self) -> int:
        return len(self.positions)


@dataclass(frozen=True, slots=True)
class MatchEffect:
    """A run was found and is about to be cleared."""
    match: Match
    kind: str = field(default="Match", init=False)


@dataclass(frozen=True, slots=True)
class RefillEffect:
    """One or more empty slots were filled during a cascade pass."""
    positions: Tuple[Position, ...] = ()
    kind: str = field(default="Refill", init=False)


Effect = Union[MatchEffect, RefillEffect]
