from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from esper import World

from match3.components.grid import EMPTY, Grid
from match3.components.piece_supply import PieceSupply
from match3.components.position import Position
from match3.constants import DEFAULT_BUILD_ATTEMPTS
from match3.errors import BoardShapeError
from match3.events.bus import EventBus, EVENT_TILE_SWAP_VALID, EVENT_TILE_SWAP_FINALIZE
from match3.systems.board_ops import fill_board, get_grid

logger = logging.getLogger(__name__)


def _check_dimension(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise BoardShapeError(f"Board {name} must be an int, got {value!r}")
    if value <= 0:
        raise BoardShapeError(f"Board {name} must be positive, got {value}")
    return value


class BoardSystem:
    """Owns the board entity and commits validated swaps to its grid."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        supply: PieceSupply,
        *,
        width: int | None = None,
        height: int | None = None,
        rows: Iterable[Sequence[Any]] | None = None,
        max_attempts: int = DEFAULT_BUILD_ATTEMPTS,
    ):
        self.world = world
        self.event_bus = event_bus
        if rows is not None:
            grid = Grid.from_rows(rows)
        else:
            grid = self._init_grid(supply, width, height, max_attempts)
        self.board_entity = self.world.create_entity(grid, supply)
        self.event_bus.subscribe(EVENT_TILE_SWAP_VALID, self.on_swap_valid)

    @staticmethod
    def _init_grid(supply: PieceSupply, width: Any, height: Any, max_attempts: int) -> Grid:
        width = _check_dimension("width", width)
        height = _check_dimension("height", height)
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        grid = Grid(cells=[[EMPTY] * width for _ in range(height)], width=width, height=height)
        fill_board(grid, supply, max_attempts=max_attempts)
        logger.debug("Filled %dx%d board with %d draw(s)", width, height, supply.drawn)
        return grid

    @property
    def grid(self) -> Grid:
        return get_grid(self.world)

    def swap_tiles(self, a: Position, b: Position) -> None:
        self.grid.swap(a, b)

    def on_swap_valid(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if src is None or dst is None:
            return
        self.swap_tiles(src, dst)
        self.event_bus.emit(EVENT_TILE_SWAP_FINALIZE, src=src, dst=dst)
