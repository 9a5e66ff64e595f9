"""Public entry point of the board engine.

``create_board`` builds a board from a piece generator; ``MatchBoard`` wires the
esper world, the event bus and the board systems together and exposes the
operations a host needs: read access, move validation, moves and observers.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Sequence, Tuple

from esper import World

from match3.components.effect import Effect
from match3.components.grid import Grid
from match3.components.piece_supply import PieceSupply
from match3.components.position import Position, as_position
from match3.constants import DEFAULT_BUILD_ATTEMPTS
from match3.events.bus import EventBus, EVENT_TILE_SWAP_REQUEST, EVENT_TILE_SWAP_VALID, EVENT_CASCADE_COMPLETE
from match3.events.emitter import BoardObserver, EffectEmitter
from match3.systems.board import BoardSystem
from match3.systems.board_ops import find_all_matches, find_valid_swaps, get_grid, is_stable
from match3.systems.match import MatchSystem
from match3.systems.match_resolution import MatchResolutionSystem
from match3.world import create_world


@dataclass(frozen=True, slots=True)
class MoveResult:
    accepted: bool
    effects: Tuple[Effect, ...] = ()
    passes: int = 0

    def __bool__(self) -> bool:
        return self.accepted


class MatchBoard:
    def __init__(
        self,
        generator: Iterable[Any],
        *,
        width: int | None = None,
        height: int | None = None,
        rows: Iterable[Sequence[Any]] | None = None,
        max_attempts: int = DEFAULT_BUILD_ATTEMPTS,
    ):
        self.event_bus = EventBus()
        self.world: World = create_world(self.event_bus)
        self.board_system = BoardSystem(
            self.world,
            self.event_bus,
            PieceSupply(generator),
            width=width,
            height=height,
            rows=rows,
            max_attempts=max_attempts,
        )
        self.match_system = MatchSystem(self.world, self.event_bus)
        self.match_resolution_system = MatchResolutionSystem(self.world, self.event_bus)
        self._accepted = False
        self._passes = 0
        self.event_bus.subscribe(EVENT_TILE_SWAP_VALID, self._on_swap_valid)
        self.event_bus.subscribe(EVENT_CASCADE_COMPLETE, self._on_cascade_complete)

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Any]], generator: Iterable[Any] = ()) -> MatchBoard:
        """Build a board from an explicit layout; only the shape is validated."""
        return cls(generator, rows=rows)

    @property
    def grid(self) -> Grid:
        """Live grid component shared with the board systems.

        Engine internal: writing to it bypasses validation and the cascade.
        Hosts read the board through ``rows``, ``piece`` and ``positions``.
        """
        return get_grid(self.world)

    @property
    def effect_emitter(self) -> EffectEmitter:
        return self.world.effect_emitter

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def rows(self) -> List[List[Any]]:
        return self.grid.snapshot()

    def piece(self, p: Position) -> Any:
        return self.grid.piece(p)

    def is_outside(self, p: Position) -> bool:
        return self.grid.is_outside(p)

    def positions(self) -> Iterator[Position]:
        return self.grid.positions()

    def matches(self):
        return find_all_matches(self.grid)

    def is_stable(self) -> bool:
        return is_stable(self.grid)

    def valid_moves(self) -> List[Tuple[Position, Position]]:
        return find_valid_swaps(self.grid)

    def subscribe(self, observer: BoardObserver) -> None:
        self.effect_emitter.subscribe(observer)

    def unsubscribe(self, observer: BoardObserver) -> None:
        self.effect_emitter.unsubscribe(observer)

    def can_move(self, first: Position, second: Position) -> bool:
        return self.match_system.can_move(as_position(first), as_position(second))

    def move(self, first: Position, second: Position) -> MoveResult:
        """Swap two pieces and resolve the cascade; a rejected swap changes nothing.

        Raises ExhaustedSupply if the generator runs dry during a refill.
        """
        first = as_position(first)
        second = as_position(second)
        self._accepted = False
        self._passes = 0
        self.effect_emitter.reset()
        self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=first, dst=second)
        if not self._accepted:
            return MoveResult(accepted=False)
        return MoveResult(accepted=True, effects=tuple(self.effect_emitter.emitted), passes=self._passes)

    def _on_swap_valid(self, sender, **kwargs):
        self._accepted = True

    def _on_cascade_complete(self, sender, **kwargs):
        self._passes = kwargs.get('depth', 0)

    def __repr__(self) -> str:
        return f"MatchBoard(width={self.width}, height={self.height})"


def create_board(
    generator: Iterable[Any],
    width: int,
    height: int,
    *,
    max_attempts: int = DEFAULT_BUILD_ATTEMPTS,
) -> MatchBoard:
    """Fill a width x height board row-major from generator.

    A piece that would complete a run with the two slots to its left or the two
    above it is discarded and redrawn, at most max_attempts draws per slot,
    before InitialMatchError is raised.
    """
    return MatchBoard(generator, width=width, height=height, max_attempts=max_attempts)
