from esper import World

from match3.components.position import Position
from match3.events.bus import EventBus, EVENT_TILE_SWAP_REQUEST, EVENT_TILE_SWAP_VALID, EVENT_TILE_SWAP_INVALID
from match3.systems.board_ops import get_grid, predict_swap_creates_match


class MatchSystem:
    """Validates swap requests against the current grid."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if src is None or dst is None:
            return
        if self.can_move(src, dst):
            self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)
        else:
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst)

    def can_move(self, a: Position, b: Position) -> bool:
        # Bounds, adjacency and a virtual swap; the grid is restored before returning.
        return predict_swap_creates_match(get_grid(self.world), a, b)
