import logging

from esper import World

from match3.events.bus import (EventBus, EVENT_TILE_SWAP_FINALIZE, EVENT_MATCH_FOUND,
                               EVENT_MATCH_CLEARED, EVENT_GRAVITY_APPLIED, EVENT_REFILL_COMPLETED,
                               EVENT_CASCADE_STEP, EVENT_CASCADE_COMPLETE)
from match3.systems.board_ops import (apply_gravity_moves, clear_positions, compute_gravity_moves,
                                      find_all_matches, get_grid, get_supply, refill_empty_slots)

logger = logging.getLogger(__name__)


class MatchResolutionSystem:
    """Runs the detect, clear, gravity and refill cycle after a committed swap.

    The whole cascade runs synchronously inside the swap-finalize handler. Each
    pass clears every match found by one full-board scan before gravity and
    refill run once, then the board is scanned again until nothing matches.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_SWAP_FINALIZE, self.on_swap_finalize)
        self.cascade_depth = 0

    def on_swap_finalize(self, sender, **kwargs):
        self.resolve()

    def resolve(self) -> int:
        """Cascade until stable; returns the number of passes that cleared something."""
        self.cascade_depth = 0
        while self._resolve_pass():
            pass
        logger.debug("Cascade complete after %d pass(es)", self.cascade_depth)
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=self.cascade_depth)
        return self.cascade_depth

    def _resolve_pass(self) -> bool:
        grid = get_grid(self.world)
        matches = find_all_matches(grid)
        if not matches:
            return False
        self.cascade_depth += 1
        depth = self.cascade_depth
        flat_positions = sorted({pos for match in matches for pos in match.positions})
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=depth, positions=flat_positions)
        for match in matches:
            self.event_bus.emit(EVENT_MATCH_FOUND, match=match, depth=depth)

        cleared = clear_positions(grid, flat_positions)
        self.event_bus.emit(EVENT_MATCH_CLEARED, positions=cleared, depth=depth)

        moves = compute_gravity_moves(grid)
        apply_gravity_moves(grid, moves)
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=moves, depth=depth)

        # Slots filled before the supply runs dry keep their new pieces.
        new_tiles = refill_empty_slots(grid, get_supply(self.world))
        logger.debug(
            "Cascade pass %d: %d match(es), %d cleared, %d fell, %d refilled",
            depth, len(matches), len(cleared), len(moves), len(new_tiles),
        )
        if new_tiles:
            self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=new_tiles, depth=depth)
        return True
