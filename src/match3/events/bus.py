from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SWAP FLOW
# ============================================================================
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=Position, dst=Position
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=Position, dst=Position
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=Position, dst=Position
EVENT_TILE_SWAP_FINALIZE = "tile_swap_finalize"    # payload: src=Position, dst=Position


# ============================================================================
# CASCADE RESOLUTION
# ============================================================================
EVENT_MATCH_FOUND = "match_found"                  # payload: match=Match, depth=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[Position,...], depth=int
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[GravityMove,...], depth=int
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[Position,...], depth=int
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[Position,...]
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int
