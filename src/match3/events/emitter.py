from __future__ import annotations

from typing import Callable, List

from match3.components.effect import Effect, MatchEffect, RefillEffect
from match3.events.bus import EventBus, EVENT_MATCH_FOUND, EVENT_REFILL_COMPLETED

BoardObserver = Callable[[Effect], None]


class EffectEmitter:
    """Turns cascade bus events into Effect records for registered observers.

    Observers are plain callables taking one Effect. They are called synchronously
    in registration order; one added mid-cascade only sees effects emitted after it
    was added.
    """

    def __init__(self, event_bus: EventBus):
        self.event_bus = event_bus
        self.observers: List[BoardObserver] = []
        self.emitted: List[Effect] = []
        self.event_bus.subscribe(EVENT_MATCH_FOUND, self.on_match_found)
        self.event_bus.subscribe(EVENT_REFILL_COMPLETED, self.on_refill_completed)

    def subscribe(self, observer: BoardObserver) -> None:
        if not callable(observer):
            raise TypeError(f"Observer must be callable, got {observer!r}")
        self.observers.append(observer)

    def unsubscribe(self, observer: BoardObserver) -> None:
        self.observers.remove(observer)

    def reset(self) -> None:
        self.emitted = []

    def on_match_found(self, sender, **kwargs):
        self.publish(MatchEffect(match=kwargs["match"]))

    def on_refill_completed(self, sender, **kwargs):
        new_tiles = kwargs.get("new_tiles") or []
        if not new_tiles:
            return
        self.publish(RefillEffect(positions=tuple(new_tiles)))

    def publish(self, effect: Effect) -> None:
        self.emitted.append(effect)
        # Snapshot so observers added during delivery wait for the next effect.
        for observer in list(self.observers):
            observer(effect)
