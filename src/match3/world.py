from esper import World

from match3.events.bus import EventBus
from match3.events.emitter import EffectEmitter


def create_world(event_bus: EventBus) -> World:
    """Create an empty board world and attach the effect emitter to the bus."""
    world = World()
    setattr(world, "effect_emitter", EffectEmitter(event_bus))
    return world
