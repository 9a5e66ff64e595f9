from match3.events.bus import EventBus


def test_event_bus_emit_subscribe():
    bus = EventBus()
    received = {}

    def handler(sender, **kwargs):
        received.update(kwargs)

    bus.subscribe("test", handler)
    bus.emit("test", value=42, msg="hello")

    assert received["value"] == 42
    assert received["msg"] == "hello"


def test_event_bus_unsubscribe_stops_delivery():
    bus = EventBus()
    calls = []

    def handler(sender, **kwargs):
        calls.append(kwargs)

    bus.subscribe("test", handler)
    bus.unsubscribe("test", handler)
    bus.emit("test", value=1)
    # Unknown names are ignored.
    bus.emit("nobody_listens", value=2)

    assert calls == []


def test_swap_events_cover_request_to_finalize():
    from match3.events import bus as bus_module

    swap_events = sorted(
        value for name, value in vars(bus_module).items() if name.startswith("EVENT_TILE_SWAP_")
    )
    assert swap_events == [
        "tile_swap_finalize",
        "tile_swap_invalid",
        "tile_swap_request",
        "tile_swap_valid",
    ]
