import gc

from spice_pos.core.bus import EventBus


class Listener:
    def __init__(self):
        self.calls = []

    def on_event(self, *args):
        self.calls.append(args)


def test_emit_passes_arguments():
    bus = EventBus()
    seen = []
    bus.subscribe("orders_changed", lambda table_id: seen.append(table_id))

    bus.emit("orders_changed", 3)
    bus.emit("other", 4)

    assert seen == [3]


def test_bound_methods_are_weak():
    bus = EventBus()
    listener = Listener()
    bus.subscribe("notify", listener.on_event)
    bus.emit("notify", "hi", "info")
    assert listener.calls == [("hi", "info")]

    del listener
    gc.collect()
    bus.emit("notify", "gone", "info")
    assert bus._subs["notify"] == []


def test_unsubscribe_bound_method():
    bus = EventBus()
    listener = Listener()
    bus.subscribe("notify", listener.on_event)
    bus.unsubscribe("notify", listener.on_event)
    bus.emit("notify", "x")
    assert listener.calls == []


def test_listener_added_during_emit_is_kept():
    bus = EventBus()
    late = []

    def first(_):
        bus.subscribe("evt", late.append)

    bus.subscribe("evt", first)
    bus.emit("evt", 1)
    assert late == []

    bus.emit("evt", 2)
    assert late == [2]


def test_clear_drops_everything():
    bus = EventBus()
    seen = []
    bus.subscribe("evt", seen.append)
    bus.clear()
    bus.emit("evt", 1)
    assert seen == []
