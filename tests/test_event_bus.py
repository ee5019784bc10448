"""EventBus and EventEmitter: delivery order, once, error isolation, re-entrancy."""
import logging

from sceneinspector.core.event_bus import EventBus
from sceneinspector.core.events import EventEmitter


def test_emit_calls_subscribers_in_order():
    """Callbacks receive (topic, data) in subscription order."""
    bus = EventBus()
    seen = []
    bus.subscribe("t", lambda name, data: seen.append(("a", name, data)))
    bus.on("t", lambda name, data: seen.append(("b", name, data)))
    bus.emit("t", 42)
    assert seen == [("a", "t", 42), ("b", "t", 42)]


def test_unsubscribe_removes_single_occurrence():
    bus = EventBus()
    seen = []

    def cb(name, data):
        seen.append(data)

    bus.subscribe("t", cb)
    bus.subscribe("t", cb)
    bus.unsubscribe("t", cb)
    bus.emit("t", 1)
    assert seen == [1]
    bus.off("t", cb)
    bus.off("t", cb)
    assert bus.handler_count("t") == 0


def test_once_fires_only_once():
    bus = EventBus()
    seen = []
    bus.once("t", lambda name, data: seen.append(data))
    bus.emit("t", 1)
    bus.emit("t", 2)
    assert seen == [1]


def test_failing_callback_is_logged_and_others_still_run(caplog):
    """A raising subscriber does not prevent delivery to the next one."""
    bus = EventBus()
    seen = []

    def boom(name, data):
        raise RuntimeError("boom")

    bus.subscribe("t", boom)
    bus.subscribe("t", lambda name, data: seen.append(data))
    with caplog.at_level(logging.ERROR, logger="sceneinspector"):
        bus.emit("t", "x")
    assert seen == ["x"]
    assert "EventBus callback error [t]" in caplog.text


def test_subscribe_during_emit_takes_effect_next_time():
    bus = EventBus()
    seen = []

    def late(name, data):
        seen.append(("late", data))

    def first(name, data):
        seen.append(("first", data))
        bus.subscribe("t", late)

    bus.subscribe("t", first)
    bus.emit("t", 1)
    assert seen == [("first", 1)]


def test_emitter_passes_keyword_payload():
    em = EventEmitter()
    seen = []
    em.on("loaded", lambda **kw: seen.append(kw))
    em.emit("loaded", target="scene")
    assert seen == [{"target": "scene"}]


def test_emitter_once_and_off_all():
    em = EventEmitter()
    seen = []
    em.once("e", lambda **kw: seen.append("once"))
    em.on("e", lambda **kw: seen.append("always"))
    em.emit("e")
    em.emit("e")
    assert seen == ["once", "always", "always"]
    em.off("e")
    assert em.listener_count("e") == 0
    em.off("missing")
