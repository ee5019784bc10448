"""One-shot waits: resolution, predicates, cancellation, timeout."""
from concurrent.futures import CancelledError

import pytest

from sceneinspector.core.deferred import OneShot, wait_for
from sceneinspector.core.events import EventEmitter
from sceneinspector.core.exceptions import WaitTimeoutError


def test_resolves_with_event_payload_and_detaches():
    em = EventEmitter()
    shot = OneShot(em, "loaded")
    assert not shot.done
    em.emit("loaded", target="x")
    assert shot.future.result(timeout=0) == {"target": "x"}
    assert em.listener_count("loaded") == 0


def test_fires_at_most_once():
    em = EventEmitter()
    calls = []
    wait_for(em, "loaded", calls.append)
    em.emit("loaded", n=1)
    em.emit("loaded", n=2)
    assert calls == [{"n": 1}]


def test_predicate_keeps_wait_armed():
    """Non-matching events are ignored; the first matching one resolves the wait."""
    em = EventEmitter()
    shot = OneShot(em, "componentinitialized", predicate=lambda p: p.get("name") == "camera")
    em.emit("componentinitialized", name="position")
    assert not shot.done
    em.emit("componentinitialized", name="camera")
    assert shot.future.result(timeout=0)["name"] == "camera"


def test_then_runs_immediately_when_already_resolved():
    em = EventEmitter()
    shot = OneShot(em, "e")
    em.emit("e", v=3)
    seen = []
    shot.then(seen.append)
    assert seen == [{"v": 3}]


def test_cancel_prevents_callback():
    em = EventEmitter()
    calls = []
    shot = OneShot(em, "e").then(calls.append)
    assert shot.cancel() is True
    em.emit("e")
    assert calls == []
    assert em.listener_count("e") == 0
    with pytest.raises(CancelledError):
        shot.future.result(timeout=0)
    assert shot.cancel() is False


def test_timeout_fails_future():
    """An expired wait fails with WaitTimeoutError and ignores later events."""
    em = EventEmitter()
    calls = []
    shot = OneShot(em, "camera-set-active", timeout=0.05, description="an active camera").then(calls.append)
    with pytest.raises(WaitTimeoutError, match="an active camera"):
        shot.future.result(timeout=5)
    assert em.listener_count("camera-set-active") == 0
    em.emit("camera-set-active", camera_el=None)
    assert calls == []
