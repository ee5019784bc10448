"""
Pytest configuration and shared fixtures.

Headless Qt on Linux: set QT_QPA_PLATFORM=offscreen so the Qt bridge tests
run in CI without a display.
"""
import os
import sys

# Must set before any PySide6/Qt import
if sys.platform.startswith("linux"):
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from sceneinspector.application.controller import Inspector
from sceneinspector.config import get_config, reset_config
from sceneinspector.core.event_bus import EventBus
from sceneinspector.host.document import Document


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Every test starts from the packaged defaults."""
    monkeypatch.delenv("SCENEINSPECTOR_CONFIG", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config():
    return get_config()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def recorder(bus):
    """Record (topic, data) for every bus topic the inspector publishes."""
    from sceneinspector.core.config import TOPICS

    events = []
    for topic in TOPICS:
        bus.subscribe(topic, lambda name, data: events.append((name, data)))
    return events


def _entity(document, tag="a-entity", **attributes):
    el = document.create_element(tag)
    for name, value in attributes.items():
        el.set_attribute(name, value)
    return el


@pytest.fixture
def make_entity():
    return _entity


@pytest.fixture
def document():
    return Document()


@pytest.fixture
def scene_with_lights(document):
    """
    Scene with a user camera, a point light, a box and a nested spot light.
    Returns (scene, entities by name); the scene is not loaded yet.
    """
    scene = document.create_scene()
    els = {
        "camera": _entity(document, camera={"active": True}, position="0 1.6 0"),
        "point": _entity(document, light="type: point; intensity: 2"),
        "box": _entity(document, geometry="primitive: box; width: 2; height: 1; depth: 1", position="1 0 0"),
        "group": _entity(document),
        "spot": _entity(document, light="type: spot"),
    }
    for name in ("camera", "point", "box", "group"):
        scene.append_child(els[name])
    els["group"].append_child(els["spot"])
    return scene, els


@pytest.fixture
def started(document, scene_with_lights, bus, config):
    """Inspector started on a ready document with a loaded scene. Returns (inspector, scene, entities)."""
    scene, els = scene_with_lights
    scene.load()
    document.finish_loading()
    inspector = Inspector(document, event_bus=bus, config=config)
    inspector.start()
    yield inspector, scene, els
    inspector.destroy()
