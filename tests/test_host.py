"""Host model: component parsing, entity attach order, scene default camera, active camera."""
import pytest

from sceneinspector.host.document import DEFAULT_CAMERA_ATTR, Document
from sceneinspector.host.entity import Entity, parse_properties, parse_vec3
from sceneinspector.host.graph import ObjectType


def test_parse_properties():
    assert parse_properties("type: point; intensity: 2; castShadow: true") == {
        "type": "point", "intensity": 2.0, "castShadow": True,
    }
    assert parse_properties(" box ") == "box"
    assert parse_properties({"a": 1}) == {"a": 1}


@pytest.mark.parametrize("value", ["1 2 3", (1, 2, 3), {"x": 1, "y": 2, "z": 3}])
def test_parse_vec3(value):
    v = parse_vec3(value)
    assert (v.x(), v.y(), v.z()) == (1.0, 2.0, 3.0)


def test_entity_initializes_components_on_attach(make_entity):
    doc = Document()
    scene = doc.create_scene()
    el = make_entity(doc, light="type: spot", position="0 1 0")
    events = []
    el.on("componentinitialized", lambda name, target: events.append(name))
    el.on("loaded", lambda target: events.append("loaded"))
    scene.append_child(el)
    assert events == []
    scene.load()
    assert events == ["light", "position", "loaded"]
    assert el.get_object3d("light").type is ObjectType.SPOT_LIGHT
    assert el.object3d.position.y() == 1.0


def test_scene_injects_default_camera_when_none_declared():
    doc = Document()
    scene = doc.create_scene()
    scene.load()
    assert scene.camera is not None
    assert scene.camera.el.has_attribute(DEFAULT_CAMERA_ATTR)


def test_default_camera_dropped_when_another_camera_activates(make_entity):
    doc = Document()
    scene = doc.create_scene()
    scene.load()
    default_el = scene.camera.el
    detached = []
    doc.on("child-detached", lambda el: detached.append(el))
    user_cam = make_entity(doc, camera={"active": True})
    scene.append_child(user_cam)
    assert scene.camera is user_cam.get_object3d("camera")
    assert default_el not in scene.children
    assert detached == [default_el]


def test_removing_active_camera_clears_it(make_entity):
    doc = Document()
    scene = doc.create_scene()
    cam = make_entity(doc, camera={"active": True})
    scene.append_child(cam)
    scene.load()
    scene.remove_child(cam)
    assert scene.camera is None
    assert cam.scene is None


def test_document_ready_and_keydown():
    doc = Document()
    loaded, keys = [], []
    doc.on("DOMContentLoaded", lambda: loaded.append(True))
    doc.on("keydown", lambda **kw: keys.append(kw))
    doc.finish_loading()
    doc.finish_loading()
    assert doc.is_ready and loaded == [True]
    doc.key_down("i", ctrl=True)
    assert keys == [{"key": "i", "ctrl": True, "alt": False, "shift": False}]


def test_reparenting_entity_moves_object():
    a, b, child = Entity(), Entity(), Entity()
    a.append_child(child)
    b.append_child(child)
    assert child.parent is b
    assert child.object3d.parent is b.object3d
    assert child not in a.children
