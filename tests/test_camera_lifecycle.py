"""Editor camera: installation, default-camera handling, deferred activation, restore."""
import pytest
from PySide6.QtGui import QVector3D

from sceneinspector.application.controller import Inspector
from sceneinspector.host.document import DEFAULT_CAMERA_ATTR


def _xyz(v):
    return (v.x(), v.y(), v.z())


def test_editor_camera_replaces_host_camera(started, config):
    inspector, scene, els = started
    lifecycle = inspector.camera_lifecycle
    assert lifecycle.ready
    assert lifecycle.host_camera_el is els["camera"]
    assert els["camera"].has_attribute(config["markers"]["original_camera"])
    assert scene.camera is inspector.camera
    assert inspector.camera is not els["camera"].get_object3d("camera")
    assert lifecycle.editor_camera_el.is_inspector
    assert lifecycle.editor_camera_el.get_attribute(config["markers"]["inspector"]) == "camera"


def test_editor_camera_default_pose(started):
    inspector, _, _ = started
    cam = inspector.camera
    assert _xyz(cam.position) == pytest.approx((0.0, 1.6, 2.0))
    assert _xyz(cam.world_direction()) == pytest.approx((0.0, 0.0, -1.0), abs=1e-5)
    assert cam.near == pytest.approx(0.01)
    assert cam.far == pytest.approx(10000)


def test_reset_pose_after_user_moves_camera(started):
    inspector, _, _ = started
    cam = inspector.camera
    cam.position = QVector3D(9, 9, 9)
    cam.look_at(0, 0, 0)
    inspector.camera_lifecycle.reset_pose()
    assert _xyz(cam.position) == pytest.approx((0.0, 1.6, 2.0))
    assert _xyz(cam.world_direction()) == pytest.approx((0.0, 0.0, -1.0), abs=1e-5)


def test_destroy_restores_host_camera(started, config):
    inspector, scene, els = started
    editor_el = inspector.camera_lifecycle.editor_camera_el
    inspector.destroy()
    assert editor_el not in scene.children
    assert scene.camera is els["camera"].get_object3d("camera")
    assert not els["camera"].has_attribute(config["markers"]["original_camera"])


def test_default_camera_survives_editor_camera(document, bus, config, make_entity):
    """The framework default camera is untagged so activating the editor camera does not drop it."""
    scene = document.create_scene()
    scene.append_child(make_entity(document, light="type: point"))
    scene.load()
    default_el = scene.camera.el
    assert default_el.has_attribute(DEFAULT_CAMERA_ATTR)
    document.finish_loading()

    inspector = Inspector(document, event_bus=bus, config=config)
    inspector.start()
    lifecycle = inspector.camera_lifecycle
    assert lifecycle.was_default_camera
    assert default_el in scene.children
    assert not default_el.has_attribute(DEFAULT_CAMERA_ATTR)
    assert default_el.get_attribute(config["markers"]["inspector"]) == "default-camera"

    inspector.destroy()
    assert default_el.has_attribute(DEFAULT_CAMERA_ATTR)
    assert not default_el.has_attribute(config["markers"]["inspector"])
    assert scene.camera is default_el.get_object3d("camera")


def test_waits_for_active_camera(document, bus, config, make_entity):
    scene = document.create_scene()
    scene.load(inject_default_camera=False)
    document.finish_loading()
    inspector = Inspector(document, event_bus=bus, config=config)
    inspector.start()
    assert inspector.camera is None
    assert not inspector.opened

    cam_el = make_entity(document, camera={"active": True})
    scene.append_child(cam_el)
    assert inspector.camera_lifecycle.host_camera_el is cam_el
    assert inspector.opened
    inspector.destroy()


def test_waits_for_document_and_scene(document, scene_with_lights, bus, config):
    scene, els = scene_with_lights
    inspector = Inspector(document, event_bus=bus, config=config)
    inspector.start()
    assert inspector.scene_el is None
    document.finish_loading()
    assert inspector.scene_el is scene
    assert inspector.camera is None
    scene.load()
    assert inspector.camera_lifecycle.host_camera_el is els["camera"]
    assert inspector.opened
    inspector.destroy()


def test_destroy_cancels_pending_camera_wait(document, bus, config, make_entity):
    scene = document.create_scene()
    scene.load(inject_default_camera=False)
    document.finish_loading()
    inspector = Inspector(document, event_bus=bus, config=config)
    inspector.start()
    inspector.destroy()
    scene.append_child(make_entity(document, camera={"active": True}))
    assert inspector.camera is None
    assert not inspector.opened
