"""Helper construction: dispatch table, picker proxy, selection box."""
import numpy as np
import pytest
from PySide6.QtGui import QVector3D

from sceneinspector.core.config import INSPECTOR_SOURCE, PICKER_NAME
from sceneinspector.host.graph import CameraObject, LightObject, ObjectType, SceneObject
from sceneinspector.viewer.helpers import BoxHelper, HelperKind, create_helper, helper_kind_for


@pytest.mark.parametrize("type_, kind", [
    (ObjectType.CAMERA, HelperKind.CAMERA),
    (ObjectType.POINT_LIGHT, HelperKind.POINT_LIGHT),
    (ObjectType.DIRECTIONAL_LIGHT, HelperKind.DIRECTIONAL_LIGHT),
    (ObjectType.SPOT_LIGHT, HelperKind.SPOT_LIGHT),
    (ObjectType.HEMISPHERE_LIGHT, HelperKind.HEMISPHERE_LIGHT),
    (ObjectType.SKINNED_MESH, HelperKind.SKELETON),
    (ObjectType.AMBIENT_LIGHT, None),
    (ObjectType.MESH, None),
    (ObjectType.GROUP, None),
])
def test_helper_kind_dispatch(type_, kind):
    assert helper_kind_for(SceneObject(type_)) is kind


def test_unsupported_type_gets_no_helper():
    assert create_helper(SceneObject(ObjectType.MESH)) is None


def test_light_helper_has_invisible_picker(config):
    """The picker is the helper's only child and points back at the source light."""
    parent = SceneObject()
    light = parent.add(LightObject(ObjectType.POINT_LIGHT))
    helper = create_helper(light, config)
    assert helper.kind is HelperKind.POINT_LIGHT
    assert helper.visible
    assert helper.source_object_id == light.id
    assert helper.parent_object_id == parent.id
    assert helper.user_data["source"] == INSPECTOR_SOURCE
    assert helper.children == [helper.picker]
    picker = helper.picker
    assert picker.name == PICKER_NAME
    assert picker.visible is False
    assert picker.user_data["object"] is light
    assert picker.radius == config["picker"]["radius"]


def test_camera_helper_starts_hidden(config):
    helper = create_helper(CameraObject(), config)
    assert helper.kind is HelperKind.CAMERA
    assert helper.visible is False
    assert helper.parent_object_id is None


def test_helper_follows_source_world_position():
    parent = SceneObject()
    parent.position = QVector3D(0, 3, 0)
    light = parent.add(LightObject(ObjectType.SPOT_LIGHT))
    helper = create_helper(light)
    assert (helper.position.x(), helper.position.y(), helper.position.z()) == pytest.approx((0, 3, 0))
    parent.position = QVector3D(1, 0, 0)
    helper.update()
    assert helper.position.x() == pytest.approx(1)


def test_box_helper_bounds_subtree_and_skips_inspector_nodes():
    root = SceneObject()
    root.add(SceneObject(ObjectType.MESH, vertices=[[0, 0, 0], [1, 2, 3]]))
    far = root.add(SceneObject(ObjectType.MESH, vertices=[[100, 100, 100]]))
    far.user_data["source"] = INSPECTOR_SOURCE
    box = BoxHelper().set_from_object(root)
    np.testing.assert_allclose(box.min, [0, 0, 0])
    np.testing.assert_allclose(box.max, [1, 2, 3])
    np.testing.assert_allclose(box.center(), [0.5, 1, 1.5])
    np.testing.assert_allclose(box.size(), [1, 2, 3])


def test_box_helper_empty_without_geometry():
    box = BoxHelper().set_from_object(SceneObject())
    assert box.is_empty
    assert box.center() is None
