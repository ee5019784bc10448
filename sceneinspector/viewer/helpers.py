"""Helpers: editor-only visual proxies for lights, cameras and skinned meshes, plus the selection box."""

from enum import Enum
from typing import Optional

import numpy as np

from sceneinspector.core.config import INSPECTOR_SOURCE, PICKER_NAME
from sceneinspector.host.graph import ObjectType, SceneObject


class HelperKind(Enum):
    CAMERA = "camera"
    POINT_LIGHT = "point-light"
    DIRECTIONAL_LIGHT = "directional-light"
    SPOT_LIGHT = "spot-light"
    HEMISPHERE_LIGHT = "hemisphere-light"
    SKELETON = "skeleton"


# Closed dispatch table: source type tag -> helper kind. Types not listed get no helper.
HELPER_KINDS: dict[ObjectType, HelperKind] = {
    ObjectType.CAMERA: HelperKind.CAMERA,
    ObjectType.POINT_LIGHT: HelperKind.POINT_LIGHT,
    ObjectType.DIRECTIONAL_LIGHT: HelperKind.DIRECTIONAL_LIGHT,
    ObjectType.SPOT_LIGHT: HelperKind.SPOT_LIGHT,
    ObjectType.HEMISPHERE_LIGHT: HelperKind.HEMISPHERE_LIGHT,
    ObjectType.SKINNED_MESH: HelperKind.SKELETON,
}


def helper_kind_for(obj: SceneObject) -> Optional[HelperKind]:
    return HELPER_KINDS.get(obj.type)


class Picker(SceneObject):
    """Invisible sphere used for pointer hit-testing; points back at the helper's source object."""

    def __init__(self, source: SceneObject, radius: float = 2.0, width_segments: int = 4, height_segments: int = 2):
        super().__init__(ObjectType.MESH, PICKER_NAME, vertices=_sphere_vertices(radius, width_segments, height_segments))
        self.radius = radius
        self.visible = False
        self.user_data["object"] = source
        self.user_data["source"] = INSPECTOR_SOURCE


def _sphere_vertices(radius: float, width_segments: int, height_segments: int) -> np.ndarray:
    """Vertices of a UV sphere (poles included once per ring, like a coarse picker mesh)."""
    phi = np.linspace(0.0, 2.0 * np.pi, max(3, width_segments) + 1)
    theta = np.linspace(0.0, np.pi, max(2, height_segments) + 1)
    t, p = np.meshgrid(theta, phi, indexing="ij")
    x = -radius * np.cos(p) * np.sin(t)
    y = radius * np.cos(t)
    z = radius * np.sin(p) * np.sin(t)
    return np.stack([x.ravel(), y.ravel(), z.ravel()], axis=1)


class Helper(SceneObject):
    """
    Visual proxy for one source object. Lives in the helper layer, never in the
    primary graph. `parent_object_id` is the source's parent id at creation time
    (the registry key); the picker is its only child.
    """

    def __init__(self, source: SceneObject, kind: HelperKind, size: float = 1.0, picker: Optional[Picker] = None):
        super().__init__(ObjectType.OTHER, f"{kind.value}-helper")
        self.kind = kind
        self.source = source
        self.source_object_id = source.id
        self.parent_object_id = source.parent.id if source.parent is not None else None
        self.size = size
        self.user_data["source"] = INSPECTOR_SOURCE
        self.picker = picker or Picker(source)
        self.add(self.picker)
        self.update()

    def __repr__(self) -> str:
        return f"<Helper {self.kind.value} for #{self.source_object_id}>"

    def update(self) -> None:
        """Follow the source's world position."""
        self.position = self.source.world_position()


def create_helper(obj: SceneObject, config: Optional[dict] = None) -> Optional[Helper]:
    """Build the helper for obj, or None when its type has no helper. Camera helpers start hidden."""
    kind = helper_kind_for(obj)
    if kind is None:
        return None
    config = config or {}
    sizes = config.get("helper_sizes") or {}
    picker_cfg = config.get("picker") or {}
    picker = Picker(
        obj,
        radius=float(picker_cfg.get("radius", 2.0)),
        width_segments=int(picker_cfg.get("width_segments", 4)),
        height_segments=int(picker_cfg.get("height_segments", 2)),
    )
    if kind is HelperKind.CAMERA:
        helper = Helper(obj, kind, float(sizes.get("camera", 0.1)), picker)
        helper.visible = False
    elif kind is HelperKind.SKELETON:
        helper = Helper(obj, kind, 1.0, picker)
    else:
        helper = Helper(obj, kind, float(sizes.get("light", 1.0)), picker)
    return helper


class BoxHelper(SceneObject):
    """Axis-aligned world bounding box of an object and its descendants (selection outline)."""

    def __init__(self, color: int = 0xFAFAFA) -> None:
        super().__init__(ObjectType.OTHER, "bbox-helper")
        self.color = color
        self.user_data["source"] = INSPECTOR_SOURCE
        self.min: Optional[np.ndarray] = None
        self.max: Optional[np.ndarray] = None

    @property
    def is_empty(self) -> bool:
        return self.min is None

    def set_from_object(self, obj: SceneObject) -> "BoxHelper":
        """Recompute from world geometry of obj's subtree; empty when nothing has geometry."""
        chunks = [v for v in (node.world_vertices() for node in obj.iter_subtree()
                              if node.user_data.get("source") != INSPECTOR_SOURCE) if v is not None]
        if not chunks:
            self.min = self.max = None
            return self
        points = np.vstack(chunks)
        self.min = points.min(axis=0)
        self.max = points.max(axis=0)
        return self

    def center(self) -> Optional[np.ndarray]:
        if self.is_empty:
            return None
        return (self.min + self.max) / 2.0

    def size(self) -> Optional[np.ndarray]:
        if self.is_empty:
            return None
        return self.max - self.min
