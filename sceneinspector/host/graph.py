"""Scene graph: primary graph nodes owned by the host (objects, cameras, lights)."""

import itertools
from enum import Enum
from typing import Callable, Iterator, Optional

import numpy as np
from PySide6.QtGui import QMatrix4x4, QQuaternion, QVector3D

_ids = itertools.count(1)


class ObjectType(Enum):
    CAMERA = "camera"
    POINT_LIGHT = "point-light"
    DIRECTIONAL_LIGHT = "directional-light"
    SPOT_LIGHT = "spot-light"
    HEMISPHERE_LIGHT = "hemisphere-light"
    AMBIENT_LIGHT = "ambient-light"
    SKINNED_MESH = "skinned-mesh"
    MESH = "mesh"
    GROUP = "group"
    OTHER = "other"


class SceneObject:
    """
    Node in the primary scene graph: identity, parent/children, type tag,
    local transform and optional local geometry (N, 3 vertices).
    `el` is the owning host entity, if any.
    """

    def __init__(self, type_: ObjectType = ObjectType.GROUP, name: str = "", vertices=None) -> None:
        self.id = next(_ids)
        self.name = name
        self.type = type_
        self.parent: Optional["SceneObject"] = None
        self.children: list["SceneObject"] = []
        self.el = None
        self.visible = True
        self.user_data: dict = {}
        self.position = QVector3D(0.0, 0.0, 0.0)
        self.quaternion = QQuaternion()
        self.scale = QVector3D(1.0, 1.0, 1.0)
        self.vertices = None if vertices is None else np.asarray(vertices, dtype=np.float64).reshape(-1, 3)

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<{type(self).__name__} #{self.id}{label} {self.type.value}>"

    # -- hierarchy ---------------------------------------------------------

    def add(self, child: "SceneObject") -> "SceneObject":
        """Attach child (detaching it from any previous parent)."""
        if child is self:
            raise ValueError("An object cannot be added as a child of itself.")
        if child.parent is not None:
            child.parent.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove(self, child: "SceneObject") -> None:
        """Detach child; no-op if it is not a child."""
        try:
            self.children.remove(child)
        except ValueError:
            return
        child.parent = None

    def traverse(self, callback: Callable[["SceneObject"], None]) -> None:
        """Pre-order traversal over self and all descendants."""
        callback(self)
        for child in list(self.children):
            child.traverse(callback)

    def iter_subtree(self) -> Iterator["SceneObject"]:
        yield self
        for child in list(self.children):
            yield from child.iter_subtree()

    def get_object_by_id(self, object_id: int) -> Optional["SceneObject"]:
        """Search self and descendants (visible or not) for object_id."""
        for obj in self.iter_subtree():
            if obj.id == object_id:
                return obj
        return None

    # -- transforms --------------------------------------------------------

    def matrix(self) -> QMatrix4x4:
        """Local transform: translate * rotate * scale."""
        m = QMatrix4x4()
        m.translate(self.position)
        m.rotate(self.quaternion)
        m.scale(self.scale)
        return m

    def matrix_world(self) -> QMatrix4x4:
        """World transform (product of local transforms up to the root)."""
        m = self.matrix()
        node = self.parent
        while node is not None:
            m = node.matrix() * m
            node = node.parent
        return m

    def world_position(self) -> QVector3D:
        return self.matrix_world().map(QVector3D(0.0, 0.0, 0.0))

    def world_vertices(self) -> np.ndarray | None:
        """Local geometry mapped to world space, (N, 3) float64 or None without geometry."""
        if self.vertices is None or len(self.vertices) == 0:
            return None
        m = self.matrix_world()
        mapped = [m.map(QVector3D(float(x), float(y), float(z))) for x, y, z in self.vertices]
        return np.array([(v.x(), v.y(), v.z()) for v in mapped], dtype=np.float64)


class CameraObject(SceneObject):
    """Perspective camera; looks down its local -Z axis."""

    def __init__(self, name: str = "", fov: float = 80.0, near: float = 0.005, far: float = 10000.0) -> None:
        super().__init__(ObjectType.CAMERA, name)
        self.fov = fov
        self.near = near
        self.far = far

    def look_at(self, x: float, y: float, z: float, up: QVector3D | None = None) -> None:
        """Rotate so that the camera faces the world point (x, y, z)."""
        target = QVector3D(x, y, z)
        eye = self.world_position()
        back = eye - target
        if back.length() == 0:
            return
        self.quaternion = QQuaternion.fromDirection(back.normalized(), up or QVector3D(0.0, 1.0, 0.0))

    def world_direction(self) -> QVector3D:
        """Unit vector the camera is facing, in world space."""
        m = self.matrix_world()
        origin = m.map(QVector3D(0.0, 0.0, 0.0))
        ahead = m.map(QVector3D(0.0, 0.0, -1.0))
        return (ahead - origin).normalized()


class LightObject(SceneObject):
    """Light of one of the light ObjectTypes."""

    def __init__(self, type_: ObjectType, name: str = "", color: str = "#fff", intensity: float = 1.0) -> None:
        super().__init__(type_, name)
        self.color = color
        self.intensity = intensity


LIGHT_TYPES = {
    "point": ObjectType.POINT_LIGHT,
    "directional": ObjectType.DIRECTIONAL_LIGHT,
    "spot": ObjectType.SPOT_LIGHT,
    "hemisphere": ObjectType.HEMISPHERE_LIGHT,
    "ambient": ObjectType.AMBIENT_LIGHT,
}
