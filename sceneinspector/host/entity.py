"""Entities: host elements that own one SceneObject, carry attributes and components."""

from typing import Any, Callable, Optional

import numpy as np
from PySide6.QtGui import QVector3D

from sceneinspector.core.config import EV_CHILD_DETACHED, EV_COMPONENT_INITIALIZED, EV_LOADED
from sceneinspector.core.events import EventEmitter
from sceneinspector.core.logger import get_logger
from sceneinspector.host.graph import LIGHT_TYPES, CameraObject, LightObject, ObjectType, SceneObject

logger = get_logger("host.entity")


def parse_properties(value: Any) -> Any:
    """
    Parse a component value. Dicts pass through; "a: 1; b: two" strings become
    {"a": 1.0, "b": "two"}; other strings are returned stripped.
    """
    if isinstance(value, dict):
        return dict(value)
    if not isinstance(value, str) or ":" not in value:
        return value.strip() if isinstance(value, str) else value
    out = {}
    for part in value.split(";"):
        if ":" not in part:
            continue
        key, raw = part.split(":", 1)
        raw = raw.strip()
        if raw.lower() in ("true", "false"):
            out[key.strip()] = raw.lower() == "true"
            continue
        try:
            out[key.strip()] = float(raw)
        except ValueError:
            out[key.strip()] = raw
    return out


def parse_vec3(value: Any) -> QVector3D:
    """Accept "x y z", (x, y, z) or {"x":, "y":, "z":}."""
    if isinstance(value, QVector3D):
        return QVector3D(value.x(), value.y(), value.z())
    if isinstance(value, dict):
        return QVector3D(float(value.get("x", 0)), float(value.get("y", 0)), float(value.get("z", 0)))
    if isinstance(value, str):
        value = value.split()
    x, y, z = (float(v) for v in value)
    return QVector3D(x, y, z)


# -----------------------------------------------------------------------------
# Built-in components. Each initializer receives (entity, data) once the entity
# is attached to a scene.
# -----------------------------------------------------------------------------

def _init_camera(entity: "Entity", data: dict) -> None:
    data = data if isinstance(data, dict) else {}
    camera = CameraObject(
        fov=float(data.get("fov", 80.0)),
        near=float(data.get("near", 0.005)),
        far=float(data.get("far", 10000.0)),
    )
    entity.set_object3d("camera", camera)
    if data.get("active", True) and entity.scene is not None:
        entity.scene.set_active_camera(entity)


def _init_light(entity: "Entity", data: dict) -> None:
    data = data if isinstance(data, dict) else {}
    light_type = LIGHT_TYPES.get(str(data.get("type", "directional")), ObjectType.DIRECTIONAL_LIGHT)
    light = LightObject(
        light_type,
        color=str(data.get("color", "#fff")),
        intensity=float(data.get("intensity", 1.0)),
    )
    entity.set_object3d("light", light)


def _box_vertices(width: float, height: float, depth: float) -> np.ndarray:
    corners = np.array(
        [[x, y, z] for x in (-0.5, 0.5) for y in (-0.5, 0.5) for z in (-0.5, 0.5)],
        dtype=np.float64,
    )
    return corners * np.array([width, height, depth], dtype=np.float64)


def _init_geometry(entity: "Entity", data: dict) -> None:
    data = data if isinstance(data, dict) else {"primitive": data}
    primitive = str(data.get("primitive", "box"))
    if primitive == "sphere":
        r = float(data.get("radius", 1.0))
        vertices = _box_vertices(2 * r, 2 * r, 2 * r)
    else:
        vertices = _box_vertices(
            float(data.get("width", 1.0)),
            float(data.get("height", 1.0)),
            float(data.get("depth", 1.0)),
        )
    entity.set_object3d("mesh", SceneObject(ObjectType.MESH, primitive, vertices=vertices))


def _init_position(entity: "Entity", data: Any) -> None:
    entity.object3d.position = parse_vec3(data)


COMPONENTS: dict[str, Callable[["Entity", Any], None]] = {
    "camera": _init_camera,
    "light": _init_light,
    "geometry": _init_geometry,
    "position": _init_position,
}


class Entity(EventEmitter):
    """
    Host element. Owns `object3d`; child entities' objects are parented under it.
    Components registered in COMPONENTS are initialized on attach (emitting
    `componentinitialized`), after which the entity emits `loaded`.
    """

    def __init__(self, tag: str = "a-entity", object3d: Optional[SceneObject] = None) -> None:
        super().__init__()
        self.tag = tag
        self.object3d = object3d or SceneObject(ObjectType.GROUP, tag)
        self.object3d.el = self
        self.object3d_map: dict[str, SceneObject] = {}
        self.attributes: dict[str, Any] = {}
        self.components: dict[str, Any] = {}
        self.parent: Optional["Entity"] = None
        self.children: list["Entity"] = []
        self.scene = None
        self.has_loaded = False
        self.is_inspector = False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.tag}#{self.object3d.id}>"

    # -- attributes ----------------------------------------------------------

    def set_attribute(self, name: str, value: Any = "") -> None:
        self.attributes[name] = value
        if name in COMPONENTS:
            data = parse_properties(value)
            self.components[name] = data
            if self.has_loaded:
                self._init_component(name, data)

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)
        self.components.pop(name, None)

    # -- object3d ------------------------------------------------------------

    def set_object3d(self, kind: str, obj: SceneObject) -> None:
        previous = self.object3d_map.get(kind)
        if previous is not None:
            self.object3d.remove(previous)
        obj.el = self
        self.object3d.add(obj)
        self.object3d_map[kind] = obj

    def get_object3d(self, kind: str) -> Optional[SceneObject]:
        return self.object3d_map.get(kind)

    # -- hierarchy -----------------------------------------------------------

    def append_child(self, child: "Entity") -> "Entity":
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self.children.append(child)
        self.object3d.add(child.object3d)
        if self.scene is not None and self.has_loaded:
            child._attach(self.scene)
        return child

    def remove_child(self, child: "Entity") -> None:
        if child not in self.children:
            return
        self.children.remove(child)
        self.object3d.remove(child.object3d)
        child.parent = None
        scene = self.scene
        child._detach()
        if scene is not None:
            scene.on_child_detached(child)
            scene.document.emit(EV_CHILD_DETACHED, el=child)

    def _init_component(self, name: str, data: Any) -> None:
        COMPONENTS[name](self, data)
        logger.debug("%r: component %s initialized", self, name)
        self.emit(EV_COMPONENT_INITIALIZED, name=name, target=self)

    def _attach(self, scene) -> None:
        self.scene = scene
        for name, data in list(self.components.items()):
            self._init_component(name, data)
        self.has_loaded = True
        for child in list(self.children):
            child._attach(scene)
        self.emit(EV_LOADED, target=self)

    def _detach(self) -> None:
        self.scene = None
        for child in self.children:
            child._detach()

    def iter_entities(self):
        yield self
        for child in list(self.children):
            yield from child.iter_entities()
