"""Host document and scene element: readiness, body classes, active camera, play state."""

from dataclasses import dataclass, field
from typing import Optional

from sceneinspector.core.config import EV_CAMERA_SET_ACTIVE, EV_DOM_CONTENT_LOADED, EV_KEYDOWN, EV_LOADED
from sceneinspector.core.events import EventEmitter
from sceneinspector.core.logger import get_logger
from sceneinspector.host.entity import Entity
from sceneinspector.host.graph import CameraObject, ObjectType, SceneObject

logger = get_logger("host.document")

DEFAULT_CAMERA_ATTR = "data-aframe-default-camera"


@dataclass
class Mutation:
    """One record of a mutation batch (see the dom_modified topic)."""
    type: str
    removed_nodes: list = field(default_factory=list)
    added_nodes: list = field(default_factory=list)


class Document(EventEmitter):
    """Top-level host: ready state, body class list, registered scenes, keyboard events."""

    def __init__(self, ready_state: str = "loading") -> None:
        super().__init__()
        self.ready_state = ready_state
        self.body_classes: set[str] = set()
        self.scenes: list["HostScene"] = []

    @property
    def is_ready(self) -> bool:
        return self.ready_state in ("complete", "loaded")

    def finish_loading(self) -> None:
        """Mark the document complete and emit DOMContentLoaded."""
        if self.is_ready:
            return
        self.ready_state = "complete"
        self.emit(EV_DOM_CONTENT_LOADED)

    def create_element(self, tag: str) -> Entity:
        return Entity(tag)

    def create_scene(self) -> "HostScene":
        scene = HostScene(self)
        self.scenes.append(scene)
        return scene

    def key_down(self, key: str, *, ctrl: bool = False, alt: bool = False, shift: bool = False) -> None:
        self.emit(EV_KEYDOWN, key=key, ctrl=ctrl, alt=alt, shift=shift)


class HostScene(Entity):
    """
    Scene element. Owns the root SceneObject, tracks the active camera and
    play/VR state. Injects a framework default camera when none is declared,
    and drops that default camera once another camera becomes active.
    """

    def __init__(self, document: Document) -> None:
        super().__init__("a-scene", SceneObject(ObjectType.GROUP, "scene"))
        self.document = document
        self.camera: Optional[CameraObject] = None
        self.is_playing = True
        self.in_vr = False
        self.resize_count = 0

    def load(self, inject_default_camera: bool = True) -> None:
        """Attach all declared entities, then emit `loaded`."""
        if self.has_loaded:
            return
        self.scene = self
        for name, data in list(self.components.items()):
            self._init_component(name, data)
        for child in list(self.children):
            child._attach(self)
        if self.camera is None and inject_default_camera:
            self._inject_default_camera()
        self.has_loaded = True
        logger.debug("Scene loaded (%d entities)", len(self.children))
        self.emit(EV_LOADED, target=self)

    def _inject_default_camera(self) -> None:
        default_camera = Entity()
        default_camera.set_attribute("camera", {"active": True})
        default_camera.set_attribute("position", "0 1.6 0")
        default_camera.set_attribute(DEFAULT_CAMERA_ATTR, "")
        self.children.append(default_camera)
        default_camera.parent = self
        self.object3d.add(default_camera.object3d)
        default_camera._attach(self)

    def set_active_camera(self, entity: Entity) -> None:
        camera = entity.get_object3d("camera")
        if camera is None:
            return
        previous = self.camera.el if self.camera is not None else None
        for el in self.iter_entities():
            if el is not entity and "camera" in el.components and isinstance(el.components["camera"], dict):
                el.components["camera"]["active"] = False
        self.camera = camera
        self.emit(EV_CAMERA_SET_ACTIVE, camera_el=entity)
        if previous is not None and previous is not entity and previous.has_attribute(DEFAULT_CAMERA_ATTR):
            logger.debug("Removing framework default camera %r", previous)
            if previous.parent is not None:
                previous.parent.remove_child(previous)

    def on_child_detached(self, child: Entity) -> None:
        if self.camera is not None and self.camera.el is child:
            self.camera = None

    def pause(self) -> None:
        self.is_playing = False

    def play(self) -> None:
        self.is_playing = True

    def enter_vr(self) -> None:
        self.in_vr = True

    def exit_vr(self) -> None:
        self.in_vr = False

    def resize(self) -> None:
        self.resize_count += 1
