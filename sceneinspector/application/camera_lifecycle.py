"""
Camera lifecycle: swap the host's active camera for an editor-owned one and
put everything back when the overlay goes away.
"""
from typing import Callable, Optional

from sceneinspector.core.config import EV_CAMERA_SET_ACTIVE, EV_COMPONENT_INITIALIZED
from sceneinspector.core.deferred import OneShot
from sceneinspector.core.logger import get_logger
from sceneinspector.host.entity import Entity
from sceneinspector.host.graph import CameraObject
from sceneinspector.viewer.camera import DEFAULT_FAR, DEFAULT_NEAR, CameraPose, place_editor_camera

logger = get_logger("camera_lifecycle")


class CameraLifecycle:
    """
    Holds the camera context: the borrowed host camera entity, the owned editor
    camera, whether the host camera was the framework default, and the pose
    clear() returns to.
    """

    def __init__(self, context) -> None:
        self.context = context
        self.scene = None
        self.host_camera_el: Optional[Entity] = None
        self.editor_camera_el: Optional[Entity] = None
        self.editor_camera: Optional[CameraObject] = None
        self.camera: Optional[CameraObject] = None
        self.was_default_camera = False
        self.editor_pose: Optional[CameraPose] = None
        self._pending: Optional[OneShot] = None

    @property
    def ready(self) -> bool:
        return self.camera is not None

    def _marker(self, key: str) -> str:
        return self.context.markers[key]

    def attach(self, scene, on_ready: Callable[[], None]) -> None:
        """Install the editor camera once the scene has an active camera, then call on_ready()."""
        self.scene = scene
        if scene.camera is None:
            logger.info("No active camera yet; waiting for %s", EV_CAMERA_SET_ACTIVE)
            self._pending = OneShot(
                scene,
                EV_CAMERA_SET_ACTIVE,
                timeout=self.context.wait_timeout,
                description="an active camera",
            ).then(lambda _payload: self.attach(scene, on_ready))
            return
        self._pending = None

        self.host_camera_el = scene.camera.el
        self.host_camera_el.set_attribute(self._marker("original_camera"), "")

        # A framework default camera is dropped as soon as another camera
        # becomes active; untag it so it survives the editor camera.
        default_attr = self._marker("default_camera")
        if self.host_camera_el.has_attribute(default_attr):
            self.host_camera_el.remove_attribute(default_attr)
            self.host_camera_el.set_attribute(self._marker("inspector"), "default-camera")
            self.was_default_camera = True

        cam_cfg = self.context.config.get("editor_camera") or {}
        el = Entity()
        el.is_inspector = True
        self.editor_camera_el = el

        def _on_component(name, target=None, **_):
            if name != "camera":
                return
            el.off(EV_COMPONENT_INITIALIZED, _on_component)
            self.editor_camera = el.get_object3d("camera")
            self.editor_pose = place_editor_camera(self.editor_camera, self.context.config)
            self.camera = self.editor_camera
            logger.info("Editor camera ready (#%s)", self.editor_camera.id)
            on_ready()

        el.on(EV_COMPONENT_INITIALIZED, _on_component)
        el.set_attribute("camera", {
            "far": float(cam_cfg.get("far", DEFAULT_FAR)),
            "near": float(cam_cfg.get("near", DEFAULT_NEAR)),
            "active": True,
        })
        el.set_attribute(self._marker("inspector"), "camera")
        scene.append_child(el)

    def cancel(self) -> None:
        """Abandon a pending wait for the host camera."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def reset_pose(self) -> None:
        """Copy the recorded editor pose back onto the active camera."""
        if self.camera is None or self.editor_pose is None:
            return
        self.editor_pose.apply(self.camera)

    def restore(self) -> None:
        """Remove the editor camera and hand the scene back to the host camera."""
        self.cancel()
        scene = self.scene
        if scene is None:
            return
        if self.editor_camera_el is not None and self.editor_camera_el.parent is not None:
            self.editor_camera_el.parent.remove_child(self.editor_camera_el)
        host = self.host_camera_el
        if host is not None:
            host.remove_attribute(self._marker("original_camera"))
            if self.was_default_camera:
                host.remove_attribute(self._marker("inspector"))
                host.set_attribute(self._marker("default_camera"), "")
            if host.scene is scene:
                scene.set_active_camera(host)
        logger.info("Host camera restored")
        self.editor_camera_el = None
        self.editor_camera = None
        self.camera = None
        self.editor_pose = None
        self.host_camera_el = None
        self.was_default_camera = False
        self.scene = None
