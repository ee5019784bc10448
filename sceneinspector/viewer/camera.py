"""Editor camera pose: default placement and snapshots used to reset the view."""

from dataclasses import dataclass

from PySide6.QtGui import QQuaternion, QVector3D

from sceneinspector.host.graph import CameraObject

DEFAULT_POSITION = (0.0, 1.6, 2.0)
DEFAULT_LOOK_AT = (0.0, 1.6, -1.0)
DEFAULT_NEAR = 0.01
DEFAULT_FAR = 10000.0


@dataclass(frozen=True)
class CameraPose:
    """Snapshot of a camera's placement and projection planes."""
    position: tuple[float, float, float]
    rotation: tuple[float, float, float, float]  # scalar, x, y, z
    fov: float
    near: float
    far: float

    @classmethod
    def capture(cls, camera: CameraObject) -> "CameraPose":
        p, q = camera.position, camera.quaternion
        return cls(
            position=(p.x(), p.y(), p.z()),
            rotation=(q.scalar(), q.x(), q.y(), q.z()),
            fov=camera.fov,
            near=camera.near,
            far=camera.far,
        )

    def apply(self, camera: CameraObject) -> None:
        camera.position = QVector3D(*self.position)
        camera.quaternion = QQuaternion(*self.rotation)
        camera.fov = self.fov
        camera.near = self.near
        camera.far = self.far


def place_editor_camera(camera: CameraObject, config: dict | None = None) -> CameraPose:
    """Move camera to the configured editor pose and return it as a snapshot."""
    cam_cfg = (config or {}).get("editor_camera") or {}
    position = cam_cfg.get("position") or DEFAULT_POSITION
    look_at = cam_cfg.get("look_at") or DEFAULT_LOOK_AT
    camera.position = QVector3D(*(float(v) for v in position))
    camera.look_at(*(float(v) for v in look_at))
    return CameraPose.capture(camera)
