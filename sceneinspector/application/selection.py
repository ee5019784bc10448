"""Selection manager: current object/entity, bounding-box proxy, camera-helper visibility."""

from typing import Callable, Optional

from sceneinspector.core.config import ENTITY_SELECTED, HELPER_ADDED, OBJECT_SELECTED
from sceneinspector.core.logger import get_logger
from sceneinspector.host.graph import SceneObject
from sceneinspector.viewer.helpers import BoxHelper, HelperKind

logger = get_logger("selection")


class SelectionManager:
    """
    Two states: Idle (nothing selected) and Selected.

    select() is the only mutator of `selected`. Entity selection comes in two
    flavours: select_entity() announces the change on the bus, while
    select_entity_from_event() is used when the change already came from an
    entity_selected event and must not echo it back.
    """

    def __init__(
        self,
        event_bus,
        registry,
        scene_provider: Callable[[], Optional[SceneObject]],
        camera_provider: Callable[[], Optional[SceneObject]],
        camera_entity_provider: Callable[[], object],
    ) -> None:
        self.event_bus = event_bus
        self.registry = registry
        self._scene = scene_provider
        self._camera = camera_provider
        self._camera_entity = camera_entity_provider
        self.selected: Optional[SceneObject] = None
        self.selected_entity = None
        self.bbox_helper = BoxHelper()
        # A rebuilt camera helper starts hidden; re-derive its visibility.
        self.event_bus.subscribe(HELPER_ADDED, self._on_helper_added)

    def detach(self) -> None:
        self.event_bus.unsubscribe(HELPER_ADDED, self._on_helper_added)

    def _on_helper_added(self, _, helper) -> None:
        if getattr(helper, "kind", None) is HelperKind.CAMERA:
            self._update_camera_helper()

    @property
    def is_idle(self) -> bool:
        return self.selected is None

    @property
    def camera_helper_visible(self) -> bool:
        helper = self.registry.camera_helper
        return bool(helper is not None and helper.visible)

    def select(self, obj: Optional[SceneObject]) -> None:
        if self.selected is obj:
            return
        self.selected = obj
        if obj is not None:
            self.bbox_helper.set_from_object(obj)
        logger.debug("Selected %r", obj)
        self.event_bus.emit(OBJECT_SELECTED, obj)

    def deselect(self) -> None:
        self.select(None)

    def select_entity(self, entity) -> None:
        """Select entity (or None) and announce it with entity_selected."""
        self._apply_entity(entity)
        self.event_bus.emit(ENTITY_SELECTED, entity)

    def select_entity_from_event(self, entity) -> None:
        """Select entity (or None) without re-emitting entity_selected."""
        self._apply_entity(entity)

    def _apply_entity(self, entity) -> None:
        self.selected_entity = entity
        self.select(entity.object3d if entity is not None else None)
        self._update_camera_helper()

    def _update_camera_helper(self) -> None:
        helper = self.registry.camera_helper
        if helper is None:
            return
        camera_entity = self._camera_entity()
        helper.visible = self.selected_entity is not None and self.selected_entity is camera_entity

    def select_by_id(self, object_id: int) -> None:
        camera = self._camera()
        if camera is not None and object_id == camera.id:
            self.select(camera)
            return
        scene = self._scene()
        self.select(scene.get_object_by_id(object_id) if scene is not None else None)

    def reset(self) -> None:
        """Back to Idle without announcing anything."""
        self.selected = None
        self.selected_entity = None
        self.bbox_helper.min = self.bbox_helper.max = None
        self._update_camera_helper()
