"""
Helper registry: the derived helper layer, indexed by the source object's parent id.
Adding a helper under a parent tears down that parent's whole group first.
"""
from typing import Optional

from sceneinspector.core.config import (
    HELPER_ADDED,
    HELPER_REMOVED,
    INSPECTOR_SOURCE,
    OBJECT_ADDED,
    SCENE_GRAPH_CHANGED,
)
from sceneinspector.core.logger import get_logger
from sceneinspector.host.graph import ObjectType, SceneObject
from sceneinspector.viewer.helpers import Helper, HelperKind, create_helper

logger = get_logger("helper_registry")


class HelperRegistry:
    """
    Owns `scene_helpers` (the helper layer root) and the table
    parent_id -> {source_id: Helper}. Absent groups and unsupported types are
    no-ops, never errors.
    """

    def __init__(self, event_bus, config: Optional[dict] = None) -> None:
        self.event_bus = event_bus
        self.config = config or {}
        self.helpers: dict[Optional[int], dict[int, Helper]] = {}
        self.scene_helpers = SceneObject(ObjectType.GROUP, "scene-helpers")
        self.scene_helpers.user_data["source"] = INSPECTOR_SOURCE
        self.camera_helper: Optional[Helper] = None

    @property
    def visible(self) -> bool:
        return self.scene_helpers.visible

    @visible.setter
    def visible(self, value: bool) -> None:
        self.scene_helpers.visible = bool(value)

    def __len__(self) -> int:
        return sum(len(group) for group in self.helpers.values())

    def __contains__(self, source_id: int) -> bool:
        return self.get(source_id) is not None

    def get(self, source_id: int) -> Optional[Helper]:
        for group in self.helpers.values():
            helper = group.get(source_id)
            if helper is not None:
                return helper
        return None

    def groups(self) -> dict[Optional[int], dict[int, Helper]]:
        """Snapshot of the table (copies of the inner dicts)."""
        return {parent_id: dict(group) for parent_id, group in self.helpers.items()}

    def replace_group(self, parent_id: Optional[int], entries: dict[int, Helper]) -> None:
        """Detach every helper registered under parent_id, then install entries as the new group."""
        for helper in self.helpers.get(parent_id, {}).values():
            self.scene_helpers.remove(helper)
            if helper is self.camera_helper:
                self.camera_helper = None
        self.helpers[parent_id] = dict(entries)
        for helper in entries.values():
            self.scene_helpers.add(helper)

    def add_object(self, root: SceneObject) -> None:
        """Offer root and every descendant to add_helper, skipping inspector-owned nodes."""

        def _visit(child: SceneObject) -> None:
            if child.el is None or not child.el.is_inspector:
                self.add_helper(child)

        root.traverse(_visit)
        self.update_helpers()
        self.event_bus.emit(OBJECT_ADDED, root)
        self.event_bus.emit(SCENE_GRAPH_CHANGED)

    def add_helper(self, obj: SceneObject) -> Optional[Helper]:
        helper = create_helper(obj, self.config)
        if helper is None:
            return None
        parent_id = obj.parent.id if obj.parent is not None else None
        if parent_id in self.helpers:
            logger.debug("Invalidating %d helper(s) under parent #%s", len(self.helpers[parent_id]), parent_id)
        self.replace_group(parent_id, {obj.id: helper})
        if helper.kind is HelperKind.CAMERA:
            self.camera_helper = helper
        logger.debug("Helper added: %r", helper)
        self.event_bus.emit(HELPER_ADDED, helper)
        return helper

    def remove_helpers(self, obj: SceneObject) -> None:
        """Remove the helper group keyed by obj.id, i.e. helpers of obj's children."""
        parent_id = obj.id
        group = self.helpers.get(parent_id)
        if group is None:
            return
        for helper in group.values():
            self.event_bus.emit(HELPER_REMOVED, helper)
            self.scene_helpers.remove(helper)
            if helper is self.camera_helper:
                self.camera_helper = None
        del self.helpers[parent_id]
        logger.debug("Helpers removed for parent #%s (%d)", parent_id, len(group))

    def update_helpers(self) -> None:
        """Move every helper (and its picker) to its source's current world position."""
        for group in self.helpers.values():
            for helper in group.values():
                helper.update()

    def clear(self) -> None:
        for parent_id in list(self.helpers):
            self.replace_group(parent_id, {})
        self.helpers.clear()
