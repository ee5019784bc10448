"""
Inspector: top-level orchestrator of the overlay.
Flow: start -> document ready -> scene loaded -> camera ready -> _init_ui -> open -> modules.
Delegates: helpers (helper_registry.py), selection (selection.py), camera (camera_lifecycle.py).
"""
from typing import Any, Callable, Optional

from sceneinspector.application.camera_lifecycle import CameraLifecycle
from sceneinspector.application.helper_registry import HelperRegistry
from sceneinspector.application.selection import SelectionManager
from sceneinspector.application.shortcuts import KeyCombo, Shortcuts
from sceneinspector.core import config as topics
from sceneinspector.core.config import (
    EV_CHILD_DETACHED,
    EV_DOM_CONTENT_LOADED,
    EV_INSPECTOR_LOADED,
    EV_KEYDOWN,
    EV_LOADED,
    EV_MODEL_LOADED,
)
from sceneinspector.core.context import InspectorContext
from sceneinspector.core.deferred import OneShot
from sceneinspector.core.logger import get_entity_logger, get_logger
from sceneinspector.host.entity import Entity
from sceneinspector.host.graph import SceneObject

logger = get_logger("controller")


class Inspector:
    """
    Mirrors the host scene into the helper layer and owns the overlay's
    open/close lifecycle. All reactions happen synchronously inside event
    handlers; waits are one-shot subscriptions.
    """

    def __init__(self, document, event_bus=None, config=None, loaders: Optional[dict[str, Callable[[], Any]]] = None):
        self.context = InspectorContext(document, event_bus, config)
        self.document = document
        self.event_bus = self.context.event_bus
        self.config = self.context.config
        self.opened = False
        self.inspector_active = False
        self.modules: dict[str, Any] = {}
        self.loaders: dict[str, Any] = {}
        self._loader_factories = dict(loaders or {})
        self.scene_el = None
        self.scene: Optional[SceneObject] = None
        self.camera_lifecycle = CameraLifecycle(self.context)
        self.registry = HelperRegistry(self.event_bus, self.config)
        self.selection = SelectionManager(
            self.event_bus,
            self.registry,
            scene_provider=lambda: self.scene,
            camera_provider=lambda: self.camera_lifecycle.camera,
            camera_entity_provider=lambda: self.camera_lifecycle.host_camera_el,
        )
        self.shortcuts = Shortcuts(document, self.config.get("shortcuts") or {})
        self.toggle_combo = KeyCombo.parse(self.config.get("toggle_shortcut", "Ctrl+Alt+I"))
        self._bus_handlers: list[tuple[str, Callable]] = []
        self._doc_handlers: list[tuple[str, Callable]] = []
        self._pending: list[OneShot] = []
        self._ui_ready = False

    # =====================================================
    # Startup
    # =====================================================

    def start(self) -> None:
        """Begin startup; each missing precondition becomes a one-shot wait."""
        if self.document.is_ready:
            self._on_dom_loaded()
        else:
            self._wait(self.document, EV_DOM_CONTENT_LOADED, lambda _: self._on_dom_loaded(), "document ready")

    def _wait(self, emitter, event_name: str, callback, description: str) -> OneShot:
        self._pending = [s for s in self._pending if not s.done]
        shot = OneShot(emitter, event_name, timeout=self.context.wait_timeout, description=description)
        self._pending.append(shot)
        return shot.then(callback)

    def _on_dom_loaded(self) -> None:
        for name, factory in self._loader_factories.items():
            self.loaders[name] = factory()
        if not self.document.scenes:
            logger.warning("No scene in document; inspector idle")
            return
        self.scene_el = self.document.scenes[0]
        self.context.scene = self.scene_el
        if self.scene_el.has_loaded:
            self._on_scene_loaded()
        else:
            self._wait(self.scene_el, EV_LOADED, lambda _: self._on_scene_loaded(), "scene loaded")

    def _on_scene_loaded(self) -> None:
        self.camera_lifecycle.attach(self.scene_el, self._on_camera_ready)

    def _on_camera_ready(self) -> None:
        self._init_ui()
        self._init_modules()

    def _init_ui(self) -> None:
        self._init_events()
        self.selection.reset()
        self.scene = self.scene_el.object3d
        self.registry.scene_helpers.visible = True
        self.registry.scene_helpers.add(self.selection.bbox_helper)
        self.inspector_active = False
        self.event_bus.emit(topics.WINDOW_RESIZE)

        for child in list(self.scene.children):
            for grandchild in list(child.children):
                self.add_object(grandchild)

        self.scene.add(self.registry.scene_helpers)
        self._ui_ready = True
        self.document.emit(EV_INSPECTOR_LOADED, inspector=self)
        self.open()

    def register_module(self, name: str, module: Any) -> None:
        """Register a module; it is initialized with the scene once the UI is up."""
        self.modules[name] = module
        if self._ui_ready:
            self._init_module(name, module)

    def _init_modules(self) -> None:
        for name, module in self.modules.items():
            self._init_module(name, module)

    def _init_module(self, name: str, module: Any) -> None:
        logger.info("Initializing module <%s>", name)
        module.init(self.scene_el)

    # =====================================================
    # Event wiring
    # =====================================================

    def _on_bus(self, topic: str, callback: Callable) -> None:
        self.event_bus.subscribe(topic, callback)
        self._bus_handlers.append((topic, callback))

    def _on_doc(self, event_name: str, callback: Callable) -> None:
        self.document.on(event_name, callback)
        self._doc_handlers.append((event_name, callback))

    def _init_events(self) -> None:
        self._on_doc(EV_KEYDOWN, self._on_keydown)
        self._on_doc(EV_CHILD_DETACHED, self._on_child_detached)
        self._on_doc(EV_MODEL_LOADED, self._on_model_loaded)

        self._on_bus(topics.ENTITY_SELECTED, lambda _, entity: self.selection.select_entity_from_event(entity))
        self._on_bus(topics.INSPECTOR_MODE_CHANGED, self._on_mode_changed)
        self._on_bus(topics.CREATE_NEW_ENTITY, lambda _, definition: self.create_new_entity(definition))
        self._on_bus(topics.SELECTED_ENTITY_COMPONENT_CHANGED, self._on_component_event)
        self._on_bus(topics.SELECTED_ENTITY_COMPONENT_CREATED, self._on_component_event)
        self._on_bus(topics.DOM_MODIFIED, self._on_dom_modified)

        if "deselect" in (self.config.get("shortcuts") or {}):
            self.shortcuts.add_callback("deselect", self.deselect)

    def _on_keydown(self, **event) -> None:
        if self.toggle_combo.matches(**event):
            self.toggle()

    def _on_mode_changed(self, _, active) -> None:
        self.inspector_active = bool(active)
        self.registry.visible = self.inspector_active

    def _on_component_event(self, _, data) -> None:
        target = data.get("target") if isinstance(data, dict) else data
        if isinstance(target, Entity):
            self.add_object(target.object3d)

    def _on_child_detached(self, el=None, **_) -> None:
        if el is not None:
            self.remove_object(el.object3d)

    def _on_model_loaded(self, target=None, **_) -> None:
        if target is not None:
            self.add_object(target.object3d)

    def _on_dom_modified(self, _, mutations) -> None:
        if not mutations:
            return
        for mutation in mutations:
            if mutation.type != "childList":
                continue
            for removed in mutation.removed_nodes:
                if self.selection.selected_entity is removed:
                    self.select_entity(None)

    # =====================================================
    # Structure
    # =====================================================

    def add_object(self, obj: SceneObject) -> None:
        self.registry.add_object(obj)

    def remove_object(self, obj: SceneObject) -> None:
        # The host drops the object itself; only its helpers are ours.
        self.registry.remove_helpers(obj)
        self.event_bus.emit(topics.OBJECT_REMOVED, obj)

    def create_new_entity(self, definition: dict) -> Entity:
        """
        Create an entity from {"element": tag, "components": {name: value}}, append it
        to the scene, and select it once its components have loaded.
        """
        entity = self.document.create_element(definition.get("element", "a-entity"))
        for attr, value in (definition.get("components") or {}).items():
            entity.set_attribute(attr, value)
        log = get_entity_logger(logger, repr(entity))

        def _loaded(_payload):
            log.debug("Entity loaded; registering helpers")
            self.add_entity(entity)

        self._wait(entity, EV_LOADED, _loaded, f"{entity!r} loaded")
        self.scene_el.append_child(entity)
        return entity

    def add_entity(self, entity: Entity) -> None:
        self.add_object(entity.object3d)
        self.select_entity(entity)

    # =====================================================
    # Selection
    # =====================================================

    @property
    def selected(self) -> Optional[SceneObject]:
        return self.selection.selected

    @property
    def selected_entity(self):
        return self.selection.selected_entity

    @property
    def camera(self):
        return self.camera_lifecycle.camera

    def select(self, obj: Optional[SceneObject]) -> None:
        self.selection.select(obj)

    def deselect(self) -> None:
        self.selection.deselect()

    def select_entity(self, entity) -> None:
        self.selection.select_entity(entity)

    def select_by_id(self, object_id: int) -> None:
        self.selection.select_by_id(object_id)

    # =====================================================
    # Lifecycle
    # =====================================================

    def clear(self) -> None:
        """Reset the view and remove the scene's content (inspector-owned entities stay)."""
        self.camera_lifecycle.reset_pose()
        self.deselect()
        if self.scene_el is not None:
            for child in list(self.scene_el.children):
                if not child.is_inspector and child is not self.camera_lifecycle.host_camera_el:
                    self.scene_el.remove_child(child)
        self.event_bus.emit(topics.INSPECTOR_CLEARED)

    def toggle(self) -> None:
        if self.opened:
            self.close()
        else:
            self.open()

    def open(self, focus_el=None) -> None:
        markers = self.context.markers
        self.scene_el = self.document.scenes[0] if self.document.scenes else self.scene_el
        self.opened = True
        self.event_bus.emit(topics.INSPECTOR_MODE_CHANGED, True)

        if not self.scene_el.has_attribute(markers["motion_capture_replaying"]):
            self.scene_el.pause()
            self.scene_el.exit_vr()

        if self.scene_el.has_attribute("embedded"):
            self.scene_el.remove_attribute("embedded")
            self.scene_el.set_attribute(markers["removed_embedded"], "")

        self.document.body_classes.add(markers["opened_class"])
        self.scene_el.resize()
        self.shortcuts.enable()
        logger.info("Inspector opened")

        if focus_el is not None:
            self.select_entity(focus_el)

    def close(self) -> None:
        markers = self.context.markers
        self.opened = False
        self.event_bus.emit(topics.INSPECTOR_MODE_CHANGED, False)
        self.scene_el.play()
        if self.scene_el.has_attribute(markers["removed_embedded"]):
            self.scene_el.set_attribute("embedded", "")
            self.scene_el.remove_attribute(markers["removed_embedded"])
        self.document.body_classes.discard(markers["opened_class"])
        self.scene_el.resize()
        self.shortcuts.disable()
        logger.info("Inspector closed")

    def destroy(self) -> None:
        """Detach the overlay completely and give the scene back to the host camera."""
        for shot in self._pending:
            shot.cancel()
        self._pending.clear()
        if self.opened:
            self.close()
        for topic, cb in self._bus_handlers:
            self.event_bus.unsubscribe(topic, cb)
        self._bus_handlers.clear()
        for event_name, cb in self._doc_handlers:
            self.document.off(event_name, cb)
        self._doc_handlers.clear()
        if self.scene is not None:
            self.scene.remove(self.registry.scene_helpers)
        self.registry.clear()
        self.selection.reset()
        self.selection.detach()
        self.camera_lifecycle.restore()
        self._ui_ready = False
        logger.info("Inspector destroyed")
