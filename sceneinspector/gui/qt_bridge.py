"""Qt adapter for the inspector event bus: re-emits bus topics as Qt signals."""

from PySide6.QtCore import QObject, Signal

from sceneinspector.core import config as topics


class QtInspectorBridge(QObject):
    """
    Subscribes to an inspector EventBus and exposes its topics as Qt signals so
    widgets can connect with the usual signal/slot mechanism.
    Adapter only: no selection or helper logic here.
    """

    objectSelected = Signal(object)       # SceneObject or None
    entitySelected = Signal(object)       # Entity or None
    objectAdded = Signal(object)
    objectRemoved = Signal(object)
    helperAdded = Signal(object)
    helperRemoved = Signal(object)
    modeChanged = Signal(bool)            # True when the overlay opens
    sceneGraphChanged = Signal()
    inspectorCleared = Signal()
    windowResized = Signal()

    def __init__(self, event_bus, parent=None):
        super().__init__(parent)
        self._bus = event_bus
        self._handlers = []
        self._subscribe()

    def _subscribe(self):
        def on_object_selected(ev, data):
            self.objectSelected.emit(data)

        def on_entity_selected(ev, data):
            self.entitySelected.emit(data)

        def on_object_added(ev, data):
            self.objectAdded.emit(data)

        def on_object_removed(ev, data):
            self.objectRemoved.emit(data)

        def on_helper_added(ev, data):
            self.helperAdded.emit(data)

        def on_helper_removed(ev, data):
            self.helperRemoved.emit(data)

        def on_mode_changed(ev, data):
            self.modeChanged.emit(bool(data))

        def on_scene_graph_changed(ev, data):
            self.sceneGraphChanged.emit()

        def on_cleared(ev, data):
            self.inspectorCleared.emit()

        def on_resize(ev, data):
            self.windowResized.emit()

        for ev, cb in [
            (topics.OBJECT_SELECTED, on_object_selected),
            (topics.ENTITY_SELECTED, on_entity_selected),
            (topics.OBJECT_ADDED, on_object_added),
            (topics.OBJECT_REMOVED, on_object_removed),
            (topics.HELPER_ADDED, on_helper_added),
            (topics.HELPER_REMOVED, on_helper_removed),
            (topics.INSPECTOR_MODE_CHANGED, on_mode_changed),
            (topics.SCENE_GRAPH_CHANGED, on_scene_graph_changed),
            (topics.INSPECTOR_CLEARED, on_cleared),
            (topics.WINDOW_RESIZE, on_resize),
        ]:
            self._bus.subscribe(ev, cb)
            self._handlers.append((ev, cb))

    def detach(self):
        """Unsubscribe from the bus; signals stop firing."""
        for ev, cb in self._handlers:
            self._bus.unsubscribe(ev, cb)
        self._handlers.clear()

    def request_new_entity(self, definition: dict):
        """Ask the inspector (via the bus) to create an entity from a definition."""
        self._bus.emit(topics.CREATE_NEW_ENTITY, definition)

    def request_entity_selection(self, entity):
        """Announce a UI-originated entity selection on the bus."""
        self._bus.emit(topics.ENTITY_SELECTED, entity)
