"""
Overlay constants. No runtime tuning here (see sceneinspector/config/default.yaml).
Event bus topics, element event names, env names, marker attributes.
"""
# ---------------------------------------------------------------------------
# Event bus topics: single source of truth for publishers and subscribers
# ---------------------------------------------------------------------------
OBJECT_ADDED = "object_added"
OBJECT_REMOVED = "object_removed"
HELPER_ADDED = "helper_added"
HELPER_REMOVED = "helper_removed"
OBJECT_SELECTED = "object_selected"
ENTITY_SELECTED = "entity_selected"
INSPECTOR_MODE_CHANGED = "inspector_mode_changed"
SCENE_GRAPH_CHANGED = "scene_graph_changed"
CREATE_NEW_ENTITY = "create_new_entity"
INSPECTOR_CLEARED = "inspector_cleared"
WINDOW_RESIZE = "window_resize"
DOM_MODIFIED = "dom_modified"
SELECTED_ENTITY_COMPONENT_CHANGED = "selected_entity_component_changed"
SELECTED_ENTITY_COMPONENT_CREATED = "selected_entity_component_created"

TOPICS = (
    OBJECT_ADDED,
    OBJECT_REMOVED,
    HELPER_ADDED,
    HELPER_REMOVED,
    OBJECT_SELECTED,
    ENTITY_SELECTED,
    INSPECTOR_MODE_CHANGED,
    SCENE_GRAPH_CHANGED,
    CREATE_NEW_ENTITY,
    INSPECTOR_CLEARED,
    WINDOW_RESIZE,
    DOM_MODIFIED,
    SELECTED_ENTITY_COMPONENT_CHANGED,
    SELECTED_ENTITY_COMPONENT_CREATED,
)

# ---------------------------------------------------------------------------
# Host element events (keyword payloads, see core/events.py)
# ---------------------------------------------------------------------------
EV_DOM_CONTENT_LOADED = "DOMContentLoaded"
EV_LOADED = "loaded"
EV_CAMERA_SET_ACTIVE = "camera-set-active"
EV_COMPONENT_INITIALIZED = "componentinitialized"
EV_CHILD_DETACHED = "child-detached"
EV_MODEL_LOADED = "model-loaded"
EV_KEYDOWN = "keydown"
EV_INSPECTOR_LOADED = "inspector-loaded"

# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------
INSPECTOR_SOURCE = "INSPECTOR"
PICKER_NAME = "picker"

# ---------------------------------------------------------------------------
# Env var names
# ---------------------------------------------------------------------------
ENV_LOG_LEVEL = "SCENEINSPECTOR_LOG_LEVEL"
ENV_LOG_DIR = "SCENEINSPECTOR_LOG_DIR"
ENV_CONFIG = "SCENEINSPECTOR_CONFIG"
