from sceneinspector.config import get_config
from sceneinspector.core.event_bus import EventBus


class InspectorContext:
    """
    Shared state for one overlay instance: document, event bus, config, and the
    scene once it is known. Owned by the Inspector, which hands its bus and
    config to the registry and selection manager and the whole context to the
    camera lifecycle; there is no module-level inspector singleton.
    """

    def __init__(self, document, event_bus=None, config=None):
        self.document = document
        self.event_bus = event_bus or EventBus()
        self.config = config if config is not None else get_config()
        self.scene = None

    @property
    def markers(self) -> dict:
        return self.config.get("markers") or {}

    @property
    def wait_timeout(self):
        return self.config.get("wait_timeout")
