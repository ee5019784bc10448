"""sceneinspector: editor overlay for a live 3D scene graph (helpers, selection, editor camera)."""

__version__ = "0.1.0"

from sceneinspector.application.controller import Inspector
from sceneinspector.core.event_bus import EventBus
from sceneinspector.core.events import EventEmitter
from sceneinspector.host.document import Document, HostScene

__all__ = [
    "__version__",
    "Inspector",
    "EventBus",
    "EventEmitter",
    "Document",
    "HostScene",
]
