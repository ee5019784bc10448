from .logger import get_logger

logger = get_logger("events")


class EventEmitter:
    """
    Element-level event hooks for host objects (document, scene, entities).
    Register callbacks with on(), emit with emit(). Callbacks receive keyword
    arguments from emit(). Plays the role DOM events play for a browser host.
    """

    def __init__(self):
        self._handlers = {}  # event_name -> list of callables

    def on(self, event_name: str, callback):
        """Register a callback for event_name. Callback receives keyword arguments from emit()."""
        if event_name not in self._handlers:
            self._handlers[event_name] = []
        self._handlers[event_name].append(callback)

    def once(self, event_name: str, callback):
        """Register a callback that is removed before its first invocation. Returns the wrapper."""

        def _wrapper(**payload):
            self.off(event_name, _wrapper)
            callback(**payload)

        self.on(event_name, _wrapper)
        return _wrapper

    def off(self, event_name: str, callback=None):
        """Remove one callback, or all callbacks for event_name if callback is None."""
        if event_name not in self._handlers:
            return
        if callback is None:
            self._handlers[event_name] = []
        else:
            self._handlers[event_name] = [h for h in self._handlers[event_name] if h != callback]

    def emit(self, event_name: str, **payload):
        """Invoke all callbacks registered for event_name with **payload."""
        for h in list(self._handlers.get(event_name, ())):
            try:
                h(**payload)
            except Exception:
                # one handler must not break the others
                logger.exception("Handler for %r failed", event_name)

    def listener_count(self, event_name: str) -> int:
        return len(self._handlers.get(event_name, ()))
