"""
Process-wide in-process event bus: named topics, subscribe/emit.
"""
import threading
from collections import defaultdict
from typing import Any, Callable

from .logger import get_logger

logger = get_logger("event_bus")


class EventBus:
    """
    Topic name -> list of callbacks.
    Callbacks are invoked with (topic, data); errors are caught and logged.
    Delivery works on a snapshot of the handler list, so a callback may
    subscribe or unsubscribe while the topic is being emitted.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Callable[..., None]]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, topic: str, callback: Callable[..., None]) -> None:
        """Register callback for topic. Same callback can be subscribed multiple times."""
        with self._lock:
            self._handlers[topic].append(callback)

    on = subscribe

    def unsubscribe(self, topic: str, callback: Callable[..., None]) -> None:
        """Remove one occurrence of callback for topic."""
        with self._lock:
            if topic not in self._handlers:
                return
            try:
                self._handlers[topic].remove(callback)
            except ValueError:
                pass
            if not self._handlers[topic]:
                del self._handlers[topic]

    off = unsubscribe

    def once(self, topic: str, callback: Callable[..., None]) -> Callable[..., None]:
        """Register callback for the next emission of topic only. Returns the wrapper (for unsubscribe)."""

        def _wrapper(name, data):
            self.unsubscribe(topic, _wrapper)
            callback(name, data)

        self.subscribe(topic, _wrapper)
        return _wrapper

    def emit(self, topic: str, data: Any = None) -> None:
        """Invoke all callbacks for topic with (topic, data). Errors are logged, not raised."""
        with self._lock:
            callbacks = list(self._handlers.get(topic, ()))
        logger.debug("emit %s (%d handlers)", topic, len(callbacks))
        for cb in callbacks:
            try:
                cb(topic, data)
            except Exception as e:
                logger.exception("EventBus callback error [%s]: %s", topic, e)

    def handler_count(self, topic: str) -> int:
        with self._lock:
            return len(self._handlers.get(topic, ()))
