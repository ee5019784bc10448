"""
One-shot waits: suspend an orchestration step until an element event fires.
Each wait resolves at most once, can be cancelled, and can be bounded by a timeout.
"""
import threading
from concurrent.futures import CancelledError, Future, InvalidStateError
from typing import Any, Callable, Optional

from .exceptions import WaitTimeoutError
from .logger import get_logger

logger = get_logger("deferred")


class OneShot:
    """
    Wait for the next `event_name` on an EventEmitter.

    The result of `future` is the keyword payload of the event (a dict).
    With `predicate`, events whose payload does not match are ignored and the
    wait stays armed. With `timeout` (seconds), the future fails with
    WaitTimeoutError if nothing matched in time. `timeout=None` waits forever.
    """

    def __init__(
        self,
        emitter,
        event_name: str,
        *,
        predicate: Optional[Callable[[dict], bool]] = None,
        timeout: Optional[float] = None,
        description: str = "",
    ) -> None:
        self.future: Future = Future()
        self.event_name = event_name
        self.description = description or event_name
        self._emitter = emitter
        self._predicate = predicate
        self._timer: Optional[threading.Timer] = None
        self._armed = True
        emitter.on(event_name, self._on_event)
        if timeout is not None:
            self._timer = threading.Timer(timeout, self._on_timeout, args=(timeout,))
            self._timer.daemon = True
            self._timer.start()

    @property
    def done(self) -> bool:
        return self.future.done()

    def _detach(self) -> None:
        if not self._armed:
            return
        self._armed = False
        self._emitter.off(self.event_name, self._on_event)
        if self._timer is not None:
            self._timer.cancel()

    def _on_event(self, **payload) -> None:
        if self._predicate is not None and not self._predicate(payload):
            return
        self._detach()
        try:
            self.future.set_result(payload)
        except InvalidStateError:
            pass  # lost the race against timeout/cancel

    def _on_timeout(self, timeout: float) -> None:
        self._detach()
        try:
            self.future.set_exception(
                WaitTimeoutError(f"Timed out after {timeout}s waiting for {self.description}")
            )
        except InvalidStateError:
            pass

    def cancel(self) -> bool:
        """Stop waiting. Returns True if the wait was still pending."""
        self._detach()
        if self.future.done():
            return False
        return self.future.cancel()

    def then(self, callback: Callable[[dict], Any]) -> "OneShot":
        """
        Run callback(payload) once the event fires. Runs immediately if already resolved.
        Timeouts are logged as warnings; cancellation is logged at debug level.
        """

        def _done(fut: Future) -> None:
            try:
                payload = fut.result()
            except CancelledError:
                logger.debug("Wait for %s cancelled", self.description)
                return
            except WaitTimeoutError as e:
                logger.warning("%s", e)
                return
            callback(payload)

        self.future.add_done_callback(_done)
        return self


def wait_for(emitter, event_name: str, callback: Callable[[dict], Any], **kwargs) -> OneShot:
    """Shorthand: OneShot(emitter, event_name, **kwargs).then(callback)."""
    return OneShot(emitter, event_name, **kwargs).then(callback)
