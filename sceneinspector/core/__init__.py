from .event_bus import EventBus
from .events import EventEmitter
from .deferred import OneShot, wait_for
from .exceptions import InspectorError, ConfigError, WaitTimeoutError
from .logger import get_logger, get_entity_logger, setup_logging, reset_logging

__all__ = [
    "EventBus", "EventEmitter",
    "OneShot", "wait_for",
    "InspectorError", "ConfigError", "WaitTimeoutError",
    "get_logger", "get_entity_logger", "setup_logging", "reset_logging",
]
