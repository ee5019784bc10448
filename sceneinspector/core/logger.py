"""
Logging for the overlay.
Call setup_logging() once from the host integration; modules take their logger
from get_logger(), and multi-step flows about one entity use get_entity_logger().
"""
import logging
import os
from pathlib import Path
from typing import Optional

from .config import ENV_LOG_DIR, ENV_LOG_LEVEL

ROOT_NAME = "sceneinspector"
LOG_FILENAME = "sceneinspector.log"
_DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s%(entity)s %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_configured = False


class InspectorFormatter(logging.Formatter):
    """Timestamped formatter; `%(entity)s` is empty for records logged without entity context."""

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None):
        super().__init__(fmt=fmt or _DEFAULT_FORMAT, datefmt=datefmt or _DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "entity"):
            record.entity = ""
        return super().format(record)


class EntityAdapter(logging.LoggerAdapter):
    """Prefixes messages with the entity they concern, e.g. `[a-entity#12]`."""

    def process(self, msg, kwargs):
        entity = self.extra.get("entity", "")
        kwargs.setdefault("extra", {})["entity"] = f" [{entity}]" if entity else ""
        return msg, kwargs


def _level_from_env() -> int:
    name = os.environ.get(ENV_LOG_LEVEL, "").strip().upper()
    level = logging.getLevelName(name) if name else logging.INFO
    return level if isinstance(level, int) else logging.INFO


def _log_path(log_file, log_dir) -> Optional[Path]:
    """Explicit file wins, then an explicit directory, then SCENEINSPECTOR_LOG_DIR."""
    if log_file is not None:
        return Path(log_file)
    directory = log_dir or os.environ.get(ENV_LOG_DIR)
    if not directory:
        return None
    return Path(directory) / LOG_FILENAME


def _attach(root: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    root.addHandler(handler)


def setup_logging(
    level: Optional[int] = None,
    log_file: Optional[os.PathLike | str] = None,
    log_dir: Optional[os.PathLike | str] = None,
    format_string: Optional[str] = None,
    use_console: bool = True,
) -> None:
    """
    Configure the `sceneinspector` logger: console handler and/or a log file.
    Level defaults to SCENEINSPECTOR_LOG_LEVEL (INFO if unset). Only the first call has an effect.
    """
    global _configured
    if _configured:
        return

    level = _level_from_env() if level is None else level
    root = logging.getLogger(ROOT_NAME)
    root.setLevel(level)
    formatter = InspectorFormatter(format_string)

    if use_console:
        _attach(root, logging.StreamHandler(), level, formatter)

    path = _log_path(log_file, log_dir)
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        _attach(root, logging.FileHandler(path, encoding="utf-8"), level, formatter)

    _configured = True


def reset_logging() -> None:
    """Close and drop the handlers setup_logging() installed, so it can run again."""
    global _configured
    root = logging.getLogger(ROOT_NAME)
    while root.handlers:
        handler = root.handlers[0]
        root.removeHandler(handler)
        handler.close()
    _configured = False


def get_logger(name: str) -> logging.Logger:
    """`get_logger("selection")` -> the `sceneinspector.selection` logger."""
    prefix = ROOT_NAME + "."
    return logging.getLogger(name if name.startswith(prefix) else prefix + name)


def get_entity_logger(logger, entity_name: str) -> EntityAdapter:
    """Wrap logger so every line names entity_name; wrapping an adapter again nests the names."""
    if isinstance(logger, EntityAdapter):
        outer = logger.extra.get("entity", "")
        return EntityAdapter(logger.logger, {"entity": f"{outer} {entity_name}".strip()})
    return EntityAdapter(logger, {"entity": entity_name})
