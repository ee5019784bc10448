"""
Overlay configuration from YAML.
Layers, later wins: built-in defaults, packaged default.yaml, the file named by
SCENEINSPECTOR_CONFIG, then the path given to load_config().
"""
import copy
import os
from pathlib import Path
from typing import Any, Iterator, Optional

import yaml

from sceneinspector.core.config import ENV_CONFIG
from sceneinspector.core.exceptions import ConfigError

PACKAGED_CONFIG = Path(__file__).resolve().parent / "default.yaml"

_BUILTIN: dict[str, Any] = {
    "toggle_shortcut": "Ctrl+Alt+I",
    "editor_camera": {
        "position": [0.0, 1.6, 2.0],
        "look_at": [0.0, 1.6, -1.0],
        "near": 0.01,
        "far": 10000,
    },
    "picker": {"radius": 2.0, "width_segments": 4, "height_segments": 2},
    "helper_sizes": {"light": 1.0, "camera": 0.1},
    "markers": {
        "original_camera": "data-aframe-inspector-original-camera",
        "default_camera": "data-aframe-default-camera",
        "inspector": "data-aframe-inspector",
        "removed_embedded": "aframe-inspector-removed-embedded",
        "motion_capture_replaying": "aframe-inspector-motion-capture-replaying",
        "opened_class": "aframe-inspector-opened",
    },
    "shortcuts": {"deselect": "Escape"},
    "wait_timeout": None,
}

_cached: Optional[dict] = None


def _merge(base: dict, layer: dict) -> dict:
    """Return base updated with layer; nested dicts merge key by key."""
    merged = dict(base)
    for key, value in layer.items():
        current = merged.get(key)
        merged[key] = _merge(current, value) if isinstance(current, dict) and isinstance(value, dict) else value
    return merged


def _read_layer(path: Path) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    return data if isinstance(data, dict) else {}


def _layer_paths(override_path) -> Iterator[Path]:
    yield PACKAGED_CONFIG
    env_path = os.environ.get(ENV_CONFIG)
    if env_path:
        yield Path(env_path)
    if override_path is not None:
        yield Path(override_path)


def _validate(cfg: dict) -> dict:
    timeout = cfg.get("wait_timeout")
    if timeout is not None:
        try:
            timeout = float(timeout)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"wait_timeout must be a number or null, got {timeout!r}") from e
        if timeout <= 0:
            raise ConfigError(f"wait_timeout must be positive, got {timeout}")
        cfg["wait_timeout"] = timeout
    cam = cfg.get("editor_camera") or {}
    for key in ("position", "look_at"):
        vec = cam.get(key)
        if not isinstance(vec, (list, tuple)) or len(vec) != 3:
            raise ConfigError(f"editor_camera.{key} must be a list of 3 numbers, got {vec!r}")
    return cfg


def load_config(override_path: str | Path | None = None) -> dict:
    """
    Build (or return the cached) configuration dict.
    Passing override_path always rebuilds and replaces the cache. Missing files are skipped.
    """
    global _cached
    if _cached is not None and override_path is None:
        return _cached
    cfg = copy.deepcopy(_BUILTIN)
    for path in _layer_paths(override_path):
        if path.exists():
            cfg = _merge(cfg, _read_layer(path))
    _cached = _validate(cfg)
    return _cached


def get_config(override_path: str | Path | None = None) -> dict:
    """Same as load_config(); reads normally go through here."""
    return load_config(override_path)


def reset_config() -> None:
    """Forget the cached configuration (tests, reloads)."""
    global _cached
    _cached = None
