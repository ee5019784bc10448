"""Keyboard shortcuts: key-combination parsing and an enable/disable-able command table."""

from dataclasses import dataclass
from typing import Callable

from sceneinspector.core.config import EV_KEYDOWN
from sceneinspector.core.logger import get_logger

logger = get_logger("shortcuts")

_MODIFIERS = {"ctrl", "alt", "shift"}
_ALIASES = {"control": "ctrl", "option": "alt"}


@dataclass(frozen=True)
class KeyCombo:
    key: str
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @classmethod
    def parse(cls, text: str) -> "KeyCombo":
        """Parse "Ctrl+Alt+I" style text (case-insensitive)."""
        parts = [p.strip().lower() for p in text.split("+") if p.strip()]
        if not parts:
            raise ValueError(f"Empty key combination: {text!r}")
        mods = {_ALIASES.get(p, p) for p in parts[:-1]}
        unknown = mods - _MODIFIERS
        if unknown:
            raise ValueError(f"Unknown modifier(s) {sorted(unknown)} in {text!r}")
        return cls(key=parts[-1], ctrl="ctrl" in mods, alt="alt" in mods, shift="shift" in mods)

    def matches(self, key: str, ctrl: bool = False, alt: bool = False, shift: bool = False, **_) -> bool:
        return (
            str(key).lower() == self.key
            and bool(ctrl) == self.ctrl
            and bool(alt) == self.alt
            and bool(shift) == self.shift
        )

    def __str__(self) -> str:
        mods = [name.capitalize() for name in ("ctrl", "alt", "shift") if getattr(self, name)]
        return "+".join(mods + [self.key.upper()])


class Shortcuts:
    """
    Editor shortcuts, live only between enable() and disable().
    Register commands with add_callback(); key presses arrive as document keydown events.
    """

    def __init__(self, document, bindings: dict[str, str] | None = None) -> None:
        self.document = document
        self.enabled = False
        self._bindings: dict[str, KeyCombo] = {
            cmd: KeyCombo.parse(seq) for cmd, seq in (bindings or {}).items()
        }
        self._callbacks: dict[str, Callable[[], None]] = {}

    def add_callback(self, command_name: str, callback: Callable[[], None], combo: str | None = None) -> None:
        """Bind callback to command_name; combo overrides/declares its key combination."""
        if combo is not None:
            self._bindings[command_name] = KeyCombo.parse(combo)
        if command_name not in self._bindings:
            raise KeyError(f"Command '{command_name}' has no key binding.")
        self._callbacks[command_name] = callback

    def enable(self) -> None:
        if self.enabled:
            return
        self.document.on(EV_KEYDOWN, self._on_keydown)
        self.enabled = True
        logger.debug("Shortcuts enabled")

    def disable(self) -> None:
        if not self.enabled:
            return
        self.document.off(EV_KEYDOWN, self._on_keydown)
        self.enabled = False
        logger.debug("Shortcuts disabled")

    def _on_keydown(self, **event) -> None:
        for cmd, combo in self._bindings.items():
            if not combo.matches(**event):
                continue
            cb = self._callbacks.get(cmd)
            if cb is None:
                logger.warning("Shortcut %s pressed but command '%s' is not registered", combo, cmd)
                continue
            logger.info("Shortcut triggered: %s -> %s", cmd, getattr(cb, "__qualname__", repr(cb)))
            cb()
