"""Qt-facing adapters."""

from sceneinspector.gui.qt_bridge import QtInspectorBridge

__all__ = ["QtInspectorBridge"]
