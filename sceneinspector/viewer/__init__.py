"""Editor-side visuals: helpers, picker proxies, selection box, editor camera pose."""

from sceneinspector.viewer.helpers import (
    HELPER_KINDS,
    BoxHelper,
    Helper,
    HelperKind,
    Picker,
    create_helper,
    helper_kind_for,
)
from sceneinspector.viewer.camera import CameraPose, place_editor_camera

__all__ = [
    "HELPER_KINDS",
    "BoxHelper",
    "Helper",
    "HelperKind",
    "Picker",
    "create_helper",
    "helper_kind_for",
    "CameraPose",
    "place_editor_camera",
]
