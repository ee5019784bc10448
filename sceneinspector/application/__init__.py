# Application layer: inspector controller, helper registry, selection, camera lifecycle, shortcuts

from sceneinspector.application.controller import Inspector
from sceneinspector.application.helper_registry import HelperRegistry
from sceneinspector.application.selection import SelectionManager
from sceneinspector.application.camera_lifecycle import CameraLifecycle
from sceneinspector.application.shortcuts import KeyCombo, Shortcuts

__all__ = ["Inspector", "HelperRegistry", "SelectionManager", "CameraLifecycle", "KeyCombo", "Shortcuts"]
