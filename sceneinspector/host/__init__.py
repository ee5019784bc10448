"""Host-side model: scene graph nodes, entities, document and scene element."""

from sceneinspector.host.graph import CameraObject, LightObject, ObjectType, SceneObject
from sceneinspector.host.entity import COMPONENTS, Entity, parse_properties, parse_vec3
from sceneinspector.host.document import DEFAULT_CAMERA_ATTR, Document, HostScene, Mutation

__all__ = [
    "CameraObject",
    "LightObject",
    "ObjectType",
    "SceneObject",
    "COMPONENTS",
    "Entity",
    "parse_properties",
    "parse_vec3",
    "DEFAULT_CAMERA_ATTR",
    "Document",
    "HostScene",
    "Mutation",
]
