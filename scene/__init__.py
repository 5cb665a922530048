"""Scene document model and error types."""

from .errors import (
    SceneError,
    UnreadableSource,
    MalformedHeader,
    MalformedRecord,
    DanglingReference,
    FieldShapeMismatch,
    CyclicHierarchy,
)
from .model import Record, SceneDocument, HierarchyNode, ScriptAsset

__all__ = [
    "SceneError",
    "UnreadableSource",
    "MalformedHeader",
    "MalformedRecord",
    "DanglingReference",
    "FieldShapeMismatch",
    "CyclicHierarchy",
    "Record",
    "SceneDocument",
    "HierarchyNode",
    "ScriptAsset",
]
