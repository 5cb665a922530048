"""Errors raised while loading and walking scene documents."""

from pathlib import Path
from typing import Optional, Union


class SceneError(Exception):
    """
    Base class for every failure tied to a scene document.
    
    Carries the offending file and, when known, the anchor id of the record
    being processed so diagnostics can point at the exact document.
    """
    
    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        anchor_id: Optional[int] = None,
    ):
        self.message = message
        self.path = Path(path) if path is not None else None
        self.anchor_id = anchor_id
        super().__init__(str(self))
    
    def __str__(self) -> str:
        text = self.message
        if self.path is not None:
            text = f"{self.path}: {text}"
        if self.anchor_id is not None:
            text = f"{text} (anchor &{self.anchor_id})"
        return text


class UnreadableSource(SceneError):
    """The file could not be opened or decoded."""


class MalformedHeader(SceneError):
    """A document-start line has no usable anchor declaration."""


class MalformedRecord(SceneError):
    """A record body is not a single-key mapping."""


class DanglingReference(SceneError):
    """A reference points at an anchor never declared in the file."""


class FieldShapeMismatch(SceneError):
    """A field expected to hold a reference or sequence has another shape."""


class CyclicHierarchy(SceneError):
    """A transform appears again below itself in the hierarchy."""
