"""Data model for anchor-indexed scene documents."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from .errors import DanglingReference


@dataclass(eq=False)
class Record:
    """
    One top-level document of a scene file.

    Attributes:
        anchor_id: Anchor declared on the document-start line.
        type_name: The record's single top-level key (e.g. ``Transform``).
        body: Field mapping under the type key. Scalars are kept as the
              literal text found in the file.
        position: Zero-based ordinal of the record in document order.
        text: Raw lines of the record body, header excluded.
    """

    anchor_id: int
    type_name: str
    body: Dict[str, Any]
    position: int = 0
    text: List[str] = field(default_factory=list, repr=False)

    def get(self, name: str, default: Any = None) -> Any:
        """Return a field value, or ``default`` if the field is absent."""
        return self.body.get(name, default)

    def __contains__(self, name: str) -> bool:
        return name in self.body


class SceneDocument:
    """
    All records of one scene file plus the index of their anchors.

    Records live in a single append-only list; relationships between them are
    only ever followed through the anchor index, never through direct links.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = path
        self._records: List[Record] = []
        self._anchors: Dict[int, int] = {}  # anchor id -> position in _records

    @property
    def records(self) -> List[Record]:
        """Return the records in document order."""
        return list(self._records)

    @property
    def anchors(self) -> Dict[int, int]:
        """Return the anchor index (anchor id -> record position)."""
        return dict(self._anchors)

    def add(self, record: Record) -> Record:
        """
        Append a record and index its anchor.

        The record's position is set to its ordinal in the document.
        Callers are responsible for rejecting duplicate anchors first.
        """
        record.position = len(self._records)
        self._records.append(record)
        self._anchors[record.anchor_id] = record.position
        return record

    def get(self, anchor_id: int) -> Record:
        """
        Look up the record declared with ``anchor_id``.

        Raises:
            DanglingReference: If the anchor was never declared in this file.
        """
        position = self._anchors.get(anchor_id)
        if position is None:
            raise DanglingReference(
                f"reference to undeclared anchor &{anchor_id}",
                path=self.path,
            )
        return self._records[position]

    def records_of_type(self, *type_names: str) -> List[Record]:
        """Return the records whose type is one of ``type_names``, in order."""
        return [r for r in self._records if r.type_name in type_names]

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __len__(self) -> int:
        """Return the number of records in the document."""
        return len(self._records)

    def __contains__(self, anchor_id: int) -> bool:
        """Check if an anchor is declared in the document."""
        return anchor_id in self._anchors

    def __repr__(self) -> str:
        return f"SceneDocument(path={self.path}, records={len(self._records)})"


@dataclass
class HierarchyNode:
    """A transform reinterpreted as a named tree node."""

    name: str
    anchor_id: int
    depth: int = 0
    children: List["HierarchyNode"] = field(default_factory=list)

    def walk(self) -> Iterator["HierarchyNode"]:
        """Yield this node and its descendants in depth-first pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass(frozen=True)
class ScriptAsset:
    """A script file and the guid its ``.meta`` sidecar assigns to it."""

    guid: str
    relative_path: str
