"""Reference resolution between records of the same scene document."""

import re
from typing import Any, Sequence, Union

from scene.errors import DanglingReference, FieldShapeMismatch
from scene.model import Record, SceneDocument


FieldPath = Union[str, Sequence[str]]

NULL_ANCHOR = 0
ANCHOR_PATTERN = re.compile(r"-?[0-9]+")


def reference_anchor(value: Any) -> int:
    """
    Extract the anchor id from a reference value.

    A reference is a one-entry mapping whose value is an anchor id, e.g.
    ``{fileID: 123}``. The id must be an optional minus sign followed by
    digits only.

    Raises:
        ValueError: If the value is not shaped as a reference.
    """
    if not isinstance(value, dict) or len(value) != 1:
        raise ValueError(f"expected a one-entry reference mapping, got {value!r}")
    raw = next(iter(value.values()))
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if not isinstance(raw, str) or not ANCHOR_PATTERN.fullmatch(raw):
        raise ValueError(f"reference value {raw!r} is not an anchor id")
    return int(raw)


def is_null_reference(value: Any) -> bool:
    """Check if a value is the null reference ``{fileID: 0}``."""
    try:
        return reference_anchor(value) == NULL_ANCHOR
    except ValueError:
        return False


def _field_names(field_path: FieldPath) -> Sequence[str]:
    if isinstance(field_path, str):
        return (field_path,)
    return tuple(field_path)


def get_field(document: SceneDocument, record: Record, field_path: FieldPath) -> Any:
    """
    Walk a chain of field names through a record body.

    Raises:
        FieldShapeMismatch: If a field along the path is missing or the
                            value holding it is not a mapping.
    """
    value: Any = record.body
    walked = []
    for name in _field_names(field_path):
        if not isinstance(value, dict) or name not in value:
            raise FieldShapeMismatch(
                f"{record.type_name} has no field {'.'.join(walked + [name])}",
                path=document.path,
                anchor_id=record.anchor_id,
            )
        value = value[name]
        walked.append(name)
    return value


def resolve_value(
    document: SceneDocument,
    record: Record,
    value: Any,
    field: str = "reference",
) -> Record:
    """
    Resolve a reference value found inside ``record``.

    Args:
        document: Document the record belongs to.
        record: Record holding the value (used for diagnostics).
        value: The reference mapping.
        field: Human-readable location of the value.

    Raises:
        FieldShapeMismatch: If ``value`` is not a reference.
        DanglingReference: If the anchor is not declared in the document.
    """
    try:
        anchor_id = reference_anchor(value)
    except ValueError as e:
        raise FieldShapeMismatch(
            f"{record.type_name}.{field}: {e}",
            path=document.path,
            anchor_id=record.anchor_id,
        ) from e
    if anchor_id not in document:
        raise DanglingReference(
            f"{record.type_name}.{field} points at undeclared anchor &{anchor_id}",
            path=document.path,
            anchor_id=record.anchor_id,
        )
    return document.get(anchor_id)


def resolve_reference(
    document: SceneDocument,
    record: Record,
    field_path: FieldPath,
) -> Record:
    """
    Follow the reference stored at ``field_path`` of ``record``.

    Args:
        document: Document the record belongs to.
        record: Record holding the reference.
        field_path: Field name, or chain of names, ending at a reference.

    Returns:
        The referenced record, as stored in the document.

    Raises:
        FieldShapeMismatch: If the field is missing or not a reference.
        DanglingReference: If the anchor is not declared in the document.
    """
    value = get_field(document, record, field_path)
    return resolve_value(document, record, value, ".".join(_field_names(field_path)))
