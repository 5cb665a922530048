"""Loader that splits scene files into anchor-tagged records."""

import logging
import re
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

import yaml

from scene.errors import MalformedHeader, MalformedRecord, UnreadableSource
from scene.model import Record, SceneDocument


logger = logging.getLogger("scene_inspector.parser")

DOCUMENT_START = "---"
DOCUMENT_END = "..."

# "--- &123", "--- !u!4 &123" and "--- !u!4 &123 stripped"
HEADER_PATTERN = re.compile(r"^---\s+(?:!\S+\s+)?&(-?\d+)(?:\s|$)")


def parse_header(line: str, path: Optional[Path] = None) -> int:
    """
    Extract the anchor id from a document-start line.

    Args:
        line: A line beginning with the document-start marker.
        path: File being parsed, for diagnostics.

    Returns:
        The anchor id declared on the line.

    Raises:
        MalformedHeader: If the line carries no ``&<digits>`` declaration.
    """
    match = HEADER_PATTERN.match(line.rstrip("\r\n"))
    if match is None:
        raise MalformedHeader(
            f"document header without anchor declaration: {line.strip()!r}",
            path=path,
        )
    return int(match.group(1))


def _is_preamble(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith(("%", "#"))


def split_documents(
    lines: List[str],
    path: Optional[Path] = None,
) -> Iterator[Tuple[int, List[str]]]:
    """
    Split the lines of a file into ``(anchor_id, body_lines)`` pairs.

    Directives, comments and blank lines before the first header are skipped.

    Raises:
        MalformedHeader: On a header without anchor, or on content that
                         appears before the first header.
    """
    anchor_id: Optional[int] = None
    body: List[str] = []

    for line in lines:
        if line.startswith(DOCUMENT_START):
            if anchor_id is not None:
                yield anchor_id, body
            anchor_id = parse_header(line, path)
            body = []
        elif anchor_id is None:
            if not _is_preamble(line):
                raise MalformedHeader(
                    f"content before the first document header: {line.strip()!r}",
                    path=path,
                )
        elif line.rstrip() == DOCUMENT_END:
            continue
        else:
            body.append(line)

    if anchor_id is not None:
        yield anchor_id, body


def parse_record(
    anchor_id: int,
    body_lines: List[str],
    path: Optional[Path] = None,
) -> Record:
    """
    Parse the body of one document into a Record.

    The body is loaded with PyYAML's ``BaseLoader`` so every scalar keeps the
    exact text of the file (names such as ``Yes`` or ``007`` stay strings).

    Raises:
        MalformedRecord: If the body does not parse or is not a single-key
                         mapping.
    """
    text = "".join(body_lines)
    try:
        data = yaml.load(text, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise MalformedRecord(f"unparsable record body: {e}", path=path, anchor_id=anchor_id) from e

    if not isinstance(data, dict) or len(data) != 1:
        raise MalformedRecord(
            "record body must be a mapping with exactly one type key",
            path=path,
            anchor_id=anchor_id,
        )

    type_name, body = next(iter(data.items()))
    if body is None or body == "":
        body = {}
    if not isinstance(body, dict):
        raise MalformedRecord(
            f"fields of {type_name} must be a mapping",
            path=path,
            anchor_id=anchor_id,
        )

    return Record(
        anchor_id=anchor_id,
        type_name=str(type_name),
        body=body,
        text=[line.rstrip("\r\n") for line in body_lines],
    )


def read_lines(path: Path) -> List[str]:
    """
    Read a text file as a list of lines with line endings kept.

    Raises:
        UnreadableSource: If the file cannot be opened or decoded.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        raise UnreadableSource(f"cannot read file: {e}", path=path) from e


def load_document(path: Path) -> SceneDocument:
    """
    Load a scene file into an anchor-indexed document.

    Args:
        path: Path to the scene file.

    Returns:
        SceneDocument whose records are in file order and whose anchor index
        maps every declared anchor to its record's ordinal.

    Raises:
        UnreadableSource: If the file cannot be read.
        MalformedHeader: On a bad or duplicated anchor declaration.
        MalformedRecord: On a record body that is not a single-key mapping.
    """
    path = Path(path)
    document = SceneDocument(path)

    for anchor_id, body_lines in split_documents(read_lines(path), path):
        if anchor_id in document:
            raise MalformedHeader("duplicate anchor declaration", path=path, anchor_id=anchor_id)
        document.add(parse_record(anchor_id, body_lines, path))

    logger.debug("Loaded %d records from %s", len(document), path)
    return document
