"""Script discovery and detection of scripts no scene references."""

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Tuple

from scene.errors import UnreadableSource
from scene.model import Record, ScriptAsset
from .discovery import DEFAULT_SCRIPTS_DIR, find_scripts, get_relative_path
from .parser import read_lines


logger = logging.getLogger("scene_inspector.usage")

META_SUFFIX = ".meta"

# "guid: 0123abcd..." at the start of a .meta line
META_GUID_PATTERN = re.compile(r"^guid:?\s+([0-9A-Za-z]+)")

# "guid: 0123abcd..." anywhere in a scene line
USAGE_GUID_PATTERN = re.compile(r"guid:\s*([0-9A-Za-z]+)")

Candidates = Dict[str, ScriptAsset]


def read_meta_guid(meta_path: Path) -> str:
    """
    Read the guid declared in a ``.meta`` sidecar.

    Raises:
        UnreadableSource: If the sidecar cannot be read.
        ValueError: If no ``guid`` line is found.
    """
    for line in read_lines(meta_path):
        match = META_GUID_PATTERN.match(line)
        if match:
            return match.group(1)
    raise ValueError(f"{meta_path}: no guid line")


def discover_scripts(
    project_root: Path,
    scripts_dir: str = DEFAULT_SCRIPTS_DIR,
) -> Tuple[Candidates, List[str]]:
    """
    Pair every script under the scripts folder with its sidecar guid.

    Scripts whose sidecar is missing, unreadable or has no guid are left out
    of the candidates and reported in the returned warnings. When two scripts
    share a guid, the first in path order is kept.

    Args:
        project_root: Project root directory.
        scripts_dir: Scripts folder relative to the project root.

    Returns:
        Tuple of (guid -> ScriptAsset mapping, list of warning messages).
    """
    candidates: Candidates = {}
    warnings: List[str] = []

    for script in find_scripts(project_root, scripts_dir):
        relative_path = get_relative_path(script, project_root)
        meta_path = script.with_name(script.name + META_SUFFIX)
        if not meta_path.is_file():
            warnings.append(f"{relative_path}: missing {META_SUFFIX} file, script skipped")
            continue
        try:
            guid = read_meta_guid(meta_path)
        except UnreadableSource as e:
            warnings.append(f"{relative_path}: {e.message}, script skipped")
            continue
        except ValueError:
            warnings.append(f"{relative_path}: no guid in {META_SUFFIX} file, script skipped")
            continue

        if guid in candidates:
            warnings.append(
                f"{relative_path}: guid {guid} already used by {candidates[guid].relative_path}, script skipped"
            )
            continue
        candidates[guid] = ScriptAsset(guid=guid, relative_path=relative_path)

    for warning in warnings:
        logger.warning(warning)
    logger.debug("Found %d scripts with guids", len(candidates))
    return candidates, warnings


def referenced_guids(lines: Iterable[str]) -> Iterator[str]:
    """Yield every guid referenced on the given lines."""
    for line in lines:
        for match in USAGE_GUID_PATTERN.finditer(line):
            yield match.group(1)


def _remove_referenced(lines: Iterable[str], candidates: Candidates) -> Candidates:
    remaining = dict(candidates)
    for guid in referenced_guids(lines):
        remaining.pop(guid, None)
        if not remaining:
            break
    return remaining


def scan_usages(records: Iterable[Record], candidates: Candidates) -> Candidates:
    """
    Drop every candidate referenced anywhere in the given records.

    The scan is textual over each record's lines, so references inside
    components, nested lists or overrides all count.

    Returns:
        A new mapping; ``candidates`` is left untouched.
    """
    def _lines() -> Iterator[str]:
        for record in records:
            yield from record.text

    return _remove_referenced(_lines(), candidates)


def scan_scene_file(scene_path: Path, candidates: Candidates) -> Candidates:
    """
    Drop every candidate referenced in a scene file.

    Works on the raw lines, so it does not depend on the file's headers being
    well formed.

    Raises:
        UnreadableSource: If the scene cannot be read.
    """
    remaining = _remove_referenced(read_lines(scene_path), candidates)
    logger.debug(
        "%s references %d candidate scripts",
        scene_path, len(candidates) - len(remaining),
    )
    return remaining


def find_unused_scripts(scene_paths: Iterable[Path], candidates: Candidates) -> List[ScriptAsset]:
    """
    Scan every scene and return the scripts none of them reference.

    Returns:
        Unreferenced scripts sorted by relative path.
    """
    for scene_path in scene_paths:
        candidates = scan_scene_file(scene_path, candidates)
    return sorted(candidates.values(), key=lambda asset: asset.relative_path)
