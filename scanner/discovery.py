"""File discovery utilities for scanning project asset folders."""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Set


logger = logging.getLogger("scene_inspector.discovery")

DEFAULT_SCENES_DIR = "Assets/Scenes"
DEFAULT_SCRIPTS_DIR = "Assets/Scripts"
SCENE_EXTENSIONS = {".unity"}
SCRIPT_EXTENSIONS = {".cs"}


def _is_ignored_dir(entry: Path) -> bool:
    # The asset importer skips hidden folders and folders ending in "~".
    return entry.name.startswith(".") or entry.name.endswith("~")


def iter_files(
    root: Path,
    include_ext: Set[str],
    max_depth: Optional[int] = None,
) -> Iterator[Path]:
    """
    Iterate over files in a directory tree, in sorted order.

    Args:
        root: Directory to scan.
        include_ext: File extensions to include (e.g., {'.unity'}).
        max_depth: Maximum depth to descend. None means unlimited.

    Yields:
        Path objects for matching files.
    """
    def _walk(current: Path, depth: int) -> Iterator[Path]:
        if max_depth is not None and depth > max_depth:
            return

        for entry in sorted(current.iterdir()):
            if entry.is_dir():
                if _is_ignored_dir(entry):
                    continue
                yield from _walk(entry, depth + 1)
            elif entry.is_file():
                if entry.suffix.lower() in include_ext:
                    yield entry

    yield from _walk(root, 0)


def find_scenes(project_root: Path, scenes_dir: str = DEFAULT_SCENES_DIR) -> List[Path]:
    """Return every scene file below the project's scenes folder."""
    folder = project_root / scenes_dir
    if not folder.is_dir():
        logger.warning("Scenes folder %s does not exist", folder)
        return []
    return list(iter_files(folder, SCENE_EXTENSIONS))


def find_scripts(project_root: Path, scripts_dir: str = DEFAULT_SCRIPTS_DIR) -> List[Path]:
    """Return every script file below the project's scripts folder."""
    folder = project_root / scripts_dir
    if not folder.is_dir():
        logger.warning("Scripts folder %s does not exist", folder)
        return []
    return list(iter_files(folder, SCRIPT_EXTENSIONS))


def get_relative_path(file_path: Path, root: Path) -> str:
    """Get the path relative to root with forward slashes."""
    try:
        relative = file_path.resolve().relative_to(root.resolve())
    except ValueError:
        relative = file_path
    return relative.as_posix()
