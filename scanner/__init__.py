"""Scanner module for loading scene documents and inspecting projects."""

from .discovery import iter_files, find_scenes, find_scripts
from .parser import load_document, parse_header, split_documents
from .resolver import resolve_reference, resolve_value
from .hierarchy import build_hierarchy, render_hierarchy, scene_root_ids
from .usage import discover_scripts, scan_usages, scan_scene_file, find_unused_scripts
from .builder import dump_scene_hierarchy, inspect_project

__all__ = [
    "iter_files",
    "find_scenes",
    "find_scripts",
    "load_document",
    "parse_header",
    "split_documents",
    "resolve_reference",
    "resolve_value",
    "build_hierarchy",
    "render_hierarchy",
    "scene_root_ids",
    "discover_scripts",
    "scan_usages",
    "scan_scene_file",
    "find_unused_scripts",
    "dump_scene_hierarchy",
    "inspect_project",
]
