"""Project inspection that orchestrates loading, scanning and writing outputs."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from exporters import to_csv
from scene.errors import SceneError
from scene.model import ScriptAsset
from .discovery import DEFAULT_SCENES_DIR, DEFAULT_SCRIPTS_DIR, find_scenes
from .hierarchy import render_hierarchy, scene_root_ids
from .parser import load_document
from .usage import discover_scripts, find_unused_scripts


logger = logging.getLogger("scene_inspector.builder")

DUMP_SUFFIX = ".dump"
UNUSED_SCRIPTS_FILENAME = "UnusedScripts.csv"


@dataclass
class InspectionReport:
    """Outcome of a project inspection."""

    dumps: List[Path] = field(default_factory=list)
    unused_scripts: List[ScriptAsset] = field(default_factory=list)
    unused_scripts_file: Optional[Path] = None
    warnings: List[str] = field(default_factory=list)
    failures: List[Tuple[Path, SceneError]] = field(default_factory=list)


def dump_scene_hierarchy(scene_path: Path, output_dir: Path) -> Path:
    """
    Write the hierarchy of one scene to ``<output_dir>/<scene name>.dump``.

    The dump is rendered in full before the file is opened, so a failure
    leaves no partial output behind.

    Args:
        scene_path: Scene file to dump.
        output_dir: Directory receiving the dump.

    Returns:
        Path of the written dump.

    Raises:
        SceneError: If the scene cannot be loaded or its hierarchy resolved.
    """
    document = load_document(scene_path)
    text = render_hierarchy(document, scene_root_ids(document))

    output_path = output_dir / (scene_path.name + DUMP_SUFFIX)
    output_path.write_text(text, encoding="utf-8")
    logger.debug("Wrote %s", output_path)
    return output_path


def write_unused_scripts(assets: List[ScriptAsset], output_dir: Path) -> Path:
    """Write ``UnusedScripts.csv`` into ``output_dir``."""
    output_path = output_dir / UNUSED_SCRIPTS_FILENAME
    output_path.write_text(to_csv(assets), encoding="utf-8")
    logger.debug("Wrote %d unused scripts to %s", len(assets), output_path)
    return output_path


def inspect_project(
    project_root: Path,
    output_dir: Path,
    scenes_dir: str = DEFAULT_SCENES_DIR,
    scripts_dir: str = DEFAULT_SCRIPTS_DIR,
) -> InspectionReport:
    """
    Inspect a project and write every output artifact.

    Unused scripts are determined across all scenes and written first. Each
    scene hierarchy is then dumped on its own; a scene that fails is
    recorded in the report and the remaining scenes are still processed.

    Args:
        project_root: Project root directory.
        output_dir: Existing directory receiving the outputs.
        scenes_dir: Scenes folder relative to the project root.
        scripts_dir: Scripts folder relative to the project root.

    Returns:
        InspectionReport describing what was written and what failed.

    Raises:
        UnreadableSource: If a scene cannot be read during the usage scan.
    """
    report = InspectionReport()
    scenes = find_scenes(project_root, scenes_dir)

    candidates, report.warnings = discover_scripts(project_root, scripts_dir)
    report.unused_scripts = find_unused_scripts(scenes, candidates)
    report.unused_scripts_file = write_unused_scripts(report.unused_scripts, output_dir)

    for scene_path in scenes:
        try:
            report.dumps.append(dump_scene_hierarchy(scene_path, output_dir))
        except SceneError as e:
            report.failures.append((scene_path, e))

    return report
