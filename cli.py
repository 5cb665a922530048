#!/usr/bin/env python3
"""
Scene Inspector CLI

A tool for dumping the object hierarchy of every scene in a project and
listing the scripts that no scene references.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, TextIO

from scene.errors import SceneError
from scanner.builder import inspect_project, DUMP_SUFFIX, UNUSED_SCRIPTS_FILENAME
from scanner.discovery import DEFAULT_SCENES_DIR, DEFAULT_SCRIPTS_DIR


EXIT_OK = 0
EXIT_ERROR = 1


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit code 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_ERROR, f"{self.prog}: error: {message}\n")


def parse_args(args=None):
    """Parse command line arguments."""
    parser = _ArgumentParser(
        prog="scene-inspector",
        description="Dump scene hierarchies and list scripts no scene references.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Outputs written to OUTPUT:
  <scene file>{DUMP_SUFFIX}         # one hierarchy dump per scene
  {UNUSED_SCRIPTS_FILENAME}      # scripts never referenced by a scene

Examples:
  scene-inspector ./MyGame ./report
  scene-inspector ./MyGame ./report -y -v
        """,
    )

    # Positional arguments
    parser.add_argument(
        "project",
        help="Project root directory",
    )

    parser.add_argument(
        "output",
        help="Directory receiving the dumps and the CSV",
    )

    # Scanning options
    parser.add_argument(
        "--scenes-dir",
        default=DEFAULT_SCENES_DIR,
        help=f"Scenes folder relative to the project root (default: {DEFAULT_SCENES_DIR})",
    )

    parser.add_argument(
        "--scripts-dir",
        default=DEFAULT_SCRIPTS_DIR,
        help=f"Scripts folder relative to the project root (default: {DEFAULT_SCRIPTS_DIR})",
    )

    parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Create the output directory without asking",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress details",
    )

    return parser.parse_args(args)


def confirm(
    question: str,
    read_line: Callable[[], str] = input,
    out: Optional[TextIO] = None,
) -> bool:
    """
    Ask a yes/no question until the answer starts with y or n.

    End of input counts as "no".
    """
    if out is None:
        out = sys.stdout
    print(f"{question} [y/n]", file=out)
    while True:
        try:
            answer = read_line().strip()
        except EOFError:
            return False
        if answer[:1] in ("y", "Y"):
            return True
        if answer[:1] in ("n", "N"):
            return False
        print(f"{question}\nType 'y' or 'n' to continue.", file=out)


def ensure_output_dir(
    output: Path,
    assume_yes: bool = False,
    read_line: Callable[[], str] = input,
) -> bool:
    """
    Make sure the output directory exists, asking before creating it.

    Returns:
        True if the directory exists afterwards.
    """
    if output.is_dir():
        return True
    if output.exists():
        print(f"Error: '{output}' is not a directory", file=sys.stderr)
        return False

    print(f"Directory {output} doesn't exist")
    if not assume_yes and not confirm(f"Create new directory {output}?", read_line):
        print(f"Error: directory '{output}' doesn't exist", file=sys.stderr)
        return False

    try:
        output.mkdir(parents=True)
    except OSError as e:
        print(f"Failed to create directory {output}: {e}", file=sys.stderr)
        return False
    print(f"Directory {output} was created")
    return True


def main(args=None, read_line: Callable[[], str] = input):
    """Main entry point."""
    parsed = parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # Resolve paths
    project = Path(parsed.project)
    if not project.is_dir():
        print(f"Error: directory '{parsed.project}' doesn't exist", file=sys.stderr)
        return EXIT_ERROR

    output = Path(parsed.output)
    if not ensure_output_dir(output, parsed.yes, read_line):
        return EXIT_ERROR

    # Inspect the project
    try:
        report = inspect_project(
            project_root=project,
            output_dir=output,
            scenes_dir=parsed.scenes_dir,
            scripts_dir=parsed.scripts_dir,
        )
    except SceneError as e:
        print(f"Error scanning project: {e}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return EXIT_ERROR

    for _, error in report.failures:
        print(f"Error: {error}", file=sys.stderr)

    print(
        f"{len(report.dumps)} scene dump(s) and {len(report.unused_scripts)} unused script(s) "
        f"written to: {output}",
        file=sys.stderr,
    )

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
