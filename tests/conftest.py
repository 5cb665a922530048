"""Shared fixtures: sample scene and project written to a temporary directory."""

import pytest

from helpers import SAMPLE_SCENE, write_file, write_script


@pytest.fixture
def sample_scene(tmp_path):
    """The sample scene written to a temporary file."""
    return write_file(tmp_path / "Main.unity", SAMPLE_SCENE)


@pytest.fixture
def project(tmp_path):
    """A project with scripts A (g1) and B (g2) and one scene using A."""
    root = tmp_path / "Game"
    write_script(root, "Assets/Scripts/A.cs", "g1")
    write_script(root, "Assets/Scripts/B.cs", "g2")
    write_file(root / "Assets/Scenes/Main.unity", SAMPLE_SCENE)
    return root
