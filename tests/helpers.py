"""Helpers that write small scene files and projects to disk."""

import textwrap
from pathlib import Path


SAMPLE_SCENE = textwrap.dedent("""\
    %YAML 1.1
    %TAG !u! tag:unity3d.com,2011:
    --- !u!1 &1
    GameObject:
      m_ObjectHideFlags: 0
      m_Name: Player
    --- !u!4 &10
    Transform:
      m_GameObject: {fileID: 1}
      m_Children:
      - {fileID: 11}
      m_Father: {fileID: 0}
    --- !u!114 &50
    MonoBehaviour:
      m_GameObject: {fileID: 1}
      m_Script: {fileID: 11500000, guid: g1, type: 3}
    --- !u!1 &2
    GameObject:
      m_Name: Weapon
    --- !u!4 &11
    Transform:
      m_GameObject: {fileID: 2}
      m_Children: []
      m_Father: {fileID: 10}
    --- !u!1 &3
    GameObject:
      m_Name: Camera
    --- !u!4 &20
    Transform:
      m_GameObject: {fileID: 3}
      m_Father: {fileID: 0}
    --- !u!1660057539 &9223372036854775807
    SceneRoots:
      m_ObjectHideFlags: 0
      m_Roots:
      - {fileID: 10}
      - {fileID: 20}
    """)


def write_file(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def write_script(project: Path, relative: str, guid: str) -> Path:
    script = write_file(project / relative, "public class Script {}\n")
    write_file(
        script.with_name(script.name + ".meta"),
        f"fileFormatVersion: 2\nguid: {guid}\nMonoImporter:\n  serializedVersion: 2\n",
    )
    return script




def chain_scene(depth: int) -> str:
    """Scene text with one root and ``depth`` nested transforms below it."""
    parts = []
    for level in range(depth + 1):
        transform = level + 1
        parts.append(f"--- !u!1 &{100000 + level}\nGameObject:\n  m_Name: Level{level}\n")
        parts.append(
            f"--- !u!4 &{transform}\nTransform:\n  m_GameObject: {{fileID: {100000 + level}}}\n"
            f"  m_Father: {{fileID: {level}}}\n"
        )
        if level < depth:
            parts.append(f"  m_Children:\n  - {{fileID: {transform + 1}}}\n")
    parts.append("--- !u!1660057539 &900000\nSceneRoots:\n  m_Roots:\n  - {fileID: 1}\n")
    return "".join(parts)
