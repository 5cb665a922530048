"""Indented text exporter for scene hierarchies."""

from typing import List, Sequence

from scene.model import HierarchyNode


DEPTH_MARKER = "--"


def to_dump(nodes: Sequence[HierarchyNode], marker: str = DEPTH_MARKER) -> str:
    """
    Convert hierarchy trees to the indented dump format.
    
    Each node is written on its own line, prefixed by one ``marker`` per
    level of depth. Roots keep their given order and children their file
    order; every subtree is written in full before its next sibling.
    
    Args:
        nodes: Root nodes to render.
        marker: Indentation marker repeated once per depth level.
    
    Returns:
        Newline-terminated text, or an empty string for no nodes.
    """
    lines: List[str] = []
    for root in nodes:
        for node in root.walk():
            lines.append(f"{marker * node.depth}{node.name}")
    
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
