"""CSV exporter for unreferenced scripts."""

import csv
import io
from typing import Iterable

from scene.model import ScriptAsset


CSV_HEADER = ("Relative Path", "GUID")


def to_csv(assets: Iterable[ScriptAsset]) -> str:
    """
    Convert script assets to CSV, one row per script sorted by path.
    
    Args:
        assets: Scripts to list.
    
    Returns:
        CSV text with a ``Relative Path,GUID`` header row.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for asset in sorted(assets, key=lambda a: a.relative_path):
        writer.writerow((asset.relative_path, asset.guid))
    return buffer.getvalue()
