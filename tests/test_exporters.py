"""Tests for exporters."""

import csv
import io

import pytest

from exporters.csv_exporter import to_csv
from exporters.text_exporter import to_dump
from scene.model import HierarchyNode, ScriptAsset


class TestTextExporter:
    """Tests for hierarchy dump exporter."""
    
    def test_empty(self):
        """Test exporting no roots."""
        assert to_dump([]) == ""
    
    def test_depth_markers(self):
        """Test that each depth level adds one marker."""
        weapon = HierarchyNode("Weapon", 11, depth=1)
        scope = HierarchyNode("Scope", 12, depth=2)
        weapon.children.append(scope)
        roots = [
            HierarchyNode("Player", 10, children=[weapon]),
            HierarchyNode("Camera", 20),
        ]
        
        output = to_dump(roots)
        
        assert output == "Player\n--Weapon\n----Scope\nCamera\n"
    
    def test_custom_marker(self):
        """Test a different indentation marker."""
        root = HierarchyNode("Root", 1, children=[HierarchyNode("Child", 2, depth=1)])
        
        assert to_dump([root], marker="  ") == "Root\n  Child\n"


class TestCSVExporter:
    """Tests for unused scripts CSV exporter."""
    
    def test_header_only(self):
        """Test exporting no scripts."""
        assert to_csv([]) == "Relative Path,GUID\n"
    
    def test_rows_sorted_by_path(self):
        """Test that rows are sorted by relative path."""
        assets = [
            ScriptAsset("g2", "Assets/Scripts/B.cs"),
            ScriptAsset("g1", "Assets/Scripts/A.cs"),
        ]
        
        output = to_csv(assets)
        
        assert output == (
            "Relative Path,GUID\n"
            "Assets/Scripts/A.cs,g1\n"
            "Assets/Scripts/B.cs,g2\n"
        )
    
    def test_path_with_comma(self):
        """Test that paths containing commas stay one column."""
        output = to_csv([ScriptAsset("g1", "Assets/Scripts/a,b.cs")])
        
        rows = list(csv.reader(io.StringIO(output)))
        
        assert rows[1] == ["Assets/Scripts/a,b.cs", "g1"]
