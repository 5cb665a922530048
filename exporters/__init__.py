"""Exporters for converting scan results to output formats."""

from .text_exporter import to_dump
from .csv_exporter import to_csv

__all__ = ["to_dump", "to_csv"]
