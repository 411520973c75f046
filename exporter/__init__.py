"""Exporter module for writing the selected timetable to various text formats."""

from .base import BaseExporter
from .grid_exporter import GridExporter, build_grid
from .text_exporter import TextExporter

__all__ = ["BaseExporter", "GridExporter", "TextExporter", "build_grid"]
