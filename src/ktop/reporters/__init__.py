"""Reporters package: table rendering and progress output."""

from .progress import ProgressNotifier, RichProgress
from .table_renderer import TableRenderer

__all__ = ["ProgressNotifier", "RichProgress", "TableRenderer"]
