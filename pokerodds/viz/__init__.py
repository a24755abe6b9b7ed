"""Visualization module."""

from .report import display_result, result_panel, result_table

__all__ = [
    "display_result",
    "result_panel",
    "result_table",
]
