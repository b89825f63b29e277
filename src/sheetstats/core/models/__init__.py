"""Shared models."""

from sheetstats.core.models.base import EMPTY_CELL, Cell, CellKind, DataType, format_number

__all__ = [
    "EMPTY_CELL",
    "Cell",
    "CellKind",
    "DataType",
    "format_number",
]
