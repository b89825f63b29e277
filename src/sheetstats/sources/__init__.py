"""Sheet reader boundary.

Readers yield raw cell values. Column extraction and classification live in
``sheetstats.sources.extraction``.
"""

from sheetstats.sources.base import EMPTY_RAW_CELL, RawCell, SheetReader, WorkbookReader
from sheetstats.sources.dates import DateSystem, serial_to_datetime
from sheetstats.sources.memory import Formula, InMemorySheet, InMemoryWorkbook

__all__ = [
    "EMPTY_RAW_CELL",
    "DateSystem",
    "Formula",
    "InMemorySheet",
    "InMemoryWorkbook",
    "RawCell",
    "SheetReader",
    "WorkbookReader",
    "serial_to_datetime",
]
