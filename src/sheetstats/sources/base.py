"""Base classes for sheet readers.

The readers are the boundary to file formats and storage. They yield raw,
already-materialized cell values; classification into numbers, text and dates
happens once in ``sources.extraction``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sheetstats.core.exceptions import SheetNotFoundError
from sheetstats.sources.dates import DateSystem, serial_to_datetime


@dataclass(frozen=True, slots=True)
class RawCell:
    """A cell as the reader sees it.

    Attributes:
        value: Stored value (formula text for formula cells)
        is_formula: Whether the cell holds a formula
        calculated_value: Formula result, meaningful only for formula cells
        calculation_error: Set when the formula could not be evaluated
        is_date: Whether the cell carries a date number format
    """

    value: Any = None
    is_formula: bool = False
    calculated_value: Any = None
    calculation_error: str | None = None
    is_date: bool = False


EMPTY_RAW_CELL = RawCell()


class SheetReader(ABC):
    """A single sheet of a workbook.

    Coordinates are 1-based; row 1 is the header row.
    """

    date_system: DateSystem = DateSystem.WINDOWS_1900

    @property
    @abstractmethod
    def name(self) -> str:
        """Sheet title."""
        pass

    @abstractmethod
    def highest_row(self) -> int:
        """Index of the last populated row (0 for an empty sheet)."""
        pass

    @abstractmethod
    def highest_column(self) -> int:
        """Index of the last populated column (0 for an empty sheet)."""
        pass

    @abstractmethod
    def cell(self, column: int, row: int) -> RawCell:
        """Raw cell at (column, row); EMPTY_RAW_CELL when nothing is stored."""
        pass

    def to_datetime(self, serial: float) -> datetime:
        """Convert a date serial using this sheet's date system."""
        return serial_to_datetime(serial, self.date_system)


class WorkbookReader(ABC):
    """A collection of named sheets."""

    @abstractmethod
    def sheet_names(self) -> list[str]:
        """Sheet titles in workbook order."""
        pass

    @abstractmethod
    def _get_sheet(self, name: str) -> SheetReader | None:
        pass

    def sheet(self, name: str) -> SheetReader:
        """Get a sheet by title.

        Raises:
            SheetNotFoundError: no sheet with that title
        """
        sheet = self._get_sheet(name)
        if sheet is None:
            raise SheetNotFoundError(name)
        return sheet

    def sheets(self) -> Iterator[SheetReader]:
        for name in self.sheet_names():
            yield self.sheet(name)
