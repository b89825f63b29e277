"""In-memory workbook reader.

Holds sheets as lists of rows. Used by services that have already parsed a file
into Python values, and by the test suite.

Example:
    workbook = InMemoryWorkbook(
        {
            "Sales": [
                ["Region", "Qty", "Total"],
                ["A", 10, Formula("=B2*2", result=20)],
                ["B", 20, Formula("=B3*2", error="#REF!")],
            ]
        }
    )
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from sheetstats.sources.base import EMPTY_RAW_CELL, RawCell, SheetReader, WorkbookReader
from sheetstats.sources.dates import DateSystem


@dataclass(frozen=True, slots=True)
class Formula:
    """A formula cell with its evaluated result or evaluation error."""

    text: str
    result: Any = None
    error: str | None = None

    def to_raw(self) -> RawCell:
        return RawCell(
            value=self.text,
            is_formula=True,
            calculated_value=self.result,
            calculation_error=self.error,
        )


def _to_raw(value: Any) -> RawCell:
    if isinstance(value, RawCell):
        return value
    if isinstance(value, Formula):
        return value.to_raw()
    if value is None:
        return EMPTY_RAW_CELL
    return RawCell(value=value)


def _is_blank(cell: RawCell) -> bool:
    return not cell.is_formula and (cell.value is None or cell.value == "")


class InMemorySheet(SheetReader):
    """A sheet backed by a list of rows (row 1 first)."""

    def __init__(
        self,
        name: str,
        rows: Sequence[Sequence[Any]],
        date_system: DateSystem = DateSystem.WINDOWS_1900,
    ):
        self._name = name
        self.date_system = date_system
        self._rows: list[list[RawCell]] = [[_to_raw(v) for v in row] for row in rows]

        self._highest_row = 0
        self._highest_column = 0
        for row_idx, row in enumerate(self._rows, start=1):
            for col_idx, cell in enumerate(row, start=1):
                if not _is_blank(cell):
                    self._highest_row = max(self._highest_row, row_idx)
                    self._highest_column = max(self._highest_column, col_idx)

    @property
    def name(self) -> str:
        return self._name

    def highest_row(self) -> int:
        return self._highest_row

    def highest_column(self) -> int:
        return self._highest_column

    def cell(self, column: int, row: int) -> RawCell:
        if row < 1 or column < 1 or row > len(self._rows):
            return EMPTY_RAW_CELL
        values = self._rows[row - 1]
        if column > len(values):
            return EMPTY_RAW_CELL
        return values[column - 1]


class InMemoryWorkbook(WorkbookReader):
    """An ordered mapping of sheet title to rows."""

    def __init__(
        self,
        sheets: Mapping[str, Sequence[Sequence[Any]]],
        date_system: DateSystem = DateSystem.WINDOWS_1900,
    ):
        self._sheets = {
            name: InMemorySheet(name, rows, date_system=date_system)
            for name, rows in sheets.items()
        }

    def sheet_names(self) -> list[str]:
        return list(self._sheets)

    def _get_sheet(self, name: str) -> SheetReader | None:
        return self._sheets.get(name)

    @classmethod
    def from_sheets(cls, sheets: Iterable[InMemorySheet]) -> InMemoryWorkbook:
        """Build a workbook from already constructed sheets."""
        workbook = cls({})
        workbook._sheets = {sheet.name: sheet for sheet in sheets}
        return workbook
