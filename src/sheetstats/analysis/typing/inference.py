"""Cell classification and predominant-type inference.

Two steps:
1. ``classify_cell`` turns a raw reader value into a ``Cell`` (number, text,
   date or empty). Formula cells are classified on their calculated value; a
   formula that failed to evaluate is kept as text.
2. ``infer_data_type`` counts the kinds of a column's non-empty cells and picks
   the kind holding more than the threshold share (80% by default), else
   ``mixed``.

Date rules:
- datetime values and numbers carrying a date format are dates only when the
  calendar year is later than ``date_min_year``; otherwise they are text.
- other strings count as dates when they contain a digit and parse with
  ``dateutil``; everything else is text.
"""

from __future__ import annotations

import math
import numbers
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from dateutil import parser as dateparser

from sheetstats.core.config import get_settings
from sheetstats.core.logging import get_logger
from sheetstats.core.models.base import Cell, CellKind, DataType, format_number
from sheetstats.sources.dates import serial_to_datetime

if TYPE_CHECKING:
    from sheetstats.sources.base import RawCell

logger = get_logger(__name__)

_NUMERIC_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_HAS_DIGIT_RE = re.compile(r"\d")
# Missing fields of a parsed date string come from here, not from today
_PARSE_DEFAULT = datetime(1900, 1, 1)

DateConverter = Callable[[float], datetime]


def parse_number(value: str) -> float | None:
    """Parse a plain decimal or exponent number; None when not numeric."""
    stripped = value.strip()
    if not _NUMERIC_RE.match(stripped):
        return None
    number = float(stripped)
    return number if math.isfinite(number) else None


def parse_date_string(value: str) -> datetime | None:
    """Parse a free-form date string; None when it is not a date."""
    if not _HAS_DIGIT_RE.search(value):
        return None
    try:
        return dateparser.parse(value, default=_PARSE_DEFAULT)
    except (ValueError, OverflowError):
        return None


def _serial_to_cell(
    serial: float,
    to_datetime: DateConverter,
    date_min_year: int,
    source_text: str | None = None,
) -> Cell:
    fallback = Cell.text(source_text if source_text is not None else format_number(serial))
    try:
        converted = to_datetime(serial)
    except (ValueError, OverflowError):
        return fallback
    if converted.year > date_min_year:
        return Cell.date(converted, source_text)
    return fallback


def classify_value(
    value: Any,
    *,
    is_date: bool = False,
    to_datetime: DateConverter = serial_to_datetime,
    date_min_year: int | None = None,
) -> Cell:
    """Classify a plain (non-formula) value.

    Args:
        value: Raw value from the reader
        is_date: Whether the reader flagged the cell as date formatted
        to_datetime: Date-serial converter of the sheet
        date_min_year: Dates must be later than this year (default from settings)

    Returns:
        Classified Cell
    """
    if date_min_year is None:
        date_min_year = get_settings().date_min_year

    if value is None or (isinstance(value, str) and value == ""):
        return Cell.empty()

    if isinstance(value, bool):
        return Cell.text("TRUE" if value else "FALSE")

    if isinstance(value, datetime | date):
        if not isinstance(value, datetime):
            value = datetime(value.year, value.month, value.day)
        if value.year > date_min_year:
            return Cell.date(value)
        return Cell.text(value.isoformat())

    if isinstance(value, numbers.Real):
        number = float(value)
        if not math.isfinite(number):
            return Cell.text(str(value))
        if is_date:
            return _serial_to_cell(number, to_datetime, date_min_year)
        return Cell.number(number)

    if isinstance(value, str):
        number = parse_number(value)
        if number is not None:
            if is_date:
                return _serial_to_cell(number, to_datetime, date_min_year, value)
            return Cell.number(number, source_text=value)
        parsed = parse_date_string(value)
        if parsed is not None:
            return Cell.date(parsed, source_text=value)
        return Cell.text(value)

    return Cell.text(str(value))


def classify_cell(
    raw: RawCell,
    to_datetime: DateConverter = serial_to_datetime,
    date_min_year: int | None = None,
) -> Cell:
    """Classify a raw reader cell, resolving formulas to their result."""
    value = raw.value
    if raw.is_formula:
        if raw.calculation_error is not None:
            logger.debug(
                "formula_evaluation_failed",
                formula=str(raw.value),
                error=raw.calculation_error,
            )
            return Cell.text(str(raw.value))
        value = raw.calculated_value

    return classify_value(
        value,
        is_date=raw.is_date,
        to_datetime=to_datetime,
        date_min_year=date_min_year,
    )


@dataclass
class TypeCounts:
    """Counts of non-empty cell kinds in a column."""

    numeric: int = 0
    text: int = 0
    date: int = 0

    @property
    def total(self) -> int:
        return self.numeric + self.text + self.date

    def add(self, cell: Cell) -> None:
        match cell.kind:
            case CellKind.NUMBER:
                self.numeric += 1
            case CellKind.TEXT:
                self.text += 1
            case CellKind.DATE:
                self.date += 1
            case CellKind.EMPTY:
                pass

    @classmethod
    def from_cells(cls, cells: Iterable[Cell]) -> TypeCounts:
        counts = cls()
        for cell in cells:
            counts.add(cell)
        return counts

    def dominant_type(self, threshold: float) -> DataType:
        """Kind holding more than ``threshold`` of the non-empty values, else mixed."""
        total = self.total
        if total == 0:
            return DataType.MIXED
        if self.numeric / total > threshold:
            return DataType.NUMERIC
        if self.text / total > threshold:
            return DataType.TEXT
        if self.date / total > threshold:
            return DataType.DATE
        return DataType.MIXED


def infer_data_type(cells: Iterable[Cell], threshold: float | None = None) -> DataType:
    """Infer the predominant data type of a column.

    Args:
        cells: Column cells (empty cells are ignored)
        threshold: Share a kind must exceed (default from settings)

    Returns:
        numeric, text, date, or mixed
    """
    if threshold is None:
        threshold = get_settings().dominant_type_threshold
    return TypeCounts.from_cells(cells).dominant_type(threshold)
