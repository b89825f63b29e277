"""Base models and types used across all modules.

This module contains the fundamental types shared by the sheet-reading boundary
and the analysis engines.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class DataType(str, Enum):
    """Predominant type of a column."""

    NUMERIC = "numeric"
    TEXT = "text"
    DATE = "date"
    MIXED = "mixed"


class CellKind(str, Enum):
    """Kind of a single classified cell value."""

    NUMBER = "number"
    TEXT = "text"
    DATE = "date"
    EMPTY = "empty"


@dataclass(frozen=True, slots=True)
class Cell:
    """A classified cell value.

    Produced once at the sheet-reader boundary so the engines work on a closed
    set of kinds instead of re-testing raw values:
    - NUMBER: ``value`` is a finite float
    - TEXT: ``value`` is a str
    - DATE: ``value`` is a datetime
    - EMPTY: ``value`` is None

    ``source_text`` keeps the original string when the cell was read from text,
    so labels stay exactly as entered ("007" is not "7").
    """

    kind: CellKind
    value: float | str | datetime | None = None
    source_text: str | None = field(default=None, compare=False)

    @classmethod
    def number(cls, value: float, source_text: str | None = None) -> Cell:
        return cls(CellKind.NUMBER, float(value), source_text)

    @classmethod
    def text(cls, value: str) -> Cell:
        return cls(CellKind.TEXT, value)

    @classmethod
    def date(cls, value: datetime, source_text: str | None = None) -> Cell:
        return cls(CellKind.DATE, value, source_text)

    @classmethod
    def empty(cls) -> Cell:
        return EMPTY_CELL

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    @property
    def is_number(self) -> bool:
        return self.kind is CellKind.NUMBER

    def as_float(self) -> float | None:
        """Numeric value, or None for non-numeric cells."""
        if self.kind is CellKind.NUMBER:
            return self.value  # type: ignore[return-value]
        return None

    def as_text(self) -> str:
        """String form used for category and pivot labels.

        The original text when there is one, otherwise the rendered value.
        """
        if self.source_text is not None:
            return self.source_text
        match self.kind:
            case CellKind.EMPTY:
                return ""
            case CellKind.NUMBER:
                return format_number(self.value)  # type: ignore[arg-type]
            case CellKind.DATE:
                return _format_date(self.value)  # type: ignore[arg-type]
            case CellKind.TEXT:
                return self.value  # type: ignore[return-value]


EMPTY_CELL = Cell(CellKind.EMPTY, None)


def format_number(value: float) -> str:
    """Render a number the way spreadsheets display it: 10.0 -> '10'."""
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def _format_date(value: datetime | date) -> str:
    if isinstance(value, datetime) and value.time() == datetime.min.time():
        return value.date().isoformat()
    return value.isoformat()
