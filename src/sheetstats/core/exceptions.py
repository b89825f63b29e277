"""Error types raised for malformed requests.

Numeric edge cases (zero variance, empty buckets, empty sheets) are not errors
and never raise; they resolve to sentinel values inside the engines.
"""

from __future__ import annotations


class SheetStatsError(Exception):
    """Base class for all sheetstats errors."""


class NotFoundError(SheetStatsError):
    """A requested sheet or column does not exist."""


class SheetNotFoundError(NotFoundError):
    """Requested sheet is absent from the workbook."""

    def __init__(self, sheet_name: str):
        self.sheet_name = sheet_name
        super().__init__(f"Sheet '{sheet_name}' not found")


class ColumnNotFoundError(NotFoundError):
    """One or more requested columns are absent from the sheet header."""

    def __init__(self, columns: list[str], sheet_name: str | None = None):
        self.columns = list(columns)
        self.sheet_name = sheet_name
        names = ", ".join(f"'{c}'" for c in self.columns)
        where = f" in sheet '{sheet_name}'" if sheet_name else ""
        super().__init__(f"Column(s) {names} not found{where}")


class InvalidAggregationError(SheetStatsError, ValueError):
    """Unsupported pivot aggregation kind."""

    def __init__(self, aggregation: str, supported: list[str]):
        self.aggregation = aggregation
        self.supported = supported
        super().__init__(
            f"Unsupported aggregation '{aggregation}' (expected one of: {', '.join(supported)})"
        )
