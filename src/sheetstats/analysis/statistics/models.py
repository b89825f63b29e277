"""Statistics Models.

Pydantic models for descriptive statistics:
- NumericSummary: Aggregates over a column's numeric values
- ColumnStats: Type, fill rate and numeric summary of a column
- SheetStats: Column statistics plus cross-column analysis of a sheet
- WorkbookStats: Statistics of every sheet of a workbook
- ColumnListing: Columns of a sheet grouped by type
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from sheetstats.analysis.correlation.models import CrossColumnStat
from sheetstats.core.models.base import DataType


class NumericSummary(BaseModel):
    """Aggregates over the numeric values of a column."""

    model_config = ConfigDict(frozen=True)

    count: int
    sum: float
    avg: float
    min: float
    max: float


class ColumnStats(BaseModel):
    """Descriptive statistics of a column.

    ``numeric`` is present whenever the column holds at least one numeric
    value, even when its predominant type is not numeric.
    """

    model_config = ConfigDict(frozen=True)

    header: str
    data_type: DataType
    non_empty_count: int
    empty_count: int
    fill_rate: float  # percent, 2 decimals
    numeric: NumericSummary | None = None


class SheetStats(BaseModel):
    """Statistics of one sheet."""

    model_config = ConfigDict(frozen=True)

    name: str
    row_count: int
    column_count: int
    columns: dict[str, ColumnStats] = Field(default_factory=dict)
    cross_column_stats: list[CrossColumnStat] = Field(default_factory=list)
    cross_column_complete: bool = True

    def find_cross_column_stat(self, target: str, source: str) -> CrossColumnStat | None:
        """Precomputed analysis of a (target, source) pair, if any."""
        for stat in self.cross_column_stats:
            if stat.target_column == target and stat.source_column == source:
                return stat
        return None


class WorkbookStats(BaseModel):
    """Statistics of every sheet of a workbook."""

    model_config = ConfigDict(frozen=True)

    sheet_count: int
    total_rows: int
    total_columns: int
    sheets: dict[str, SheetStats] = Field(default_factory=dict)


class ColumnEntry(BaseModel):
    """A column as offered for cross-analysis."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: DataType
    stats: dict[str, float] | None = None  # min/max/avg for numeric columns
    fill_rate: float | None = None


class ColumnListing(BaseModel):
    """Columns of a sheet split by predominant type."""

    model_config = ConfigDict(frozen=True)

    numeric: list[ColumnEntry] = Field(default_factory=list)
    categorical: list[ColumnEntry] = Field(default_factory=list)
    date: list[ColumnEntry] = Field(default_factory=list)
    other: list[ColumnEntry] = Field(default_factory=list)
