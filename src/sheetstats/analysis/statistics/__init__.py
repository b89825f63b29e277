"""Per-column and per-sheet statistics."""

from sheetstats.analysis.statistics.builder import (
    build_column_stats,
    fill_rate,
    summarize_numeric,
)
from sheetstats.analysis.statistics.models import (
    ColumnEntry,
    ColumnListing,
    ColumnStats,
    NumericSummary,
    SheetStats,
    WorkbookStats,
)

__all__ = [
    "ColumnEntry",
    "ColumnListing",
    "ColumnStats",
    "NumericSummary",
    "SheetStats",
    "WorkbookStats",
    "build_column_stats",
    "fill_rate",
    "summarize_numeric",
]
