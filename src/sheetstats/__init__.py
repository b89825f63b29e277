"""Sheet statistics engine.

Descriptive and relational statistics for tabular spreadsheet data.
"""

__version__ = "0.1.0"

from sheetstats.analysis.processor import (
    correlation_matrix,
    get_column_pair_analysis,
    get_sheet_stats,
    list_available_columns,
    pivot_table,
    profile_sheet,
    profile_workbook,
)
from sheetstats.core.exceptions import (
    ColumnNotFoundError,
    InvalidAggregationError,
    NotFoundError,
    SheetNotFoundError,
    SheetStatsError,
)

__all__ = [
    # Entry points
    "correlation_matrix",
    "get_column_pair_analysis",
    "get_sheet_stats",
    "list_available_columns",
    "pivot_table",
    "profile_sheet",
    "profile_workbook",
    # Errors
    "ColumnNotFoundError",
    "InvalidAggregationError",
    "NotFoundError",
    "SheetNotFoundError",
    "SheetStatsError",
    "__version__",
]
