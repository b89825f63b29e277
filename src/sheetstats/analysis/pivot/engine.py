"""Two-axis pivot aggregation."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np

from sheetstats.analysis.pivot.models import Aggregation, PivotTable
from sheetstats.core.logging import get_logger
from sheetstats.sources.extraction import SheetData

logger = get_logger(__name__)


def _median(values: Sequence[float]) -> float:
    return float(np.median(values))


_AGGREGATORS: dict[Aggregation, Callable[[Sequence[float]], float]] = {
    Aggregation.SUM: lambda v: float(np.sum(v)),
    Aggregation.AVG: lambda v: float(np.sum(v)) / len(v),
    Aggregation.COUNT: lambda v: float(len(v)),
    Aggregation.MIN: lambda v: float(np.min(v)),
    Aggregation.MAX: lambda v: float(np.max(v)),
    Aggregation.MEDIAN: _median,
}


def aggregate(values: Sequence[float], aggregation: Aggregation | str) -> float:
    """Apply an aggregation to a non-empty bucket."""
    return _AGGREGATORS[Aggregation.parse(aggregation)](values)


def build_pivot_table(
    sheet: SheetData,
    row_column: str,
    column_column: str,
    value_column: str,
    aggregation: Aggregation | str = Aggregation.SUM,
) -> PivotTable:
    """Group a value column by two label columns and aggregate each bucket.

    Rows with an empty row label, empty column label, or a non-numeric value
    are skipped. Labels are the string form of the cells, sorted ascending.

    Args:
        sheet: Materialized sheet
        row_column: Column providing row labels
        column_column: Column providing column labels
        value_column: Numeric column to aggregate
        aggregation: sum, avg, count, min, max or median

    Returns:
        PivotTable with None for label combinations without data

    Raises:
        InvalidAggregationError: unknown aggregation
        ColumnNotFoundError: any of the three columns is missing
    """
    kind = Aggregation.parse(aggregation)
    rows_col, cols_col, values_col = sheet.require(row_column, column_column, value_column)

    buckets: dict[tuple[str, str], list[float]] = {}
    row_labels: set[str] = set()
    col_labels: set[str] = set()

    for row in range(2, sheet.row_count + 1):
        row_label = rows_col.cell(row).as_text()
        col_label = cols_col.cell(row).as_text()
        value = values_col.cell(row).as_float()
        if row_label == "" or col_label == "" or value is None:
            continue
        row_labels.add(row_label)
        col_labels.add(col_label)
        buckets.setdefault((row_label, col_label), []).append(value)

    sorted_rows = sorted(row_labels)
    sorted_cols = sorted(col_labels)
    aggregator = _AGGREGATORS[kind]
    grid: list[list[float | None]] = [
        [
            aggregator(buckets[(r, c)]) if (r, c) in buckets else None
            for c in sorted_cols
        ]
        for r in sorted_rows
    ]

    logger.info(
        "pivot_built",
        sheet=sheet.name,
        aggregation=kind.value,
        rows=len(sorted_rows),
        columns=len(sorted_cols),
        buckets=len(buckets),
    )
    return PivotTable(
        row_column=row_column,
        column_column=column_column,
        value_column=value_column,
        aggregation=kind,
        row_labels=sorted_rows,
        col_labels=sorted_cols,
        values=grid,
    )
