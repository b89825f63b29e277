"""Per-column descriptive statistics."""

from __future__ import annotations

import numpy as np

from sheetstats.analysis.statistics.models import ColumnStats, NumericSummary
from sheetstats.analysis.typing.inference import infer_data_type
from sheetstats.core.models.base import DataType
from sheetstats.sources.extraction import ColumnData


def fill_rate(count: int, row_count: int) -> float:
    """Percentage of data rows (header excluded), 0 when there are none."""
    if row_count <= 1:
        return 0.0
    return round(count / (row_count - 1) * 100, 2)


def summarize_numeric(values: list[float]) -> NumericSummary | None:
    """Count, sum, mean and extremes; None for an empty list."""
    if not values:
        return None
    arr = np.asarray(values, dtype=float)
    total = float(arr.sum())
    return NumericSummary(
        count=len(values),
        sum=total,
        avg=total / len(values),
        min=float(arr.min()),
        max=float(arr.max()),
    )


def build_column_stats(
    column: ColumnData,
    row_count: int,
    data_type: DataType | None = None,
    threshold: float | None = None,
) -> ColumnStats:
    """Compute descriptive statistics for one column.

    Args:
        column: Classified column values
        row_count: Sheet row count including the header row
        data_type: Pre-inferred type (inferred here when omitted)
        threshold: Predominant type threshold override

    Returns:
        ColumnStats
    """
    cells = column.non_empty()
    if data_type is None:
        data_type = infer_data_type(cells, threshold=threshold)

    non_empty = len(cells)
    data_rows = max(row_count - 1, 0)
    numeric_values = [c.value for c in cells if c.is_number]

    return ColumnStats(
        header=column.name,
        data_type=data_type,
        non_empty_count=non_empty,
        empty_count=data_rows - non_empty,
        fill_rate=fill_rate(non_empty, row_count),
        numeric=summarize_numeric(numeric_values),  # type: ignore[arg-type]
    )
