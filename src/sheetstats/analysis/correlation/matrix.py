"""All-pairs Pearson correlation matrix over numeric columns."""

from __future__ import annotations

from collections.abc import Sequence

from sheetstats.analysis.correlation.algorithms import align_series, pearson_coefficient
from sheetstats.analysis.correlation.models import CorrelationMatrix
from sheetstats.analysis.typing.inference import infer_data_type
from sheetstats.core.logging import get_logger
from sheetstats.core.models.base import DataType
from sheetstats.sources.extraction import SheetData

logger = get_logger(__name__)


def build_correlation_matrix(
    sheet: SheetData,
    columns: Sequence[str] | None = None,
    min_correlation: float = 0.0,
) -> CorrelationMatrix:
    """Correlate every pair of numeric columns.

    Non-numeric columns in the selection are left out of the matrix. Each
    off-diagonal coefficient is computed over the rows where both columns are
    numeric and reported as 0 when its absolute value is below
    ``min_correlation``. The diagonal is always 1.

    Args:
        sheet: Materialized sheet
        columns: Columns to consider (default: all, in header order)
        min_correlation: Threshold below which coefficients are zeroed

    Returns:
        CorrelationMatrix indexed in header order

    Raises:
        ColumnNotFoundError: a selected column is not in the sheet
    """
    if columns:
        sheet.require(*columns)
        selected = set(columns)
        candidates = [c for c in sheet.columns.values() if c.name in selected]
    else:
        candidates = list(sheet.columns.values())

    numeric = [c for c in candidates if infer_data_type(c.non_empty()) is DataType.NUMERIC]
    series = [c.numeric_values() for c in numeric]
    n = len(numeric)

    matrix = [[0.0] * n for _ in range(n)]
    for i in range(n):
        matrix[i][i] = 1.0
        for j in range(i + 1, n):
            r = pearson_coefficient(*align_series(series[i], series[j]))
            if abs(r) < min_correlation:
                r = 0.0
            matrix[i][j] = r
            matrix[j][i] = r

    logger.info(
        "correlation_matrix_built",
        sheet=sheet.name,
        columns=n,
        min_correlation=min_correlation,
    )
    return CorrelationMatrix(
        columns=[c.name for c in numeric],
        correlations=matrix,
        min_correlation=min_correlation,
    )
