"""Sheet analysis processor.

Entry points the result consumer calls, each reading from a sheet reader:

Profiling (profile_sheet / profile_workbook):
- Type inference and descriptive statistics for every column
- Cross-column analysis of every numeric target against every other column

On-demand analyses:
- get_column_pair_analysis: one (target, source) pair, reusing precomputed or
  cached results before reading the two columns
- correlation_matrix: all-pairs Pearson matrix over numeric columns
- pivot_table: two-axis aggregation of a value column

Projections:
- list_available_columns: columns grouped by type for selection
"""

from __future__ import annotations

from collections.abc import Sequence

from sheetstats.analysis.correlation.cache import CrossColumnCache
from sheetstats.analysis.correlation.cross_column import (
    analyze_column_pair,
    analyze_cross_columns,
    infer_column_types,
)
from sheetstats.analysis.correlation.matrix import build_correlation_matrix
from sheetstats.analysis.correlation.models import CorrelationMatrix, CrossColumnStat
from sheetstats.analysis.pivot.engine import build_pivot_table
from sheetstats.analysis.pivot.models import Aggregation, PivotTable
from sheetstats.analysis.statistics.builder import build_column_stats
from sheetstats.analysis.statistics.models import (
    ColumnEntry,
    ColumnListing,
    SheetStats,
    WorkbookStats,
)
from sheetstats.core.exceptions import ColumnNotFoundError, SheetNotFoundError
from sheetstats.core.logging import get_logger, log_context, timed
from sheetstats.core.models.base import DataType
from sheetstats.sources.base import SheetReader, WorkbookReader
from sheetstats.sources.extraction import read_sheet

logger = get_logger(__name__)


def profile_sheet(
    reader: SheetReader,
    timeout: float | None = None,
) -> SheetStats:
    """Compute column statistics and cross-column analysis for a sheet.

    Args:
        reader: Sheet reader
        timeout: Seconds allowed for the cross-column phase; pairs not finished
            in time are dropped and ``cross_column_complete`` is False

    Returns:
        SheetStats
    """
    with log_context(sheet=reader.name), timed(logger, "sheet_profiled") as fields:
        sheet = read_sheet(reader)
        column_types = infer_column_types(sheet)

        columns = {
            name: build_column_stats(column, sheet.row_count, data_type=column_types[name])
            for name, column in sheet.columns.items()
        }
        cross = analyze_cross_columns(sheet, column_types, timeout=timeout)

        fields.update(
            rows=sheet.row_count,
            columns=sheet.column_count,
            numeric_columns=sum(1 for t in column_types.values() if t is DataType.NUMERIC),
            cross_column_stats=len(cross.stats),
        )

    return SheetStats(
        name=sheet.name,
        row_count=sheet.row_count,
        column_count=sheet.column_count,
        columns=columns,
        cross_column_stats=cross.stats,
        cross_column_complete=cross.complete,
    )


def profile_workbook(
    workbook: WorkbookReader,
    timeout: float | None = None,
) -> WorkbookStats:
    """Profile every sheet of a workbook.

    Args:
        workbook: Workbook reader
        timeout: Per-sheet cross-column timeout in seconds

    Returns:
        WorkbookStats with sheets in workbook order
    """
    sheets: dict[str, SheetStats] = {}
    for reader in workbook.sheets():
        sheets[reader.name] = profile_sheet(reader, timeout=timeout)

    return WorkbookStats(
        sheet_count=len(sheets),
        total_rows=sum(s.row_count for s in sheets.values()),
        total_columns=sum(s.column_count for s in sheets.values()),
        sheets=sheets,
    )


def get_sheet_stats(workbook_stats: WorkbookStats, sheet_name: str) -> SheetStats:
    """Stats of one sheet.

    Raises:
        SheetNotFoundError: the workbook has no such sheet
    """
    try:
        return workbook_stats.sheets[sheet_name]
    except KeyError:
        raise SheetNotFoundError(sheet_name) from None


def list_available_columns(sheet_stats: SheetStats) -> ColumnListing:
    """Split a sheet's columns into numeric, categorical, date and other groups."""
    listing: dict[str, list[ColumnEntry]] = {
        "numeric": [],
        "categorical": [],
        "date": [],
        "other": [],
    }
    for header, stats in sheet_stats.columns.items():
        match stats.data_type:
            case DataType.NUMERIC:
                summary = stats.numeric
                listing["numeric"].append(
                    ColumnEntry(
                        name=header,
                        type=stats.data_type,
                        stats=(
                            {"min": summary.min, "max": summary.max, "avg": summary.avg}
                            if summary
                            else None
                        ),
                    )
                )
            case DataType.TEXT:
                listing["categorical"].append(
                    ColumnEntry(name=header, type=stats.data_type, fill_rate=stats.fill_rate)
                )
            case DataType.DATE:
                listing["date"].append(
                    ColumnEntry(name=header, type=stats.data_type, fill_rate=stats.fill_rate)
                )
            case _:
                listing["other"].append(
                    ColumnEntry(name=header, type=stats.data_type, fill_rate=stats.fill_rate)
                )
    return ColumnListing(**listing)


def get_column_pair_analysis(
    reader: SheetReader,
    target: str,
    source: str,
    sheet_stats: SheetStats | None = None,
    cache: CrossColumnCache | None = None,
    sheet_id: str | None = None,
) -> CrossColumnStat:
    """Analysis of one (target, source) pair.

    Lookup order:
    1. ``sheet_stats.cross_column_stats`` (exact target/source match)
    2. ``cache`` under ``(sheet_id, target, source)``
    3. Fresh computation reading only the two columns from ``reader``

    Args:
        reader: Sheet reader, used only when nothing precomputed matches
        target: Target column name
        source: Source column name
        sheet_stats: Previously profiled stats of the same sheet
        cache: Shared pair cache
        sheet_id: Cache identity of the sheet (defaults to the sheet name)

    Returns:
        CrossColumnStat

    Raises:
        ColumnNotFoundError: target or source is not in the sheet
    """
    if sheet_stats is not None:
        missing = [c for c in (target, source) if c not in sheet_stats.columns]
        if missing:
            raise ColumnNotFoundError(missing, sheet_name=sheet_stats.name)
        precomputed = sheet_stats.find_cross_column_stat(target, source)
        if precomputed is not None:
            return precomputed

    def compute() -> CrossColumnStat:
        sheet = read_sheet(reader, columns=[target, source])
        logger.info("pair_analyzed_on_demand", sheet=reader.name, target=target, source=source)
        return analyze_column_pair(sheet, target, source)

    if cache is None:
        return compute()
    return cache.get_or_compute(sheet_id or reader.name, target, source, compute)


def correlation_matrix(
    reader: SheetReader,
    columns: Sequence[str] | None = None,
    min_correlation: float = 0.0,
) -> CorrelationMatrix:
    """Correlation matrix over the numeric columns of a sheet.

    Raises:
        ColumnNotFoundError: a selected column is not in the sheet
    """
    sheet = read_sheet(reader, columns=columns or None)
    return build_correlation_matrix(sheet, columns=columns, min_correlation=min_correlation)


def pivot_table(
    reader: SheetReader,
    row_column: str,
    column_column: str,
    value_column: str,
    aggregation: Aggregation | str = Aggregation.SUM,
) -> PivotTable:
    """Pivot a sheet on two label columns.

    Raises:
        InvalidAggregationError: unknown aggregation
        ColumnNotFoundError: any of the three columns is missing
    """
    kind = Aggregation.parse(aggregation)
    sheet = read_sheet(reader, columns=[row_column, column_column, value_column])
    return build_pivot_table(sheet, row_column, column_column, value_column, kind)
