"""Cross-column relationship analysis.

Orchestrates pairwise analysis over the columns of a sheet:
1. Every numeric column is a target
2. Every other column is a source for it
3. Numeric sources are correlated (Pearson); other sources group the target
   values by category

Pairs are independent, so large sheets run them in a thread pool. Results are
always returned target-major, source-minor in header order.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from concurrent.futures import Future, ThreadPoolExecutor, TimeoutError

from sheetstats.analysis.correlation.algorithms import correlate_series, group_by_category
from sheetstats.analysis.correlation.models import (
    CategoryStat,
    CorrelationResult,
    CrossColumnAnalysis,
    CrossColumnStat,
    SamplePair,
)
from sheetstats.analysis.typing.inference import infer_data_type
from sheetstats.core.config import get_settings
from sheetstats.core.logging import get_logger, timed
from sheetstats.core.models.base import DataType
from sheetstats.sources.extraction import SheetData

logger = get_logger(__name__)


def infer_column_types(sheet: SheetData) -> dict[str, DataType]:
    """Predominant type of every extracted column."""
    return {name: infer_data_type(column.non_empty()) for name, column in sheet.columns.items()}


def analyze_column_pair(
    sheet: SheetData,
    target: str,
    source: str,
    column_types: Mapping[str, DataType] | None = None,
    max_categories: int | None = None,
    max_sample_pairs: int | None = None,
) -> CrossColumnStat:
    """Analyze how a source column relates to a target column.

    Args:
        sheet: Materialized sheet holding both columns
        target: Target column name
        source: Source column name
        column_types: Pre-inferred column types (inferred here when missing)
        max_categories: Categories kept for a categorical source
        max_sample_pairs: Sample points kept for a numeric source

    Returns:
        CrossColumnStat

    Raises:
        ColumnNotFoundError: target or source is not in the sheet
    """
    settings = get_settings()
    if max_categories is None:
        max_categories = settings.max_category_stats
    if max_sample_pairs is None:
        max_sample_pairs = settings.max_sample_pairs

    target_col, source_col = sheet.require(target, source)
    column_types = column_types or {}
    target_type = column_types.get(target) or infer_data_type(target_col.non_empty())
    source_type = column_types.get(source) or infer_data_type(source_col.non_empty())

    if target_type is not DataType.NUMERIC:
        return CrossColumnStat(
            target_column=target,
            source_column=source,
            target_type=target_type,
            source_type=source_type,
            sample_count=len(target_col.cells.keys() & source_col.cells.keys()),
        )

    target_values = target_col.numeric_values()

    if source_type is DataType.NUMERIC:
        computation = correlate_series(
            target_values,
            source_col.numeric_values(),
            max_sample_pairs=max_sample_pairs,
        )
        p_value = computation.p_value
        return CrossColumnStat(
            target_column=target,
            source_column=source,
            target_type=target_type,
            source_type=source_type,
            sample_count=computation.sample_count,
            correlation=CorrelationResult(
                coefficient=computation.coefficient,
                strength=computation.strength,
                sample_count=computation.sample_count,
                p_value=p_value,
                is_significant=p_value is not None and p_value < settings.significance_level,
                sample_pairs=[SamplePair(x=x, y=y) for x, y in computation.sample_pairs],
            ),
        )

    labels = {row: cell.as_text() for row, cell in source_col.cells.items()}
    groups = group_by_category(
        target_values,
        labels,
        row_count=sheet.row_count,
        max_categories=max_categories,
    )
    return CrossColumnStat(
        target_column=target,
        source_column=source,
        target_type=target_type,
        source_type=source_type,
        sample_count=sum(1 for row in target_values if labels.get(row)),
        category_stats=[
            CategoryStat(
                category=g.category,
                count=g.count,
                percent=g.percent,
                sum=g.sum,
                avg=g.avg,
                min=g.min,
                max=g.max,
                variance=g.variance,
                std_dev=g.std_dev,
            )
            for g in groups
        ],
    )


def column_pairs(column_types: Mapping[str, DataType]) -> list[tuple[str, str]]:
    """Ordered (target, source) pairs: numeric targets against every other column."""
    names = list(column_types)
    return [
        (target, source)
        for target in names
        if column_types[target] is DataType.NUMERIC
        for source in names
        if source != target
    ]


def analyze_cross_columns(
    sheet: SheetData,
    column_types: Mapping[str, DataType] | None = None,
    max_workers: int | None = None,
    parallel_min_pairs: int | None = None,
    timeout: float | None = None,
) -> CrossColumnAnalysis:
    """Analyze every (numeric target, other source) pair of a sheet.

    Args:
        sheet: Materialized sheet
        column_types: Pre-inferred column types
        max_workers: Thread pool size
        parallel_min_pairs: Pair count from which the thread pool is used
        timeout: Seconds after which unfinished pairs are abandoned

    Returns:
        CrossColumnAnalysis (``complete`` is False when the timeout expired)
    """
    settings = get_settings()
    if max_workers is None:
        max_workers = settings.max_workers
    if parallel_min_pairs is None:
        parallel_min_pairs = settings.parallel_min_pairs
    if column_types is None:
        column_types = infer_column_types(sheet)

    pairs = column_pairs(column_types)
    deadline = time.monotonic() + timeout if timeout is not None else None
    results: list[CrossColumnStat] = []
    complete = True

    with timed(logger, "cross_column_analysis_finished", sheet=sheet.name) as fields:
        if max_workers > 1 and len(pairs) >= parallel_min_pairs:
            pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="cross-column")
            try:
                futures: list[Future[CrossColumnStat]] = [
                    pool.submit(analyze_column_pair, sheet, target, source, column_types)
                    for target, source in pairs
                ]
                for future in futures:
                    remaining = None if deadline is None else max(deadline - time.monotonic(), 0.0)
                    try:
                        results.append(future.result(timeout=remaining))
                    except TimeoutError:
                        complete = False
                        break
            finally:
                pool.shutdown(wait=complete, cancel_futures=True)
        else:
            for target, source in pairs:
                if deadline is not None and time.monotonic() > deadline:
                    complete = False
                    break
                results.append(analyze_column_pair(sheet, target, source, column_types))

        fields.update(pairs=len(pairs), computed=len(results), complete=complete)
        if not complete:
            fields["log_level"] = "warning"

    return CrossColumnAnalysis(stats=results, complete=complete)
