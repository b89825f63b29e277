"""Pure categorical grouping algorithms.

Groups a numeric target series by the category label found on the same row
of a source column and describes each group.
No sheet access, no models - just math.
"""

from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np


@dataclass
class CategoryGroup:
    """Statistics of the target values sharing one category."""

    category: str
    count: int
    percent: float
    sum: float
    avg: float
    min: float
    max: float
    variance: float  # population variance
    std_dev: float


def group_by_category(
    target: Mapping[int, float],
    categories: Mapping[int, str],
    row_count: int,
    max_categories: int = 10,
) -> list[CategoryGroup]:
    """Group target values by category and compute per-group statistics.

    Rows without a numeric target value or with an empty category label are
    skipped. ``percent`` uses the sheet's data rows (``row_count - 1``) as its
    denominator.

    Args:
        target: Row number -> numeric target value
        categories: Row number -> category label
        row_count: Sheet row count including the header row
        max_categories: Number of largest groups to keep

    Returns:
        Groups sorted by count descending (ties keep first-seen order)
    """
    grouped: dict[str, list[float]] = {}
    for row in sorted(target):
        label = categories.get(row, "")
        if label == "":
            continue
        grouped.setdefault(label, []).append(target[row])

    data_rows = row_count - 1
    groups = []
    for label, values in grouped.items():
        arr = np.asarray(values, dtype=float)
        count = len(values)
        total = float(arr.sum())
        avg = total / count
        variance = float(np.mean((arr - avg) ** 2)) if count > 1 else 0.0
        groups.append(
            CategoryGroup(
                category=label,
                count=count,
                percent=round(count / data_rows * 100, 2) if data_rows > 0 else 0.0,
                sum=total,
                avg=avg,
                min=float(arr.min()),
                max=float(arr.max()),
                variance=variance,
                std_dev=float(np.sqrt(variance)),
            )
        )

    groups.sort(key=lambda g: g.count, reverse=True)
    return groups[:max_categories]
