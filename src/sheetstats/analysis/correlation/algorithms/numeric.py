"""Pure numeric correlation algorithms.

Computes Pearson's r on row-aligned numeric series.
No sheet access, no models - just math.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

import numpy as np
from scipy import stats


@dataclass
class PearsonComputation:
    """Result from correlating a target series against a source series."""

    coefficient: float
    strength: str  # 'negligible', 'weak', 'moderate', 'strong', 'very strong'
    sample_count: int
    p_value: float | None
    sample_pairs: list[tuple[float, float]] = field(default_factory=list)  # (source, target)


def classify_strength(r: float) -> str:
    """Classify correlation strength by absolute value."""
    abs_r = abs(r)
    if abs_r < 0.1:
        return "negligible"
    elif abs_r < 0.3:
        return "weak"
    elif abs_r < 0.5:
        return "moderate"
    elif abs_r < 0.7:
        return "strong"
    return "very strong"


def align_series(
    x: Mapping[int, float],
    y: Mapping[int, float],
) -> tuple[list[float], list[float]]:
    """Keep only rows where both series have a value, in row order."""
    rows = sorted(x.keys() & y.keys())
    return [x[r] for r in rows], [y[r] for r in rows]


def pearson_coefficient(x: Sequence[float], y: Sequence[float]) -> float:
    """Pearson's r of two equal-length series.

    Returns 0 for fewer than two points, mismatched lengths, or when either
    series has zero variance.
    """
    n = len(x)
    if n < 2 or n != len(y):
        return 0.0

    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    if np.ptp(x_arr) == 0 or np.ptp(y_arr) == 0:
        return 0.0

    x_diff = x_arr - x_arr.mean()
    y_diff = y_arr - y_arr.mean()
    sum_xy = float(np.dot(x_diff, y_diff))
    sum_x2 = float(np.dot(x_diff, x_diff))
    sum_y2 = float(np.dot(y_diff, y_diff))

    if sum_x2 == 0 or sum_y2 == 0:
        return 0.0

    r = sum_xy / np.sqrt(sum_x2 * sum_y2)
    return float(np.clip(r, -1.0, 1.0))


def pearson_p_value(x: Sequence[float], y: Sequence[float]) -> float | None:
    """Two-sided p-value for Pearson's r, None when it is undefined."""
    if len(x) < 3 or len(x) != len(y):
        return None
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    if np.ptp(x_arr) == 0 or np.ptp(y_arr) == 0:
        return None
    result = stats.pearsonr(x_arr, y_arr)
    return float(np.asarray(result.pvalue).item())


def correlate_series(
    target: Mapping[int, float],
    source: Mapping[int, float],
    max_sample_pairs: int = 50,
) -> PearsonComputation:
    """Correlate two numeric columns over the rows where both are numeric.

    Args:
        target: Row number -> target value
        source: Row number -> source value
        max_sample_pairs: Number of leading (source, target) pairs to keep

    Returns:
        PearsonComputation
    """
    target_values, source_values = align_series(target, source)
    r = pearson_coefficient(target_values, source_values)

    return PearsonComputation(
        coefficient=r,
        strength=classify_strength(r),
        sample_count=len(target_values),
        p_value=pearson_p_value(target_values, source_values),
        sample_pairs=list(zip(source_values, target_values, strict=True))[:max_sample_pairs],
    )
