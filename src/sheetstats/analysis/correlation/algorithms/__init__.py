"""Pure correlation algorithms.

These functions operate on row-indexed numbers and labels and return plain
dataclasses. No sheet access, no Pydantic models - just math.
"""

from sheetstats.analysis.correlation.algorithms.categorical import (
    CategoryGroup,
    group_by_category,
)
from sheetstats.analysis.correlation.algorithms.numeric import (
    PearsonComputation,
    align_series,
    classify_strength,
    correlate_series,
    pearson_coefficient,
    pearson_p_value,
)

__all__ = [
    # Numeric
    "PearsonComputation",
    "align_series",
    "classify_strength",
    "correlate_series",
    "pearson_coefficient",
    "pearson_p_value",
    # Categorical
    "CategoryGroup",
    "group_by_category",
]
