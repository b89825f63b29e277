"""Correlation analysis module.

Analyzes relationships between the columns of a sheet:
- Numeric target vs numeric source: Pearson correlation
- Numeric target vs other source: per-category statistics
- All-pairs correlation matrix over numeric columns
"""

# Algorithms (pure computation)
from sheetstats.analysis.correlation.algorithms import (
    CategoryGroup,
    PearsonComputation,
    classify_strength,
    correlate_series,
    group_by_category,
    pearson_coefficient,
)
from sheetstats.analysis.correlation.cache import CrossColumnCache, PairKey
from sheetstats.analysis.correlation.cross_column import (
    analyze_column_pair,
    analyze_cross_columns,
    column_pairs,
    infer_column_types,
)
from sheetstats.analysis.correlation.matrix import build_correlation_matrix

# Pydantic Models
from sheetstats.analysis.correlation.models import (
    CategoryStat,
    CorrelationMatrix,
    CorrelationResult,
    CrossColumnAnalysis,
    CrossColumnStat,
    SamplePair,
)

__all__ = [
    # Entry points
    "analyze_column_pair",
    "analyze_cross_columns",
    "build_correlation_matrix",
    "column_pairs",
    "infer_column_types",
    # Cache
    "CrossColumnCache",
    "PairKey",
    # Algorithms (pure computation)
    "CategoryGroup",
    "PearsonComputation",
    "classify_strength",
    "correlate_series",
    "group_by_category",
    "pearson_coefficient",
    # Pydantic Models
    "CategoryStat",
    "CorrelationMatrix",
    "CorrelationResult",
    "CrossColumnAnalysis",
    "CrossColumnStat",
    "SamplePair",
]
