"""Correlation Analysis Pydantic Models.

Data structures for relationship analysis between columns:
- SamplePair: One (x, y) point kept for visualization
- CorrelationResult: Pearson correlation between two numeric columns
- CategoryStat: Target statistics for one category of a source column
- CrossColumnStat: Analysis of one (target, source) column pair
- CrossColumnAnalysis: All pairs of a sheet
- CorrelationMatrix: All-pairs correlation over numeric columns
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sheetstats.core.models.base import DataType

# =============================================================================
# Numeric Correlation Models
# =============================================================================


class SamplePair(BaseModel):
    """A (source, target) point."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class CorrelationResult(BaseModel):
    """Pearson correlation between a target and a source column."""

    model_config = ConfigDict(frozen=True)

    coefficient: float  # [-1, 1]
    strength: str  # 'negligible', 'weak', 'moderate', 'strong', 'very strong'
    sample_count: int
    p_value: float | None = None
    is_significant: bool = False
    sample_pairs: list[SamplePair] = Field(default_factory=list)


# =============================================================================
# Categorical Grouping Models
# =============================================================================


class CategoryStat(BaseModel):
    """Statistics of the target values sharing one source category."""

    model_config = ConfigDict(frozen=True)

    category: str
    count: int
    percent: float
    sum: float
    avg: float
    min: float
    max: float
    variance: float
    std_dev: float


# =============================================================================
# Cross-Column Models
# =============================================================================


class CrossColumnStat(BaseModel):
    """Analysis of one ordered (target, source) column pair.

    A numeric target carries ``correlation`` when the source is numeric and
    ``category_stats`` otherwise. A non-numeric target (only produced by
    on-demand lookups) carries neither.
    """

    model_config = ConfigDict(frozen=True)

    target_column: str
    source_column: str
    target_type: DataType
    source_type: DataType
    sample_count: int = 0
    correlation: CorrelationResult | None = None
    category_stats: list[CategoryStat] | None = None


class CrossColumnAnalysis(BaseModel):
    """Cross-column results of a sheet.

    ``complete`` is False when a timeout cut the run short; ``stats`` then holds
    the pairs finished in time.
    """

    model_config = ConfigDict(frozen=True)

    stats: list[CrossColumnStat] = Field(default_factory=list)
    complete: bool = True


# =============================================================================
# Correlation Matrix Models
# =============================================================================


class CorrelationMatrix(BaseModel):
    """Square correlation matrix indexed by ``columns``.

    Off-diagonal values below the requested threshold are reported as 0.
    """

    model_config = ConfigDict(frozen=True)

    columns: list[str]
    correlations: list[list[float]]
    min_correlation: float = 0.0

    def value(self, column1: str, column2: str) -> float:
        i = self.columns.index(column1)
        j = self.columns.index(column2)
        return self.correlations[i][j]

    def to_dict(self) -> dict[str, Any]:
        return {"columns": list(self.columns), "correlations": [list(r) for r in self.correlations]}
