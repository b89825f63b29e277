"""Pivot table aggregation."""

from sheetstats.analysis.pivot.engine import aggregate, build_pivot_table
from sheetstats.analysis.pivot.models import Aggregation, PivotTable

__all__ = [
    "Aggregation",
    "PivotTable",
    "aggregate",
    "build_pivot_table",
]
