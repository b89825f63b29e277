"""Analysis modules for sheet statistics.

This package contains modules for:
- typing: Cell classification and predominant type inference
- statistics: Per-column descriptive statistics
- correlation: Pearson correlation, categorical grouping, cross-column analysis
- pivot: Two-axis aggregation
- processor: Sheet and workbook profiling entry points
"""
