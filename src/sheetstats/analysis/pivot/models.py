"""Pivot Table Models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from sheetstats.core.exceptions import InvalidAggregationError


class Aggregation(str, Enum):
    """Aggregation applied to each pivot bucket."""

    SUM = "sum"
    AVG = "avg"
    COUNT = "count"
    MIN = "min"
    MAX = "max"
    MEDIAN = "median"

    @classmethod
    def parse(cls, value: str | Aggregation) -> Aggregation:
        """Parse an aggregation name.

        Raises:
            InvalidAggregationError: unknown aggregation
        """
        if isinstance(value, Aggregation):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidAggregationError(str(value), [a.value for a in cls]) from None


class PivotTable(BaseModel):
    """Dense pivot grid.

    ``values[i][j]`` is the aggregate for ``row_labels[i]`` and
    ``col_labels[j]``; None marks a cell no row contributed to.
    """

    model_config = ConfigDict(frozen=True)

    row_column: str
    column_column: str
    value_column: str
    aggregation: Aggregation
    row_labels: list[str]
    col_labels: list[str]
    values: list[list[float | None]]

    def get(self, row_label: str, col_label: str) -> float | None:
        return self.values[self.row_labels.index(row_label)][self.col_labels.index(col_label)]

    def to_dict(self) -> dict[str, Any]:
        """Serialize as row records keyed by column label."""
        data = []
        for row_label, row_values in zip(self.row_labels, self.values, strict=True):
            record: dict[str, Any] = {"row_label": row_label}
            record.update(zip(self.col_labels, row_values, strict=True))
            data.append(record)
        return {
            "row_labels": list(self.row_labels),
            "col_labels": list(self.col_labels),
            "data": data,
            "summary": {
                "aggregation": self.aggregation.value,
                "row_column": self.row_column,
                "column_column": self.column_column,
                "value_column": self.value_column,
            },
        }
