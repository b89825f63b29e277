"""Type inference for sheet columns."""

from sheetstats.analysis.typing.inference import (
    TypeCounts,
    classify_cell,
    classify_value,
    infer_data_type,
    parse_date_string,
    parse_number,
)

__all__ = [
    "TypeCounts",
    "classify_cell",
    "classify_value",
    "infer_data_type",
    "parse_date_string",
    "parse_number",
]
