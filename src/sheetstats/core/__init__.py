"""Core module - configuration, logging, errors, and shared models."""

from sheetstats.core.config import Settings, get_settings
from sheetstats.core.exceptions import (
    ColumnNotFoundError,
    InvalidAggregationError,
    NotFoundError,
    SheetNotFoundError,
    SheetStatsError,
)
from sheetstats.core.models.base import Cell, CellKind, DataType

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "ColumnNotFoundError",
    "InvalidAggregationError",
    "NotFoundError",
    "SheetNotFoundError",
    "SheetStatsError",
    # Models
    "Cell",
    "CellKind",
    "DataType",
]
