"""Shared pytest fixtures for all tests."""

import pytest

from sheetstats.core.config import get_settings
from sheetstats.sources.memory import Formula, InMemorySheet, InMemoryWorkbook


@pytest.fixture(autouse=True)
def fresh_settings():
    """Clear the settings cache so env overrides apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def qty_region_sheet() -> InMemorySheet:
    """Numeric Qty grouped by text Region."""
    return InMemorySheet(
        "Orders",
        [
            ["Qty", "Region"],
            [10, "A"],
            [20, "A"],
            [30, "B"],
            [40, "B"],
        ],
    )


@pytest.fixture
def xy_sheet() -> InMemorySheet:
    """Two perfectly correlated numeric columns."""
    return InMemorySheet(
        "Linear",
        [
            ["X", "Y"],
            [1, 2],
            [2, 4],
            [3, 6],
            [4, 8],
            [5, 10],
        ],
    )


@pytest.fixture
def sales_sheet() -> InMemorySheet:
    """Mixed sheet with formulas, gaps and a bad formula cell."""
    return InMemorySheet(
        "Sales",
        [
            ["Region", "Month", "Sales", "Units", "Note"],
            ["A", "Jan", 10, 1, "ok"],
            ["A", "Feb", 20, 2, None],
            ["B", "Jan", 30, Formula("=1+2", result=3), "late"],
            ["B", "Feb", Formula("=40", result=40), 4, Formula("=X1", error="#REF!")],
            ["C", "Mar", None, 5, "ok"],
        ],
    )


@pytest.fixture
def workbook(qty_region_sheet, xy_sheet, sales_sheet) -> InMemoryWorkbook:
    """Workbook with three sheets."""
    return InMemoryWorkbook.from_sheets([qty_region_sheet, xy_sheet, sales_sheet])
