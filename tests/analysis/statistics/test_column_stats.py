"""Tests for per-column descriptive statistics."""

import pytest

from sheetstats.analysis.statistics.builder import build_column_stats, fill_rate, summarize_numeric
from sheetstats.core.models.base import DataType
from sheetstats.sources.extraction import read_sheet
from sheetstats.sources.memory import InMemorySheet


class TestFillRate:
    """Tests for fill rate computation."""

    def test_basic(self):
        assert fill_rate(4, 6) == 80.0

    def test_rounded_to_two_decimals(self):
        assert fill_rate(1, 4) == 33.33

    @pytest.mark.parametrize("row_count", [0, 1])
    def test_no_data_rows(self, row_count):
        assert fill_rate(0, row_count) == 0.0


class TestSummarizeNumeric:
    """Tests for numeric summaries."""

    def test_summary(self):
        summary = summarize_numeric([10.0, 20.0, 30.0, 40.0])
        assert summary is not None
        assert summary.count == 4
        assert summary.sum == 100.0
        assert summary.avg == 25.0
        assert summary.min == 10.0
        assert summary.max == 40.0

    def test_empty(self):
        assert summarize_numeric([]) is None


class TestBuildColumnStats:
    """Tests for building column statistics from a sheet."""

    def test_numeric_column_with_gap(self, sales_sheet):
        sheet = read_sheet(sales_sheet)
        stats = build_column_stats(sheet.column("Sales"), sheet.row_count)

        assert stats.header == "Sales"
        assert stats.data_type is DataType.NUMERIC
        assert stats.non_empty_count == 4
        assert stats.empty_count == 1
        assert stats.fill_rate == 80.0
        assert stats.numeric is not None
        assert stats.numeric.sum == 100.0
        assert stats.numeric.avg == 25.0

    def test_formula_results_count_as_numbers(self, sales_sheet):
        sheet = read_sheet(sales_sheet)
        stats = build_column_stats(sheet.column("Units"), sheet.row_count)

        assert stats.data_type is DataType.NUMERIC
        assert stats.numeric is not None
        assert stats.numeric.sum == 15.0
        assert stats.fill_rate == 100.0

    def test_text_column_has_no_summary(self, sales_sheet):
        sheet = read_sheet(sales_sheet)
        stats = build_column_stats(sheet.column("Note"), sheet.row_count)

        assert stats.data_type is DataType.TEXT
        assert stats.non_empty_count == 4
        assert stats.numeric is None

    def test_mixed_column_keeps_numeric_summary(self):
        reader = InMemorySheet("Mixed", [["Value"], [1], [2], ["n/a"], ["?"]])
        sheet = read_sheet(reader)
        stats = build_column_stats(sheet.column("Value"), sheet.row_count)

        assert stats.data_type is DataType.MIXED
        assert stats.numeric is not None
        assert stats.numeric.count == 2
        assert stats.numeric.max == 2.0

    def test_header_only_sheet(self):
        reader = InMemorySheet("Empty", [["A", "B"]])
        sheet = read_sheet(reader)
        stats = build_column_stats(sheet.column("A"), sheet.row_count)

        assert stats.data_type is DataType.MIXED
        assert stats.non_empty_count == 0
        assert stats.empty_count == 0
        assert stats.fill_rate == 0.0
        assert stats.numeric is None

    def test_explicit_type_is_kept(self, sales_sheet):
        sheet = read_sheet(sales_sheet)
        stats = build_column_stats(sheet.column("Sales"), sheet.row_count, data_type=DataType.MIXED)
        assert stats.data_type is DataType.MIXED
