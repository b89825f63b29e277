"""Tests for pivot aggregation."""

import pytest

from sheetstats.analysis.pivot.engine import aggregate, build_pivot_table
from sheetstats.analysis.pivot.models import Aggregation
from sheetstats.core.exceptions import ColumnNotFoundError, InvalidAggregationError
from sheetstats.sources.extraction import read_sheet
from sheetstats.sources.memory import InMemorySheet


@pytest.fixture
def region_month_sheet():
    return read_sheet(
        InMemorySheet(
            "Sales",
            [
                ["Region", "Month", "Sales"],
                ["A", "Jan", 10],
                ["A", "Feb", 20],
                ["B", "Jan", 30],
            ],
        )
    )


class TestAggregate:
    """Tests for bucket aggregation."""

    @pytest.mark.parametrize(
        ("aggregation", "expected"),
        [
            ("sum", 10.0),
            ("avg", 2.5),
            ("count", 4.0),
            ("min", 1.0),
            ("max", 4.0),
            ("median", 2.5),
        ],
    )
    def test_aggregations(self, aggregation, expected):
        assert aggregate([4.0, 1.0, 3.0, 2.0], aggregation) == expected

    def test_median_odd(self):
        assert aggregate([5.0, 1.0, 3.0], Aggregation.MEDIAN) == 3.0

    def test_sum_equals_avg_times_count(self):
        values = [1.5, 2.25, 7.0, 0.1]
        total = aggregate(values, "sum")
        assert total == pytest.approx(aggregate(values, "avg") * aggregate(values, "count"))


class TestAggregationParse:
    """Tests for aggregation name parsing."""

    def test_case_insensitive(self):
        assert Aggregation.parse(" AVG ") is Aggregation.AVG

    def test_unknown(self):
        with pytest.raises(InvalidAggregationError) as exc_info:
            Aggregation.parse("mode")
        assert exc_info.value.aggregation == "mode"
        assert "median" in exc_info.value.supported


class TestBuildPivotTable:
    """Tests for building pivot grids."""

    def test_sum_by_region_and_month(self, region_month_sheet):
        pivot = build_pivot_table(region_month_sheet, "Region", "Month", "Sales", "sum")

        assert pivot.row_labels == ["A", "B"]
        assert pivot.col_labels == ["Feb", "Jan"]
        assert pivot.to_dict()["data"] == [
            {"row_label": "A", "Feb": 20.0, "Jan": 10.0},
            {"row_label": "B", "Feb": None, "Jan": 30.0},
        ]

    def test_missing_bucket_is_none_not_zero(self, region_month_sheet):
        pivot = build_pivot_table(region_month_sheet, "Region", "Month", "Sales", "count")
        assert pivot.get("B", "Feb") is None
        assert pivot.get("A", "Jan") == 1

    def test_summary(self, region_month_sheet):
        summary = build_pivot_table(
            region_month_sheet, "Region", "Month", "Sales", Aggregation.MAX
        ).to_dict()["summary"]
        assert summary == {
            "aggregation": "max",
            "row_column": "Region",
            "column_column": "Month",
            "value_column": "Sales",
        }

    def test_skips_empty_labels_and_non_numeric_values(self):
        sheet = read_sheet(
            InMemorySheet(
                "Sales",
                [
                    ["Region", "Month", "Sales"],
                    ["A", "Jan", 10],
                    [None, "Jan", 99],
                    ["A", None, 99],
                    ["A", "Jan", "n/a"],
                    ["A", "Jan", None],
                    ["A", "Jan", 5],
                ],
            )
        )

        pivot = build_pivot_table(sheet, "Region", "Month", "Sales", "sum")

        assert pivot.row_labels == ["A"]
        assert pivot.col_labels == ["Jan"]
        assert pivot.get("A", "Jan") == 15.0

    def test_numeric_labels_use_display_form(self):
        sheet = read_sheet(
            InMemorySheet(
                "Years",
                [
                    ["Year", "Side", "Value"],
                    [2023, "East", 1],
                    [2024, "East", 2],
                    [2023, "West", 3],
                ],
            )
        )

        pivot = build_pivot_table(sheet, "Year", "Side", "Value", "sum")

        assert pivot.row_labels == ["2023", "2024"]
        assert pivot.get("2023", "West") == 3.0

    def test_labels_keep_entered_text(self):
        sheet = read_sheet(
            InMemorySheet(
                "Slots",
                [
                    ["Zip", "Slot", "Value"],
                    ["007", "12:30", 1],
                    ["01234", "Jan 5", 2],
                    ["007", "Jan 5", 3],
                ],
            )
        )

        pivot = build_pivot_table(sheet, "Zip", "Slot", "Value", "sum")

        assert pivot.row_labels == ["007", "01234"]
        assert pivot.col_labels == ["12:30", "Jan 5"]
        assert pivot.get("007", "Jan 5") == 3.0

    def test_count_is_float(self, region_month_sheet):
        pivot = build_pivot_table(region_month_sheet, "Region", "Month", "Sales", "count")
        assert isinstance(pivot.get("A", "Jan"), float)

    def test_median_even_bucket(self):
        sheet = read_sheet(
            InMemorySheet(
                "M",
                [["R", "C", "V"], ["a", "x", 1], ["a", "x", 9], ["a", "x", 3], ["a", "x", 4]],
            )
        )
        pivot = build_pivot_table(sheet, "R", "C", "V", "median")
        assert pivot.get("a", "x") == 3.5

    def test_missing_column(self, region_month_sheet):
        with pytest.raises(ColumnNotFoundError) as exc_info:
            build_pivot_table(region_month_sheet, "Region", "Quarter", "Sales", "sum")
        assert exc_info.value.columns == ["Quarter"]

    def test_invalid_aggregation(self, region_month_sheet):
        with pytest.raises(InvalidAggregationError):
            build_pivot_table(region_month_sheet, "Region", "Month", "Sales", "mode")
