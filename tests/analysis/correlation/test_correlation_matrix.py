"""Tests for the correlation matrix."""

import pytest

from sheetstats.analysis.correlation.matrix import build_correlation_matrix
from sheetstats.core.exceptions import ColumnNotFoundError
from sheetstats.sources.extraction import read_sheet
from sheetstats.sources.memory import InMemorySheet


@pytest.fixture
def abc_sheet():
    return read_sheet(
        InMemorySheet(
            "Matrix",
            [
                ["A", "Label", "B", "C"],
                [1, "p", 2, 5],
                [2, "q", 1, 4],
                [3, "r", 4, 3],
                [4, "s", 3, 2],
                [5, "t", 5, 1],
            ],
        )
    )


class TestBuildCorrelationMatrix:
    """Tests for all-pairs correlation."""

    def test_numeric_columns_only(self, abc_sheet):
        matrix = build_correlation_matrix(abc_sheet)

        assert matrix.columns == ["A", "B", "C"]
        assert matrix.value("A", "B") == pytest.approx(0.8)
        assert matrix.value("A", "C") == pytest.approx(-1.0)

    def test_diagonal_and_symmetry(self, abc_sheet):
        matrix = build_correlation_matrix(abc_sheet)
        n = len(matrix.columns)

        for i in range(n):
            assert matrix.correlations[i][i] == 1.0
            for j in range(n):
                assert matrix.correlations[i][j] == matrix.correlations[j][i]

    def test_threshold_zeroes_weak_values(self, abc_sheet):
        matrix = build_correlation_matrix(abc_sheet, min_correlation=0.9)

        assert matrix.value("A", "B") == 0.0
        assert matrix.value("A", "C") == pytest.approx(-1.0)
        for i, row in enumerate(matrix.correlations):
            for j, value in enumerate(row):
                if i != j:
                    assert abs(value) >= 0.9 or value == 0.0

    def test_threshold_keeps_strong_values(self, abc_sheet):
        matrix = build_correlation_matrix(abc_sheet, min_correlation=0.5)
        assert matrix.value("A", "B") == pytest.approx(0.8)

    def test_selected_columns_in_header_order(self, abc_sheet):
        matrix = build_correlation_matrix(abc_sheet, columns=["C", "Label", "A"])
        assert matrix.columns == ["A", "C"]

    def test_unknown_column(self, abc_sheet):
        with pytest.raises(ColumnNotFoundError):
            build_correlation_matrix(abc_sheet, columns=["A", "Nope"])

    def test_to_dict(self, abc_sheet):
        data = build_correlation_matrix(abc_sheet, columns=["A", "B"]).to_dict()
        assert data["columns"] == ["A", "B"]
        assert data["correlations"][0][0] == 1.0
        assert data["correlations"][0][1] == pytest.approx(0.8)
