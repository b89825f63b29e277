"""Tests for Pearson correlation algorithms."""

import pytest

from sheetstats.analysis.correlation.algorithms.numeric import (
    align_series,
    classify_strength,
    correlate_series,
    pearson_coefficient,
    pearson_p_value,
)


def _series(values, start_row=2):
    return {row: float(v) for row, v in enumerate(values, start=start_row)}


class TestClassifyStrength:
    """Tests for strength bands."""

    @pytest.mark.parametrize(
        ("r", "expected"),
        [
            (0.0, "negligible"),
            (0.09, "negligible"),
            (0.1, "weak"),
            (-0.29, "weak"),
            (0.3, "moderate"),
            (0.5, "strong"),
            (-0.69, "strong"),
            (0.7, "very strong"),
            (-1.0, "very strong"),
        ],
    )
    def test_bands(self, r, expected):
        assert classify_strength(r) == expected


class TestPearsonCoefficient:
    """Tests for Pearson's r."""

    def test_perfect_positive(self):
        assert pearson_coefficient([1, 2, 3, 4, 5], [2, 4, 6, 8, 10]) == pytest.approx(1.0)

    def test_perfect_negative(self):
        assert pearson_coefficient([1, 2, 3], [3, 2, 1]) == pytest.approx(-1.0)

    def test_symmetric(self):
        a = [1.0, 4.0, 2.0, 8.0, 5.0]
        b = [3.0, 1.0, 7.0, 2.0, 6.0]
        assert pearson_coefficient(a, b) == pytest.approx(pearson_coefficient(b, a))

    def test_constant_series_is_zero(self):
        assert pearson_coefficient([1, 1, 1], [1, 2, 3]) == 0.0
        assert pearson_coefficient([1, 2, 3], [5, 5, 5]) == 0.0

    def test_too_few_points(self):
        assert pearson_coefficient([1], [2]) == 0.0
        assert pearson_coefficient([], []) == 0.0

    def test_length_mismatch(self):
        assert pearson_coefficient([1, 2, 3], [1, 2]) == 0.0

    def test_bounded(self):
        r = pearson_coefficient([0.1, 0.2, 0.3], [0.30000000000000004, 0.6, 0.9])
        assert -1.0 <= r <= 1.0


class TestPearsonPValue:
    """Tests for p-value computation."""

    def test_strong_relationship_is_significant(self):
        p = pearson_p_value([1, 2, 3, 4, 5, 6], [1.1, 2.0, 2.9, 4.2, 5.1, 5.8])
        assert p is not None
        assert p < 0.05

    def test_undefined_for_two_points(self):
        assert pearson_p_value([1, 2], [3, 4]) is None

    def test_undefined_for_constant_series(self):
        assert pearson_p_value([1, 1, 1, 1], [1, 2, 3, 4]) is None


class TestCorrelateSeries:
    """Tests for row-aligned correlation."""

    def test_linear_columns(self):
        result = correlate_series(_series([1, 2, 3, 4, 5]), _series([2, 4, 6, 8, 10]))

        assert result.coefficient == pytest.approx(1.0)
        assert result.strength == "very strong"
        assert result.sample_count == 5

    def test_sample_pairs_are_source_target(self):
        result = correlate_series(_series([1, 2, 3]), _series([10, 20, 30]))
        assert result.sample_pairs[0] == (10.0, 1.0)

    def test_only_rows_numeric_in_both(self):
        target = {2: 1.0, 3: 2.0, 4: 3.0}
        source = {3: 5.0, 4: 6.0, 5: 7.0}

        result = correlate_series(target, source)

        assert result.sample_count == 2
        assert result.sample_pairs == [(5.0, 2.0), (6.0, 3.0)]

    def test_sample_pairs_are_capped(self):
        values = list(range(60))
        result = correlate_series(_series(values), _series(values), max_sample_pairs=50)

        assert result.sample_count == 60
        assert len(result.sample_pairs) == 50
        assert result.sample_pairs[0] == (0.0, 0.0)

    def test_constant_target(self):
        result = correlate_series(_series([3, 3, 3]), _series([1, 2, 3]))

        assert result.coefficient == 0.0
        assert result.strength == "negligible"
        assert result.p_value is None


class TestAlignSeries:
    """Tests for row alignment."""

    def test_row_order(self):
        x, y = align_series({5: 1.0, 2: 2.0, 3: 3.0}, {3: 30.0, 5: 50.0, 2: 20.0})
        assert x == [2.0, 3.0, 1.0]
        assert y == [20.0, 30.0, 50.0]
