"""
Tests for Pearson correlation.
Uses linear series where the coefficient is exactly +1 or -1.
"""

import pytest

from app_analytics.calculations.correlation import (
    correlate,
    pearson,
    CorrelationError
)


class TestCorrelate:
    """Tests for the public correlate function."""

    def test_perfect_positive(self):
        """Test y = 2x correlates at +1."""
        x = [1, 2, 3, 4, 5]
        y = [2, 4, 6, 8, 10]

        assert abs(correlate(x, y) - 1.0) < 1e-9

    def test_perfect_negative(self):
        """Test y = -x correlates at -1."""
        x = [1, 2, 3, 4, 5]
        y = [5, 4, 3, 2, 1]

        assert abs(correlate(x, y) + 1.0) < 1e-9

    def test_known_value(self):
        """Test a hand-computed coefficient."""
        # dx = [-2,-1,0,1,2], dy = [-1,-2,1,0,2]; Σdxdy = 8, Σdx² = 10, Σdy² = 10
        x = [1, 2, 3, 4, 5]
        y = [2, 1, 4, 3, 5]

        assert abs(correlate(x, y) - 0.8) < 1e-9

    def test_symmetry(self):
        """Test correlate(x, y) == correlate(y, x)."""
        x = [1, 3, 2, 5, 4, 9]
        y = [2, 1, 4, 3, 5, 4]

        assert correlate(x, y) == correlate(y, x)

    def test_self_correlation(self):
        """Test a varying series correlates with itself at 1."""
        x = [0.5, 2.0, 1.5, 8.0, 3.25]

        assert abs(correlate(x, x) - 1.0) < 1e-9

    def test_mismatched_lengths(self):
        """Test mismatched lengths return exactly 0."""
        assert correlate([1, 2, 3], [1, 2]) == 0

    def test_empty(self):
        """Test empty inputs return 0."""
        assert correlate([], []) == 0

    def test_drops_pairs_with_holes(self):
        """Test pairs with a hole on either side are skipped."""
        x = [1, None, 3, 4]
        y = [2, 5, 6, float('nan')]

        # Remaining pairs (1, 2) and (3, 6) lie on a line
        assert abs(correlate(x, y) - 1.0) < 1e-9

    def test_fewer_than_two_pairs(self):
        """Test a single valid pair returns 0."""
        assert correlate([1, None, 3], [2, 4, None]) == 0

    def test_zero_variance(self):
        """Test a constant series returns 0 instead of NaN."""
        assert correlate([1, 2, 3, 4], [5, 5, 5, 5]) == 0
        assert correlate([7, 7, 7], [1, 2, 3]) == 0

    def test_overflow_returns_zero(self):
        """Test floating point overflow is converted to 0."""
        x = [1e308, -1e308, 1e308]
        y = [1, 2, 3]

        assert correlate(x, y) == 0

    def test_generator_inputs(self):
        """Test iterables other than lists are accepted."""
        assert abs(correlate(iter([1, 2, 3]), (2, 4, 6)) - 1.0) < 1e-9

    def test_result_in_range(self):
        """Test coefficient stays within [-1, 1]."""
        x = [0.1, 0.2, 0.3, 0.4, 0.5, 0.6]
        y = [0.3, 0.6, 0.9, 1.2, 1.5, 1.8]

        r = correlate(x, y)
        assert -1.0 <= r <= 1.0


class TestPearson:
    """Tests for the strict pearson helper."""

    def test_pearson_basic(self):
        """Test clean series."""
        assert abs(pearson([1.0, 2.0, 3.0], [3.0, 2.0, 1.0]) + 1.0) < 1e-9

    def test_pearson_zero_variance(self):
        """Test constant series raises."""
        with pytest.raises(CorrelationError, match="Zero variance"):
            pearson([1.0, 1.0, 1.0], [1.0, 2.0, 3.0])

    def test_pearson_length_mismatch(self):
        """Test different lengths raise."""
        with pytest.raises(CorrelationError, match="same length"):
            pearson([1.0, 2.0], [1.0])

    def test_pearson_insufficient_data(self):
        """Test a single pair raises."""
        with pytest.raises(CorrelationError, match="Insufficient data"):
            pearson([1.0], [2.0])
