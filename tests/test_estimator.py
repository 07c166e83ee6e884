"""
Unit tests for the ink cost estimator.

Covers the default bands at every boundary and custom band validation.
"""

import math

import pytest

from modules.estimator import InkEstimator, DEFAULT_COST_BANDS, ink_cost


# Fixtures

@pytest.fixture
def estimator():
    """Estimator with the default bands."""
    return InkEstimator()


# Tests for Default Bands

class TestDefaultBands:
    """Test the three default cost bands."""

    @pytest.mark.parametrize("char_count, expected", [
        (0, 0.5),
        (1, 0.5),
        (49, 0.5),
        (50, 0.7),
        (51, 0.7),
        (99, 0.7),
        (100, 1.0),
        (101, 1.0),
        (10_000, 1.0),
    ])
    def test_cost_at_boundaries(self, estimator, char_count, expected):
        """Bands are half-open: [0,50) -> 0.5, [50,100) -> 0.7, [100,inf) -> 1.0."""
        assert estimator.ink_cost(char_count) == expected

    def test_module_level_helper_uses_defaults(self):
        """ink_cost() matches a default InkEstimator."""
        assert ink_cost(49) == 0.5
        assert ink_cost(50) == 0.7
        assert ink_cost(100) == 1.0

    def test_negative_char_count_rejected(self, estimator):
        """A negative count is a programming error."""
        with pytest.raises(ValueError):
            estimator.ink_cost(-1)

    def test_default_bands_are_contiguous(self):
        """Each band starts where the previous one ends."""
        for (_, upper, _), (lower, _, _) in zip(DEFAULT_COST_BANDS, DEFAULT_COST_BANDS[1:]):
            assert upper == lower
        assert math.isinf(DEFAULT_COST_BANDS[-1][1])


# Tests for Custom Bands

class TestCustomBands:
    """Test band table validation."""

    def test_custom_bands(self):
        """A valid custom table is evaluated first-match."""
        estimator = InkEstimator([(0, 10, 0.1), (10, math.inf, 2.0)])

        assert estimator.ink_cost(9) == 0.1
        assert estimator.ink_cost(10) == 2.0

    def test_gap_rejected(self):
        with pytest.raises(ValueError, match="gap"):
            InkEstimator([(0, 10, 0.1), (20, math.inf, 2.0)])

    def test_must_start_at_zero(self):
        with pytest.raises(ValueError):
            InkEstimator([(5, math.inf, 1.0)])

    def test_must_be_open_ended(self):
        with pytest.raises(ValueError, match="do not cover"):
            InkEstimator([(0, 10, 0.1), (10, 100, 2.0)])

    def test_empty_band_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            InkEstimator([(0, 0, 0.1), (0, math.inf, 1.0)])

    def test_negative_cost_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            InkEstimator([(0, math.inf, -1.0)])
