"""Ink cost estimator for print jobs."""

from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple

from logging_config import get_logger


# (lower bound inclusive, upper bound exclusive, ink cost in percent)
# Bands are checked in order and the first match wins.
CostBand = Tuple[int, float, float]

DEFAULT_COST_BANDS: Tuple[CostBand, ...] = (
    (0, 50, 0.5),           # charCount < 50
    (50, 100, 0.7),         # 50 <= charCount < 100
    (100, math.inf, 1.0),   # charCount >= 100
)


class InkEstimator:
    """Maps a job's character count to the ink it consumes."""

    def __init__(self, bands: Optional[Sequence[CostBand]] = None) -> None:
        self.bands: Tuple[CostBand, ...] = tuple(DEFAULT_COST_BANDS if bands is None else bands)
        self.logger = get_logger(__name__)
        self._validate_bands()

    def _validate_bands(self) -> None:
        """Bands must start at 0, be contiguous, and end open-ended."""
        if not self.bands:
            raise ValueError("At least one cost band is required")

        expected_lower = 0
        for lower, upper, cost in self.bands:
            if lower != expected_lower:
                raise ValueError(f"Cost band starting at {lower} leaves a gap after {expected_lower}")
            if upper <= lower:
                raise ValueError(f"Cost band [{lower}, {upper}) is empty")
            if cost < 0:
                raise ValueError(f"Cost band [{lower}, {upper}) has negative cost {cost}")
            expected_lower = upper

        if not math.isinf(expected_lower):
            raise ValueError(f"Cost bands do not cover character counts >= {expected_lower}")

    def ink_cost(self, char_count: int) -> float:
        """
        Return the ink cost (percent) for a job of char_count characters.

        Raises:
            ValueError: If char_count is negative
        """
        if char_count < 0:
            raise ValueError(f"char_count must be >= 0, got {char_count}")

        for lower, upper, cost in self.bands:
            if lower <= char_count < upper:
                self.logger.debug(f"{char_count} chars in band [{lower}, {upper}) -> cost {cost}")
                return cost

        # Unreachable with validated bands
        raise ValueError(f"No cost band covers {char_count} characters")


_default_estimator = InkEstimator()


def ink_cost(char_count: int) -> float:
    """Ink cost using the default bands."""
    return _default_estimator.ink_cost(char_count)
