"""
Shared ink budget for the printer server.

The InkService owns the process-wide ink level. It is the ONLY place the
level is read or changed, and every access goes through one capacity-1
guard (a bounded semaphore).

Thread Safety:
    - try_deduct() performs read, check and deduct as one atomic unit
    - snapshot() and ink_remaining read under the same guard
    - The guard is taken with a context manager, so it is released even when
      the body raises

Under the sequential accept loop only one job ever runs at a time and the
guard is never contended. Under the threaded policy it is the sole
serialization point for the budget.

Usage:
    ink_service = InkService(initial_ink=100.0)

    result = ink_service.try_deduct(0.7)
    if result.success:
        ...  # printed, result.ink_remaining is the new balance
"""

from __future__ import annotations

import threading

from models.printer_state import (
    DeductResult,
    InkSnapshot,
    MAX_INK_PERCENT,
    MIN_INK_PERCENT,
)
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

# Costs are tenths of a percent; rounding after each deduction keeps repeated
# float subtraction from drifting (100 - 0.5 - 0.7 - 1.0 == 97.8).
INK_PRECISION = 6


class InkService:
    """
    Guarded ink budget.

    Attributes:
        initial_ink: Ink percentage at construction time
        ink_remaining: Current ink percentage (read under the guard)
    """

    def __init__(self, initial_ink: float = MAX_INK_PERCENT):
        """
        Initialize the ink budget.

        Args:
            initial_ink: Starting ink percentage

        Raises:
            ValueError: If initial_ink is outside [0, 100]
        """
        if not MIN_INK_PERCENT <= initial_ink <= MAX_INK_PERCENT:
            raise ValueError(
                f"initial_ink must be between {MIN_INK_PERCENT} and {MAX_INK_PERCENT}, got {initial_ink}"
            )

        self._initial_ink = float(initial_ink)
        self._ink = float(initial_ink)
        self._jobs_printed = 0
        self._jobs_rejected = 0

        # Printer guard: one holder at a time
        self._guard = threading.BoundedSemaphore(1)

        logger.info(f"InkService initialized (ink: {self._ink:.1f}%)")

    @property
    def initial_ink(self) -> float:
        return self._initial_ink

    @property
    def ink_remaining(self) -> float:
        """Current ink percentage."""
        with self._guard:
            return self._ink

    def try_deduct(self, cost: float) -> DeductResult:
        """
        Deduct cost from the budget if enough ink is left.

        The check and the deduction happen inside one critical section, so no
        other job can observe or change the level in between. A rejected job
        leaves the level untouched.

        Args:
            cost: Ink to consume, in percent

        Returns:
            DeductResult with success flag and the resulting balance

        Raises:
            ValueError: If cost is negative
        """
        if cost < 0:
            raise ValueError(f"cost must be >= 0, got {cost}")

        with self._guard:
            if self._ink >= cost:
                self._ink = round(self._ink - cost, INK_PRECISION)
                self._jobs_printed += 1
                return DeductResult(success=True, cost=cost, ink_remaining=self._ink)

            self._jobs_rejected += 1
            return DeductResult(success=False, cost=cost, ink_remaining=self._ink)

    def snapshot(self) -> InkSnapshot:
        """Consistent view of ink level and job counters."""
        with self._guard:
            return InkSnapshot(
                ink_remaining=self._ink,
                jobs_printed=self._jobs_printed,
                jobs_rejected=self._jobs_rejected,
            )
