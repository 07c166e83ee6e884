"""
Printer state data models.

Immutable values handed out by the ink service, so callers never see the
budget in an intermediate state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Any


MAX_INK_PERCENT = 100.0
MIN_INK_PERCENT = 0.0


@dataclass(frozen=True)
class DeductResult:
    """Outcome of one atomic check-and-deduct against the ink budget."""

    success: bool
    """True if the cost was deducted."""

    cost: float
    """Ink cost that was requested."""

    ink_remaining: float
    """Balance after the operation (unchanged on failure)."""


@dataclass(frozen=True)
class InkSnapshot:
    """
    Point-in-time view of the printer.

    Taken inside the guard, so ink and counters are consistent with each other.
    """

    ink_remaining: float
    """Ink percentage at the time of the snapshot."""

    jobs_printed: int = 0
    """Jobs that consumed ink since startup."""

    jobs_rejected: int = 0
    """Jobs refused for lack of ink since startup."""

    taken_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    """When this snapshot was taken (UTC)."""

    @property
    def jobs_total(self) -> int:
        return self.jobs_printed + self.jobs_rejected

    @property
    def is_empty(self) -> bool:
        return self.ink_remaining <= MIN_INK_PERCENT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "inkRemaining": self.ink_remaining,
            "jobsPrinted": self.jobs_printed,
            "jobsRejected": self.jobs_rejected,
            "takenAt": self.taken_at.isoformat(),
        }
