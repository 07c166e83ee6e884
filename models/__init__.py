"""
Data models for socket-printer.

This module contains immutable dataclasses for:
- PrintJob: filename + content received from one client
- JobOutcome: what happened to a job, and its response line
- DeductResult: result of one atomic try-deduct on the ink budget
- InkSnapshot: point-in-time printer state
"""

from .print_job import PrintJob, JobOutcome, JobStatus
from .printer_state import (
    DeductResult,
    InkSnapshot,
    MAX_INK_PERCENT,
    MIN_INK_PERCENT,
)

__all__ = [
    # Job models
    "PrintJob",
    "JobOutcome",
    "JobStatus",
    # Printer state models
    "DeductResult",
    "InkSnapshot",
    "MAX_INK_PERCENT",
    "MIN_INK_PERCENT",
]
