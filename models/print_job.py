"""
Print job data models.

A PrintJob is built by the server once a connection's input has been fully
read, and a JobOutcome records what happened to it. Both are discarded after
the response line is sent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List

from core.protocol import LINE_END, success_message, failure_message


class JobStatus(Enum):
    """
    Final status of a print job.

    Lifecycle:
        (received) -> PRINTED | REJECTED
    """

    PRINTED = "printed"
    """Ink was deducted and the job was printed."""

    REJECTED = "rejected"
    """Not enough ink; the budget was left untouched."""


@dataclass(frozen=True)
class PrintJob:
    """
    One client request: a filename and the text received for it.

    Immutable, so it can be handed to any thread.
    """

    filename: str
    """Base name sent by the client on the first line."""

    content: str = ""
    """Received lines, each followed by a line break. The <FIN> line is never part of it."""

    truncated: bool = False
    """True if the stream ended before <FIN> arrived."""

    @property
    def char_count(self) -> int:
        """Characters of the reconstructed content, line breaks included."""
        return len(self.content)

    @property
    def lines(self) -> List[str]:
        return self.content.split(LINE_END)[:-1] if self.content else []

    @classmethod
    def from_lines(cls, filename: str, lines: List[str], truncated: bool = False) -> "PrintJob":
        """Rebuild the content exactly as the server accumulates it."""
        content = "".join(line + LINE_END for line in lines)
        return cls(filename=filename, content=content, truncated=truncated)


@dataclass(frozen=True)
class JobOutcome:
    """
    Result of handling one print job.

    Carries everything needed to compose the response line and log the job.
    """

    job_id: str
    """Unique job identifier (hex UUID)."""

    filename: str
    """Filename the client asked to print."""

    char_count: int
    """Characters that were charged for."""

    cost: float
    """Ink cost of the job in percent."""

    status: JobStatus
    """PRINTED or REJECTED."""

    ink_remaining: float
    """Ink level after the job (unchanged when rejected)."""

    details: Dict[str, Any] = field(default_factory=dict)
    """Extra context for logging (e.g. truncated stream)."""

    @property
    def printed(self) -> bool:
        return self.status is JobStatus.PRINTED

    @property
    def message(self) -> str:
        """The single response line sent back to the client."""
        if self.printed:
            return success_message(self.filename, self.ink_remaining)
        return failure_message(self.filename, self.ink_remaining)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "jobId": self.job_id,
            "filename": self.filename,
            "charCount": self.char_count,
            "cost": self.cost,
            "status": self.status.value,
            "inkRemaining": self.ink_remaining,
            **self.details,
        }
