"""
Custom exceptions for socket-printer.

Exception Hierarchy:
    PrinterSimError (base)
    ├── InputError              - bad file path on the client (job aborted, no connection)
    ├── PrinterConnectionError  - socket connect/read/write failure on one job
    └── ProtocolShortReadError  - an expected protocol line never arrived

Running out of ink is NOT an exception. It is a normal outcome reported to
the client in the response line (see models.print_job.JobStatus.REJECTED).

Usage:
    Client: InputError and PrinterConnectionError are reported to the user and
    the process exits normally.
    Server: every error is confined to its connection; the accept loop keeps
    running.
"""

from typing import Optional, Dict, Any


class PrinterSimError(Exception):
    """
    Base exception for all socket-printer errors.

    Carries a human-readable message plus an optional details dictionary for
    logging.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InputError(PrinterSimError):
    """
    The user supplied an unusable file path.

    Raised before any network activity, so an InputError guarantees that no
    connection was attempted.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        details = {"path": path} if path is not None else {}
        super().__init__(message, details)
        self.path = path


class PrinterConnectionError(PrinterSimError):
    """Socket failure while talking to the other side of a print job."""

    def __init__(
        self,
        host: str,
        port: int,
        reason: str,
        operation: str = "connect to",
    ):
        message = f"Could not {operation} {host}:{port}: {reason}"
        details = {
            "host": host,
            "port": port,
            "operation": operation,
        }
        super().__init__(message, details)
        self.host = host
        self.port = port
        self.reason = reason
        self.operation = operation


class ProtocolShortReadError(PrinterSimError):
    """
    The peer closed the stream before a required line arrived.

    stage is "filename" on the server (job abandoned) or "response" on the
    client (no verdict received).
    """

    def __init__(self, stage: str, message: Optional[str] = None):
        message = message or f"Connection closed before the {stage} line arrived"
        super().__init__(message, {"stage": stage})
        self.stage = stage
