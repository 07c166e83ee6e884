"""
Core module for socket-printer.

Contains the infrastructure shared by client and server:
- exceptions: Custom exception hierarchy
- protocol: Line-oriented wire format (sentinel, encoding, response messages)
"""

from .exceptions import (
    PrinterSimError,
    InputError,
    PrinterConnectionError,
    ProtocolShortReadError,
)
from .protocol import (
    FIN_SENTINEL,
    ENCODING,
    LineReader,
    write_line,
    write_job,
    open_streams,
    success_message,
    failure_message,
)

__all__ = [
    "PrinterSimError",
    "InputError",
    "PrinterConnectionError",
    "ProtocolShortReadError",
    "FIN_SENTINEL",
    "ENCODING",
    "LineReader",
    "write_line",
    "write_job",
    "open_streams",
    "success_message",
    "failure_message",
]
