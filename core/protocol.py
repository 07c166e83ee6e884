"""
Line-oriented wire protocol shared by the printer client and server.

Client -> Server:
    <filename>\\n
    <content line 1>\\n
    ...
    <content line N>\\n
    <FIN>\\n

Server -> Client (exactly one line):
    Impresión de <filename> completada. Tinta restante: <ink>%
    No hay suficiente tinta para imprimir <filename>. Tinta restante: <ink>%

Lines are UTF-8. Readers accept \\n, \\r\\n or a lone \\r as terminator and
strip it; writers always emit \\n.
"""

from __future__ import annotations

import socket
from typing import IO, BinaryIO, Iterable, Optional, Tuple

ENCODING = "utf-8"
FIN_SENTINEL = "<FIN>"
LINE_END = "\n"

SUCCESS_TEMPLATE = "Impresión de {filename} completada. Tinta restante: {ink}%"
FAILURE_TEMPLATE = "No hay suficiente tinta para imprimir {filename}. Tinta restante: {ink}%"


class LineReader:
    """
    Byte-level line reader over a binary stream.

    A line ends at \\n, \\r\\n or a lone \\r. A \\r returns the line at once;
    a \\n arriving right after it is skipped on the next read. This never
    waits for more input once a terminator has been seen, so a peer that
    ends its lines with \\r and then waits for a reply is answered.
    """

    def __init__(self, raw: BinaryIO):
        self._raw = raw
        self._skip_lf = False

    def read_line(self) -> Optional[str]:
        """Read one line without its terminator, or None at end of stream."""
        buf = bytearray()
        while True:
            ch = self._raw.read(1)
            if not ch:
                if not buf:
                    return None
                break
            if self._skip_lf:
                self._skip_lf = False
                if ch == b"\n":
                    continue
            if ch == b"\n":
                break
            if ch == b"\r":
                self._skip_lf = True
                break
            buf += ch
        return buf.decode(ENCODING, errors="replace")

    def close(self) -> None:
        self._raw.close()

    def __enter__(self) -> "LineReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_streams(conn: socket.socket) -> Tuple[LineReader, IO[str]]:
    """
    Wrap a connected socket in a line reader and a text writer.

    Undecodable bytes are replaced rather than raised.
    """
    reader = LineReader(conn.makefile("rb"))
    writer = conn.makefile("w", encoding=ENCODING, newline="")
    return reader, writer


def write_line(writer: IO[str], line: str) -> None:
    writer.write(line + LINE_END)
    writer.flush()


def write_job(writer: IO[str], filename: str, lines: Iterable[str]) -> int:
    """
    Send a complete print job and return the number of content lines sent.

    The stream is flushed once, after the sentinel.
    """
    writer.write(filename + LINE_END)
    count = 0
    for line in lines:
        writer.write(line + LINE_END)
        count += 1
    writer.write(FIN_SENTINEL + LINE_END)
    writer.flush()
    return count


def format_ink(value: float) -> str:
    """Ink percentage with one decimal, e.g. 99.5 or 100.0."""
    return f"{value:.1f}"


def success_message(filename: str, ink_remaining: float) -> str:
    return SUCCESS_TEMPLATE.format(filename=filename, ink=format_ink(ink_remaining))


def failure_message(filename: str, ink_remaining: float) -> str:
    return FAILURE_TEMPLATE.format(filename=filename, ink=format_ink(ink_remaining))
