"""
Unit tests for the wire protocol helpers and exceptions.
"""

import io
from unittest.mock import MagicMock

import pytest

from core.exceptions import (
    InputError,
    PrinterConnectionError,
    PrinterSimError,
    ProtocolShortReadError,
)
from core.protocol import (
    FIN_SENTINEL,
    LineReader,
    failure_message,
    format_ink,
    success_message,
    write_job,
    write_line,
)
from services.job_service import read_job


# Tests for Line I/O

def reader_for(data: bytes) -> LineReader:
    return LineReader(io.BytesIO(data))


class TestLineReader:

    @pytest.mark.parametrize("raw, expected", [
        (b"plain\n", "plain"),
        (b"windows\r\n", "windows"),
        (b"old mac\r", "old mac"),
        (b"last line without terminator", "last line without terminator"),
        (b"\n", ""),
    ])
    def test_strips_terminator(self, raw, expected):
        assert reader_for(raw).read_line() == expected

    def test_eof(self):
        assert reader_for(b"").read_line() is None

    def test_mixed_terminators(self):
        """\\r\\n counts as one terminator; a lone \\r or \\n each end a line."""
        reader = reader_for(b"a\r\nb\rc\n\r\nd")

        assert [reader.read_line() for _ in range(5)] == ["a", "b", "c", "", "d"]
        assert reader.read_line() is None

    def test_lone_cr_does_not_wait_for_more_input(self):
        """A line ending in \\r is returned without reading the next byte."""
        raw = MagicMock()
        raw.read.side_effect = [b"<", b"F", b"I", b"N", b">", b"\r", AssertionError("read past \\r")]

        assert LineReader(raw).read_line() == FIN_SENTINEL
        assert raw.read.call_count == 6

    def test_invalid_utf8_replaced(self):
        assert reader_for(b"caf\xe9\n").read_line() == "caf\ufffd"

    def test_utf8_decoded(self):
        assert reader_for("impresión\n".encode("utf-8")).read_line() == "impresión"

    def test_close_closes_stream(self):
        raw = io.BytesIO(b"x\n")
        with LineReader(raw):
            pass
        assert raw.closed


class TestLineWriting:

    def test_write_line(self):
        buf = io.StringIO()
        write_line(buf, "hola")
        assert buf.getvalue() == "hola\n"

    def test_write_job_layout(self):
        buf = io.StringIO()

        sent = write_job(buf, "doc.txt", ["uno", "", "tres"])

        assert sent == 3
        assert buf.getvalue() == "doc.txt\nuno\n\ntres\n<FIN>\n"

    def test_job_round_trip(self):
        """Lines sent by write_job come back joined by line breaks, sentinel excluded."""
        lines = ["alpha", "beta", "  indented", ""]
        buf = io.StringIO()
        write_job(buf, "round.txt", lines)

        job = read_job(reader_for(buf.getvalue().encode("utf-8")))

        assert job.filename == "round.txt"
        assert job.lines == lines
        assert FIN_SENTINEL not in job.content
        assert job.char_count == sum(len(line) + 1 for line in lines)


# Tests for Response Messages

class TestMessages:

    @pytest.mark.parametrize("value, expected", [
        (100.0, "100.0"),
        (99.5, "99.5"),
        (97.8, "97.8"),
        (0.0, "0.0"),
    ])
    def test_format_ink(self, value, expected):
        assert format_ink(value) == expected

    def test_success_message(self):
        assert success_message("a.txt", 99.5) == "Impresión de a.txt completada. Tinta restante: 99.5%"

    def test_failure_message(self):
        assert failure_message("a.txt", 0.3) == (
            "No hay suficiente tinta para imprimir a.txt. Tinta restante: 0.3%"
        )


# Tests for Exceptions

class TestExceptions:

    def test_hierarchy(self):
        for exc in (
            InputError("bad"),
            PrinterConnectionError("localhost", 12345, "refused"),
            ProtocolShortReadError("response"),
        ):
            assert isinstance(exc, PrinterSimError)

    def test_str_includes_details(self):
        exc = InputError("missing", path="/tmp/nope.txt")
        assert str(exc) == "missing | Details: {'path': '/tmp/nope.txt'}"

    def test_connection_error_message(self):
        exc = PrinterConnectionError("localhost", 12345, "refused")
        assert exc.message == "Could not connect to localhost:12345: refused"
        assert exc.details["operation"] == "connect to"
