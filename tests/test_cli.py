"""
Unit tests for the command line entry point.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

import cli


# Fixtures

@pytest.fixture(autouse=True)
def reset_logging():
    """cli.main() installs handlers on the app logger; drop them after each test."""
    yield
    logging.getLogger("socket_printer").handlers.clear()


# Tests for Argument Parsing

class TestParser:

    def test_serve_defaults(self):
        args = cli.build_parser().parse_args(["serve"])

        assert args.command == "serve"
        assert args.port == 12345
        assert args.ink == 100.0
        assert args.concurrency == "sequential"

    def test_serve_overrides(self):
        args = cli.build_parser().parse_args(
            ["serve", "--port", "9000", "--ink", "5", "--concurrency", "threaded"]
        )

        assert args.port == 9000
        assert args.ink == 5.0
        assert args.concurrency == "threaded"

    def test_print_file_flag(self):
        args = cli.build_parser().parse_args(["print", "--host", "printer.local", "--file", "a.txt"])

        assert args.host == "printer.local"
        assert args.file == "a.txt"

    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])


# Tests for Commands

class TestCommands:

    @patch("client.PrintClient")
    def test_print_exit_codes(self, mock_client_cls):
        mock_client_cls.return_value.run.return_value = "Impresión de a.txt completada. Tinta restante: 99.5%"
        assert cli.main(["print", "--file", "a.txt"]) == 0
        mock_client_cls.return_value.run.assert_called_once_with("a.txt")

        mock_client_cls.return_value.run.return_value = None
        assert cli.main(["print", "--file", "a.txt"]) == 1

    @patch("server.PrinterServer")
    def test_serve_starts_server(self, mock_server_cls):
        server = MagicMock()
        mock_server_cls.return_value = server

        assert cli.main(["serve", "--port", "0", "--ink", "50"]) == 0

        mock_server_cls.assert_called_once_with(
            host="0.0.0.0", port=0, initial_ink=50.0, concurrency="sequential"
        )
        server.start.assert_called_once()

    def test_serve_rejects_bad_ink(self, capsys):
        assert cli.main(["serve", "--port", "0", "--ink", "150"]) == 2
        assert "initial_ink" in capsys.readouterr().err

    @patch("server.PrinterServer")
    def test_serve_reports_bind_failure(self, mock_server_cls, capsys):
        mock_server_cls.return_value.start.side_effect = OSError("Address already in use")

        assert cli.main(["serve", "--port", "12345"]) == 2
        err = capsys.readouterr().err
        assert "cannot listen on 0.0.0.0:12345" in err
        assert "Address already in use" in err
