#!/usr/bin/env python3
"""
socket-printer - CLI entry point

Subcommands
───────────
  serve   Start the printer server
  print   Send one file to a running printer server

Usage examples
──────────────
  # Start the printer on the default port with a full cartridge
  socket-printer serve

  # Start with 5% ink, one thread per connection
  socket-printer serve --port 12345 --ink 5 --concurrency threaded

  # Print a file (prompts for the path when --file is omitted)
  socket-printer print --host 192.168.1.50 --file notes.txt
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from config import Config
from logging_config import setup_logging


def _setup_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    else:
        level = logging.getLevelName(Config.LOG_LEVEL.upper())
        if not isinstance(level, int):
            level = logging.INFO

    enable_files = getattr(args, "log_file", False) or Config.ENABLE_FILE_LOGGING
    setup_logging(
        log_level=level,
        log_dir=Path(Config.LOG_DIR),
        enable_file_logging=enable_files,
    )


# ---------------------------------------------------------------------------
# Subcommand: serve
# ---------------------------------------------------------------------------

def cmd_serve(args: argparse.Namespace) -> int:
    """Start the printer server."""
    from server import PrinterServer

    try:
        server = PrinterServer(
            host=args.host,
            port=args.port,
            initial_ink=args.ink,
            concurrency=args.concurrency,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        server.start()   # blocks
    except OSError as e:
        print(f"Error: cannot listen on {args.host}:{args.port}: {e}", file=sys.stderr)
        return 2
    return 0


# ---------------------------------------------------------------------------
# Subcommand: print
# ---------------------------------------------------------------------------

def cmd_print(args: argparse.Namespace) -> int:
    """Send one file to the printer server."""
    from client import PrintClient

    client = PrintClient(server_address=args.host, port=args.port)
    response = client.run(args.file)
    return 0 if response is not None else 1


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="socket-printer",
        description="Shared printer simulation over TCP",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="Start the printer server")
    p_serve.add_argument("--host", default=Config.PRINTER_BIND_HOST,
                         help="Bind address (default: %(default)s)")
    p_serve.add_argument("--port", type=int, default=Config.PRINTER_PORT,
                         help="Listen port (default: %(default)s)")
    p_serve.add_argument("--ink", type=float, default=Config.PRINTER_INITIAL_INK,
                         help="Starting ink percentage (default: %(default)s)")
    p_serve.add_argument("--concurrency", choices=("sequential", "threaded"),
                         default=Config.PRINTER_CONCURRENCY,
                         help="Connection handling policy (default: %(default)s)")
    p_serve.add_argument("--log-file", action="store_true",
                         help="Also write rotating log files to LOG_DIR")
    p_serve.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    p_serve.set_defaults(func=cmd_serve)

    p_print = sub.add_parser("print", help="Send a file to the printer")
    p_print.add_argument("--host", default=Config.PRINTER_HOST,
                         help="Printer server address (default: %(default)s)")
    p_print.add_argument("--port", type=int, default=Config.PRINTER_PORT,
                         help="Printer server port (default: %(default)s)")
    p_print.add_argument("--file", default=None,
                         help="File to print (prompted for when omitted)")
    p_print.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    p_print.set_defaults(func=cmd_print)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
