"""
Configuration for socket-printer.

Values come from environment variables, optionally loaded from a .env file.
Command line flags in cli.py take precedence over anything set here.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Default configuration shared by the printer server and client."""

    # Network settings
    PRINTER_HOST = os.environ.get("PRINTER_HOST", "localhost")
    PRINTER_BIND_HOST = os.environ.get("PRINTER_BIND_HOST", "0.0.0.0")
    PRINTER_PORT = int(os.environ.get("PRINTER_PORT", "12345"))
    PRINTER_BACKLOG = int(os.environ.get("PRINTER_BACKLOG", "16"))

    # ==========================================================================
    # Printer Configuration
    # ==========================================================================
    # PRINTER_INITIAL_INK: ink percentage at server startup, in [0, 100]
    #   Default: 100.0 (full cartridge)
    #
    # PRINTER_CONCURRENCY: how accepted connections are handled
    #   "sequential" - one job fully handled before the next accept (default)
    #   "threaded"   - one handler thread per connection
    # ==========================================================================
    PRINTER_INITIAL_INK = float(os.environ.get("PRINTER_INITIAL_INK", "100.0"))
    PRINTER_CONCURRENCY = os.environ.get("PRINTER_CONCURRENCY", "sequential")

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    ENABLE_FILE_LOGGING = os.environ.get("ENABLE_FILE_LOGGING", "0") == "1"
    LOG_DIR = os.environ.get("LOG_DIR", str(BASE_DIR / "logs"))
