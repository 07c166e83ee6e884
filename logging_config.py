"""
Centralized logging configuration for socket-printer.

Every record carries the name of the thread that emitted it. Under the
sequential policy that is always the accept loop; under the threaded policy
each connection handler names its own thread, so interleaved jobs stay
readable.

Log Format:
    2026-10-18 10:15:30 [INFO    ] [MainThread] socket_printer.server - Listening on 0.0.0.0:12345
    2026-10-18 10:15:31 [INFO    ] [MainThread] socket_printer.job - [1a2b3c4d] Printed notes.txt

Usage:
    # At process startup
    from logging_config import setup_logging, get_logger

    setup_logging(log_level=logging.DEBUG, enable_file_logging=False)

    # In modules
    logger = get_logger(__name__)
"""

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


APP_NAMESPACE = "socket_printer"


# =============================================================================
# THREAD CONTEXT FILTER
# =============================================================================

class ThreadContextFilter(logging.Filter):
    """
    Logging filter that stamps thread_name and thread_id on each record.

    Never drops a record; it only adds the attributes used by the format
    string.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        current_thread = threading.current_thread()
        record.thread_name = current_thread.name
        record.thread_id = threading.get_ident()
        return True


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logging(
    app_name: str = APP_NAMESPACE,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = False,
) -> logging.Logger:
    """
    Configure the application logger.

    Installs:
    1. Console handler on stdout (always)
    2. Rotating file handler for all levels (optional)
    3. Rotating error file handler for ERROR/CRITICAL (optional)

    Args:
        app_name: Name of the root application logger
        log_level: Minimum log level (default: INFO)
        log_dir: Directory for log files (default: ./logs next to this file)
        enable_file_logging: Whether to write log files

    Returns:
        Configured application logger
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)
    logger.propagate = False  # Prevent duplicate logs to root logger

    # Allows re-configuration (tests, repeated CLI calls)
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-8s] [%(thread_name)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    thread_filter = ThreadContextFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(thread_filter)
    logger.addHandler(console_handler)

    if enable_file_logging:
        if log_dir is None:
            log_dir = Path(__file__).parent / "logs"
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        app_log_file = log_dir / f"{app_name}.log"
        file_handler = RotatingFileHandler(
            filename=app_log_file,
            maxBytes=5 * 1024 * 1024,  # 5 MB per file
            backupCount=3,
            encoding="utf-8"
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(thread_filter)
        logger.addHandler(file_handler)

        error_log_file = log_dir / f"{app_name}_error.log"
        error_handler = RotatingFileHandler(
            filename=error_log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        error_handler.addFilter(thread_filter)
        logger.addHandler(error_handler)

        logger.info(f"File logging enabled: {app_log_file}")

    logger.debug(f"Logging configured at level {logging.getLevelName(log_level)}")
    return logger


# =============================================================================
# LOGGER FACTORY FUNCTIONS
# =============================================================================

def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger under the application namespace.

    Example:
        get_logger("services.ink_service")
        # Logger name: "socket_printer.services.ink_service"
    """
    if not name.startswith(APP_NAMESPACE):
        name = f"{APP_NAMESPACE}.{name}"

    return logging.getLogger(name)


class JobLogAdapter(logging.LoggerAdapter):
    """Prefixes every message with the short job ID: "[1a2b3c4d] Printed ..."."""

    def process(self, msg, kwargs):
        return f"[{self.extra['job_id']}] {msg}", kwargs


def get_job_logger(job_id: str) -> JobLogAdapter:
    """
    Get a logger for one print job.

    All jobs share the single "socket_printer.job" logger; the first 8
    characters of the job ID travel in the message prefix.
    """
    short_id = job_id[:8] if len(job_id) >= 8 else job_id
    return JobLogAdapter(logging.getLogger(f"{APP_NAMESPACE}.job"), {"job_id": short_id})


def set_thread_name(name: str) -> None:
    """Rename the current thread; the name shows in the [thread_name] field."""
    threading.current_thread().name = name
