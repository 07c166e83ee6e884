"""
Printer server - accept loop for print jobs.

Listens on a TCP port and hands every accepted connection to a JobHandler.
All jobs share one InkService, so the ink budget accumulates across jobs for
the lifetime of the process.

CONCURRENCY POLICY:
    sequential (default)
    └── handle() runs inline; the next accept happens after the job closes

    threaded
    └── one daemon handler thread per connection

The accept loop is the outermost boundary: no single job can stop it.

Usage:
    server = PrinterServer(port=12345)
    server.start()          # blocks until stop() or SIGINT/SIGTERM
"""

from __future__ import annotations

import signal
import socket
import threading
from typing import Optional

from config import Config
from models.printer_state import MAX_INK_PERCENT
from services.ink_service import InkService
from services.job_service import JobHandler
from logging_config import get_logger, set_thread_name


# Module logger
logger = get_logger(__name__)

SEQUENTIAL = "sequential"
THREADED = "threaded"
CONCURRENCY_POLICIES = (SEQUENTIAL, THREADED)

# accept() wakes up this often to notice stop()
ACCEPT_POLL_SECONDS = 1.0


class PrinterServer:
    """
    TCP server simulating a shared printer.

    Attributes:
        host: Bind address
        port: Bound port (the real one once listening, so 0 works)
        concurrency: "sequential" or "threaded"
        ink_service: Shared ink budget
    """

    def __init__(
        self,
        host: str = Config.PRINTER_BIND_HOST,
        port: int = Config.PRINTER_PORT,
        initial_ink: float = MAX_INK_PERCENT,
        concurrency: str = SEQUENTIAL,
        backlog: int = Config.PRINTER_BACKLOG,
        ink_service: Optional[InkService] = None,
    ):
        if concurrency not in CONCURRENCY_POLICIES:
            raise ValueError(
                f"Unknown concurrency policy {concurrency!r}, expected one of {CONCURRENCY_POLICIES}"
            )

        self.host = host
        self.port = port
        self.concurrency = concurrency
        self.backlog = backlog
        self.ink_service = ink_service or InkService(initial_ink)
        self.handler = JobHandler(self.ink_service)

        self._sock: Optional[socket.socket] = None
        self._shutdown = threading.Event()
        self._connections = 0

    @property
    def is_running(self) -> bool:
        return self._sock is not None and not self._shutdown.is_set()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, ready_event: Optional[threading.Event] = None) -> None:
        """
        Bind, listen and run the accept loop. Blocks until stop().

        Args:
            ready_event: Set once the socket is listening (tests and
                         programmatic callers wait on it)
        """
        self._shutdown.clear()
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._sock.bind((self.host, self.port))
        self._sock.listen(self.backlog)
        self._sock.settimeout(ACCEPT_POLL_SECONDS)
        self.port = self._sock.getsockname()[1]

        # Signal handlers can only be installed from the main thread
        if threading.current_thread() is threading.main_thread():
            signal.signal(signal.SIGINT, self._on_signal)
            signal.signal(signal.SIGTERM, self._on_signal)

        logger.info(
            f"Printer listening on {self.host}:{self.port} "
            f"({self.concurrency}, ink {self.ink_service.ink_remaining:.1f}%)"
        )

        if ready_event is not None:
            ready_event.set()

        try:
            self._accept_loop()
        finally:
            self._close_socket()
            snapshot = self.ink_service.snapshot()
            logger.info(
                f"Printer stopped: {snapshot.jobs_total} jobs ({snapshot.jobs_printed} printed, "
                f"{snapshot.jobs_rejected} rejected), ink left {snapshot.ink_remaining:.1f}%"
            )
            if snapshot.is_empty:
                logger.warning("Ink cartridge is empty")
            logger.debug(f"Final printer state: {snapshot.to_dict()}")

    def stop(self) -> None:
        """Ask the accept loop to exit. Safe to call from any thread."""
        if self._shutdown.is_set():
            return
        logger.info("Stopping printer server...")
        self._shutdown.set()

    def _accept_loop(self) -> None:
        while not self._shutdown.is_set():
            try:
                conn, addr = self._sock.accept()
            except socket.timeout:
                continue
            except OSError as e:
                if self._shutdown.is_set():
                    break
                logger.error(f"accept() failed: {e}")
                continue

            conn.setblocking(True)
            self._connections += 1
            logger.info(f"Client connected: {addr[0]}:{addr[1]}")

            try:
                self._dispatch(conn, addr)
            except Exception as e:
                # Last line of defense: keep accepting
                logger.error(f"Unhandled error for {addr[0]}:{addr[1]}: {e}", exc_info=True)
                conn.close()

        logger.debug("Accept loop exited")

    def _dispatch(self, conn: socket.socket, addr) -> None:
        if self.concurrency == SEQUENTIAL:
            self.handler.handle(conn, addr)
            return

        thread = threading.Thread(
            target=self._handle_in_thread,
            args=(conn, addr),
            name=f"Job-{self._connections}",
            daemon=True,
        )
        thread.start()

    def _handle_in_thread(self, conn: socket.socket, addr) -> None:
        set_thread_name(f"Job-{addr[0]}:{addr[1]}")
        try:
            self.handler.handle(conn, addr)
        except Exception as e:
            logger.error(f"Unhandled error in job thread: {e}", exc_info=True)

    def _close_socket(self) -> None:
        if self._sock is not None:
            try:
                self._sock.close()
            except OSError:
                pass
            self._sock = None

    def _on_signal(self, signum, frame) -> None:
        logger.info(f"Received signal {signum}")
        self.stop()


def listen(
    port: int = Config.PRINTER_PORT,
    host: str = Config.PRINTER_BIND_HOST,
    initial_ink: float = Config.PRINTER_INITIAL_INK,
    concurrency: str = Config.PRINTER_CONCURRENCY,
) -> None:
    """Run a printer server on port until it is stopped."""
    server = PrinterServer(
        host=host,
        port=port,
        initial_ink=initial_ink,
        concurrency=concurrency,
    )
    server.start()
