"""
Printer client - sends one file to the printer server.

Flow:
    1. Ask for a file path (or take it from the caller)
    2. Validate it locally (no connection is made for a bad path)
    3. Connect, send filename + lines + <FIN>
    4. Print the server's one-line verdict

User-facing results are printed to stdout; diagnostics go to the logger.
A single job per run, no retries.
"""

from __future__ import annotations

import os
import socket
from pathlib import Path
from typing import Callable, Optional

from config import Config
from core.exceptions import InputError, PrinterConnectionError, ProtocolShortReadError
from core.protocol import ENCODING, open_streams, write_job
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

PROMPT = "Ingrese la ruta del archivo a imprimir: "


def validate_path(raw_path: Optional[str]) -> Path:
    """
    Check that raw_path names an existing, readable, regular file.

    Raises:
        InputError: If the path is blank, missing, a directory or unreadable
    """
    if raw_path is None or not raw_path.strip():
        raise InputError("El nombre del archivo no puede estar vacío.")

    path = Path(raw_path.strip())
    if not path.exists() or path.is_dir():
        raise InputError(
            f"El archivo {raw_path} no existe o no es un archivo válido.",
            path=str(path),
        )
    if not path.is_file() or not os.access(path, os.R_OK):
        raise InputError(f"El archivo {raw_path} no se puede leer.", path=str(path))

    return path


class PrintClient:
    """
    Client for the printer server.

    Attributes:
        server_address: Host of the printer server
        port: Port of the printer server
    """

    def __init__(
        self,
        server_address: str = Config.PRINTER_HOST,
        port: int = Config.PRINTER_PORT,
        input_func: Callable[[str], str] = input,
    ):
        self.server_address = server_address
        self.port = port
        self._input = input_func

    def prompt_path(self) -> str:
        return self._input(PROMPT)

    def send_file(self, path: Path) -> str:
        """
        Send path as one print job and return the server's response line.

        The file is read before connecting, so a file error never leaves a
        half-sent job behind. The connection is closed on every exit path.

        Raises:
            InputError: If the file cannot be read
            PrinterConnectionError: If connecting, sending or receiving fails
            ProtocolShortReadError: If the server closes without answering
        """
        try:
            with path.open("r", encoding=ENCODING, errors="replace") as fh:
                lines = [line.rstrip("\r\n") for line in fh]
        except OSError as e:
            raise InputError(f"El archivo {path} no se puede leer.", path=str(path)) from e

        try:
            sock = socket.create_connection((self.server_address, self.port))
        except OSError as e:
            raise PrinterConnectionError(self.server_address, self.port, str(e)) from e

        try:
            with sock:
                reader, writer = open_streams(sock)
                with reader, writer:
                    sent = write_job(writer, path.name, lines)
                    logger.debug(f"Sent {path.name} ({sent} lines) to {self.server_address}:{self.port}")

                    response = reader.read_line()
                    if response is None:
                        raise ProtocolShortReadError("response")
                    return response
        except OSError as e:
            raise PrinterConnectionError(
                self.server_address, self.port, str(e), operation="talk to"
            ) from e

    def run(self, raw_path: Optional[str] = None) -> Optional[str]:
        """
        Run one print job, reporting the result on stdout.

        Args:
            raw_path: File to print; prompts for it when None

        Returns:
            The server's response line, or None if the job did not complete
        """
        try:
            if raw_path is None:
                raw_path = self.prompt_path()
            path = validate_path(raw_path)
            response = self.send_file(path)
        except InputError as e:
            print(f"Error: {e.message}")
            return None
        except EOFError:
            print("Error: El nombre del archivo no puede estar vacío.")
            return None
        except PrinterConnectionError as e:
            logger.error(str(e))
            print(f"Error: no se pudo conectar con la impresora ({e.reason})")
            return None
        except ProtocolShortReadError as e:
            logger.error(str(e))
            print("Error: el servidor cerró la conexión sin responder.")
            return None

        print(response)
        return response


def run(server_address: str = Config.PRINTER_HOST, port: int = Config.PRINTER_PORT) -> Optional[str]:
    """Prompt for a file and send it to the printer at server_address:port."""
    return PrintClient(server_address, port).run()
