"""
Per-connection print job handling.

JobHandler.handle() runs one job end to end on an accepted connection:

    1. Read the filename line (stream ends here -> job abandoned)
    2. Read content lines until <FIN> or end of stream
    3. Compute the ink cost from the content's character count
    4. Try to deduct the cost from the shared InkService (atomic)
    5. Write one response line
    6. Close the connection, always

The handler holds no per-job state, so the same instance can be called from
the accept loop (sequential policy) or from one thread per connection
(threaded policy) without changes.

Error Handling:
    Every failure is confined to its connection. I/O errors are logged and
    the connection is closed; nothing propagates to the accept loop.
"""

from __future__ import annotations

import socket
import uuid
from typing import Optional, Tuple

from core.exceptions import ProtocolShortReadError
from core.protocol import FIN_SENTINEL, LINE_END, LineReader, open_streams, write_line
from models.print_job import JobOutcome, JobStatus, PrintJob
from modules.estimator import InkEstimator
from services.ink_service import InkService
from logging_config import get_logger, get_job_logger


# Module logger
logger = get_logger(__name__)


def read_job(reader: LineReader) -> PrintJob:
    """
    Read one print job from a line reader.

    Content lines are accumulated, each followed by a line break, until the
    <FIN> sentinel (excluded) or end of stream. A missing sentinel is not an
    error: whatever arrived is treated as the whole job.

    Raises:
        ProtocolShortReadError: If the stream ends before the filename line
    """
    filename = reader.read_line()
    if filename is None:
        raise ProtocolShortReadError("filename")

    parts = []
    truncated = True
    while True:
        line = reader.read_line()
        if line is None:
            break
        if line == FIN_SENTINEL:
            truncated = False
            break
        parts.append(line)
        parts.append(LINE_END)

    return PrintJob(filename=filename, content="".join(parts), truncated=truncated)


class JobHandler:
    """
    Handles print jobs against one shared ink budget.

    Attributes:
        ink_service: The shared, guarded ink budget
        estimator: Maps character counts to ink cost
    """

    def __init__(self, ink_service: InkService, estimator: Optional[InkEstimator] = None):
        self.ink_service = ink_service
        self.estimator = estimator or InkEstimator()

    def process(self, job: PrintJob, job_id: Optional[str] = None) -> JobOutcome:
        """
        Charge a received job against the ink budget.

        Insufficient ink is a normal outcome (JobStatus.REJECTED), not an error.
        """
        job_id = job_id or uuid.uuid4().hex
        cost = self.estimator.ink_cost(job.char_count)
        result = self.ink_service.try_deduct(cost)

        return JobOutcome(
            job_id=job_id,
            filename=job.filename,
            char_count=job.char_count,
            cost=cost,
            status=JobStatus.PRINTED if result.success else JobStatus.REJECTED,
            ink_remaining=result.ink_remaining,
            details={"truncated": job.truncated},
        )

    def handle(self, conn: socket.socket, addr: Optional[Tuple[str, int]] = None) -> Optional[JobOutcome]:
        """
        Run one job on an accepted connection and close it.

        Args:
            conn: Connected socket (ownership is taken; it is always closed)
            addr: Peer address, for logging only

        Returns:
            JobOutcome if a response was sent, None if the job was abandoned
            or failed
        """
        job_id = uuid.uuid4().hex
        job_logger = get_job_logger(job_id)
        peer = f"{addr[0]}:{addr[1]}" if addr else "peer"

        try:
            reader, writer = open_streams(conn)
            with reader, writer:
                job = read_job(reader)
                job_logger.info(
                    f"Received {job.filename} from {peer} ({len(job.lines)} lines, {job.char_count} chars)"
                )
                if job.truncated:
                    job_logger.warning(f"{job.filename}: stream ended before {FIN_SENTINEL}, using what arrived")

                outcome = self.process(job, job_id=job_id)
                if outcome.printed:
                    job_logger.info(
                        f"Printed {job.filename} (cost {outcome.cost}%, ink left {outcome.ink_remaining:.1f}%)"
                    )
                else:
                    job_logger.warning(
                        f"Rejected {job.filename}: needs {outcome.cost}%, only {outcome.ink_remaining:.1f}% left"
                    )

                write_line(writer, outcome.message)
                job_logger.debug(f"Outcome: {outcome.to_dict()}")
                return outcome

        except ProtocolShortReadError:
            job_logger.info(f"{peer} disconnected before sending a filename, job abandoned")
        except ConnectionError as e:
            job_logger.info(f"Connection with {peer} lost: {e}")
        except OSError as e:
            job_logger.error(f"I/O error on job from {peer}: {e}", exc_info=True)
        finally:
            try:
                conn.close()
            except OSError:
                pass

        return None
