"""
Services layer for socket-printer.

This module contains the business logic services:
- InkService: the shared ink budget behind the printer guard
- JobHandler: reads, charges and answers one print job per connection

Thread Model:
    Accept loop (sequential policy)
    └── JobHandler.handle() called inline, one job at a time

    Accept loop (threaded policy)
    └── One handler thread per connection, all sharing one InkService
"""

from .ink_service import InkService
from .job_service import JobHandler, read_job

__all__ = [
    "InkService",
    "JobHandler",
    "read_job",
]
