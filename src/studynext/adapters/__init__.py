"""Adapters - I/O implementations of ports."""

from .file_store import FileAssignmentRepository, FileProfileStore, FileReminderLog
from .http_assignments import HttpAssignmentRepository, AuthenticationError, DataSourceError
from .scheduler_timer import SchedulerTimer

__all__ = [
    "FileAssignmentRepository",
    "FileProfileStore",
    "FileReminderLog",
    "HttpAssignmentRepository",
    "AuthenticationError",
    "DataSourceError",
    "SchedulerTimer",
]
