"""Ports - interfaces/protocols for external dependencies."""

from .assignment_repo import AssignmentRepository
from .profile_store import ProfileStore
from .reminder_log import ReminderLog
from .timer import Timer, TimerHandle

__all__ = [
    "AssignmentRepository",
    "ProfileStore",
    "ReminderLog",
    "Timer",
    "TimerHandle",
]
