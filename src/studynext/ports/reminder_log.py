"""Sent-reminder log interface."""

from typing import Protocol


class ReminderLog(Protocol):
    """Interface for remembering which reminders were already sent."""

    def load(self, uid: str) -> dict[str, list[str]]:
        """Assignment id -> reminder kinds already sent."""
        ...

    def save(self, uid: str, notified: dict[str, list[str]]) -> None:
        """Persist the map returned by due_reminders."""
        ...
