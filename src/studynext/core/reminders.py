"""Pure due-date reminder logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .assignments import Assignment
from .assignments import local_due


class ReminderKind(Enum):
    DAY_BEFORE = "dayBefore"
    TWO_HOURS = "twoHours"


@dataclass
class Reminder:
    assignment: Assignment
    kind: ReminderKind

    @property
    def title(self) -> str:
        if self.kind == ReminderKind.DAY_BEFORE:
            return f"Upcoming Task: {self.assignment.subject}"
        return "Hurry! Assignments Due"

    @property
    def body(self) -> str:
        if self.kind == ReminderKind.DAY_BEFORE:
            return f'"{self.assignment.title}" is due tomorrow!'
        return f'"{self.assignment.title}" is due in less than 2 hours!'


def hours_until(assignment: Assignment, now: datetime) -> int:
    """Whole hours until due, truncated toward zero."""
    seconds = (local_due(assignment, now) - now).total_seconds()
    return int(seconds / 3600)


def due_reminders(
    assignments: list[Assignment],
    now: datetime,
    notified: dict[str, list[str]],
) -> tuple[list[Reminder], dict[str, list[str]]]:
    """
    Work out which reminders to send now.

    A "day before" reminder fires 23 to 25 hours out and a "two hours" one
    fires 0 to 2 hours out, each at most once per assignment as recorded in
    `notified` (assignment id -> kinds already sent). Returns the reminders
    and the updated map; the input map is not modified.
    """
    updated = {k: list(v) for k, v in notified.items()}
    reminders = []

    for a in assignments:
        if a.completed:
            continue
        hours = hours_until(a, now)
        sent = updated.get(a.id, [])

        for kind, low, high in (
            (ReminderKind.DAY_BEFORE, 23, 25),
            (ReminderKind.TWO_HOURS, 0, 2),
        ):
            if low <= hours <= high and kind.value not in sent:
                reminders.append(Reminder(assignment=a, kind=kind))
                sent = sent + [kind.value]
                updated[a.id] = sent

    return reminders, updated
