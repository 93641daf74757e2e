"""Pure display helpers for assignment rows - no I/O dependencies."""

from datetime import datetime

from .assignments import Assignment, Priority, local_due
from .triage import Bucket, classify

PRIORITY_COLORS = {
    Priority.HIGH: "danger",
    Priority.MEDIUM: "primary",
    Priority.LOW: "success",
}
DEFAULT_COLOR = "border-heavy"


def priority_color(assignment: Assignment) -> str:
    """Accent color: the assignment's override, else one per priority."""
    if assignment.color:
        return assignment.color
    return PRIORITY_COLORS.get(assignment.priority, DEFAULT_COLOR)


def format_short_date(dt: datetime) -> str:
    """'Feb 6' style date without a leading zero."""
    return f"{dt.strftime('%b')} {dt.day}"


def status_label(assignment: Assignment, bucket: Bucket | None, now: datetime | None = None) -> str:
    """Badge text for a row: Done, Overdue, Today, or the short due date.

    The date is shown in `now`'s timezone when given.
    """
    if assignment.completed:
        return "Done"
    if bucket == Bucket.OVERDUE:
        return "Overdue"
    if bucket == Bucket.TODAY:
        return "Today"
    due = local_due(assignment, now) if now else assignment.due
    return format_short_date(due)


def format_assignment_line(assignment: Assignment, now: datetime) -> str:
    """
    Format a single assignment for list display.

    Pure function - no I/O.
    """
    bucket = None if assignment.completed else classify(assignment, now)
    check = "[x]" if assignment.completed else "[ ]"
    priority = assignment.priority.value if assignment.priority else "-"
    return (
        f"{check} {assignment.subject}: {assignment.title} "
        f"({status_label(assignment, bucket, now)}, priority: {priority}, id: {assignment.id})"
    )
