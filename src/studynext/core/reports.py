"""Pure progress report numbers - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .assignments import Assignment
from .calendar import assignments_on


@dataclass
class CompletionStats:
    total: int
    completed: int
    completion_rate: int


@dataclass
class DayCount:
    day: date
    completed: int
    pending: int


def completion_stats(assignments: list[Assignment]) -> CompletionStats:
    """Totals and completion rate as a rounded percentage."""
    total = len(assignments)
    if not total:
        return CompletionStats(total=0, completed=0, completion_rate=0)
    completed = sum(1 for a in assignments if a.completed)
    return CompletionStats(
        total=total,
        completed=completed,
        completion_rate=round(completed / total * 100),
    )


def daily_breakdown(
    assignments: list[Assignment],
    today: date,
    days: int = 7,
    now: datetime | None = None,
) -> list[DayCount]:
    """Completed/pending counts by due day for the last `days` days, oldest first.

    Pass `now` to read due times in its timezone.
    """
    result = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        due_that_day = assignments_on(assignments, day, now)
        result.append(
            DayCount(
                day=day,
                completed=sum(1 for a in due_that_day if a.completed),
                pending=sum(1 for a in due_that_day if not a.completed),
            )
        )
    return result


def subject_breakdown(assignments: list[Assignment]) -> dict[str, int]:
    """Assignment count per subject, in first-seen order."""
    counts: dict[str, int] = {}
    for a in assignments:
        counts[a.subject] = counts.get(a.subject, 0) + 1
    return counts
