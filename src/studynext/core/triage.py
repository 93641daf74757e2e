"""Pure task triage logic - no I/O dependencies.

Turns a snapshot of assignments plus a reference time into what the
dashboard shows: the ordered active list, overdue/today/upcoming buckets,
the Tonight Mode view, and this week's totals. Safe to re-run on every
render; nothing is cached between calls.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum

from .assignments import Assignment, local_due
from .calendar import SUNDAY, end_of_week, start_of_week

TONIGHT_START_HOUR = 19


class Bucket(Enum):
    OVERDUE = "overdue"
    TODAY = "today"
    UPCOMING = "upcoming"


@dataclass
class WeekSummary:
    """Assignments due this calendar week (completed or not)."""

    start: date
    end: date
    total: int
    completed: int


@dataclass
class TriageResult:
    """Triage output ready for display."""

    now: datetime
    active: list[Assignment]
    visible: list[Assignment]
    overdue: list[Assignment]
    today: list[Assignment]
    upcoming: list[Assignment]
    tonight_mode: bool
    completed_count: int
    week: WeekSummary
    buckets: dict[str, Bucket] = field(default_factory=dict)


def active_assignments(assignments: list[Assignment]) -> list[Assignment]:
    """Drop completed assignments, keeping input order."""
    return [a for a in assignments if not a.completed]


def sort_for_display(assignments: list[Assignment], now: datetime | None = None) -> list[Assignment]:
    """
    Sort by due time ascending, then priority (high, medium, low, unspecified).

    Stable: ties on both keys keep their input order. Pure function - no I/O.
    """
    if now is None:
        return sorted(assignments, key=lambda a: (a.due, a.priority_rank))
    return sorted(assignments, key=lambda a: (local_due(a, now), a.priority_rank))


def classify(assignment: Assignment, now: datetime) -> Bucket:
    """Overdue if due before today's midnight, today if due today, else upcoming."""
    due_day = local_due(assignment, now).date()
    today = now.date()
    if due_day < today:
        return Bucket.OVERDUE
    if due_day == today:
        return Bucket.TODAY
    return Bucket.UPCOMING


def is_tonight_mode(now: datetime, start_hour: int = TONIGHT_START_HOUR) -> bool:
    return now.hour >= start_hour


def apply_tonight_mode(
    assignments: list[Assignment],
    now: datetime,
    start_hour: int = TONIGHT_START_HOUR,
) -> list[Assignment]:
    """
    Evening display filter.

    From `start_hour` on, upcoming assignments are hidden unless they are due
    tomorrow. Overdue and today's assignments always stay. Order is preserved.
    """
    if not is_tonight_mode(now, start_hour):
        return list(assignments)
    tomorrow = now.date() + timedelta(days=1)
    return [
        a
        for a in assignments
        if classify(a, now) != Bucket.UPCOMING or local_due(a, now).date() == tomorrow
    ]


def weekly_summary(
    assignments: list[Assignment],
    now: datetime,
    week_start: int = SUNDAY,
) -> WeekSummary:
    """Count all assignments due in the week containing `now`, and how many are done."""
    start = start_of_week(now.date(), week_start)
    end = end_of_week(now.date(), week_start)
    in_week = [a for a in assignments if start <= local_due(a, now).date() <= end]
    return WeekSummary(
        start=start,
        end=end,
        total=len(in_week),
        completed=sum(1 for a in in_week if a.completed),
    )


def triage(
    assignments: list[Assignment],
    now: datetime,
    tonight_start_hour: int = TONIGHT_START_HOUR,
    week_start: int = SUNDAY,
) -> TriageResult:
    """
    Full triage of an assignment snapshot.

    Pure function - no I/O. Buckets are derived from the sorted active list
    and never reorder it.
    """
    active = sort_for_display(active_assignments(assignments), now)
    buckets = {a.id: classify(a, now) for a in active}

    return TriageResult(
        now=now,
        active=active,
        visible=apply_tonight_mode(active, now, tonight_start_hour),
        overdue=[a for a in active if buckets[a.id] == Bucket.OVERDUE],
        today=[a for a in active if buckets[a.id] == Bucket.TODAY],
        upcoming=[a for a in active if buckets[a.id] == Bucket.UPCOMING],
        tonight_mode=is_tonight_mode(now, tonight_start_hour),
        completed_count=sum(1 for a in assignments if a.completed),
        week=weekly_summary(assignments, now, week_start),
        buckets=buckets,
    )
