"""Pure calendar grid logic - no I/O dependencies."""

from datetime import date, datetime, timedelta

from .assignments import Assignment, due_day

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)

DAY_NAMES = {
    "monday": MONDAY,
    "tuesday": TUESDAY,
    "wednesday": WEDNESDAY,
    "thursday": THURSDAY,
    "friday": FRIDAY,
    "saturday": SATURDAY,
    "sunday": SUNDAY,
}


def parse_week_start(name: str) -> int:
    """Map a weekday name ("Sunday", "mon") to date.weekday() numbering."""
    key = name.strip().lower()
    for full, number in DAY_NAMES.items():
        if full == key or (len(key) >= 3 and full.startswith(key)):
            return number
    raise ValueError(f"Unknown weekday: {name}")


def start_of_week(day: date, week_start: int = SUNDAY) -> date:
    """First day of the week containing `day`."""
    return day - timedelta(days=(day.weekday() - week_start) % 7)


def end_of_week(day: date, week_start: int = SUNDAY) -> date:
    """Last day of the week containing `day`."""
    return start_of_week(day, week_start) + timedelta(days=6)


def week_days(anchor: date, week_start: int = SUNDAY) -> list[date]:
    """The seven days of the week containing `anchor`."""
    first = start_of_week(anchor, week_start)
    return [first + timedelta(days=i) for i in range(7)]


def month_grid(anchor: date, week_start: int = SUNDAY) -> list[date]:
    """
    Days shown on a month calendar for the month containing `anchor`.

    Starts at the beginning of the week holding the 1st and ends at the end of
    the week holding the last day, so the length is always a multiple of 7.
    """
    first = anchor.replace(day=1)
    next_month = (first + timedelta(days=32)).replace(day=1)
    last = next_month - timedelta(days=1)

    start = start_of_week(first, week_start)
    end = end_of_week(last, week_start)
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def chunk_weeks(days: list[date]) -> list[list[date]]:
    """Split a grid into rows of seven."""
    return [days[i : i + 7] for i in range(0, len(days), 7)]


def assignments_on(
    assignments: list[Assignment], day: date, now: datetime | None = None
) -> list[Assignment]:
    """
    Assignments due on a calendar day, completed or not.

    With `now`, due times are read in its timezone, the same way triage
    buckets them.
    """
    return [a for a in assignments if due_day(a, now) == day]


def has_pending_on(assignments: list[Assignment], day: date, now: datetime | None = None) -> bool:
    """True if any incomplete assignment is due that day (calendar dot)."""
    return any(not a.completed and due_day(a, now) == day for a in assignments)
