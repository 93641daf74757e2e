"""Pure assignment domain logic - no I/O dependencies."""

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum

logger = logging.getLogger(__name__)


class InvalidAssignmentError(ValueError):
    """Raised when a source record cannot be turned into an Assignment."""

    pass


class Priority(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, value) -> "Priority | None":
        """Unknown or missing priorities become None (lowest precedence)."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}
UNSPECIFIED_RANK = 3


def parse_timestamp(value) -> datetime:
    """Parse an ISO date or datetime. Date-only values mean local midnight."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidAssignmentError(f"Missing or non-string timestamp: {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise InvalidAssignmentError(f"Unparsable timestamp {value!r}: {e}") from e


@dataclass
class Assignment:
    """A homework assignment."""

    id: str
    subject: str
    title: str
    due: datetime
    priority: Priority | None = None
    completed: bool = False
    color: str | None = None
    created_at: datetime | None = None

    @property
    def priority_rank(self) -> int:
        if self.priority is None:
            return UNSPECIFIED_RANK
        return PRIORITY_RANK[self.priority]

    def with_completed(self, completed: bool) -> "Assignment":
        return Assignment(
            id=self.id,
            subject=self.subject,
            title=self.title,
            due=self.due,
            priority=self.priority,
            completed=completed,
            color=self.color,
            created_at=self.created_at,
        )

    @classmethod
    def from_api(cls, data: dict) -> "Assignment":
        """Create Assignment from a data-source record.

        Raises InvalidAssignmentError for records without an id or a valid due date.
        """
        if not data.get("id"):
            raise InvalidAssignmentError(f"Record has no id: {data!r}")
        created = None
        if data.get("createdAt"):
            try:
                created = parse_timestamp(data["createdAt"])
            except InvalidAssignmentError:
                logger.debug(f"Ignoring bad createdAt on {data['id']}")
        return cls(
            id=str(data["id"]),
            subject=data.get("subject") or "",
            title=data.get("title") or "",
            due=parse_timestamp(data.get("dueDate")),
            priority=Priority.parse(data.get("priority")),
            completed=bool(data.get("isCompleted", False)),
            color=data.get("color") or None,
            created_at=created,
        )

    def to_api(self) -> dict:
        """Serialize back to data-source field names."""
        data = {
            "id": self.id,
            "subject": self.subject,
            "title": self.title,
            "dueDate": self.due.isoformat(),
            "priority": self.priority.value if self.priority else None,
            "isCompleted": self.completed,
        }
        if self.color:
            data["color"] = self.color
        if self.created_at:
            data["createdAt"] = self.created_at.isoformat()
        return data


def local_due(assignment: Assignment, now: datetime) -> datetime:
    """Express the due time in the same frame as `now` so they compare."""
    due = assignment.due
    if due.tzinfo and now.tzinfo:
        return due.astimezone(now.tzinfo)
    if due.tzinfo and not now.tzinfo:
        return due.astimezone().replace(tzinfo=None)
    if not due.tzinfo and now.tzinfo:
        return due.replace(tzinfo=now.tzinfo)
    return due


def due_day(assignment: Assignment, now: datetime | None = None) -> date:
    """Calendar day the assignment is due on, as seen from `now`'s timezone."""
    if now is None:
        return assignment.due.date()
    return local_due(assignment, now).date()


def parse_assignments(records: list[dict]) -> list[Assignment]:
    """Parse source records, skipping (and logging) malformed ones."""
    assignments = []
    for record in records:
        try:
            assignments.append(Assignment.from_api(record))
        except InvalidAssignmentError as e:
            logger.warning(f"Skipping malformed assignment record: {e}")
    return assignments


def count_active(assignments: list[Assignment]) -> int:
    return sum(1 for a in assignments if not a.completed)


def apply_history_limit(
    assignments: list[Assignment],
    now: datetime,
    days: int = 30,
) -> list[Assignment]:
    """
    Hide completed assignments created more than `days` ago.

    Active assignments are always kept, as are completed ones with no
    creation time. Pure function - no I/O.
    """
    cutoff = now - timedelta(days=days)

    def keep(a: Assignment) -> bool:
        if not a.completed or a.created_at is None:
            return True
        created = a.created_at
        if created.tzinfo and cutoff.tzinfo:
            created = created.astimezone(cutoff.tzinfo)
        elif created.tzinfo and not cutoff.tzinfo:
            created = created.astimezone().replace(tzinfo=None)
        elif not created.tzinfo and cutoff.tzinfo:
            created = created.replace(tzinfo=cutoff.tzinfo)
        return created >= cutoff

    return [a for a in assignments if keep(a)]


STATUS_FILTERS = ("all", "active", "completed")


def filter_assignments(
    assignments: list[Assignment],
    status: str = "all",
    subject: str = "all",
    query: str = "",
) -> list[Assignment]:
    """
    Filter by completion status, exact subject, and case-insensitive text search.

    The search matches title or subject. Pure function - no I/O.
    """
    if status not in STATUS_FILTERS:
        raise ValueError(f"Unknown status filter: {status}")
    needle = query.strip().lower()

    def matches(a: Assignment) -> bool:
        if status == "active" and a.completed:
            return False
        if status == "completed" and not a.completed:
            return False
        if subject != "all" and a.subject != subject:
            return False
        if needle and needle not in a.title.lower() and needle not in a.subject.lower():
            return False
        return True

    return [a for a in assignments if matches(a)]


def unique_subjects(assignments: list[Assignment]) -> list[str]:
    """Distinct non-blank subjects in first-seen order."""
    seen: dict[str, None] = {}
    for a in assignments:
        if a.subject and a.subject.strip():
            seen.setdefault(a.subject, None)
    return list(seen)


@dataclass
class Page:
    """One page of a paginated list."""

    items: list = field(default_factory=list)
    number: int = 1
    total_pages: int = 0
    total_items: int = 0


def paginate(items: list, page: int = 1, per_page: int = 10) -> Page:
    """Slice a list into 1-indexed pages. Out-of-range pages are clamped."""
    if per_page <= 0:
        raise ValueError("per_page must be positive")
    total_pages = math.ceil(len(items) / per_page)
    number = min(max(page, 1), max(total_pages, 1))
    start = (number - 1) * per_page
    return Page(
        items=items[start : start + per_page],
        number=number,
        total_pages=total_pages,
        total_items=len(items),
    )
