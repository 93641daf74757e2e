"""Assignment repository interface."""

from typing import Protocol


class AssignmentRepository(Protocol):
    """Interface for reading and writing assignment records in any backend.

    Records use the data source's field names (dueDate, isCompleted, ...);
    parsing into Assignment happens in the core.
    """

    def get_all(self, user_id: str) -> list[dict]:
        """Fetch all assignment records for a user."""
        ...

    def add(self, user_id: str, fields: dict) -> str:
        """Create an assignment. Returns its new id."""
        ...

    def update(self, assignment_id: str, fields: dict) -> None:
        """Merge fields into an existing assignment."""
        ...

    def delete(self, assignment_id: str) -> None:
        """Remove an assignment."""
        ...
