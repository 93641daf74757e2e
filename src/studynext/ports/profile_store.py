"""Profile storage interface."""

from typing import Protocol

from studynext.core.gamification import Profile


class ProfileStore(Protocol):
    """Interface for reading and writing user profiles."""

    def get(self, uid: str) -> Profile | None:
        """Load a profile. Returns None if not found."""
        ...

    def save(self, profile: Profile) -> None:
        """Create or overwrite a profile."""
        ...

    def list_all(self) -> list[Profile]:
        """All stored profiles (leaderboard source)."""
        ...
