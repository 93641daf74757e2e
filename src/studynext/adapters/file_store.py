"""File-based storage adapters (local / free tier)."""

import json
import logging
import uuid
from datetime import datetime
from pathlib import Path

from studynext.core.gamification import Profile

logger = logging.getLogger(__name__)


def _read_json(path: Path, default):
    if not path.exists():
        return default
    try:
        return json.loads(path.read_text())
    except json.JSONDecodeError as e:
        logger.error(f"Corrupt data file {path}: {e}")
        return default


def _write_json(path: Path, data) -> None:
    path.write_text(json.dumps(data, indent=2))


class FileAssignmentRepository:
    """
    File-based assignment storage.

    Implements AssignmentRepository protocol. All users share one JSON list,
    each record tagged with its userId.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.path = self.data_dir / "homework.json"

    def _load(self) -> list[dict]:
        return _read_json(self.path, [])

    def get_all(self, user_id: str) -> list[dict]:
        """Fetch all assignment records for a user."""
        return [r for r in self._load() if r.get("userId") == user_id]

    def add(self, user_id: str, fields: dict) -> str:
        """Create an assignment. Returns its new id."""
        records = self._load()
        record = {
            **fields,
            "id": uuid.uuid4().hex,
            "userId": user_id,
            "createdAt": datetime.now().isoformat(),
            "isCompleted": False,
        }
        records.append(record)
        _write_json(self.path, records)
        return record["id"]

    def update(self, assignment_id: str, fields: dict) -> None:
        """Merge fields into an existing assignment. Unknown ids are ignored."""
        records = self._load()
        for record in records:
            if record.get("id") == assignment_id:
                record.update(fields)
                _write_json(self.path, records)
                return
        logger.warning(f"Update for unknown assignment {assignment_id}")

    def delete(self, assignment_id: str) -> None:
        """Remove an assignment."""
        records = [r for r in self._load() if r.get("id") != assignment_id]
        _write_json(self.path, records)


class FileProfileStore:
    """
    File-based profile storage.

    Implements ProfileStore protocol. One JSON file per user.
    """

    def __init__(self, data_dir: Path | str):
        self.profile_dir = Path(data_dir).expanduser() / "profiles"
        self.profile_dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, uid: str) -> Path:
        return self.profile_dir / f"{uid}.json"

    def get(self, uid: str) -> Profile | None:
        """Load a profile. Returns None if not found."""
        data = _read_json(self._path_for(uid), None)
        if data is None:
            return None
        return Profile.from_dict(data)

    def save(self, profile: Profile) -> None:
        """Create or overwrite a profile."""
        _write_json(self._path_for(profile.uid), profile.to_dict())

    def list_all(self) -> list[Profile]:
        """All stored profiles."""
        profiles = []
        for path in sorted(self.profile_dir.glob("*.json")):
            data = _read_json(path, None)
            if data:
                profiles.append(Profile.from_dict(data))
        return profiles


class FileReminderLog:
    """
    File-based sent-reminder log.

    Implements ReminderLog protocol.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, uid: str) -> Path:
        return self.data_dir / f"notified_{uid}.json"

    def load(self, uid: str) -> dict[str, list[str]]:
        return _read_json(self._path_for(uid), {})

    def save(self, uid: str, notified: dict[str, list[str]]) -> None:
        _write_json(self._path_for(uid), notified)
