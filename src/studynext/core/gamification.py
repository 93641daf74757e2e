"""Pure XP, level and streak logic - no I/O dependencies."""

from dataclasses import dataclass, replace
from datetime import datetime

XP_PER_LEVEL = 1000
XP_PER_ASSIGNMENT = 100
XP_PER_FOCUS_SESSION = 250


@dataclass
class Profile:
    """A student's public profile and progress."""

    uid: str
    display_name: str = "Student"
    plan: str = "free"
    xp: int = 0
    level: int = 1
    streak: int = 0
    last_active: datetime | None = None

    @property
    def is_premium(self) -> bool:
        return self.plan == "premium"

    @property
    def first_name(self) -> str:
        return self.display_name.split(" ")[0] if self.display_name else "Student"

    @classmethod
    def from_dict(cls, data: dict) -> "Profile":
        last_active = None
        if data.get("lastActive"):
            last_active = datetime.fromisoformat(data["lastActive"])
        return cls(
            uid=data["uid"],
            display_name=data.get("displayName") or "Student",
            plan=data.get("plan", "free"),
            xp=data.get("xp", 0),
            level=data.get("level", 1),
            streak=data.get("streak", 0),
            last_active=last_active,
        )

    def to_dict(self) -> dict:
        return {
            "uid": self.uid,
            "displayName": self.display_name,
            "plan": self.plan,
            "xp": self.xp,
            "level": self.level,
            "streak": self.streak,
            "lastActive": self.last_active.isoformat() if self.last_active else None,
        }


@dataclass
class XPAward:
    """Outcome of an XP award, used for the celebration overlay."""

    amount: int
    new_xp: int
    new_level: int
    did_level_up: bool
    new_streak: int
    streak_extended: bool


def level_for(xp: int) -> int:
    """Levels start at 1 and go up every XP_PER_LEVEL points."""
    return xp // XP_PER_LEVEL + 1


def level_progress(xp: int) -> float:
    """Percent of the way through the current level (0-100)."""
    return (xp % XP_PER_LEVEL) / (XP_PER_LEVEL / 100)


def next_streak(streak: int, last_active: datetime | None, now: datetime) -> int:
    """
    Daily streak after activity at `now`.

    Same calendar day keeps the streak, the next day extends it, and any
    longer gap (or no history) starts over at 1.
    """
    if last_active is None:
        return 1
    gap = (now.date() - last_active.date()).days
    if gap == 1:
        return streak + 1
    if gap > 1:
        return 1
    return streak


def award_xp(profile: Profile, amount: int, now: datetime) -> tuple[Profile, XPAward]:
    """
    Add XP and update level and streak.

    Pure function - returns the updated profile rather than mutating.
    """
    new_streak = next_streak(profile.streak, profile.last_active, now)
    new_xp = profile.xp + amount
    new_level = level_for(new_xp)

    award = XPAward(
        amount=amount,
        new_xp=new_xp,
        new_level=new_level,
        did_level_up=new_level > profile.level,
        new_streak=new_streak,
        streak_extended=new_streak > profile.streak,
    )
    updated = replace(profile, xp=new_xp, level=new_level, streak=new_streak, last_active=now)
    return updated, award


def rank_leaderboard(profiles: list[Profile], limit: int = 50) -> list[Profile]:
    """Top profiles by XP, highest first."""
    return sorted(profiles, key=lambda p: -p.xp)[:limit]
